import datetime
import logging
from dataclasses import dataclass
from urllib.parse import quote

from .operations import Operation
from .utils import SharedKeySigner

logger = logging.getLogger(__name__)

API_VERSION = '2019-12-12'
BLOB_ENDPOINT = 'blob.core.windows.net'


def format_date(now: datetime.datetime = None) -> str:
    """RFC 1123 date in GMT, as expected by x-ms-date."""
    now = now or datetime.datetime.now(datetime.timezone.utc)
    return now.astimezone(datetime.timezone.utc).strftime('%a, %d %b %Y %H:%M:%S GMT')


@dataclass
class SharedKeyCredentials:
    account_name: str
    account_key: str  # base64, decoded only while signing

    def __repr__(self):
        return f"SharedKeyCredentials(account_name={self.account_name!r}, account_key='***')"


class Authenticator:
    def __init__(self, account_name: str, account_key: str, api_version: str = API_VERSION):
        self.credentials = SharedKeyCredentials(account_name, account_key)
        self.api_version = api_version
        self.endpoint = f"https://{account_name}.{BLOB_ENDPOINT}"

    @property
    def account_name(self) -> str:
        return self.credentials.account_name

    def _headers(self, operation: Operation, timestamp: str) -> dict:
        headers = {
            'x-ms-date': timestamp,
            'x-ms-version': self.api_version,
        }
        headers.update(operation.headers())
        return headers

    @staticmethod
    def _quoted(operation: Operation) -> (str, dict):
        path = quote(operation.path, safe='/')
        query = {k: quote(v, safe='') for k, v in operation.query.items()}
        return path, query

    def string_to_sign(self, operation: Operation, timestamp: str) -> str:
        path, query = self._quoted(operation)
        return SharedKeySigner.string_to_sign(
            operation.method, self._headers(operation, timestamp), self.account_name, path, query
        )

    def sign(self, operation: Operation, timestamp: str = None) -> (dict, str):
        timestamp = timestamp or format_date()
        headers = self._headers(operation, timestamp)
        path, query = self._quoted(operation)
        string_to_sign = self.string_to_sign(operation, timestamp)
        signature = SharedKeySigner.sign(self.credentials.account_key, string_to_sign)
        headers['Authorization'] = SharedKeySigner.authorization(self.account_name, signature)

        url = self.endpoint + path
        if query:
            url += '?' + '&'.join(f"{k}={v}" for k, v in query.items())
        logger.debug("signed %s %s", operation.method, url)
        return headers, url
