import base64
import binascii
import hashlib
import hmac
from urllib.parse import unquote

from .errors import KeyDecodeError, SigningError

# Order of the standard header slots in a Shared Key string to sign
STANDARD_HEADERS = (
    'content-encoding',
    'content-language',
    'content-length',
    'content-md5',
    'content-type',
    'date',
    'if-modified-since',
    'if-match',
    'if-none-match',
    'if-unmodified-since',
    'range',
)


class SharedKeySigner:
    @staticmethod
    def canonicalized_headers(headers: dict) -> list:
        ms_headers = {}
        for k, v in headers.items():
            lk = k.lower()
            if lk.startswith('x-ms-'):
                ms_headers[lk] = ' '.join(str(v).split())
        return [f"{k}:{ms_headers[k]}" for k in sorted(ms_headers)]

    @staticmethod
    def canonicalized_resource(account_name: str, path: str, query: dict = None) -> list:
        lines = [f"/{account_name}{unquote(path)}"]
        params = {unquote(k).lower(): unquote(str(v)) for k, v in (query or {}).items()}
        lines.extend(f"{k}:{params[k]}" for k in sorted(params))
        return lines

    @staticmethod
    def string_to_sign(method: str, headers: dict, account_name: str, path: str, query: dict = None) -> str:
        """
        Shared Key string to sign (storage service version 2009-09-19 and later).
        - headers: the exact headers that will be sent, x-ms-date included
        - path: request path starting with '/', percent-encoded or not
        - query: query parameters, undecoded values allowed
        """
        lowered = {k.lower(): str(v) for k, v in headers.items()}
        slots = []
        for name in STANDARD_HEADERS:
            value = lowered.get(name, '')
            if name == 'content-length' and value == '0':
                value = ''
            elif name == 'date':
                # carried by x-ms-date instead
                value = ''
            slots.append(value)
        return "\n".join(
            [method.upper()]
            + slots
            + SharedKeySigner.canonicalized_headers(headers)
            + SharedKeySigner.canonicalized_resource(account_name, path, query)
        )

    @staticmethod
    def sign(account_key: str, string_to_sign: str) -> str:
        try:
            key = base64.b64decode(account_key, validate=True)
        except (binascii.Error, ValueError) as e:
            raise KeyDecodeError('account key is not valid base64') from e
        try:
            mac = hmac.new(key, string_to_sign.encode('utf-8'), hashlib.sha256)
        except (TypeError, ValueError) as e:
            raise SigningError(f'unable to initialise HMAC-SHA256: {e}') from e
        return base64.b64encode(mac.digest()).decode('utf-8')

    @staticmethod
    def authorization(account_name: str, signature: str) -> str:
        return f"SharedKey {account_name}:{signature}"
