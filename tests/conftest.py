import pytest

from blobmanager.auth import Authenticator
from blobmanager.transport import TransportResponse

TIMESTAMP = 'Tue, 01 Jan 2019 00:00:00 GMT'
# base64 of b'secret'
ACCOUNT_KEY = 'c2VjcmV0'


class FakeTransport:
    """Records every request and answers with a canned response."""

    def __init__(self, status_code=200, body=b'', headers=None):
        self.response = TransportResponse(status_code, headers or {}, body)
        self.requests = []

    async def send(self, method, url, headers, body=None):
        self.requests.append({'method': method, 'url': url, 'headers': headers, 'body': body})
        return self.response


class FixedClockAuthenticator(Authenticator):
    def sign(self, operation, timestamp=None):
        return super().sign(operation, timestamp or TIMESTAMP)


@pytest.fixture
def auth():
    return FixedClockAuthenticator('acct', ACCOUNT_KEY)


@pytest.fixture
def make_transport():
    return FakeTransport


CLI_ENVIRONMENT = (
    'ACCOUNT_NAME', 'ACCOUNT_KEY', 'CONTAINER_NAME', 'API_VERSION',
    'BLOB_NAME', 'DOWNLOAD_PATH', 'FILE_PATH', 'PREFIX',
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in CLI_ENVIRONMENT:
        monkeypatch.delenv(name, raising=False)
