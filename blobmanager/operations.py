from dataclasses import dataclass
from typing import Union

BLOCK_BLOB = 'BlockBlob'
OCTET_STREAM = 'application/octet-stream'


@dataclass(frozen=True)
class DownloadBlob:
    container: str
    blob: str

    method = 'GET'

    @property
    def path(self) -> str:
        return f"/{self.container}/{self.blob}"

    @property
    def query(self) -> dict:
        return {}

    def headers(self) -> dict:
        return {}


@dataclass(frozen=True)
class ListBlobs:
    container: str
    prefix: str = ''

    method = 'GET'

    @property
    def path(self) -> str:
        return f"/{self.container}"

    @property
    def query(self) -> dict:
        # prefix is always sent, an empty filter included
        return {'restype': 'container', 'comp': 'list', 'prefix': self.prefix or ''}

    def headers(self) -> dict:
        return {}


@dataclass(frozen=True)
class UploadBlob:
    container: str
    blob: str
    content_length: int

    method = 'PUT'

    @property
    def path(self) -> str:
        return f"/{self.container}/{self.blob}"

    @property
    def query(self) -> dict:
        return {}

    def headers(self) -> dict:
        return {
            'x-ms-blob-type': BLOCK_BLOB,
            'Content-Length': str(self.content_length),
            'Content-Type': OCTET_STREAM,
        }


Operation = Union[DownloadBlob, ListBlobs, UploadBlob]
