import asyncio
import io
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterator

from .auth import Authenticator
from .errors import DestinationWriteError, PayloadReadError, RemoteRejection, ResponseParseError
from .operations import DownloadBlob, ListBlobs, UploadBlob
from .transport import RequestsTransport

logger = logging.getLogger(__name__)


def _local_name(tag: str) -> str:
    return tag.rsplit('}', 1)[-1]


def iter_blob_names(body: bytes) -> Iterator[str]:
    """
    Yield the text of every <Name> element of a List Blobs response, in document order.
    Only the first page is read: a NextMarker is reported, not followed.
    """
    try:
        for _, elem in ET.iterparse(io.BytesIO(body), events=('end',)):
            name = _local_name(elem.tag)
            if name == 'Name':
                yield elem.text or ''
            elif name == 'NextMarker' and elem.text:
                logger.warning("listing truncated, results after marker %r are not fetched", elem.text)
    except ET.ParseError as e:
        raise ResponseParseError(f"malformed listing XML: {e}") from e


class BlobManager:
    def __init__(self, auth: Authenticator, transport=None):
        self.auth = auth
        self.transport = transport or RequestsTransport()

    async def download_blob(self, container: str, blob: str, destination) -> dict:
        headers, url = self.auth.sign(DownloadBlob(container, blob))
        resp = await self.transport.send('GET', url, headers)
        if not resp.ok:
            raise RemoteRejection(resp.status_code, resp.text)

        destination = Path(destination)
        try:
            with destination.open('wb') as f:
                f.write(resp.body)
        except OSError as e:
            raise DestinationWriteError(f"unable to write {destination}: {e}") from e
        logger.info("downloaded %s/%s to %s (%d bytes)", container, blob, destination, len(resp.body))
        return {'success': True, 'path': str(destination), 'size': len(resp.body)}

    async def list_blobs(self, container: str, prefix: str = '') -> Iterator[str]:
        headers, url = self.auth.sign(ListBlobs(container, prefix))
        resp = await self.transport.send('GET', url, headers)
        if not resp.ok:
            raise RemoteRejection(resp.status_code, resp.text)
        return iter_blob_names(resp.body)

    async def upload_blob(self, container: str, blob: str, source, reject_empty: bool = False) -> dict:
        source = Path(source)
        try:
            payload = await asyncio.to_thread(source.read_bytes)
        except OSError as e:
            raise PayloadReadError(f"unable to read {source}: {e}") from e
        if reject_empty and not payload:
            raise PayloadReadError(f"file '{source}' is empty")

        headers, url = self.auth.sign(UploadBlob(container, blob, len(payload)))
        resp = await self.transport.send('PUT', url, headers, payload)
        if not resp.ok:
            logger.info("upload of %s/%s rejected with status %s", container, blob, resp.status_code)
            return {'success': False, 'status_code': resp.status_code, 'message': resp.text}
        return {'success': True, 'status_code': resp.status_code, 'url': url.split('?', 1)[0]}
