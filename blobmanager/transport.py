import asyncio
import logging
from dataclasses import dataclass, field

import requests

from .errors import TransportError

logger = logging.getLogger(__name__)


@dataclass
class TransportResponse:
    status_code: int
    headers: dict = field(default_factory=dict)
    body: bytes = b''

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.body.decode('utf-8', errors='replace')


class RequestsTransport:
    """
    Sends one request with requests, off the event loop.
    Redirects are never followed: the signature is bound to the exact host and path.
    """

    def __init__(self, session: requests.Session = None, timeout: float = None, verify: bool = True):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.verify = verify

    def _send_sync(self, method: str, url: str, headers: dict, body: bytes = None) -> TransportResponse:
        resp = self.session.request(
            method, url, headers=headers, data=body,
            timeout=self.timeout, verify=self.verify, allow_redirects=False
        )
        logger.debug("%s %s -> %s", method, url, resp.status_code)
        return TransportResponse(resp.status_code, dict(resp.headers), resp.content)

    async def send(self, method: str, url: str, headers: dict, body: bytes = None) -> TransportResponse:
        try:
            return await asyncio.to_thread(self._send_sync, method, url, headers, body)
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e
