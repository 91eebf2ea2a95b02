"""
HTTP Client - Extract Layer

The transport capability used by the remote loader, plus a requests-backed
implementation. Retries and timeouts live here, never in the loader.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Dict, Optional, Protocol

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

DEFAULT_RETRY_STRATEGY = Retry(
    total=3,
    backoff_factor=1,
    status_forcelist=[429, 500, 502, 503, 504],
    allowed_methods=["GET"],
    # hand back the last response instead of raising so the status reaches the mapper
    raise_on_status=False,
)

DEFAULT_HEADERS = {
    "User-Agent": "feedcache/0.1",
    "Accept": "application/json",
}


class TransportError(Exception):
    """No interpretable HTTP response was obtained"""


@dataclass(frozen=True)
class HTTPResponse:
    data: bytes
    status_code: int


class HTTPClient(Protocol):
    async def get(self, url: str) -> HTTPResponse:
        """Perform one GET; raise TransportError if no response was obtained"""
        ...


def new_session(retry: Retry = DEFAULT_RETRY_STRATEGY) -> requests.Session:
    """Create a new requests session with retry strategy"""
    session = requests.Session()
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    session.headers.update(DEFAULT_HEADERS)

    return session


class RequestsHTTPClient:
    """HTTPClient backed by a requests session, run off the event loop"""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.session = session or new_session()
        self.timeout = timeout
        self.headers = headers

    def _get_blocking(self, url: str) -> HTTPResponse:
        logger.debug(f"Fetching from {url}")
        start = time.time()

        try:
            response = self.session.get(url, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Transport failure for {url}: {e}")
            raise TransportError(f"GET {url} failed: {e}") from e

        logger.debug(
            f"Fetched from {url}: status={response.status_code}, {time.time() - start:.2f} seconds"
        )
        return HTTPResponse(data=response.content, status_code=response.status_code)

    async def get(self, url: str) -> HTTPResponse:
        return await asyncio.to_thread(self._get_blocking, url)

    def close(self) -> None:
        self.session.close()
