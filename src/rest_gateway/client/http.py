"""REST client over aiohttp."""

import json
import logging
from typing import Any, Optional

import aiohttp

from ..config import CLIENT_TIMEOUT
from .errors import ClientError, InvalidRequest, ResourceNotFound, ServerError, TransportFailure
from .interfaces import RestClient

logger = logging.getLogger(__name__)


class HttpRestClient(RestClient):
    """RestClient talking to a gateway at base_url.

    A session passed in is borrowed and left open by ``close()``; otherwise
    one is created on first use and owned by the client.
    """

    def __init__(self, base_url: str, session: Optional[aiohttp.ClientSession] = None,
                 timeout: float = CLIENT_TIMEOUT):
        self.base_url = base_url.rstrip('/')
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def close(self):
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def _get(self, urn: str) -> Any:
        return await self._request('GET', urn)

    async def _put(self, urn: str, body: Optional[dict] = None) -> Any:
        return await self._request('PUT', urn, body)

    async def _delete(self, urn: str) -> Any:
        return await self._request('DELETE', urn)

    async def _request(self, method: str, urn: str, body: Optional[dict] = None) -> Any:
        url = f"{self.base_url}{urn}"
        logger.debug(f"{method} {url}")
        kwargs = {'timeout': self.timeout}
        if body is not None:
            kwargs['json'] = body
        try:
            async with self.session.request(method, url, **kwargs) as response:
                text = await response.text()
                return self._handle(urn, response.status, text)
        except aiohttp.ClientError as e:
            raise TransportFailure(f"{method} {url} failed: {e}") from e

    def _handle(self, urn: str, status: int, text: str) -> Any:
        if status == 204:
            raise ResourceNotFound(urn)

        try:
            data = json.loads(text) if text else None
        except ValueError:
            data = None

        if status == 200:
            return data

        error = data if isinstance(data, dict) else {}
        kind = error.get('error', 'Unknown')
        message = error.get('message', text)
        logger.debug(f"Got error {status} for {urn}: {kind}: {message}")

        if status == 400:
            raise InvalidRequest(message, kind)
        if status >= 500:
            raise ServerError(kind, message, status)
        raise ClientError(f"Unexpected HTTP {status}: {message}", status, kind)
