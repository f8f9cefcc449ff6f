import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from core.config import ClientConfigs
from core.exceptions import TransportFailure

logger = logging.getLogger(__name__)


def unselected_params(filter_text: str, offset: int, limit: int) -> Dict[str, str]:
    """Query parameters for the unselected view; an empty filter is omitted."""
    params: Dict[str, str] = {}
    if filter_text and filter_text.strip():
        params["filter"] = filter_text.strip()
    params["offset"] = str(offset)
    params["limit"] = str(limit)
    return params


class PickerApiClient:
    """
    aiohttp transport for the picker API.

    Every failure (connection error, timeout, non-2xx status, undecodable
    body) surfaces as TransportFailure.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.base_url = (base_url or ClientConfigs.API_BASE_URL).rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds or ClientConfigs.HTTP_TIMEOUT_SECONDS)
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "PickerApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with self._get_session().request(method, url, **kwargs) as response:
                if response.status < 200 or response.status >= 300:
                    raise TransportFailure(
                        f"Request failed: {response.status}", status=response.status, path=path
                    )
                return await response.json()
        except TransportFailure:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise TransportFailure(f"Request failed: {e}", path=path) from e

    async def get_state(self) -> Dict[str, Any]:
        return await self._request("GET", "/state")

    async def get_unselected_page(self, filter_text: str, offset: int, limit: int) -> Dict[str, Any]:
        return await self._request("GET", "/unselected", params=unselected_params(filter_text, offset, limit))

    async def post_bulk(self, ids: List[int]) -> Dict[str, Any]:
        return await self._request("POST", "/items/bulk", json={"ids": ids})

    async def put_selection(self, order: List[int]) -> Dict[str, Any]:
        return await self._request("PUT", "/selected", json={"order": order})
