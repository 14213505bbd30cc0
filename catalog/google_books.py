"""
Async client for the Google Books volumes API.
Performs single requests without retry; failures surface as ProviderError.
"""

from typing import Any, Dict, Optional

import httpx
import structlog
from pydantic import ValidationError

from .exceptions import ProviderError, ProviderTimeoutError
from .models import GoogleBooksResult, VolumeItem
from utilities.config import config

logger = structlog.get_logger(__name__)


class GoogleBooksClient:
    """
    Client for searching Google Books and fetching single volumes.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Provider root, e.g. ``https://www.googleapis.com/books/v1``
            api_key: Optional Google API key sent as ``key``
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used to substitute the provider in tests
        """
        self.base_url = (base_url or config.google_books_base_url).rstrip("/")
        self.api_key = api_key if api_key is not None else config.google_books_api_key
        self.timeout = timeout or config.request_timeout
        self.transport = transport

        self.client_config = {
            "base_url": self.base_url,
            "timeout": self.timeout,
            "headers": config.get_headers(),
            "follow_redirects": True,
        }
        if transport is not None:
            self.client_config["transport"] = transport

    async def search(
        self,
        query: str,
        max_results: Optional[int] = None,
        start_index: Optional[int] = None,
    ) -> GoogleBooksResult:
        """
        Search volumes by free text.

        Args:
            query: Free-text query sent as ``q``
            max_results: Optional page size (``maxResults``)
            start_index: Optional offset (``startIndex``)

        Returns:
            GoogleBooksResult parsed from the provider response
        """
        params: Dict[str, Any] = {"q": query}
        if max_results is not None:
            params["maxResults"] = max_results
        if start_index is not None:
            params["startIndex"] = start_index

        payload = await self._get_json("/volumes", params)

        try:
            result = GoogleBooksResult.model_validate(payload)
        except ValidationError as e:
            logger.error("Malformed search response", query=query, error=str(e))
            raise ProviderError(f"Malformed search response for query '{query}'") from e

        logger.debug("Search completed", query=query, items=len(result.volumes))
        return result

    async def get_volume(self, volume_id: str) -> Optional[VolumeItem]:
        """
        Fetch a single volume by id.

        Returns:
            VolumeItem, or None if the provider does not know the id
        """
        try:
            payload = await self._get_json(f"/volumes/{volume_id}", {})
        except ProviderError as e:
            if e.status_code == 404:
                logger.info("Volume not found", volume_id=volume_id)
                return None
            raise

        try:
            return VolumeItem.model_validate(payload)
        except ValidationError as e:
            logger.error("Malformed volume response", volume_id=volume_id, error=str(e))
            raise ProviderError(f"Malformed volume response for '{volume_id}'") from e

    async def _get_json(self, path: str, params: Dict[str, Any]) -> Any:
        if self.api_key:
            params["key"] = self.api_key

        try:
            async with httpx.AsyncClient(**self.client_config) as client:
                response = await client.get(path, params=params)
                response.raise_for_status()
                return response.json()

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error("Google Books returned an error status", path=path, status_code=status_code)
            raise ProviderError(
                f"Google Books request to {path} failed with status {status_code}",
                status_code=status_code,
            ) from e

        except httpx.TimeoutException as e:
            logger.error("Google Books request timed out", path=path, timeout=self.timeout)
            raise ProviderTimeoutError(f"Google Books request to {path} timed out after {self.timeout}s") from e

        except httpx.HTTPError as e:
            logger.error("Google Books request failed", path=path, error=str(e))
            raise ProviderError(f"Google Books request to {path} failed: {e}") from e

        except ValueError as e:
            logger.error("Google Books returned invalid JSON", path=path, error=str(e))
            raise ProviderError(f"Google Books returned invalid JSON for {path}") from e
