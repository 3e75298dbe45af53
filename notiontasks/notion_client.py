import asyncio
import logging
import random
import aiohttp

from typing import Optional, Dict, Any

from .constants import BASE_HEADERS, NOTION_API_BASE_URL, NOTION_VERSION, NotionAPIError, NotionConfigError
from .notion_models import Page, Database, PaginatedList

logger = logging.getLogger(__name__)


class NotionClient:
    """
    Thin async wrapper around the Notion REST API, covering the handful of endpoints
    needed to walk the month/week/day hierarchy and write tasks.
    """
    def __init__(self, token: str, base_url: str = NOTION_API_BASE_URL, notion_version: str = NOTION_VERSION,
                 max_retries: int = 3, session: Optional[aiohttp.ClientSession] = None) -> None:
        if not token:
            raise NotionConfigError("NOTION_TOKEN is not set in environment or passed to constructor.")
        if max_retries < 0:
            raise NotionConfigError(f"max_retries must be 0 or more, got {max_retries}.")
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.notion_version = notion_version
        self.max_retries = max_retries
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "NotionClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    def _get_headers(self) -> Dict[str, str]:
        headers = BASE_HEADERS.copy()
        headers["Authorization"] = f"Bearer {self.token}"
        headers["Notion-Version"] = self.notion_version
        return headers

    async def _request(self, method: str, path: str, json: Optional[dict] = None,
                       params: Optional[dict] = None) -> Dict[str, Any]:
        """
        Perform a request against the Notion API, retrying on 429 responses.

        :param method: HTTP verb
        :param path: Path relative to the API base url, e.g. "/pages/{id}"
        :return: Decoded JSON body
        """
        url = f"{self.base_url}{path}"
        session = await self._get_session()
        for attempt in range(self.max_retries + 1):
            logger.debug(f"{method} {url} (attempt {attempt + 1})")
            try:
                async with session.request(method, url, headers=self._get_headers(), json=json, params=params) as response:
                    if response.status == 429 and attempt < self.max_retries:
                        wait_time = self._retry_delay(response.headers.get("Retry-After"), attempt)
                        logger.warning(f"Rate limited (429), waiting {wait_time:.1f} seconds before retry {attempt + 1}/{self.max_retries}")
                    elif 200 <= response.status < 300:
                        return await response.json()
                    else:
                        raise await self._api_error(method, path, response)
            except aiohttp.ClientError as e:
                logger.error(f"AIOHTTP client error during {method} {path}: {e}")
                raise NotionAPIError(f"AIOHTTP client error during {method} {path}: {e}") from e
            # Only reached for a retryable 429; the last attempt always returns or raises above
            await asyncio.sleep(wait_time)

    @staticmethod
    def _retry_delay(retry_after: Optional[str], attempt: int) -> float:
        """Seconds to wait before retrying a 429. Retry-After may also be an HTTP-date, which we don't parse."""
        if retry_after:
            try:
                return float(retry_after)
            except ValueError:
                logger.debug(f"Ignoring non-numeric Retry-After header: {retry_after}")
        # Exponential backoff with jitter
        return (2 ** attempt) + random.uniform(0, 1)

    @staticmethod
    async def _api_error(method: str, path: str, response) -> NotionAPIError:
        code = None
        try:
            error_details = await response.json()
            code = error_details.get("code")
            error_text = error_details.get("message", str(error_details))
        except (aiohttp.ContentTypeError, ValueError):
            error_text = await response.text()
        logger.error(f"Notion API error on {method} {path}: {response.status} - {error_text}")
        return NotionAPIError(f"Notion API error on {method} {path}: {response.status} - {error_text}",
                              status=response.status, code=code)

    async def query_database(self, database_id: str, filter: Optional[dict] = None,
                             start_cursor: Optional[str] = None, page_size: Optional[int] = None) -> PaginatedList:
        payload: Dict[str, Any] = {}
        if filter:
            payload["filter"] = filter
        if start_cursor:
            payload["start_cursor"] = start_cursor
        if page_size:
            payload["page_size"] = page_size
        data = await self._request("POST", f"/databases/{database_id}/query", json=payload)
        return PaginatedList.model_validate(data)

    async def list_block_children(self, block_id: str, start_cursor: Optional[str] = None,
                                  page_size: int = 100) -> PaginatedList:
        params = {"page_size": page_size}
        if start_cursor:
            params["start_cursor"] = start_cursor
        data = await self._request("GET", f"/blocks/{block_id}/children", params=params)
        return PaginatedList.model_validate(data)

    async def retrieve_database(self, database_id: str) -> Database:
        data = await self._request("GET", f"/databases/{database_id}")
        return Database.model_validate(data)

    async def create_page(self, parent_database_id: str, properties: Dict[str, Any]) -> Optional[Page]:
        payload = {
            "parent": {"database_id": parent_database_id},
            "properties": properties,
        }
        data = await self._request("POST", "/pages", json=payload)
        if not data:
            return None
        return Page.model_validate(data)

    async def retrieve_page(self, page_id: str) -> Page:
        data = await self._request("GET", f"/pages/{page_id}")
        return Page.model_validate(data)

    async def retrieve_page_property(self, page_id: str, property_id: str,
                                     start_cursor: Optional[str] = None) -> PaginatedList:
        """Paginated property items, used when a relation holds more than the 25 ids inlined on the page."""
        params = {}
        if start_cursor:
            params["start_cursor"] = start_cursor
        data = await self._request("GET", f"/pages/{page_id}/properties/{property_id}", params=params or None)
        return PaginatedList.model_validate(data)

    async def update_page(self, page_id: str, properties: Dict[str, Any]) -> Page:
        data = await self._request("PATCH", f"/pages/{page_id}", json={"properties": properties})
        return Page.model_validate(data)
