"""Notion API service for page, block and file-upload operations."""

import logging
from typing import Any

import httpx

from dashboard.config import settings

logger = logging.getLogger(__name__)

# Module-level HTTP client for connection reuse
_http_client: httpx.AsyncClient | None = None


def _get_http_client() -> httpx.AsyncClient:
    """Get shared HTTP client for connection reuse."""
    global _http_client
    if _http_client is None or _http_client.is_closed:
        _http_client = httpx.AsyncClient(timeout=settings.notion_timeout_seconds)
    return _http_client


async def close_client() -> None:
    """Close the shared client. Called on application shutdown."""
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


class NotionService:
    """Service for interacting with the Notion REST API."""

    PAGE_SIZE = 100

    def __init__(self, token: str, database_id: str = ""):
        self.database_id = database_id
        self.api_base = settings.notion_api_base
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Notion-Version": settings.notion_version,
        }

    async def _request(
        self, method: str, endpoint: str, json_body: dict | None = None, params: dict | None = None
    ) -> dict:
        client = _get_http_client()
        response = await client.request(
            method,
            f"{self.api_base}{endpoint}",
            headers=self.headers,
            json=json_body,
            params=params,
        )
        if response.is_error:
            logger.error(
                f"Notion {method} {endpoint} failed with {response.status_code}: "
                f"{response.text[:300]}"
            )
        response.raise_for_status()
        return response.json()

    # Pages and databases

    async def query_database(self, filter_obj: dict | None = None) -> list[dict]:
        """Return every page in the configured database matching ``filter_obj``."""
        pages: list[dict] = []
        cursor = None

        while True:
            body: dict[str, Any] = {"page_size": self.PAGE_SIZE}
            if filter_obj:
                body["filter"] = filter_obj
            if cursor:
                body["start_cursor"] = cursor

            data = await self._request("POST", f"/databases/{self.database_id}/query", body)
            pages.extend(data.get("results", []))

            if not data.get("has_more"):
                break
            cursor = data.get("next_cursor")

        return pages

    async def retrieve_database(self) -> dict:
        return await self._request("GET", f"/databases/{self.database_id}")

    async def retrieve_page(self, page_id: str) -> dict:
        return await self._request("GET", f"/pages/{page_id}")

    async def create_page(self, properties: dict) -> dict:
        body = {"parent": {"database_id": self.database_id}, "properties": properties}
        return await self._request("POST", "/pages", body)

    async def update_page(self, page_id: str, properties: dict) -> dict:
        return await self._request("PATCH", f"/pages/{page_id}", {"properties": properties})

    # Blocks

    async def list_block_children(self, block_id: str) -> list[dict]:
        """List every child block of a page, following pagination cursors."""
        blocks: list[dict] = []
        cursor = None

        while True:
            params: dict[str, Any] = {"page_size": self.PAGE_SIZE}
            if cursor:
                params["start_cursor"] = cursor

            data = await self._request("GET", f"/blocks/{block_id}/children", params=params)
            blocks.extend(data.get("results", []))

            if not data.get("has_more"):
                break
            cursor = data.get("next_cursor")

        return blocks

    async def append_block_children(
        self, block_id: str, children: list[dict], after: str | None = None
    ) -> list[dict]:
        """Append blocks to a page, optionally positioned after a sibling block."""
        body: dict[str, Any] = {"children": children}
        if after:
            body["after"] = after

        data = await self._request("PATCH", f"/blocks/{block_id}/children", body)
        return data.get("results", [])

    async def delete_block(self, block_id: str) -> dict:
        return await self._request("DELETE", f"/blocks/{block_id}")

    # File uploads

    async def create_file_upload(self, filename: str, content_type: str) -> dict:
        """Create an upload slot. Returns the upload object (``id``, ``upload_url``)."""
        return await self._request(
            "POST", "/file_uploads", {"filename": filename, "content_type": content_type}
        )

    async def send_file_upload(
        self, upload_url: str, filename: str, content_type: str, content: bytes
    ) -> dict:
        """Push file bytes to the URL returned by ``create_file_upload``."""
        client = _get_http_client()
        response = await client.post(
            upload_url,
            headers=self.headers,
            files={"file": (filename, content, content_type)},
        )
        if response.is_error:
            logger.error(f"File upload send failed with {response.status_code}: {response.text[:300]}")
        response.raise_for_status()
        return response.json()


def get_notion_service() -> NotionService:
    """FastAPI dependency returning a service bound to the configured workspace."""
    return NotionService(settings.notion_token, settings.notion_database_id)
