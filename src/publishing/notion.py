"""Notion publisher over the REST API.

Creates one page per conversion in the configured database. There is no
retry; a rejected request surfaces Notion's own error message.
"""

import logging
from typing import Any

import httpx

from src.exceptions import PublishRejected
from src.publishing.config import NotionConfig, get_notion_config
from src.publishing.payload import PublishRequest

logger = logging.getLogger(__name__)


class NotionPublisher:
    """Publishes page payloads to a Notion database."""

    def __init__(
        self,
        config: NotionConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the publisher.

        Args:
            config: Notion credentials; loaded from environment if not provided.
            transport: Optional httpx transport, used by tests.
        """
        self._config = config or get_notion_config()
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._config.api_key}",
            "Notion-Version": self._config.notion_version,
            "Content-Type": "application/json",
        }

    async def publish(self, request: PublishRequest) -> dict[str, Any]:
        """Create a page from a payload.

        Args:
            request: Page properties and children.

        Returns:
            Notion's page object.

        Raises:
            PublishRejected: On a non-2xx status or a transport error.
        """
        body = request.to_notion_body(self._config.database_id)
        url = f"{self._config.api_url.rstrip('/')}/pages"

        async with httpx.AsyncClient(
            timeout=self._config.timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(url, json=body, headers=self._headers())
            except httpx.RequestError as e:
                logger.error(f"Notion request failed: {e}")
                raise PublishRejected(f"Notion request failed: {e}") from e

        if response.is_success:
            page = response.json()
            logger.info(
                f"Created Notion page '{request.title}' "
                f"({len(request.children)} blocks, id={page.get('id')})"
            )
            return page

        message = _error_message(response)
        logger.error(f"Notion rejected page '{request.title}': {response.status_code} {message}")
        raise PublishRejected(message, status_code=response.status_code)


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return f"HTTP {response.status_code}"


_publisher: NotionPublisher | None = None


def get_notion_publisher() -> NotionPublisher:
    """Get or create the global publisher.

    Raises:
        ValueError: If Notion credentials are not configured.
    """
    global _publisher
    if _publisher is None:
        _publisher = NotionPublisher()
    return _publisher
