"""Unit tests for the Notion publisher."""

import json
from unittest.mock import patch

import httpx
import pytest
import pytest_check as check
from pydantic import ValidationError

from src.exceptions import PublishRejected
from src.publishing.config import NotionConfig
from src.publishing.notion import NotionPublisher
from src.publishing.payload import to_publish_payload
from src.reflow.blocks import Block, BlockType


@pytest.fixture
def notion_config() -> NotionConfig:
    return NotionConfig(
        api_key="secret_test",
        database_id="db-123",
        api_url="https://notion.test/v1",
        notion_version="2022-06-28",
    )


@pytest.fixture
def payload():
    return to_publish_payload(
        [
            Block(type=BlockType.HEADING, text="Intro"),
            Block(type=BlockType.PARAGRAPH, text="Some body text."),
        ],
        "Test Page",
    )


class TestPublish:
    async def test_posts_page_and_returns_response(self, notion_config, payload) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json={"object": "page", "id": "page-1"})

        publisher = NotionPublisher(notion_config, transport=httpx.MockTransport(handler))

        page = await publisher.publish(payload)

        assert page == {"object": "page", "id": "page-1"}
        request = captured[0]
        body = json.loads(request.content)
        check.equal(request.method, "POST")
        check.equal(str(request.url), "https://notion.test/v1/pages")
        check.equal(request.headers["Authorization"], "Bearer secret_test")
        check.equal(request.headers["Notion-Version"], "2022-06-28")
        check.equal(body["parent"], {"database_id": "db-123"})
        check.equal(body["properties"]["Name"]["title"][0]["text"]["content"], "Test Page")
        check.equal([c["type"] for c in body["children"]], ["heading_2", "paragraph"])

    async def test_rejection_carries_notion_message(self, notion_config, payload) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400,
                json={"object": "error", "code": "validation_error", "message": "body.children too long"},
            )

        publisher = NotionPublisher(notion_config, transport=httpx.MockTransport(handler))

        with pytest.raises(PublishRejected) as exc_info:
            await publisher.publish(payload)

        assert exc_info.value.status_code == 400
        assert "body.children too long" in str(exc_info.value)

    async def test_rejection_without_json_body(self, notion_config, payload) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="")

        publisher = NotionPublisher(notion_config, transport=httpx.MockTransport(handler))

        with pytest.raises(PublishRejected, match="HTTP 502"):
            await publisher.publish(payload)

    async def test_transport_error(self, notion_config, payload) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        publisher = NotionPublisher(notion_config, transport=httpx.MockTransport(handler))

        with pytest.raises(PublishRejected, match="Notion request failed") as exc_info:
            await publisher.publish(payload)

        assert exc_info.value.status_code is None


class TestNotionConfig:
    def test_requires_credentials(self) -> None:
        env = {"NOTION_API_KEY": "", "NOTION_DATABASE_ID": ""}
        with patch.dict("os.environ", env), pytest.raises(ValidationError) as exc_info:
            NotionConfig()

        assert "NOTION_API_KEY" in str(exc_info.value)

    def test_reads_environment(self) -> None:
        env = {"NOTION_API_KEY": " secret ", "NOTION_DATABASE_ID": "db-9"}
        with patch.dict("os.environ", env):
            config = NotionConfig()

        check.equal(config.api_key, "secret")
        check.equal(config.database_id, "db-9")
