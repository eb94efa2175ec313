"""Integration tests for the reflow, structuring, publishing and convert endpoints.

External services are replaced at the route seams
(get_structuring_service, get_notion_publisher); everything else runs for real.
"""

from unittest.mock import AsyncMock, patch

import pytest
import pytest_check as check
from httpx import AsyncClient

from src.exceptions import GenerationUnavailable, PublishRejected


@pytest.fixture
def structuring() -> AsyncMock:
    service = AsyncMock()
    service.structure.return_value = (
        '```json\n[{"type": "heading_2", "text": "Overview"},'
        ' {"type": "bulleted_list_item", "text": "- First point."}]\n```'
    )
    with patch("src.api.routes.get_structuring_service", return_value=service):
        yield service


@pytest.fixture
def publisher() -> AsyncMock:
    service = AsyncMock()
    service.publish.return_value = {"object": "page", "id": "page-1"}
    with patch("src.api.routes.get_notion_publisher", return_value=service):
        yield service


async def test_health(async_client: AsyncClient) -> None:
    response = await async_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "pdf-to-notion"}


class TestReflowEndpoint:
    """Tests for POST /reflow."""

    async def test_paragraph_text(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/reflow",
            json={"source": "Introduction\n\nThis is the body.\n\n• Point one."},
        )

        assert response.status_code == 200
        assert response.json()["blocks"] == [
            {"type": "heading", "text": "Introduction"},
            {"type": "paragraph", "text": "This is the body."},
            {"type": "bullet_item", "text": "Point one."},
        ]

    async def test_geometric_fragments(self, async_client: AsyncClient) -> None:
        page = [
            {"text": "Header", "y": 10, "height": 8},
            {"text": "Big Title", "y": 50, "height": 20},
            {"text": "Some body text.", "y": 80, "height": 9},
            {"text": "Footer", "y": 700, "height": 8},
        ]

        response = await async_client.post(
            "/reflow",
            json={"source": [page, page, page], "strategy": "geometric"},
        )

        assert response.status_code == 200
        data = response.json()
        check.equal(data["headers"], ["Header"])
        check.equal(data["footers"], ["Footer"])
        check.equal(data["pages"], 3)
        check.equal(data["blocks"][0], {"type": "paragraph", "text": "Header"})
        check.equal(data["blocks"][1], {"type": "heading", "text": "Big Title"})
        check.equal(data["blocks"][-1], {"type": "paragraph", "text": "Footer"})
        check.equal(len(data["blocks"]), 8)

    async def test_paragraph_rejects_pages(self, async_client: AsyncClient) -> None:
        response = await async_client.post("/reflow", json={"source": [[]]})

        assert response.status_code == 400
        assert "expects text" in response.json()["detail"]

    async def test_geometric_rejects_text(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/reflow",
            json={"source": "just text", "strategy": "geometric"},
        )

        assert response.status_code == 400
        assert "Invalid page fragments" in response.json()["detail"]


class TestStructureEndpoint:
    """Tests for POST /ai/structure."""

    async def test_salvaged_and_reflowed(self, async_client: AsyncClient, structuring) -> None:
        response = await async_client.post("/ai/structure", json={"text": "raw text"})

        assert response.status_code == 200
        data = response.json()
        check.equal(data["text"], "Overview\n\n- First point.")
        check.equal(
            data["blocks"],
            [
                {"type": "heading", "text": "Overview"},
                {"type": "bullet_item", "text": "First point."},
            ],
        )
        check.is_in("Overview", data["raw"])
        structuring.structure.assert_awaited_once_with("raw text")

    async def test_plain_text_response_passes_through(
        self, async_client: AsyncClient, structuring
    ) -> None:
        structuring.structure.return_value = "Just a summary sentence."

        response = await async_client.post("/ai/structure", json={"text": "raw"})

        assert response.status_code == 200
        assert response.json()["text"] == "Just a summary sentence."

    async def test_generation_failure_returns_503(
        self, async_client: AsyncClient, structuring
    ) -> None:
        structuring.structure.side_effect = GenerationUnavailable("Text generation failed: boom")

        response = await async_client.post("/ai/structure", json={"text": "raw"})

        assert response.status_code == 503
        assert "boom" in response.json()["detail"]

    async def test_unconfigured_model_returns_503(self, async_client: AsyncClient) -> None:
        with patch(
            "src.api.routes.get_structuring_service",
            side_effect=GenerationUnavailable("Text generation is not configured"),
        ):
            response = await async_client.post("/ai/structure", json={"text": "raw"})

        assert response.status_code == 503

    async def test_blank_text_returns_422(self, async_client: AsyncClient) -> None:
        response = await async_client.post("/ai/structure", json={"text": "   "})

        assert response.status_code == 422


class TestNotionCreateEndpoint:
    """Tests for POST /notion/create."""

    async def test_creates_page(self, async_client: AsyncClient, publisher) -> None:
        response = await async_client.post(
            "/notion/create",
            json={
                "title": "Notes",
                "blocks": [
                    {"type": "heading_1", "text": "Top"},
                    {"type": "bulleted_list_item", "text": "Item"},
                    {"type": "callout", "text": "Unknown type"},
                ],
            },
        )

        assert response.status_code == 200
        data = response.json()
        check.equal(data["message"], "Page created in Notion!")
        check.equal(data["blocks_sent"], 3)
        check.equal(data["blocks_dropped"], 0)
        check.equal(data["notion_response"]["id"], "page-1")

        sent = publisher.publish.call_args.args[0]
        check.equal(
            [child["type"] for child in sent.children],
            ["heading_2", "bulleted_list_item", "paragraph"],
        )

    async def test_truncates_to_100_blocks(self, async_client: AsyncClient, publisher) -> None:
        blocks = [{"type": "paragraph", "text": f"Block {i}"} for i in range(130)]

        response = await async_client.post("/notion/create", json={"title": "Long", "blocks": blocks})

        assert response.status_code == 200
        check.equal(response.json()["blocks_sent"], 100)
        check.equal(response.json()["blocks_dropped"], 30)

    async def test_rejection_returns_502(self, async_client: AsyncClient, publisher) -> None:
        publisher.publish.side_effect = PublishRejected("Could not find database", status_code=404)

        response = await async_client.post(
            "/notion/create",
            json={"title": "Notes", "blocks": [{"text": "Body"}]},
        )

        assert response.status_code == 502
        assert response.json()["detail"] == "Could not find database"

    async def test_unconfigured_returns_500(self, async_client: AsyncClient) -> None:
        with patch("src.api.routes.get_notion_publisher", side_effect=ValueError("missing")):
            response = await async_client.post(
                "/notion/create",
                json={"title": "Notes", "blocks": [{"text": "Body"}]},
            )

        assert response.status_code == 500
        assert "NOTION_API_KEY" in response.json()["detail"]

    async def test_blank_block_text_returns_422(self, async_client: AsyncClient, publisher) -> None:
        response = await async_client.post(
            "/notion/create",
            json={"title": "Notes", "blocks": [{"type": "paragraph", "text": "   "}]},
        )

        assert response.status_code == 422
        publisher.publish.assert_not_called()

    async def test_block_text_is_trimmed(self, async_client: AsyncClient, publisher) -> None:
        response = await async_client.post(
            "/notion/create",
            json={"title": "Notes", "blocks": [{"text": "  Body  "}]},
        )

        assert response.status_code == 200
        sent = publisher.publish.call_args.args[0]
        assert sent.children[0]["paragraph"]["rich_text"][0]["text"]["content"] == "Body"

    async def test_empty_blocks_returns_422(self, async_client: AsyncClient) -> None:
        response = await async_client.post("/notion/create", json={"title": "Notes", "blocks": []})

        assert response.status_code == 422


class TestConvertEndpoint:
    """Tests for POST /convert."""

    async def test_convert_and_publish(
        self, async_client: AsyncClient, sample_pdf: bytes, publisher
    ) -> None:
        response = await async_client.post(
            "/convert",
            files={"file": ("report.pdf", sample_pdf, "application/pdf")},
            data={"strategy": "geometric"},
        )

        assert response.status_code == 200
        data = response.json()
        check.equal(data["title"], "Annual Report")
        check.equal(data["strategy"], "geometric")
        check.equal(data["headers"], ["ACME Corp Annual Report"])
        check.equal(data["notion_page"]["id"], "page-1")
        publisher.publish.assert_awaited_once()

    async def test_convert_preview_skips_publisher(
        self, async_client: AsyncClient, sample_pdf: bytes
    ) -> None:
        with patch("src.api.routes.get_notion_publisher") as get_publisher:
            response = await async_client.post(
                "/convert",
                files={"file": ("report.pdf", sample_pdf, "application/pdf")},
                data={"publish": "false", "title": "Preview"},
            )

        assert response.status_code == 200
        check.equal(response.json()["title"], "Preview")
        check.is_none(response.json()["notion_page"])
        get_publisher.assert_not_called()

    async def test_convert_with_ai(
        self, async_client: AsyncClient, sample_pdf: bytes, structuring, publisher
    ) -> None:
        response = await async_client.post(
            "/convert",
            files={"file": ("report.pdf", sample_pdf, "application/pdf")},
            data={"use_ai": "true"},
        )

        assert response.status_code == 200
        assert response.json()["blocks"] == [
            {"type": "heading", "text": "Overview"},
            {"type": "bullet_item", "text": "First point."},
        ]

    async def test_convert_invalid_pdf(self, async_client: AsyncClient, publisher) -> None:
        response = await async_client.post(
            "/convert",
            files={"file": ("bad.pdf", b"garbage", "application/pdf")},
        )

        assert response.status_code == 400
        publisher.publish.assert_not_called()

    async def test_convert_publish_rejected(
        self, async_client: AsyncClient, sample_pdf: bytes, publisher
    ) -> None:
        publisher.publish.side_effect = PublishRejected("body failed validation", status_code=400)

        response = await async_client.post(
            "/convert",
            files={"file": ("report.pdf", sample_pdf, "application/pdf")},
        )

        assert response.status_code == 502
        assert response.json()["detail"] == "body failed validation"
