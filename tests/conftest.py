"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - async_client: HTTPX client for API testing
    - build_pdf: Factory writing small text PDFs with pypdf
    - sample_pdf: Three-page report with a running header and footer
    - fragment: Factory for positioned fragments
    - failing_second_page: Makes pypdf fail on every second page read

PDFs are generated in memory so tests never depend on binary fixtures.
"""

import io
from collections.abc import AsyncGenerator, Callable, Generator
from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient
from pypdf import PageObject, PdfWriter
from pypdf.generic import DecodedStreamObject, DictionaryObject, NameObject

from src.api import app
from src.reflow.geometry import Fragment

# (text, x, y, font size)
TextRun = tuple[str, float, float, float]


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def write_pdf(pages: list[list[TextRun]], title: str | None = None) -> bytes:
    """Write a PDF with one Helvetica text run per entry."""
    writer = PdfWriter()
    font = DictionaryObject(
        {
            NameObject("/Type"): NameObject("/Font"),
            NameObject("/Subtype"): NameObject("/Type1"),
            NameObject("/BaseFont"): NameObject("/Helvetica"),
            NameObject("/Encoding"): NameObject("/WinAnsiEncoding"),
        }
    )

    for runs in pages:
        page = writer.add_blank_page(width=612, height=792)
        operations = [
            f"BT /F1 {size} Tf {x} {y} Td ({_escape(text)}) Tj ET" for text, x, y, size in runs
        ]
        stream = DecodedStreamObject()
        stream.set_data("\n".join(operations).encode("latin-1"))
        page[NameObject("/Contents")] = writer._add_object(stream)
        page[NameObject("/Resources")] = DictionaryObject(
            {NameObject("/Font"): DictionaryObject({NameObject("/F1"): font})}
        )

    if title:
        writer.add_metadata({"/Title": title})

    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def build_pdf() -> Callable[..., bytes]:
    """Return the PDF writer factory."""
    return write_pdf


@pytest.fixture
def sample_pdf() -> bytes:
    """Three pages sharing a header and footer, with a large heading on page 1."""
    pages = []
    for number in range(1, 4):
        runs: list[TextRun] = [("ACME Corp Annual Report", 72, 760, 9)]
        if number == 1:
            runs.append(("Quarterly Results", 72, 700, 24))
        runs.append((f"Body text for page {number}.", 72, 650, 10))
        runs.append(("Confidential", 72, 40, 8))
        pages.append(runs)
    return write_pdf(pages, title="Annual Report")


@pytest.fixture
def failing_second_page() -> Generator[None]:
    """Make text extraction raise on every second page read."""
    original = PageObject.extract_text
    calls = 0

    def extract_text(self, *args, **kwargs):
        nonlocal calls
        calls += 1
        if calls % 2 == 0:
            raise ValueError("undecodable content stream")
        return original(self, *args, **kwargs)

    with patch.object(PageObject, "extract_text", extract_text):
        yield


@pytest.fixture
def fragment() -> Callable[..., Fragment]:
    """Return a Fragment factory with a default body height."""

    def make(text: str, y: float, height: float = 9.0) -> Fragment:
        return Fragment(text=text, y=y, height=height)

    return make


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
