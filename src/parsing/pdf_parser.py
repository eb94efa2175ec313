"""PDF parsing module using pypdf.

Extracts text content, metadata and positioned text fragments from PDF
files with validation.
"""

import io
import logging
import math
import re

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from src.exceptions import ExtractionFailed
from src.reflow.geometry import Fragment

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
PDF_MAGIC_BYTES = b"%PDF"

_PRIVATE_USE_RE = re.compile("[\uE000-\uF8FF]")
_LEADING_BULLET_RE = re.compile(
    "^([ \t]*)[\u2022\u25CF\u25E6\u2023\u25AA\u2013\u2014\u25A0-\u25FF]", re.MULTILINE
)
_MULTI_SPACE_RE = re.compile(r" {2,}")


class PDFContent(BaseModel):
    """Extracted content from a PDF file.

    Attributes:
        text: Combined text content from all pages, pages separated by a
            blank line.
        pages: Total number of pages in the document.
        metadata: Document metadata (title, author, etc.).
    """

    text: str
    pages: int = Field(ge=0)
    metadata: dict[str, str | None]

    @property
    def title(self) -> str | None:
        return self.metadata.get("title") or None


def clean_text(text: str) -> str:
    """Normalize extracted text before paragraph reflow.

    Removes private-use glyphs (icon fonts), rewrites line-leading bullet
    glyphs and dashes to ``•`` and collapses runs of spaces.
    """
    text = _PRIVATE_USE_RE.sub("", text)
    text = _LEADING_BULLET_RE.sub(r"\1•", text)
    text = _MULTI_SPACE_RE.sub(" ", text)
    return text.strip()


def _validate_pdf_bytes(file_content: bytes) -> None:
    """Validate PDF file content before parsing.

    Args:
        file_content: Raw bytes of the PDF file.

    Raises:
        ExtractionFailed: If validation fails.
    """
    if not file_content:
        raise ExtractionFailed("Empty file provided")

    if len(file_content) > MAX_FILE_SIZE:
        size_mb = len(file_content) / (1024 * 1024)
        raise ExtractionFailed(f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)")

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise ExtractionFailed("Invalid PDF: file does not start with PDF header")


def _open_reader(file_content: bytes) -> PdfReader:
    _validate_pdf_bytes(file_content)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        page_count = len(reader.pages)
    except PdfReadError as e:
        raise ExtractionFailed(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise ExtractionFailed(f"Failed to read PDF: {e}") from e

    if page_count == 0:
        raise ExtractionFailed("PDF contains no pages")
    return reader


def _extract_metadata(reader: PdfReader) -> dict[str, str | None]:
    """Extract metadata from PDF reader.

    Args:
        reader: Initialized PdfReader instance.

    Returns:
        Dictionary of metadata fields.
    """
    metadata: dict[str, str | None] = {}

    try:
        if reader.metadata:
            metadata["title"] = reader.metadata.get("/Title")
            metadata["author"] = reader.metadata.get("/Author")
            metadata["subject"] = reader.metadata.get("/Subject")
            metadata["creator"] = reader.metadata.get("/Creator")
            metadata["producer"] = reader.metadata.get("/Producer")

            creation_date = reader.metadata.get("/CreationDate")
            if creation_date:
                metadata["creation_date"] = str(creation_date)
    except Exception as e:
        logger.warning(f"Failed to extract some metadata: {e}")

    return {k: str(v) for k, v in metadata.items() if v is not None}


def parse_pdf(file_content: bytes, clean: bool = True) -> PDFContent:
    """Parse a PDF file and extract its text content.

    Args:
        file_content: Raw bytes of the PDF file.
        clean: Apply clean_text to each page.

    Returns:
        PDFContent with extracted text, page count, and metadata.

    Raises:
        ExtractionFailed: If the file is invalid, too large, empty, or corrupt,
            or any page's text cannot be extracted.
    """
    reader = _open_reader(file_content)

    text_parts: list[str] = []
    for i, page in enumerate(reader.pages):
        try:
            page_text = page.extract_text()
        except Exception as e:
            raise ExtractionFailed(f"Failed to extract text from page {i + 1}: {e}") from e
        if clean:
            page_text = clean_text(page_text or "")
        if page_text:
            text_parts.append(page_text)

    text = "\n\n".join(text_parts)

    if not text.strip():
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")

    return PDFContent(
        text=text,
        pages=len(reader.pages),
        metadata=_extract_metadata(reader),
    )


def _multiply(m: list[float], n: list[float]) -> list[float]:
    """Multiply two PDF affine matrices in [a b c d e f] form."""
    return [
        m[0] * n[0] + m[1] * n[2],
        m[0] * n[1] + m[1] * n[3],
        m[2] * n[0] + m[3] * n[2],
        m[2] * n[1] + m[3] * n[3],
        m[4] * n[0] + m[5] * n[2] + n[4],
        m[4] * n[1] + m[5] * n[3] + n[5],
    ]


def extract_fragments(file_content: bytes) -> list[list[Fragment]]:
    """Extract positioned text fragments per page.

    Each fragment carries the baseline y in device space and the font size
    scaled by the text and transformation matrices.

    Args:
        file_content: Raw bytes of the PDF file.

    Returns:
        One list of fragments per page, in content-stream order.

    Raises:
        ExtractionFailed: If the document or any page cannot be read.
    """
    reader = _open_reader(file_content)
    pages: list[list[Fragment]] = []

    for i, page in enumerate(reader.pages):
        fragments: list[Fragment] = []

        def visitor(text, cm, tm, font_dict, font_size) -> None:
            text = " ".join(text.split())
            if not text:
                return
            matrix = _multiply([float(v) for v in tm], [float(v) for v in cm])
            height = abs(float(font_size or 0)) * math.hypot(matrix[2], matrix[3])
            fragments.append(Fragment(text=text, y=round(matrix[5], 2), height=round(height, 2)))

        try:
            page.extract_text(visitor_text=visitor)
        except Exception as e:
            raise ExtractionFailed(f"Failed to extract text from page {i + 1}: {e}") from e

        pages.append(fragments)

    logger.info(
        f"Extracted {sum(len(p) for p in pages)} fragments from {len(pages)} pages"
    )
    return pages
