"""PDF parsing utilities for document processing.

Turns uploaded PDFs into the inputs of the reflow strategies.

Responsibilities:
    - PDF text extraction with pypdf (paragraph reflow input)
    - Positioned fragment extraction with pypdf's text visitor
      (geometric reflow input)
    - Text cleanup: icon glyphs, bullet normalization, space runs
    - Metadata extraction (title, author, pages)
"""

from src.parsing.pdf_parser import (
    MAX_FILE_SIZE,
    PDFContent,
    clean_text,
    extract_fragments,
    parse_pdf,
)

__all__ = ["MAX_FILE_SIZE", "PDFContent", "clean_text", "extract_fragments", "parse_pdf"]
