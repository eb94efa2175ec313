"""HTTP endpoints for upload, reflow, structuring and publishing.

Handles file upload validation and maps pipeline errors to HTTP statuses.
"""

import logging

from fastapi import APIRouter, Form, HTTPException, UploadFile, status

from src.agent.structuring_agent import StructuringService, get_structuring_service
from src.conversion.service import ConversionResult, ConversionService
from src.exceptions import (
    ExtractionFailed,
    GenerationUnavailable,
    ParseFailure,
    PublishRejected,
    ReflowError,
)
from src.models.schemas import (
    PDFUploadResponse,
    PublishBlocksRequest,
    PublishResponse,
    ReflowRequest,
    ReflowResponse,
    StructureRequest,
    StructureResponse,
)
from src.parsing.pdf_parser import MAX_FILE_SIZE, extract_fragments, parse_pdf
from src.publishing.notion import NotionPublisher, get_notion_publisher
from src.publishing.payload import coerce_block_type, to_publish_payload
from src.reflow.blocks import Block
from src.reflow.config import get_reflow_config
from src.reflow.geometric import GeometricReflow
from src.reflow.paragraph import ParagraphReflow
from src.reflow.salvage import salvage_text
from src.reflow.strategies import Strategy, coerce_pages, reflow

logger = logging.getLogger(__name__)

upload_router = APIRouter(prefix="/upload", tags=["upload"])
reflow_router = APIRouter(prefix="/reflow", tags=["reflow"])
ai_router = APIRouter(prefix="/ai", tags=["ai"])
notion_router = APIRouter(prefix="/notion", tags=["notion"])
convert_router = APIRouter(tags=["convert"])

routers = [upload_router, reflow_router, ai_router, notion_router, convert_router]

# 10MB limit matches pdf_parser constant
MAX_UPLOAD_SIZE = MAX_FILE_SIZE

_ERROR_STATUS: dict[type[ReflowError], int] = {
    ExtractionFailed: status.HTTP_400_BAD_REQUEST,
    ParseFailure: status.HTTP_400_BAD_REQUEST,
    GenerationUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
    PublishRejected: status.HTTP_502_BAD_GATEWAY,
}


def _to_http_error(error: ReflowError) -> HTTPException:
    """Map a pipeline error to an HTTPException, keeping its message."""
    for error_type, status_code in _ERROR_STATUS.items():
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error))


def _validate_file_extension(filename: str | None) -> str:
    """Validate that file has .pdf extension.

    Args:
        filename: The uploaded filename.

    Returns:
        The validated filename.

    Raises:
        HTTPException: 400 if extension is invalid.
    """
    if not filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Filename is required",
        )

    if not filename.lower().endswith(".pdf"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only PDF files are accepted",
        )

    return filename


async def _read_and_validate_size(file: UploadFile) -> bytes:
    """Read file content and validate size.

    Raises:
        HTTPException: 413 if file exceeds size limit.
    """
    content = await file.read()

    if len(content) > MAX_UPLOAD_SIZE:
        size_mb = len(content) / (1024 * 1024)
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail=f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)",
        )

    return content


async def _read_pdf_upload(file: UploadFile) -> tuple[str, bytes]:
    filename = _validate_file_extension(file.filename)
    return filename, await _read_and_validate_size(file)


def _structuring_service() -> StructuringService:
    try:
        return get_structuring_service()
    except GenerationUnavailable as e:
        logger.error(f"Structuring unavailable: {e}")
        raise _to_http_error(e) from e


def _notion_publisher() -> NotionPublisher:
    try:
        return get_notion_publisher()
    except ValueError as e:
        logger.error(f"Notion publisher not configured: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Notion is not configured. Set NOTION_API_KEY and NOTION_DATABASE_ID",
        ) from e


@upload_router.post("/pdf", response_model=PDFUploadResponse)
async def upload_pdf(file: UploadFile) -> PDFUploadResponse:
    """Upload a PDF and return its extracted text.

    Args:
        file: The uploaded PDF file (multipart/form-data).

    Returns:
        PDFUploadResponse with filename, page count, text and metadata.

    Raises:
        400: Invalid file (not PDF, empty, corrupt).
        413: File exceeds 10MB limit.
    """
    filename, content = await _read_pdf_upload(file)

    try:
        pdf_content = parse_pdf(content)
    except ExtractionFailed as e:
        logger.warning(f"PDF parse error for {filename}: {e}")
        raise _to_http_error(e) from e

    logger.info(f"Parsed PDF: {filename} ({pdf_content.pages} pages)")
    return PDFUploadResponse(
        filename=filename,
        pages=pdf_content.pages,
        text=pdf_content.text,
        title=pdf_content.title,
        metadata=pdf_content.metadata,
        success=True,
    )


@reflow_router.post("", response_model=ReflowResponse)
async def reflow_source(request: ReflowRequest) -> ReflowResponse:
    """Reflow text or page fragments into blocks.

    Raises:
        400: Source does not match the strategy's input shape.
    """
    config = get_reflow_config()
    try:
        if request.strategy is Strategy.GEOMETRIC:
            pages = coerce_pages(request.source)
            result = GeometricReflow(config).analyze(pages)
            return ReflowResponse(
                strategy=request.strategy,
                blocks=result.blocks,
                headers=result.headers,
                footers=result.footers,
                pages=result.page_count,
            )
        blocks = reflow(request.source, request.strategy, config)
    except ParseFailure as e:
        logger.warning(f"Reflow input rejected: {e}")
        raise _to_http_error(e) from e

    return ReflowResponse(strategy=request.strategy, blocks=blocks)


@reflow_router.post("/pdf", response_model=ReflowResponse)
async def reflow_pdf(file: UploadFile, strategy: Strategy = Strategy.PARAGRAPH) -> ReflowResponse:
    """Extract a PDF and reflow it with the chosen strategy.

    Raises:
        400: Invalid or unreadable PDF.
        413: File exceeds 10MB limit.
    """
    filename, content = await _read_pdf_upload(file)
    config = get_reflow_config()

    try:
        if strategy is Strategy.GEOMETRIC:
            result = GeometricReflow(config).analyze(extract_fragments(content))
            return ReflowResponse(
                strategy=strategy,
                blocks=result.blocks,
                headers=result.headers,
                footers=result.footers,
                pages=result.page_count,
            )
        pdf_content = parse_pdf(content)
    except ExtractionFailed as e:
        logger.warning(f"PDF parse error for {filename}: {e}")
        raise _to_http_error(e) from e

    blocks = ParagraphReflow(config).reflow(pdf_content.text)
    return ReflowResponse(strategy=strategy, blocks=blocks, pages=pdf_content.pages)


@ai_router.post("/structure", response_model=StructureResponse)
async def structure_text(request: StructureRequest) -> StructureResponse:
    """Restructure text with the model, then reflow the salvaged text.

    Raises:
        503: Model not configured or failed.
    """
    service = _structuring_service()
    try:
        raw = await service.structure(request.text)
    except GenerationUnavailable as e:
        raise _to_http_error(e) from e

    text = salvage_text(raw)
    blocks = ParagraphReflow(get_reflow_config()).reflow(text)
    return StructureResponse(text=text, blocks=blocks, raw=raw)


@notion_router.post("/create", response_model=PublishResponse)
async def create_notion_page(request: PublishBlocksRequest) -> PublishResponse:
    """Create a Notion page from client-supplied blocks.

    Only the first 100 blocks are sent.

    Raises:
        500: Notion not configured.
        502: Notion rejected the page.
    """
    blocks = [Block(type=coerce_block_type(b.type), text=b.text) for b in request.blocks]
    payload = to_publish_payload(blocks, request.title)
    publisher = _notion_publisher()

    try:
        page = await publisher.publish(payload)
    except PublishRejected as e:
        raise _to_http_error(e) from e

    return PublishResponse(
        message="Page created in Notion!",
        blocks_sent=len(payload.children),
        blocks_dropped=payload.dropped,
        notion_response=page,
    )


@convert_router.post("/convert", response_model=ConversionResult)
async def convert_pdf(
    file: UploadFile,
    title: str | None = Form(None),
    strategy: Strategy = Form(Strategy.PARAGRAPH),
    use_ai: bool = Form(False),
    publish: bool = Form(True),
) -> ConversionResult:
    """Run the full chain: extract, structure, reflow and publish.

    Raises:
        400: Invalid or unreadable PDF.
        413: File exceeds 10MB limit.
        502: Notion rejected the page.
        503: Model not configured or failed.
    """
    filename, content = await _read_pdf_upload(file)
    service = ConversionService(
        structuring=_structuring_service() if use_ai and strategy is Strategy.PARAGRAPH else None,
        publisher=_notion_publisher() if publish else None,
        config=get_reflow_config(),
    )

    try:
        return await service.convert(
            content,
            filename=filename,
            title=title,
            strategy=strategy,
            use_ai=use_ai,
            publish=publish,
        )
    except ReflowError as e:
        logger.warning(f"Conversion of {filename} failed: {e}")
        raise _to_http_error(e) from e
