"""Pydantic models for API requests and responses.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - PDFUploadResponse: Extracted text and metadata of an upload
    - ReflowRequest / ReflowResponse: Text or fragments in, blocks out
    - StructureRequest / StructureResponse: Model-assisted structuring
    - PublishBlocksRequest / PublishResponse: Notion page creation
"""

from src.models.schemas import (
    BlockIn,
    PDFUploadResponse,
    PublishBlocksRequest,
    PublishResponse,
    ReflowRequest,
    ReflowResponse,
    StructureRequest,
    StructureResponse,
)

__all__ = [
    "BlockIn",
    "PDFUploadResponse",
    "PublishBlocksRequest",
    "PublishResponse",
    "ReflowRequest",
    "ReflowResponse",
    "StructureRequest",
    "StructureResponse",
]
