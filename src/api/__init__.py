"""FastAPI endpoints for the PDF to Notion converter.

Endpoints:
    - GET /health: Service health status
    - POST /upload/pdf: Extract text and metadata from a PDF
    - POST /reflow: Reflow text or page fragments into blocks
    - POST /reflow/pdf: Extract and reflow a PDF
    - POST /ai/structure: LLM-assisted structuring of text
    - POST /notion/create: Publish blocks as a Notion page
    - POST /convert: Full chain from PDF upload to Notion page
"""

from src.api.app import app, create_app

__all__ = ["app", "create_app"]
