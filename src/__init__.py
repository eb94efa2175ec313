"""PDF to Notion - reflow extracted PDF text into structured Notion pages.

Combines FastAPI for HTTP, pypdf for extraction, Agno for optional LLM
structuring, httpx for the Notion API, NiceGUI for the web page, and
Pydantic for data validation.

Components:
    - reflow: Text and geometry heuristics producing typed blocks
    - parsing: PDF text and positioned fragment extraction
    - agent: LLM structuring of raw text
    - publishing: Notion payloads and page creation
    - conversion: End-to-end chain
    - api: HTTP endpoints
    - ui: Web interface
    - models: Request/response schemas
"""

__version__ = "0.1.0"
