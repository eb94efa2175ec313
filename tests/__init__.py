"""Test package for PDF to Notion.

Provides test coverage for all components with unit tests
for isolated logic and integration tests for the HTTP endpoints.

Structure:
    - unit/: Individual function and class tests
    - integration/: Endpoint tests through the ASGI app

PDFs are generated in conftest.py, so there are no binary fixtures.
Leverages pytest with pytest-check for soft assertions.
"""
