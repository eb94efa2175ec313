"""Integration tests for the API as a whole.

Requests go through the real FastAPI app over an ASGI transport.
The model and Notion are patched at the route seams; parsing and reflow run
for real against generated PDFs.
"""
