"""Main application entry point.

Runs FastAPI with the NiceGUI conversion page mounted, or the API alone.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Send all log records to stdout at LOG_LEVEL."""
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def _serve(app) -> None:
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    logger.info(f"API docs available at http://localhost:{port}/docs")
    uvicorn.run(app, host=host, port=port, log_level=os.getenv("LOG_LEVEL", "info").lower())


def run_integrated() -> None:
    """Run FastAPI with the NiceGUI page mounted on the same server."""
    from nicegui import ui

    from src.api.app import create_app
    from src.ui.convert_page import convert_page  # noqa: F401 - Registers the page

    app = create_app()
    ui.run_with(
        app,
        title="PDF to Notion",
        favicon="📄",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "pdf-to-notion-secret"),
    )
    logger.info("Converter UI mounted at /")
    _serve(app)


def run_api() -> None:
    """Run the HTTP API without the UI."""
    from src.api.app import create_app

    _serve(create_app())


def main() -> None:
    """Application entry point.

    Set RUN_MODE=api to serve only the HTTP API. Default is integrated
    mode (API and UI on the same port).
    """
    configure_logging()
    mode = os.getenv("RUN_MODE", "integrated").lower()
    logger.info(f"Starting PDF to Notion in {mode} mode")

    if mode == "api":
        run_api()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
