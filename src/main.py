"""Command line entry point.

Two modes, selected with RUN_MODE:

- ``dev`` (default): the in-memory development service and the chat page
  share one uvicorn server, and the client is pointed at that server.
- ``client``: only the chat page is served. It talks to whatever service
  CHAT_API_BASE_URL names.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def run_dev() -> None:
    """Serve the development service and the chat page on one port."""
    import uvicorn
    from nicegui import ui

    from src.api.app import create_app
    from src.ui.chat_page import STORAGE_SECRET, chat_page  # noqa: F401 - Registers the page

    port = int(os.getenv("PORT", "8000"))
    os.environ.setdefault("CHAT_API_BASE_URL", f"http://localhost:{port}")

    app = create_app()
    ui.run_with(app, title="Chat", storage_secret=STORAGE_SECRET)

    logger.info(f"Chat UI and development service on http://localhost:{port}/")
    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_client() -> None:
    """Serve only the chat page against an external chat service."""
    from src.session.config import get_client_config
    from src.ui.chat_page import main as run_ui

    logger.info(f"Using chat service at {get_client_config().api_base_url}")
    run_ui()


def main() -> None:
    mode = os.getenv("RUN_MODE", "dev").lower()
    if mode == "client":
        run_client()
    elif mode == "dev":
        run_dev()
    else:
        logger.error(f"Unknown RUN_MODE {mode!r}, expected 'dev' or 'client'")
        sys.exit(2)


if __name__ == "__main__":
    main()
