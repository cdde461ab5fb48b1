"""
Main entrypoint: FastAPI graph server in the main thread.

Env: BASESCAN_API_KEY, LEDGER_API_URL, NAME_REGISTRY_PATH, API_HOST, API_PORT, LOG_LEVEL.

Equivalent: uvicorn backend_walletgraph.api_server.server:app --host 0.0.0.0 --port 8000
"""

import os

# Configure structured JSON logging before other imports that may log
from backend_walletgraph.walletgraph_logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Run the FastAPI server."""
    api_host = os.getenv("API_HOST", "0.0.0.0").strip()
    api_port = int(os.getenv("API_PORT", "8000").strip() or "8000")

    from backend_walletgraph.api_server.server import app
    from backend_walletgraph.config import get_settings
    import uvicorn

    settings = get_settings()
    if not settings.api_key:
        logger.warning("main_missing_api_key", message="BASESCAN_API_KEY is not set; ledger requests may be rejected")

    logger.info("main_server_starting", host=api_host, port=api_port, api_url=settings.api_url)
    uvicorn.run(app, host=api_host, port=api_port, log_level=os.getenv("LOG_LEVEL", "info").lower())


if __name__ == "__main__":
    main()
