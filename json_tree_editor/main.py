"""Main entry point for the JSON Tree Editor REST API."""

import asyncio
import sys
from typing import Optional

import structlog
import uvicorn

from .api.app import create_app
from .config.loader import ConfigurationError, load_config
from .utils.logging_config import setup_logging


async def serve(config_path: Optional[str] = None) -> None:
    """Load configuration and run the REST API until interrupted."""
    config = load_config(config_path)
    setup_logging(config.log_level, json_logs=config.json_logs)
    logger = structlog.get_logger(__name__)

    app = create_app(config)
    server = uvicorn.Server(uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        reload=False
    ))

    logger.info("Starting JSON Tree Editor REST API", host=config.host, port=config.port)
    await server.serve()


def main() -> None:
    """Console script entry point."""
    config_path = sys.argv[1] if len(sys.argv) > 1 else None
    try:
        asyncio.run(serve(config_path))
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(2)
    except KeyboardInterrupt:
        structlog.get_logger(__name__).info("Server shutdown requested")


if __name__ == "__main__":
    main()
