"""Console entry point: ``repo-loader`` serves the HTTP API with uvicorn."""

from __future__ import annotations

import logging

import uvicorn

from repo_loader.infrastructure.config import Settings, get_settings
from repo_loader.interface.app import create_app


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )
    # httpx logs every request at INFO; keep per-request detail for DEBUG runs.
    if settings.log_level.upper() != "DEBUG":
        logging.getLogger("httpx").setLevel(logging.WARNING)


def main() -> None:
    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
