"""Entry point: ``python -m repair_api``."""

from __future__ import annotations

import argparse

import structlog


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="repair_api",
        description="Serve the repair assistant API",
    )
    parser.add_argument("--host", default="0.0.0.0", help="Interface to bind")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on")
    parser.add_argument(
        "--reload",
        action="store_true",
        default=False,
        help="Restart on code changes (development only)",
    )
    args = parser.parse_args()

    import uvicorn

    from repair_api.config import settings

    logger = structlog.get_logger("repair_api")
    logger.info("server_starting", host=args.host, port=args.port, version=settings.app_version)

    uvicorn.run(
        "repair_api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
