from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from app.main import create_app
from config.settings import Settings, check_port
from gallery import build_gallery
from gallery.tools import ImageListingError


logger = logging.getLogger("gallery")

LOG_FORMAT = "[%(asctime)s] %(levelname)s - %(message)s"


def _port(value: str) -> int:
    try:
        return check_port(int(value))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def parse_args(argv: Optional[List[str]], settings: Settings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve JPEG images from a directory, at random or in order")
    parser.add_argument("-port", "--port", type=_port, default=settings.port, help="port on which to expose the API (0-65535)")
    parser.add_argument(
        "-path",
        "--path",
        default=settings.images_path,
        help="directory to serve images from; must exist, an empty directory is allowed",
    )
    parser.add_argument("-delay", "--delay", default=settings.delay, help="time to wait before responding, e.g. 100ms")
    parser.add_argument("-host", "--host", default=settings.host, help="address to bind")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    try:
        settings = Settings()
    except ValueError as exc:
        logging.basicConfig(format=LOG_FORMAT)
        logger.critical("Invalid configuration: %s", exc)
        return 1

    args = parse_args(argv, settings)
    settings.port = args.port
    settings.images_path = args.path or None
    settings.delay = args.delay
    settings.host = args.host

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    if not settings.images_path:
        logger.critical("missing -path argument")
        return 1

    try:
        gallery = build_gallery(settings.images_path, delay=settings.delay)
    except ImageListingError as exc:
        logger.critical("Cannot list images: %s", exc)
        return 1
    except ValueError as exc:
        logger.critical("Invalid -delay value: %s", exc)
        return 1

    app = create_app(gallery, settings)
    logger.info("Serving at %s:%s", settings.host, settings.port)
    try:
        uvicorn.run(
            app,
            host=settings.host,
            port=settings.port,
            timeout_keep_alive=settings.keepalive_timeout,
            log_level=settings.log_level.lower(),
        )
    except SystemExit as exc:
        # uvicorn reports bind failures itself and exits
        if exc.code:
            logger.critical("Server failed to start on %s:%s", settings.host, settings.port)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
