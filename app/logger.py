"""Logging setup and the per-request access log middleware."""
import logging
import time

from fastapi import Request

from app import config

LOG_FORMAT = "%(asctime)s [%(levelname)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("app")


def setup_logging() -> None:
    """Attach console and (optionally) file handlers to the ``app`` logger."""
    if logger.handlers:
        return

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if config.LOG_TO_FILE:
        config.LOG_DIR.mkdir(parents=True, exist_ok=True)
        error_handler = logging.FileHandler(config.LOG_DIR / "error.log", encoding="utf-8")
        error_handler.setLevel(logging.ERROR)
        handlers.append(error_handler)
        handlers.append(logging.FileHandler(config.LOG_DIR / "combined.log", encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(config.LOG_LEVEL)


async def request_logger(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    duration = int((time.perf_counter() - start) * 1000)
    message = f"{request.method} {request.url.path} - Status: {response.status_code} - {duration}ms"

    if response.status_code >= 400:
        logger.error(message)
    else:
        logger.info(message)
    return response
