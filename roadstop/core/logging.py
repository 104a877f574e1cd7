import logging
from typing import Callable, Dict, List

import httpx

logger = logging.getLogger("roadstop.http")


def setup_logging(level: int = logging.INFO):
    # Configure logging format
    logging_format = "%(asctime)s - %(levelname)s - %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=logging_format,
        datefmt=date_format
    )
    logging.getLogger("roadstop").setLevel(level)


def _log_request(request: httpx.Request):
    logger.info(f"--> {request.method} {request.url}")


def _log_response(response: httpx.Response):
    logger.info(f"<-- {response.status_code} {response.reason_phrase} {response.request.url}")


def http_logging_hooks() -> Dict[str, List[Callable]]:
    """Event hooks that log the request line and response status of every exchange."""
    return {"request": [_log_request], "response": [_log_response]}
