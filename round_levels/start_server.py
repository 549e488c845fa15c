"""Process entrypoint for the round level HTTP service.

Reads ``HOST``/``PORT`` straight from the environment (some hosts pass
``$PORT`` unexpanded), configures logging from settings, then boots uvicorn.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Tuple

import uvicorn

from .config import get_settings
from .logging_setup import setup_logging

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000


def _resolve_port(env: Mapping[str, str] | None = None, default: int = DEFAULT_PORT) -> int:
    raw = (env if env is not None else os.environ).get("PORT")
    if not raw:
        return default
    try:
        port = int(raw)
    except ValueError:
        port = 0
    if port <= 0:
        logger.warning("Invalid PORT=%r; falling back to %d", raw, default)
        return default
    return port


def resolve_bind(env: Mapping[str, str] | None = None) -> Tuple[str, int]:
    source = env if env is not None else os.environ
    return source.get("HOST") or DEFAULT_HOST, _resolve_port(source)


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)
    host, port = resolve_bind()
    logger.info(
        "Starting round level server",
        extra={"host": host, "port": port, "base_unit": settings.round_level_factor, "debug": settings.dev_debug},
    )
    uvicorn.run("round_levels.server:app", host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
