"""Logging configuration for the match engine, API and CLI.

Console only. Engine modules log through ``logging.getLogger(__name__)``;
this just decides where the records go.
"""

import logging
from typing import Union


def setup_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Configure the root logger with a single console handler.

    Existing handlers on the root logger are cleared first so that calling
    this function multiple times (e.g. from the CLI and then the API) does
    not produce duplicate output.

    Args:
        level: Minimum level for console output, as a number or a name
            such as ``"DEBUG"``.

    Returns:
        The configured root logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)-5s [%(name)s] %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root.addHandler(console)

    # SQL echo and access logs are noise at INFO.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return root
