"""
Logging setup for the backend.

`setup_logging` configures the root logger for the running server.
`null_logger` hands out a logger that discards everything; it is the
default collaborator for `PainService`, so building a service in a test
or a script never depends on global logging having been configured.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Attach console (and optional file) handlers to the root logger.

    Does nothing if the root logger already has handlers, so calling it
    from `create_app` more than once is harmless.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


def null_logger() -> logging.Logger:
    """Return a fresh logger that is not registered with `logging`.

    Nothing outside the caller can attach handlers to it, so it stays
    silent however the rest of the process configures logging.
    """
    logger = logging.Logger("pain.null")
    logger.addHandler(logging.NullHandler())
    logger.propagate = False
    return logger
