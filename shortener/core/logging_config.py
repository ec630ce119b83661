"""Process-wide logging setup."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once.

    basicConfig is a no-op when handlers already exist (e.g. under uvicorn
    or pytest), so only the level is applied in that case.
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("shortener").setLevel(level.upper())
