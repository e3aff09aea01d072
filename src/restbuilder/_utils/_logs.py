import logging
import sys

LOGGER_NAME = "restbuilder"

_handler: logging.Handler | None = None


def setup_logging(debug: bool = False) -> logging.Logger:
    """Configure the ``restbuilder`` logger.

    Calling it again only changes the level; a single handler is kept.
    """
    global _handler

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)

    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )
        logger.addHandler(_handler)

    return logger
