import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
HANDLER_NAME = "user_api"


def configure_logging(level: str = "INFO") -> None:
    """Install one stream handler on the package logger."""
    logger = logging.getLogger("user_api")
    logger.setLevel(level.upper())
    if not any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.set_name(HANDLER_NAME)
        logger.addHandler(handler)
