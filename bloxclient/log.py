import logging

from bloxclient.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> logging.Logger:
    """Attach a stream handler to the bloxclient logger at the configured level."""
    level = (level or get_settings().log_level).upper()
    logger = logging.getLogger("bloxclient")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
