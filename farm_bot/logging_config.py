import logging
import sys

# Library loggers that are chatty at INFO; raised to WARNING unless debugging.
NOISY_LOGGERS = ("discord", "discord.client", "discord.gateway", "discord.http", "httpx")


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Attach a stdout handler to the ``farm_bot`` logger once and return it."""
    logger = logging.getLogger("farm_bot")
    if logger.handlers:
        return logger  # already configured
    logger.setLevel(level)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    if level > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    return logger
