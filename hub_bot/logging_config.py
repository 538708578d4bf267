"""Console logging for the ``hub_bot`` logger; modules log through children such as ``hub_bot.workflow``."""

import logging
import sys

NOISY_LIBRARIES = ("discord", "discord.client", "discord.gateway", "httpx", "uvicorn.access")


def quiet_libraries(level: int) -> None:
    # reduce library noise unless debugging
    if level <= logging.DEBUG:
        return
    for name in NOISY_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger("hub_bot")
    if logger.handlers:
        return logger  # already configured
    logger.setLevel(level)
    handler = logging.StreamHandler(sys.stdout)
    fmt = logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    handler.setFormatter(fmt)
    logger.addHandler(handler)
    quiet_libraries(level)
    return logger
