import logging
import os

LOGGER_NAME = "gameverse"
LOG_LEVEL = os.environ.get("GAMEVERSE_LOG_LEVEL", "INFO")


def setup_logger(level: str = LOG_LEVEL) -> logging.Logger:
    """
    Configure the "gameverse" logger used by the store.

    Console output with a timestamped format. Safe to call more than once:
    handlers are only attached the first time.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())

    # Avoid duplicate handlers if setup_logger() is called multiple times
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    logger.debug("Logger initialized")
    return logger
