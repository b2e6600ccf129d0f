# core/logging_config.py
import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOGGER_NAME = "ecoplanina"


def setup_logger() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)

    # Uvicorn --reload imports the app twice
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(stream_handler)

    return logger


logger = setup_logger()


def audit(event: str, **fields) -> None:
    """
    Single-line audit record on the application logger.
    Callers must never pass secrets (passwords, tokens).
    """
    parts = " ".join(f"{k}={v}" for k, v in fields.items())
    logger.info(f"{event} {parts}".strip())
