import logging
from logging import Handler
from pathlib import Path
from typing import Optional

TRACE_LOGGER_NAME = "dialogue.trace"


def configure_logging(
    level: int = logging.INFO,
    log_to_file: bool = False,
    log_dir: str = "logs",
    handler: Optional[Handler] = None,
) -> None:
    """
    Configure root logging for the application.

    *handler* replaces the default stream handler (the CLI passes a RichHandler).
    """
    handlers: list[Handler] = [handler or logging.StreamHandler()]
    if log_to_file:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(Path(log_dir) / "dialogue.log"), encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
        handlers.append(file_handler)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=handlers,
        force=True,
    )


def get_logger(name: str = "") -> logging.Logger:
    """
    Get a logger with the given name, pre-configured.
    """
    return logging.getLogger(name)


def get_trace_logger() -> logging.Logger:
    """
    Logger receiving the HTTP status line and response headers of every request.
    """
    return get_logger(TRACE_LOGGER_NAME)
