import logging
from pathlib import Path

from platformdirs import user_log_dir

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(threadName)s - %(name)s - %(message)s"
LOG_FILENAME = "lazyfm.log"


def default_log_file() -> Path:
    return Path(user_log_dir("lazyfm", appauthor=False)) / LOG_FILENAME


def setup_logging(level: str = "WARNING", log_file: Path | None = None) -> None:
    """
    Configure the global logging configuration.

    Args:
        level: Level name such as ``"DEBUG"``; unknown names mean WARNING.
        log_file: Target file; defaults to the per-user log directory.

    Note:
        The terminal belongs to the UI, so records only go to a file.
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear any existing handlers to avoid duplicates
    root_logger.handlers.clear()

    log_path = Path(log_file) if log_file is not None else default_log_file()
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    except OSError:
        # Unwritable log directory: run without a log file.
        handler = logging.NullHandler()
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)
