"""Logging configuration: brief console output + per-session rotating log file"""
import logging
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterable

CONSOLE_FORMAT = '%(levelname)s: %(message)s'
FILE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s'

# Third-party loggers that flood the console at INFO
NOISY_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def cleanup_session_logs(log_path: Path, keep: int) -> None:
    """
    Delete old session logs so that, with the one about to be created,
    at most `keep` remain.

    Session logs are named <stem>_<YYYYmmdd_HHMMSS>.log, so lexical order
    is chronological.
    """
    existing_logs = sorted(log_path.parent.glob(f"{log_path.stem}_*.log"), reverse=True)  # Newest first
    for old_log in existing_logs[max(keep - 1, 0):]:
        try:
            old_log.unlink()
        except OSError:
            pass  # Another process may have removed it


def setup_logging(
    log_file: str = "logs/rslp-stemmer.log",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    keep_sessions: int = 5,
    quiet_loggers: Iterable[str] = NOISY_LOGGERS,
) -> Path:
    """
    Configure root logging with two destinations:
    - Console (stdout): brief, INFO by default
    - File: detailed, DEBUG by default, one file per process start

    Rotation policy:
    - New timestamped file on each start (<stem>_<timestamp>.log)
    - Keep the newest `keep_sessions` files, older ones deleted on startup
    - Rotate when a file reaches 10MB

    Args:
        log_file: Base log path; its directory is created if missing
        console_level: Console logging level
        file_level: File logging level
        keep_sessions: Number of session logs to retain
        quiet_loggers: Loggers raised to WARNING

    Returns:
        Path of the session log file
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    cleanup_session_logs(log_path, keep_sessions)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    session_log = log_path.parent / f"{log_path.stem}_{timestamp}.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Filtering happens in handlers

    # Reconfiguring must not duplicate output
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    file_handler = RotatingFileHandler(
        session_log,
        mode='a',
        maxBytes=10*1024*1024,  # 10MB
        backupCount=10,
        encoding='utf-8'
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))

    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.info(f"Logging configured: console={logging.getLevelName(console_level)}, file={session_log} ({logging.getLevelName(file_level)})")
    return session_log
