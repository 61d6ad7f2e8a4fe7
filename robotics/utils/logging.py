"""Logging setup for robotics dispatch, with per-case context fields."""

import functools
import logging
from pathlib import Path
from typing import Any, Dict, Optional

# Every record carries these, so format strings may use %(case_id)s
DEFAULT_CONTEXT: Dict[str, Any] = {"case_id": "-"}

# Client libraries that log each request at INFO/DEBUG
NOISY_LOGGERS = ("botocore", "boto3", "urllib3", "multipart")


class CaseContextFilter(logging.Filter):
    """Stamp the case being dispatched onto each log record."""

    def __init__(self):
        super().__init__()
        self.context: Dict[str, Any] = {}

    def filter(self, record: logging.LogRecord) -> bool:
        fields = dict(DEFAULT_CONTEXT, **self.context)
        for key, value in fields.items():
            if key in self.context or not hasattr(record, key):
                setattr(record, key, value)
        return True

    def set_context(self, **kwargs):
        self.context.update(kwargs)

    def clear_context(self):
        self.context.clear()


_case_filter = CaseContextFilter()


def _attach(root: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter):
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(_case_filter)
    root.addHandler(handler)


def setup_logging(
    level: str = "INFO",
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Route all dispatch logging to the console and, optionally, a file.

    Any handlers already on the root logger are replaced. AWS and HTTP
    client loggers are held at WARNING unless DEBUG is requested.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format string; may use %(case_id)s
        log_file: Path of a log file to append to, created with its directory

    Returns:
        The root logger
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    root = logging.getLogger()
    root.setLevel(numeric_level)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = logging.Formatter(log_format)
    _attach(root, logging.StreamHandler(), numeric_level, formatter)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        _attach(root, logging.FileHandler(log_file, encoding="utf-8"), numeric_level, formatter)

    library_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    return root


def set_context(**kwargs):
    """
    Tag subsequent log records with the given fields.

    Example:
        set_context(case_id="1234567890")
        logger.info("Sending case to robotics")  # record.case_id == "1234567890"
    """
    _case_filter.set_context(**kwargs)


def clear_context():
    _case_filter.clear_context()


def get_context() -> Dict[str, Any]:
    return dict(_case_filter.context)


def with_case_context(func):
    """Tag records logged during the call with its ``case_id`` keyword argument."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        saved = dict(_case_filter.context)
        if kwargs.get("case_id") is not None:
            set_context(case_id=str(kwargs["case_id"]))
        try:
            return func(*args, **kwargs)
        finally:
            _case_filter.context = saved

    return wrapper
