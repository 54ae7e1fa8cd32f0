import inspect
import json
import logging
import re
import sys
import time
from contextvars import ContextVar
from functools import wraps
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Optional

# Session id of the resume/interview session handling the current request
session_id_var: ContextVar[Optional[str]] = ContextVar('session_id', default=None)

# Gemini keys start with "AIza"; generic key=value pairs are masked as well
SECRET_PATTERNS = [
    (re.compile(r'AIza[\w-]{20,}'), '***MASKED***'),
    (re.compile(r'(api[_-]?key\s*[=:]\s*)["\']?[\w-]{16,}["\']?', re.IGNORECASE), r'\1***MASKED***'),
    (re.compile(r'(x-goog-api-key\s*[=:]\s*)["\']?[\w-]{16,}["\']?', re.IGNORECASE), r'\1***MASKED***'),
]

LOG_FORMAT = "%(asctime)s - [%(session_id)s] - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

BASE_DIR = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = BASE_DIR / "logs"


def mask_secrets(text: str) -> str:
    """Mask API keys in text."""
    for pattern, replacement in SECRET_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


class SecretMaskingFilter(logging.Filter):
    """Masks credentials in log messages and their string arguments."""

    def filter(self, record):
        if isinstance(record.msg, str):
            record.msg = mask_secrets(record.msg)
        if record.args:
            record.args = tuple(
                mask_secrets(arg) if isinstance(arg, str) else arg
                for arg in record.args
            )
        return True


class SessionIdFilter(logging.Filter):
    """Injects the active session id into every record."""

    def filter(self, record):
        record.session_id = session_id_var.get() or "N/A"
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line for the log file."""

    def format(self, record):
        payload = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "session_id": getattr(record, 'session_id', 'N/A'),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


class ColorFormatter(logging.Formatter):
    """Colours console output by level."""

    grey = "\x1b[38;20m"
    yellow = "\x1b[33;20m"
    red = "\x1b[31;20m"
    bold_red = "\x1b[31;1m"
    reset = "\x1b[0m"

    COLORS = {
        logging.DEBUG: grey,
        logging.INFO: grey,
        logging.WARNING: yellow,
        logging.ERROR: red,
        logging.CRITICAL: bold_red,
    }

    def format(self, record):
        color = self.COLORS.get(record.levelno, self.grey)
        formatter = logging.Formatter(color + LOG_FORMAT + self.reset, datefmt=DATE_FORMAT)
        return formatter.format(record)


def setup_logger(
    name: str = "app",
    log_level: int | str = logging.INFO,
    clear_log: bool = False,
    use_json: bool = False,
    log_to_file: bool = True,
) -> logging.Logger:
    """
    Sets up the application logger with a coloured console handler and a
    rotating file handler under ``logs/``.

    Args:
        name: Logger name; every ``app.*`` module logger propagates to it.
        log_level: Level name or number.
        clear_log: Truncate ``logs/app.log`` before attaching the handler.
        use_json: Write the log file as JSON lines.
        log_to_file: Attach the rotating file handler.
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Handlers are attached once per process
    if logger.handlers:
        return logger

    session_filter = SessionIdFilter()
    secret_filter = SecretMaskingFilter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(ColorFormatter())
    console_handler.addFilter(session_filter)
    console_handler.addFilter(secret_filter)
    logger.addHandler(console_handler)

    if log_to_file:
        LOGS_DIR.mkdir(exist_ok=True)
        log_file = LOGS_DIR / "app.log"
        if clear_log and log_file.exists():
            log_file.write_text("")

        # Rotate after 5MB, keep 5 backups
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8"
        )
        if use_json:
            file_handler.setFormatter(JsonFormatter(datefmt=DATE_FORMAT))
        else:
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        file_handler.addFilter(session_filter)
        file_handler.addFilter(secret_filter)
        logger.addHandler(file_handler)

    return logger


def set_session_id(session_id: Optional[str]):
    """Bind a session id to the current context."""
    session_id_var.set(session_id)


def get_session_id() -> Optional[str]:
    return session_id_var.get()


logger = logging.getLogger(__name__)


def log_async_execution_time(func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator logging how long a coroutine function takes, including failures.
    """
    if not inspect.iscoroutinefunction(func):
        raise TypeError(f"{func.__name__} is not a coroutine function")

    @wraps(func)
    async def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            duration = time.perf_counter() - start_time
            logger.error(f"Error in {func.__name__} after {duration:.4f} seconds: {e}")
            raise
        duration = time.perf_counter() - start_time
        logger.info(f"Finished {func.__name__} in {duration:.4f} seconds")
        return result
    return wrapper
