from __future__ import annotations

import os
import logging
from pythonjsonlogger import jsonlogger
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
import sys
import re
import json
from typing import Any, Dict

from colorama import Fore, Style, init as colorama_init

# Import settings for environment variable configuration
from contractor_ads.core.config import settings

colorama_init()

LOG_DIR = os.path.abspath(settings.LOG_DIR)
# Ensure the directory exists at import time
os.makedirs(LOG_DIR, exist_ok=True)
MAX_BYTES = settings.LOG_ROTATION_SIZE
BACKUP_COUNT = settings.LOG_BACKUP_COUNT

class LogSanitizer:
    """Utility class for sanitizing sensitive data in logs.

    Leads carry contact details and every protected request carries the
    shared internal key; neither may end up in log output.
    """

    SENSITIVE_PATTERNS = {
        'email': r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}',
        # Separated groups or an international number, never a bare run of digits
        'phone': r'(?:\+\d{1,3}[-.\s]?)?\(?\b\d{3}\)?[-.\s]\d{3}[-.\s]\d{4}\b|\+\d{10,15}\b',
        'api_key': r'(?i)(api[_-]?key|apikey|token|secret|internal[_-]?key)[_-]?[=:]\s*[\w\-\.]+',
    }

    # Fields that should always be redacted
    SENSITIVE_FIELDS = {
        'password', 'token', 'secret', 'api_key', 'apikey', 'authorization',
        'internal_key', 'internal-key', 'webhook_key', 'phone', 'email',
    }

    @classmethod
    def _redaction_for_key(cls, key: str) -> str:
        lowered = key.lower()
        if 'email' in lowered:
            return "[REDACTED_EMAIL]"
        if 'phone' in lowered:
            return "[REDACTED_PHONE]"
        if 'key' in lowered:
            return "[REDACTED_API_KEY]"
        return "[REDACTED]"

    @classmethod
    def is_sensitive_key(cls, key: str) -> bool:
        lowered = key.lower()
        return any(sensitive in lowered for sensitive in cls.SENSITIVE_FIELDS)

    @classmethod
    def sanitize_value(cls, value: Any) -> Any:
        """Sanitize a single value."""
        if isinstance(value, str):
            for pattern_name, pattern in cls.SENSITIVE_PATTERNS.items():
                value = re.sub(pattern, f"[REDACTED_{pattern_name.upper()}]", value)
            return value
        elif isinstance(value, dict):
            return cls.sanitize_dict(value)
        elif isinstance(value, list):
            return [cls.sanitize_value(item) for item in value]
        return value

    @classmethod
    def sanitize_dict(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """Sanitize a dictionary of data."""
        if not isinstance(data, dict):
            return data

        sanitized = {}
        for key, value in data.items():
            if cls.is_sensitive_key(str(key)):
                sanitized[key] = cls._redaction_for_key(str(key))
            else:
                sanitized[key] = cls.sanitize_value(value)
        return sanitized

    @classmethod
    def sanitize_log_record(cls, record: logging.LogRecord) -> logging.LogRecord:
        """Sanitize a log record."""
        if isinstance(record.msg, dict):
            record.msg = cls.sanitize_dict(record.msg)
        elif isinstance(record.msg, str):
            record.msg = cls.sanitize_value(record.msg)

        if record.args:
            if isinstance(record.args, tuple):
                record.args = tuple(cls.sanitize_value(arg) for arg in record.args)
            else:
                record.args = cls.sanitize_value(record.args)

        return record

class CustomJsonFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super(CustomJsonFormatter, self).add_fields(log_record, record, message_dict)

        if not log_record.get('timestamp'):
            log_record['timestamp'] = datetime.now(timezone.utc).isoformat()

        if not log_record.get('level'):
            log_record['level'] = record.levelname.upper()

        if not log_record.get('source'):
            log_record['source'] = record.name

        if 'message' in message_dict:
            log_record['message'] = message_dict['message']
        elif hasattr(record, 'message'):
            log_record['message'] = record.message

class SanitizingFilter(logging.Filter):
    """Filter to sanitize log records before they are processed."""

    STANDARD_ATTRS = {
        'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
        'module', 'exc_info', 'exc_text', 'stack_info', 'lineno', 'funcName',
        'created', 'msecs', 'relativeCreated', 'thread', 'threadName',
        'processName', 'process', 'message', 'asctime', 'taskName',
    }

    def filter(self, record: logging.LogRecord) -> bool:
        LogSanitizer.sanitize_log_record(record)

        # Extra fields passed via ``extra=`` land on the record as attributes
        for attr_name, attr_value in list(vars(record).items()):
            if attr_name.startswith('_') or attr_name in self.STANDARD_ATTRS:
                continue
            if LogSanitizer.is_sensitive_key(attr_name):
                setattr(record, attr_name, LogSanitizer._redaction_for_key(attr_name))
            else:
                setattr(record, attr_name, LogSanitizer.sanitize_value(attr_value))

        return True

class EnhancedColorFormatter(logging.Formatter):
    LEVEL_COLORS = {
        'DEBUG': Fore.CYAN,
        'INFO': Fore.GREEN,
        'WARNING': Fore.YELLOW,
        'ERROR': Fore.RED,
        'CRITICAL': Fore.MAGENTA
    }
    CONTEXT_COLOR = Fore.CYAN
    KEY_COLOR = Fore.YELLOW
    VALUE_COLOR = Fore.WHITE
    TIME_COLOR = Fore.LIGHTBLACK_EX

    def format(self, record):
        color = self.LEVEL_COLORS.get(record.levelname, '')
        reset = Style.RESET_ALL
        time_str = datetime.now(timezone.utc).isoformat()
        msg = record.getMessage()
        context = ''
        # Extract context from message prefix, e.g., [WEBHOOK]
        if msg.startswith('['):
            end = msg.find(']')
            if end != -1:
                context = msg[:end+1]
                msg = msg[end+2:].lstrip()
        pretty_json = None
        if isinstance(record.msg, dict):
            pretty_json = json.dumps(record.msg, indent=2, default=str)
        context_str = f"{self.CONTEXT_COLOR}{context}{reset}" if context else ""
        level_str = f"{color}[{record.levelname}]{reset}"
        time_str_col = f"{self.TIME_COLOR}{time_str}{reset}"
        if pretty_json:
            colored = []
            for line in pretty_json.splitlines():
                if ':' in line:
                    key, val = line.split(':', 1)
                    colored.append(f"{self.KEY_COLOR}{key}:{reset}{self.VALUE_COLOR}{val}{reset}")
                else:
                    colored.append(f"{self.VALUE_COLOR}{line}{reset}")
            msg = '\n' + '\n'.join(colored)
        line = f"{level_str} {time_str_col} {context_str} {msg}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line

def build_formatter(log_format: str) -> logging.Formatter:
    if log_format == "console":
        return EnhancedColorFormatter()
    return CustomJsonFormatter(
        fmt="%(timestamp)s %(level)s %(name)s %(message)s %(source)s %(component)s",
        json_ensure_ascii=False,
        reserved_attrs=[],
    )

def init_logging(level: int | None = None) -> logging.Logger:
    """Bootstrap application-wide logging. Safe to call multiple times."""

    if level is None:
        level_name = settings.LOG_LEVEL.upper()
        level = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger()

    # Idempotency – if we already added our sentinel handler, just return
    for h in root_logger.handlers:
        if getattr(h, "_is_central_handler", False):
            root_logger.setLevel(level)
            return logging.getLogger("contractor_ads")

    formatter = build_formatter(settings.LOG_FORMAT)
    sanitizer = SanitizingFilter()

    # Console / docker-stdout
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    console_handler.addFilter(sanitizer)
    console_handler._is_central_handler = True  # sentinel attr

    # File output is always JSON so it stays machine readable
    combined_log_path = os.path.join(LOG_DIR, "combined.log")
    file_handler = RotatingFileHandler(
        combined_log_path,
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
    )
    file_handler.setFormatter(build_formatter("json"))
    file_handler.setLevel(level)
    file_handler.addFilter(sanitizer)
    file_handler._is_central_handler = True

    # Reset existing handlers (avoid duplicate logs when reloaded)
    root_logger.handlers = []
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    # Quiet noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)

    app_logger = logging.getLogger("contractor_ads")
    app_logger.info("Centralised logger initialised", extra={"component": "logger"})
    return app_logger

# Initialise at import time so any early imports get the logger
app_logger = init_logging()
