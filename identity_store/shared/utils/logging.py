# 📄 File: identity_store/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# Sets up the record-keeping of what the identity store does (accounts created, logins bound,
# lookups that failed) in a structured way that is easy to search later.

# 🧪 Purpose (Technical Summary):
# Implements structured logging with JSON formatting, a correlation id carried through
# contextvars, and an audit helper for user actions.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Correlation tracking across awaits

# 🔄 Connected Modules / Calls From:
# Used by: UserManager (audit trail), application startup, tests

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from pythonjsonlogger.json import JsonFormatter

from identity_store.shared.config.settings import get_settings

# Context variable for correlating log lines of one logical operation
correlation_id_var: ContextVar[str] = ContextVar('correlation_id', default='')

# Global logging configuration
_logging_configured = False
_loggers_cache: Dict[str, "StructuredLogger"] = {}


class ContextualFormatter(logging.Formatter):
    """
    Text formatter that adds contextual information to log records.

    Adds the correlation id, service name and timestamp so plain-text
    output can still be traced across one operation.
    """

    def __init__(self, *args, service_name: str = 'identity-store', **kwargs):
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def format(self, record):
        record.correlation_id = correlation_id_var.get('')
        record.service = self.service_name
        record.timestamp = datetime.now(timezone.utc).isoformat()
        return super().format(record)


class JSONFormatter(JsonFormatter):
    """
    JSON formatter for structured logging.

    Flattens ``extra_fields`` passed by StructuredLogger into the top
    level of the log entry.
    """

    def __init__(self, service_name: str = 'identity-store'):
        super().__init__('%(levelname)s %(name)s %(message)s', timestamp=True)
        self.service_name = service_name

    def add_fields(self, log_data, record, message_dict):
        super().add_fields(log_data, record, message_dict)
        log_data['service'] = self.service_name
        log_data['module'] = record.module
        log_data['function'] = record.funcName
        if correlation_id_var.get():
            log_data['correlation_id'] = correlation_id_var.get()
        extra_fields = log_data.pop('extra_fields', None)
        if extra_fields:
            log_data.update(extra_fields)


class StructuredLogger:
    """
    Logger wrapper with structured logging capabilities.

    Keyword arguments other than the standard logging ones end up as
    fields of the log entry.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def debug(self, message: str, extra: Dict = None, **kwargs):
        self._log(logging.DEBUG, message, extra, **kwargs)

    def info(self, message: str, extra: Dict = None, **kwargs):
        self._log(logging.INFO, message, extra, **kwargs)

    def warning(self, message: str, extra: Dict = None, **kwargs):
        self._log(logging.WARNING, message, extra, **kwargs)

    def error(self, message: str, extra: Dict = None, exc_info: bool = False, **kwargs):
        self._log(logging.ERROR, message, extra, exc_info=exc_info, **kwargs)

    def _log(self, level: int, message: str, extra: Dict = None, **kwargs):
        """Internal log method with extra fields handling."""
        extra_fields = dict(extra or {})

        for key, value in kwargs.items():
            if key not in ['exc_info', 'stack_info', 'stacklevel']:
                extra_fields[key] = value

        clean_kwargs = {k: v for k, v in kwargs.items()
                        if k in ['exc_info', 'stack_info', 'stacklevel']}

        if extra_fields:
            clean_kwargs['extra'] = {'extra_fields': extra_fields}

        self.logger.log(level, message, **clean_kwargs)

    def log_user_action(
        self,
        action: str,
        user_id: str,
        result: str = 'success',
        extra: Dict = None
    ):
        """Log user action for audit trail."""
        extra_fields = {
            'event_type': 'user_action',
            'action': action,
            'user_id': user_id,
            'result': result,
            **(extra or {})
        }
        level = logging.INFO if result == 'success' else logging.WARNING
        self._log(level, f"User {user_id} {action}: {result}", extra_fields)


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    force: bool = False
) -> logging.Logger:
    """
    Configure the root logger once.

    Args:
        log_level: Overrides settings.LOG_LEVEL
        log_format: 'json' or 'text', overrides settings.LOG_FORMAT
        force: Reconfigure even if logging was already set up

    Returns:
        The 'identity_store' package logger
    """
    global _logging_configured

    if _logging_configured and not force:
        return logging.getLogger('identity_store')

    settings = get_settings()
    log_level = log_level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format.lower() == 'json':
        formatter = JSONFormatter(service_name=settings.APP_NAME)
    else:
        formatter = ContextualFormatter(
            '%(timestamp)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s',
            service_name=settings.APP_NAME
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
    logging.getLogger('aiosqlite').setLevel(logging.WARNING)

    _logging_configured = True
    return logging.getLogger('identity_store')


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        StructuredLogger instance
    """
    if name in _loggers_cache:
        return _loggers_cache[name]

    logger = StructuredLogger(name)
    _loggers_cache[name] = logger

    return logger


@contextmanager
def log_context(correlation_id: Optional[str] = None):
    """
    Context manager binding a correlation id to every log line emitted inside it.

    Args:
        correlation_id: Correlation identifier; generated when omitted
    """
    if correlation_id is None:
        correlation_id = str(uuid4())

    token = correlation_id_var.set(correlation_id)
    try:
        yield correlation_id
    finally:
        correlation_id_var.reset(token)
