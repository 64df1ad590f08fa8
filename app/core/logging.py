"""
Logging Configuration and Utilities

Structured logging for the HR backend: structlog processors, a JSON or
text formatter on the root logger, and request context carried through
context variables set by the request middleware.
"""

import sys
import logging
import logging.handlers
from typing import TYPE_CHECKING, Any, Dict, Optional
from datetime import datetime, timezone
from pathlib import Path
from contextvars import ContextVar

import structlog
from pythonjsonlogger import jsonlogger

if TYPE_CHECKING:
    from app.config.settings import Settings

SERVICE_NAME = 'hr-management'

# Context variables for request tracking
request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
user_id: ContextVar[Optional[str]] = ContextVar('user_id', default=None)

SENSITIVE_KEYS = (
    'password', 'token', 'secret', 'credentials',
    'authorization', 'cookie', 'hash',
)

_environment = 'development'


def redact(data: Dict[str, Any]) -> Dict[str, Any]:
    """Mask values whose key looks sensitive, recursing into dicts."""
    for key in list(data.keys()):
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            data[key] = '[REDACTED]'
        elif isinstance(data[key], dict):
            redact(data[key])
    return data


class RequestContextProcessor:
    """Add request context to structlog events"""

    def __call__(self, logger, method_name, event_dict):
        req_id = request_id.get()
        if req_id:
            event_dict['request_id'] = req_id

        uid = user_id.get()
        if uid:
            event_dict['user_id'] = uid

        event_dict['timestamp'] = datetime.now(timezone.utc).isoformat()
        event_dict['service'] = SERVICE_NAME
        event_dict['environment'] = _environment

        return event_dict


class SecurityLogProcessor:
    """Flag security events and mask sensitive values"""

    def __call__(self, logger, method_name, event_dict):
        if any(keyword in str(event_dict.get('event', '')).lower()
               for keyword in ['auth', 'login', 'permission', 'password']):
            event_dict['security_event'] = True

        redact(event_dict)
        return event_dict


class RequestContextFilter(logging.Filter):
    """Copy request context onto stdlib log records"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id.get() or '-'
        record.user_id = getattr(record, 'user_id', None) or user_id.get() or '-'
        record.service = SERVICE_NAME
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter for structured logging"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['module'] = record.module
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno
        log_record['environment'] = _environment

        if record.exc_info:
            log_record['exception'] = self.formatException(record.exc_info)


class LoggingConfig:
    """Centralized logging configuration"""

    @staticmethod
    def configure_structured_logging(log_format: str) -> None:
        """Configure structured logging with structlog"""

        processors = [
            RequestContextProcessor(),
            SecurityLogProcessor(),
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]

        if log_format == "json":
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.processors.KeyValueRenderer())

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            context_class=dict,
            cache_logger_on_first_use=True,
        )

    @staticmethod
    def configure_standard_logging(
        level: str,
        log_format: str,
        log_file: Optional[str] = None,
    ) -> None:
        """Configure the root logger"""

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, level))
        root_logger.handlers.clear()

        if log_format == "json":
            formatter = CustomJsonFormatter(
                '%(asctime)s %(name)s %(levelname)s %(request_id)s %(message)s'
            )
        else:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s'
            )

        context_filter = RequestContextFilter()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, level))
        console_handler.setFormatter(formatter)
        console_handler.addFilter(context_filter)
        root_logger.addHandler(console_handler)

        if log_file:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
            )
            file_handler.setLevel(getattr(logging, level))
            file_handler.setFormatter(formatter)
            file_handler.addFilter(context_filter)
            root_logger.addHandler(file_handler)

    @staticmethod
    def configure_library_loggers(log_sql_queries: bool) -> None:
        """Reduce noise from external libraries"""
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("uvicorn.error").setLevel(logging.INFO)
        logging.getLogger("passlib").setLevel(logging.ERROR)
        logging.getLogger("httpx").setLevel(logging.WARNING)

        if log_sql_queries:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
        else:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


class LoggerAdapter:
    """Logger wrapper that merges persistent context into `extra`"""

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self._context: Dict[str, Any] = {}

    def add_context(self, **kwargs):
        self._context.update(kwargs)
        return self

    def remove_context(self, *keys):
        for key in keys:
            self._context.pop(key, None)
        return self

    def _log(self, level: int, message: str, *args, **kwargs):
        extra = dict(kwargs.get('extra') or {})
        extra.update(self._context)
        kwargs['extra'] = redact(extra)

        self.logger.log(level, message, *args, **kwargs)

    def debug(self, message: str, *args, **kwargs):
        self._log(logging.DEBUG, message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self._log(logging.INFO, message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self._log(logging.WARNING, message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self._log(logging.ERROR, message, *args, **kwargs)

    def exception(self, message: str, *args, **kwargs):
        kwargs.setdefault('exc_info', True)
        self._log(logging.ERROR, message, *args, **kwargs)

    def critical(self, message: str, *args, **kwargs):
        self._log(logging.CRITICAL, message, *args, **kwargs)


def get_logger(name: Optional[str] = None) -> LoggerAdapter:
    """
    Get a context-carrying logger.

    Args:
        name: Logger name (defaults to the package name)
    """
    return LoggerAdapter(logging.getLogger(name or 'app'))


def setup_logging(settings: "Settings") -> None:
    """Initialize logging from application settings"""
    global _environment
    _environment = settings.ENVIRONMENT

    if settings.ENABLE_STRUCTURED_LOGGING:
        LoggingConfig.configure_structured_logging(settings.LOG_FORMAT)

    LoggingConfig.configure_standard_logging(
        settings.LOG_LEVEL,
        settings.LOG_FORMAT,
        settings.LOG_FILE,
    )
    LoggingConfig.configure_library_loggers(settings.LOG_SQL_QUERIES)

    get_logger(__name__).info(
        "Logging system initialized",
        extra={
            'log_level': settings.LOG_LEVEL,
            'log_format': settings.LOG_FORMAT,
            'structured_logging': settings.ENABLE_STRUCTURED_LOGGING,
        },
    )


__all__ = [
    'get_logger',
    'setup_logging',
    'redact',
    'LoggerAdapter',
    'LoggingConfig',
    'request_id',
    'user_id',
]
