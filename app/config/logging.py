"""Process-wide logging configuration for service and diagnostics runs."""

import json
import logging

_RESERVED_RECORD_FIELDS = frozenset(
    {
        "msg",
        "args",
        "exc_info",
        "exc_text",
        "stack_info",
        "stacklevel",
        "levelno",
        "levelname",
        "msecs",
        "relativeCreated",
        "created",
        "thread",
        "threadName",
        "processName",
        "process",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "name",
        "message",
        "asctime",
        "taskName",
        "color_message",
    }
)
_PLAIN_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class JsonLogFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects with extra fields attached."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key in _RESERVED_RECORD_FIELDS:
                continue
            try:
                json.dumps({key: value})
                payload[key] = value
            except (TypeError, ValueError):
                payload[key] = str(value)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, separators=(",", ":"))


def config_configure_logging(level: str = "info", log_format: str = "plain") -> logging.Logger:
    """Attach one stream handler to the root logger and set its level.

    Repeated calls replace the formatter and level of the existing handler
    rather than stacking new handlers.

    Args:
        level: Logging level name, case-insensitive.
        log_format: `plain` for human-readable lines, `json` for structured lines.

    Returns:
        logging.Logger: Configured root logger.

    Raises:
        ValueError: Raised when level or format is not recognized.
    """

    normalized_level = level.strip().upper()
    if normalized_level not in logging.getLevelNamesMapping():
        raise ValueError(f"unknown log level: {level}")
    normalized_format = log_format.strip().lower()
    if normalized_format not in {"plain", "json"}:
        raise ValueError(f"unknown log format: {log_format}")

    formatter: logging.Formatter
    if normalized_format == "json":
        formatter = JsonLogFormatter()
    else:
        formatter = logging.Formatter(_PLAIN_FORMAT)

    root_logger = logging.getLogger()
    handler = next((existing for existing in root_logger.handlers if getattr(existing, "_service_handler", False)), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler._service_handler = True  # type: ignore[attr-defined]
        root_logger.addHandler(handler)
    handler.setFormatter(formatter)
    root_logger.setLevel(normalized_level)
    return root_logger
