from __future__ import annotations

"""Logging helpers for import diagnostics and per-import context."""

from typing import Any, Dict, Iterable, Optional
from pathlib import Path
import logging
import logging.config
import json
from datetime import datetime, timezone
import os
import contextvars

from svp_importer.config import CONFIG_DIR, Settings


def summarize_payload(value: Any, *, max_list: int = 20, max_str: int = 200, depth: int = 3) -> Any:
    """Return a safe, size-limited summary of a payload for logging."""
    if depth <= 0:
        return f"<{type(value).__name__}>"
    if isinstance(value, dict):
        items = list(value.items())
        summarized: Dict[str, Any] = {}
        for key, val in items[:max_list]:
            summarized[str(key)] = summarize_payload(val, max_list=max_list, max_str=max_str, depth=depth - 1)
        if len(items) > max_list:
            summarized["__truncated__"] = True
            summarized["__len__"] = len(items)
        return summarized
    if isinstance(value, (list, tuple)):
        if len(value) > max_list:
            return {
                "__len__": len(value),
                "sample": [
                    summarize_payload(item, max_list=max_list, max_str=max_str, depth=depth - 1)
                    for item in value[:5]
                ],
            }
        return [
            summarize_payload(item, max_list=max_list, max_str=max_str, depth=depth - 1)
            for item in value
        ]
    if isinstance(value, str):
        if len(value) > max_str:
            return value[:max_str] + "...(truncated)"
        return value
    if isinstance(value, bytes):
        return {"__bytes__": len(value)}
    if isinstance(value, Path):
        return str(value)
    return value


DEFAULT_LOG_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s %(filename)s:%(lineno)d:%(funcName)s "
    "import_id=%(import_id)s source_file=%(source_file)s %(message)s"
)


_STANDARD_LOG_RECORD_KEYS = set(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
)


_import_id = contextvars.ContextVar("log_import_id", default="-")
_source_file = contextvars.ContextVar("log_source_file", default="-")


def set_log_context(*, import_id: Optional[str] = None, source_file: Optional[str] = None) -> None:
    """Set context variables for log enrichment."""
    if import_id is not None:
        _import_id.set(import_id)
    if source_file is not None:
        _source_file.set(source_file)


def clear_log_context() -> None:
    """Reset log context variables to their default values."""
    _import_id.set("-")
    _source_file.set("-")


class ImportContextFilter(logging.Filter):
    """Inject the active import ID and source file into each log record."""
    def filter(self, record: logging.LogRecord) -> bool:
        record.import_id = _import_id.get()
        record.source_file = _source_file.get()
        return True


class JsonFormatter(logging.Formatter):
    """Format log records as JSON for structured logging sinks."""
    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
            timespec="milliseconds"
        )
        payload = {
            "timestamp": timestamp,
            "severity": record.levelname,
            "level": record.levelname,
            "logger": record.name,
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
            "message": record.getMessage(),
            "import_id": getattr(record, "import_id", "-"),
            "source_file": getattr(record, "source_file", "-"),
        }
        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_LOG_RECORD_KEYS and key not in payload
        }
        if extras:
            payload.update(extras)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def build_formatter(settings: Optional[Settings] = None) -> logging.Formatter:
    """Build the active log formatter based on environment settings."""
    settings = settings or Settings.from_env()
    if settings.log_json:
        return JsonFormatter()
    return logging.Formatter(DEFAULT_LOG_FORMAT)


def attach_context_filter(handler: logging.Handler) -> None:
    """Ensure a handler includes the import context filter."""
    if not any(isinstance(f, ImportContextFilter) for f in handler.filters):
        handler.addFilter(ImportContextFilter())


def ensure_context_handlers(logger_names: Iterable[str] | None = None) -> None:
    """Apply consistent formatting/context to known logger handlers."""
    formatter = build_formatter()
    if logger_names is None:
        logger_names = ("", "svp_importer")
    for name in logger_names:
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.setFormatter(formatter)
            attach_context_filter(handler)


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Load logging configuration and apply environment overrides."""
    settings = settings or Settings.from_env()
    app_env = settings.app_env.lower()
    config_name = "logging.prod.json" if app_env in {"prod", "production"} else "logging.dev.json"
    config_path = CONFIG_DIR / config_name
    override_path = os.getenv("LOG_CONFIG")
    if override_path:
        config_path = Path(override_path)
    if config_path.exists():
        with config_path.open("r", encoding="utf-8") as handle:
            config = json.load(handle)
        if settings.log_json and "formatters" in config and "json" in config["formatters"]:
            for handler in config.get("handlers", {}).values():
                handler["formatter"] = "json"
        logging.config.dictConfig(config)
    else:
        logging.basicConfig(level=logging.INFO)
    if settings.log_level:
        logging.getLogger().setLevel(settings.log_level)
    ensure_context_handlers()


def get_logger(module_name: str, settings: Optional[Settings] = None) -> logging.Logger:
    """Return a logger and attach a per-module file handler when a log dir is set."""
    logger = logging.getLogger(module_name)
    if getattr(logger, "_file_handler_attached", False):
        return logger
    settings = settings or Settings.from_env()
    if settings.log_dir is None or not settings.is_dev:
        logger.propagate = True
        return logger
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    filename = module_name.replace(".", "_") + ".log"
    handler = logging.FileHandler(settings.log_dir / filename, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(build_formatter(settings))
    attach_context_filter(handler)
    logger.addHandler(handler)
    logger.propagate = True
    setattr(logger, "_file_handler_attached", True)
    return logger
