"""
Logging Module - Application log setup
======================================

All loggers live under the ``elite_agent`` namespace. One call to
setup_logging() installs the handlers:

- a colored console handler
- ``elite-agent.log`` (plain text or JSON lines) when a log dir is set
- ``errors.log`` with JSON lines for ERROR and above

Request context (for example the chat route's ``request_id``) is held
in a context variable, so it follows a request through async code and
is stamped onto every record emitted while it is set.
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


ROOT_LOGGER_NAME = "elite_agent"

FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"

_request_context: ContextVar[Dict[str, Any]] = ContextVar("elite_agent_log_context", default={})


def _record_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return getattr(record, "extra_data", None) or {}


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line.

    Context fields, when present, are nested under ``data``.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        fields = _record_fields(record)
        if fields:
            entry["data"] = fields

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


class ColoredFormatter(logging.Formatter):
    """Console formatter: colored level tag, then ``key=value`` context."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"
    BOLD = "\033[1m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, "")
        when = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")

        parts = [
            f"{color}{self.BOLD}[{record.levelname}]{self.RESET} {when}",
            f"{record.name}:{record.lineno}",
            record.getMessage(),
        ]

        fields = _record_fields(record)
        if fields:
            parts.append(" ".join(f"{key}={value}" for key, value in fields.items()))

        line = " | ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class RequestContextFilter(logging.Filter):
    """
    Stamp the current request context onto each record.

    Fields bound by a ComponentAdapter are merged in first, so request
    context wins on a name clash. Never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        fields = dict(getattr(record, "component_fields", None) or {})
        fields.update(_request_context.get())
        if fields:
            record.extra_data = fields
        return True


class ComponentAdapter(logging.LoggerAdapter):
    """
    Logger adapter carrying fixed fields for one component.

    Example:
        logger = get_logger("services.chat", component="chat")
        logger.info("Turn answered")  # ... | component=chat
    """

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        if self.extra:
            extra = dict(kwargs.get("extra") or {})
            extra["component_fields"] = dict(self.extra)
            kwargs["extra"] = extra
        return msg, kwargs


_configured = False


def _attach(
    logger: logging.Logger,
    handler: logging.Handler,
    level: int,
    formatter: logging.Formatter
) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    # Filters on the handler also see records propagated from child loggers
    handler.addFilter(RequestContextFilter())
    logger.addHandler(handler)


def setup_logging(
    log_dir: Optional[str] = None,
    log_level: str = "INFO",
    json_format: bool = False,
    console_output: bool = True
) -> None:
    """
    Configure the ``elite_agent`` logger.

    Only the first call takes effect; the web app, the CLI and the
    terminal UI may all call it.

    Args:
        log_dir: Directory for log files; no files are written if empty
        log_level: Minimum level name, e.g. "INFO"
        json_format: Write ``elite-agent.log`` as JSON lines
        console_output: Also log to stdout
    """
    global _configured

    if _configured:
        return

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root.handlers.clear()

    if console_output:
        _attach(root, logging.StreamHandler(sys.stdout), logging.DEBUG, ColoredFormatter())

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        main_formatter = JSONFormatter() if json_format else logging.Formatter(FILE_FORMAT)
        _attach(
            root,
            logging.FileHandler(log_path / "elite-agent.log", encoding="utf-8"),
            logging.DEBUG,
            main_formatter,
        )
        _attach(
            root,
            logging.FileHandler(log_path / "errors.log", encoding="utf-8"),
            logging.ERROR,
            JSONFormatter(),
        )

    _configured = True


def get_logger(name: str, **fields) -> ComponentAdapter:
    """
    Get a logger nested under the application logger.

    ``get_logger("web.routes")`` and ``get_logger("elite_agent.web.routes")``
    name the same logger. Keyword arguments are attached to every record.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return ComponentAdapter(logging.getLogger(name), fields)


def set_log_context(**fields) -> None:
    """
    Add fields to the current request's log context.

    Example:
        set_log_context(request_id="abc123")
        logger.info("Processing request")  # ... | request_id=abc123
    """
    _request_context.set({**_request_context.get(), **fields})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the current request's log context."""
    return dict(_request_context.get())


def clear_log_context() -> None:
    """Drop all fields from the current request's log context."""
    _request_context.set({})
