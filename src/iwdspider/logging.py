"""
Logging configuration for iwd-spider.
Provides console, rotating file and syslog output in text or JSON form, and
the per-entity logger adapter that tags messages with the entity's type and path.
"""

import json
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Tuple, Union

ROOT_LOGGER_NAME = "iwdspider"

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FORMATS = ("text", "tty", "json")


class JsonFormatter(logging.Formatter):
    """Formatter that renders each record as one JSON object."""

    def __init__(self, enable_timestamp: bool = True, pretty: bool = False):
        """
        Args:
            enable_timestamp: Include the record time
            pretty: Indent the JSON output
        """
        super().__init__(datefmt=DATE_FORMAT)
        self.enable_timestamp = enable_timestamp
        self.pretty = pretty

    def format(self, record):
        """Format the record as JSON, carrying entity fields when present."""
        payload = {
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if self.enable_timestamp:
            payload["time"] = self.formatTime(record, self.datefmt)
        for field in ("entity_type", "path"):
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = str(value)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, indent=2 if self.pretty else None, sort_keys=True)


def make_formatter(log_format: str = "text", enable_timestamp: bool = True,
                   pretty: bool = False) -> logging.Formatter:
    """
    Build the formatter for one of the supported output formats.

    Args:
        log_format: 'text', 'tty' or 'json'
        enable_timestamp: Include timestamps (text and json)
        pretty: Indent JSON output

    Returns:
        Formatter instance

    Raises:
        ValueError: If the format is not supported
    """
    if log_format == "tty":
        return logging.Formatter(fmt=TEXT_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")
    if log_format == "text":
        fmt = TEXT_FORMAT if enable_timestamp else "[%(levelname)s] %(name)s - %(message)s"
        return logging.Formatter(fmt=fmt, datefmt=DATE_FORMAT)
    if log_format == "json":
        return JsonFormatter(enable_timestamp=enable_timestamp, pretty=pretty)
    raise ValueError(
        f"Invalid log format {log_format!r}; valid values are: {', '.join(LOG_FORMATS)}")


def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    console_output: bool = True,
    log_format: str = "text",
    syslog_address: Optional[Union[str, Tuple[str, int]]] = None,
    syslog_tag: str = "iwd-spider",
    pretty: bool = False
) -> logging.Logger:
    """
    Configure logging for iwd-spider.

    Args:
        log_level: Logging level as string (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file for persistent logging
        console_output: Whether to also log to console/stderr
        log_format: 'text', 'tty' or 'json'
        syslog_address: Optional syslog socket path or (host, port)
        syslog_tag: Identifier prepended to syslog messages
        pretty: Indent JSON output

    Returns:
        Configured logger instance
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Clear any existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = make_formatter(log_format, pretty=pretty)

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if syslog_address:
        syslog_handler = logging.handlers.SysLogHandler(address=syslog_address)
        syslog_handler.ident = f"{syslog_tag}: "
        syslog_handler.setLevel(level)
        syslog_handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))
        logger.addHandler(syslog_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance under the iwdspider hierarchy
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


class EntityLogger(logging.LoggerAdapter):
    """
    Logger adapter owned by a single entity instance.

    Adds entity_type and path to every record and prefixes the message
    so plain text output identifies the entity.
    """

    def __init__(self, logger: logging.Logger, entity_type: str, path: str):
        super().__init__(logger, {"entity_type": entity_type, "path": path})

    def process(self, msg, kwargs):
        extra = dict(self.extra)
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        return f"[{self.extra['entity_type']} {self.extra['path']}] {msg}", kwargs
