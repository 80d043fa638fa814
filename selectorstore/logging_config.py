"""
Logging setup for selstore.

Every record carries a ``store_key`` field: the storage key of the
traversal that emitted it, or "-" outside a traversal. Writers also
attach ``records`` (links recorded so far) so a failed or committed
traversal can be sized from its log line alone.

Environment Variables:
    SELSTORE_LOG_LEVEL: DEBUG, INFO, WARNING or ERROR - default: INFO
    SELSTORE_LOG_FORMAT: json or text - default: json
"""

import logging
import os
import sys
from typing import Any, MutableMapping, Optional, Tuple

from pythonjsonlogger import jsonlogger

NO_KEY = "-"

JSON_FIELDS = "%(asctime)s %(levelname)s %(name)s %(store_key)s %(message)s"
TEXT_FIELDS = "%(asctime)s %(levelname)-7s %(name)s [%(store_key)s] %(message)s"


class StoreKeyFilter(logging.Filter):
    """Fills ``store_key`` on records from plain (non-traversal) loggers."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "store_key"):
            record.store_key = NO_KEY  # type: ignore
        return True


class TraversalLogAdapter(logging.LoggerAdapter):
    """
    Binds a storage key to a logger.

    Unlike the stdlib adapter, call-site ``extra`` is merged over the bound
    fields instead of being discarded.
    """

    def __init__(self, logger: logging.Logger, key: Optional[str] = None):
        super().__init__(logger, {"store_key": key or NO_KEY})

    @property
    def key(self) -> str:
        return self.extra["store_key"]

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


def _formatter(log_format: str) -> logging.Formatter:
    if log_format == "text":
        return logging.Formatter(TEXT_FIELDS, datefmt="%Y-%m-%d %H:%M:%S")
    return jsonlogger.JsonFormatter(
        JSON_FIELDS,
        rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
    )


def setup_logging() -> None:
    """
    Install a single stderr handler on the root logger.

    Called by the CLI only; library code just logs. Stderr keeps stdout
    free for --json output.
    """
    level = logging.getLevelName(os.getenv("SELSTORE_LOG_LEVEL", "INFO").upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.addFilter(StoreKeyFilter())
    handler.setFormatter(_formatter(os.getenv("SELSTORE_LOG_FORMAT", "json").lower()))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers[:] = [handler]

    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logger(name: str, key: Optional[str] = None) -> TraversalLogAdapter:
    """Logger for ``name`` tagged with the traversal's storage key."""
    return TraversalLogAdapter(logging.getLogger(name), key)
