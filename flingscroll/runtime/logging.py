"""Logging pipeline: console output plus optional JSON-lines file streaming.

Engine messages are written as ``event_name key=value ...``. The JSON
formatter lifts the event name and the pairs into structured fields so fling
and settings traces can be filtered without re-parsing text.
"""

from __future__ import annotations

import logging
import queue
import re
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from flingscroll.api.logging import LoggingConfig
from flingscroll.runtime.config import resolve_log_level_name
from flingscroll.runtime.json_codec import dumps_text

_QUEUE_LISTENER: QueueListener | None = None

_RECORD_ATTRIBUTES = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}
_EVENT_NAME = re.compile(r"[a-z][a-z0-9_]*")
_FIELD = re.compile(r"([a-z][a-z0-9_]*)=(\S+)")
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def split_event_message(message: str) -> tuple[str | None, dict[str, str]]:
    """Split ``fling_finished reason=decayed frames=12`` into name and fields.

    Fields are only extracted when every token after the name is a pair;
    messages embedding a repr keep just the event name.
    """
    head, _, rest = message.partition(" ")
    if not _EVENT_NAME.fullmatch(head):
        return None, {}
    matches = [_FIELD.fullmatch(token) for token in rest.split()]
    if not all(matches):
        return head, {}
    return head, {match.group(1): match.group(2) for match in matches if match is not None}


class JsonFormatter(logging.Formatter):
    """One JSON object per record with the event name and its fields."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        event, fields = split_event_message(message)
        fields.update(
            (key, value) for key, value in record.__dict__.items() if key not in _RECORD_ATTRIBUTES
        )
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": message,
        }
        if event is not None:
            payload["event"] = event
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return dumps_text(payload)


def configure_logging(config: LoggingConfig) -> None:
    """Replace root handlers; a file sink is fed through a background listener."""
    global _QUEUE_LISTENER

    shutdown_logging()
    console = logging.StreamHandler()
    console.setFormatter(_formatter_for(config.console_format))
    sinks: list[logging.Handler] = [console]
    if config.file_path:
        path = Path(config.file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_sink = logging.FileHandler(path, mode="a", encoding="utf-8", delay=True)
        file_sink.setFormatter(_formatter_for(config.file_format))
        sinks.append(file_sink)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(getattr(logging, config.level_name.upper(), logging.INFO))
    if not config.file_path:
        root.addHandler(console)
        return
    records: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(records))
    _QUEUE_LISTENER = QueueListener(records, *sinks, respect_handler_level=True)
    _QUEUE_LISTENER.start()


def shutdown_logging() -> None:
    """Flush and stop the file-streaming listener if one is running."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        _QUEUE_LISTENER = None


def setup_logging() -> None:
    """Install console logging unless the host already configured handlers."""
    if logging.getLogger().handlers:
        return
    configure_logging(LoggingConfig(level_name=resolve_log_level_name(default="INFO")))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _formatter_for(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter(_TEXT_FORMAT)


__all__ = [
    "JsonFormatter",
    "configure_logging",
    "get_logger",
    "setup_logging",
    "shutdown_logging",
    "split_event_message",
]
