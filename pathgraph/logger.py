"""Event logging for solver runs and the CLI.

Events are a short dotted name plus keyword fields, e.g.
``dijkstra.done reached=5 pops=5``.
"""

from __future__ import annotations

import json
import sys
from typing import Any, Dict, Protocol, TextIO


class Logger(Protocol):
    """Anything with ``debug``/``info``/``warning`` taking an event and fields."""

    def debug(self, event: str, **fields: Any) -> None: ...

    def info(self, event: str, **fields: Any) -> None: ...

    def warning(self, event: str, **fields: Any) -> None: ...


class NoopLogger:
    """Silent default for solvers built without a logger."""

    def debug(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return

    def info(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return

    def warning(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return


class StdLogger:
    """Line-per-event logger.

    Text mode prints ``<level> <event> k=v ...``; with ``json_fmt`` each event
    becomes a JSON object carrying ``level`` and ``event`` next to its fields.
    Values JSON cannot encode (vertex labels, paths) go through ``str``.

    Args:
        level: Threshold; events below it are dropped.
        json_fmt: Switch to JSON lines.
        stream: Where lines go. Falls back to ``sys.stderr``.
    """

    LEVELS: Dict[str, int] = {"debug": 10, "info": 20, "warning": 30}

    def __init__(
        self,
        level: str = "warning",
        json_fmt: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        if level not in self.LEVELS:
            raise ValueError(f"unknown log level '{level}'")
        self.level = level
        self.json_fmt = json_fmt
        self.stream = stream or sys.stderr

    def enabled(self, level: str) -> bool:
        return self.LEVELS[level] >= self.LEVELS[self.level]

    def log(self, level: str, event: str, **fields: Any) -> None:
        if not self.enabled(level):
            return
        if self.json_fmt:
            record: Dict[str, Any] = {"level": level, "event": event}
            record.update(fields)
            line = json.dumps(record, default=str)
        else:
            kv = " ".join(f"{k}={v}" for k, v in fields.items())
            line = f"{level} {event} {kv}".rstrip()
        self.stream.write(line + "\n")

    def debug(self, event: str, **fields: Any) -> None:
        self.log("debug", event, **fields)

    def info(self, event: str, **fields: Any) -> None:
        self.log("info", event, **fields)

    def warning(self, event: str, **fields: Any) -> None:
        self.log("warning", event, **fields)


__all__ = ["Logger", "NoopLogger", "StdLogger"]
