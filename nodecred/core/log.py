"""nodecred.core.log

Logging setup for entry points.

Library modules only ever call ``logging.getLogger(__name__)`` and log snake_case
event names with context in ``extra``. Handlers are installed here, once, by
whoever owns the process.
"""

from __future__ import annotations

import json
import logging
import sys

from nodecred.core.config import LoggingConfig

# Attributes every LogRecord carries; anything else arrived through `extra`.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class JsonLinesFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        out: dict[str, object] = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        for k, v in record.__dict__.items():
            if k not in _RECORD_ATTRS and not k.startswith("_"):
                out[k] = v
        if record.exc_info:
            out["exc"] = self.formatException(record.exc_info)
        return json.dumps(out, default=str, sort_keys=True)


def configure_logging(config: LoggingConfig, *, stream=None) -> logging.Handler:
    """Install a single handler on the root logger and return it.

    Calling this again replaces the handler installed by the previous call.
    """

    handler = logging.StreamHandler(stream or sys.stderr)
    if config.json_output:
        handler.setFormatter(JsonLinesFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    handler.set_name("nodecred")

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == "nodecred":
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(config.level)
    return handler
