"""Logging setup for the ``tandem`` logger hierarchy.

Modules log through ``logging.getLogger("tandem.<area>")``. Nothing is
configured on import; ``configure_logging()`` is called by ``App.serve()``
and the CLI. Hosting code that configures logging itself can skip it.
"""

import json
import logging
from datetime import UTC, datetime

_HANDLER_NAME = "tandem"

_TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per line, suited to CloudWatch and other log collectors."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(level: str = "info", fmt: str = "text") -> logging.Logger:
    """Attach a single stream handler to the ``tandem`` logger.

    Idempotent: calling it again replaces the handler installed by an
    earlier call instead of stacking a second one.

    Raises ``ValueError`` for an unknown *level* or *fmt*.
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        msg = f"Unknown log level {level!r}"
        raise ValueError(msg)
    if fmt not in ("text", "json"):
        msg = f"Unknown log format {fmt!r}. Expected 'text' or 'json'."
        raise ValueError(msg)

    logger = logging.getLogger("tandem")
    for existing in list(logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logger.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else logging.Formatter(_TEXT_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(numeric)
    return logger
