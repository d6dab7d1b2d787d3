"""Logging setup for processes embedding the mocking engine.

Library modules only ever call ``logging.getLogger(__name__)``; handlers are
installed here, once, by the entry point.  With
``MOCKSINK_STRUCTURED_LOGGING=true`` each record is emitted as one JSON
object per line::

    {
        "timestamp": "2025-05-15T12:34:56.789012+00:00",
        "level": "ERROR",
        "logger": "mock_engine.mocking.insert_scanner",
        "message": "Statement parse error, statement dropped",
        "statement": "INSERT INTO ...",   // present when passed via extra=
        "exc_info": "Traceback ..."       // present only on exceptions
    }
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import UTC, datetime
from typing import Any

from mock_engine.config import Settings

_TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Marks handlers installed by configure_logging so repeat calls replace them.
_HANDLER_FLAG = "_mocksink_handler"


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        statement = getattr(record, "statement", None)
        if statement is not None:
            payload["statement"] = statement

        if record.exc_info and record.exc_info[0] is not None:
            payload["exc_info"] = "".join(traceback.format_exception(*record.exc_info))

        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging(settings: Settings) -> logging.Handler:
    """Install a stderr handler on the root logger according to *settings*.

    Returns the installed handler.  Calling again replaces the handler from
    the previous call instead of stacking a second one.
    """
    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, _HANDLER_FLAG, False):
            root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    if settings.structured_logging:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
    setattr(handler, _HANDLER_FLAG, True)

    root.addHandler(handler)
    root.setLevel("DEBUG" if settings.debug else settings.log_level)
    return handler
