"""Logging setup for the incidentio logger tree.

Library code only logs to module loggers under "incidentio"; nothing is
printed until an application (or the CLI's --debug / --log-json flags)
installs a handler with configure_logging().
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime

LOGGER_NAME = "incidentio"

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """Render each record as a single JSON line.

    The timestamp is the time the record was created, not the time it was
    formatted. Multi-line messages such as transport dumps stay one JSON
    string with embedded newlines.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, str] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack"] = self.formatStack(record.stack_info)
        return json.dumps(entry)


def configure_logging(level: int = logging.WARNING, json_format: bool = False) -> None:
    """Install a single stderr handler on the "incidentio" logger.

    Calling it again replaces the previous handler.

    Args:
        level: Logging level. DEBUG also shows transport wire dumps when the
            client config has debug enabled.
        json_format: Emit JSON lines instead of human-readable text.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if json_format else logging.Formatter(TEXT_FORMAT))
    logger.addHandler(handler)
