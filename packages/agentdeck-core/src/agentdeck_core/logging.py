from __future__ import annotations

import json
import logging
import sys


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return json.dumps({
            "ts": record.created,
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            **({"exc": self.formatException(record.exc_info)} if record.exc_info else {}),
        })


def setup_logging(level: str = "WARNING", json_output: bool = False) -> logging.Logger:
    """Configure and return the root agentdeck logger.

    Calling it again replaces the previous handler, so the handler always
    writes to the current ``sys.stderr``.
    """
    logger = logging.getLogger("agentdeck")

    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    for existing in list(logger.handlers):
        logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)

    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        ))

    logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger under the agentdeck namespace."""
    return logging.getLogger(f"agentdeck.{name}")
