from __future__ import annotations

import json
import logging
import sys
from typing import Any, Optional

from .config import ObservabilityConfig, get_config
from .domain.errors import ConfigurationError

logger = logging.getLogger("route_directions")

# Attributes every LogRecord carries; anything else came in through `extra`.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Formats a record as one JSON object, `extra` fields included."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": self.formatTime(record),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(config: Optional[ObservabilityConfig] = None) -> None:
    """Install a stdout handler on the root logger from configuration.

    Raises:
        ConfigurationError: If the configured level is not a logging level.
    """
    config = config or get_config().observability

    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        raise ConfigurationError(
            f"Unknown log level {config.level!r}",
            setting_name="RD_LOG_LEVEL",
            expected_type="DEBUG, INFO, WARNING, ERROR or CRITICAL",
        )

    handler = logging.StreamHandler(sys.stdout)
    if config.structured:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(config.format))

    logging.basicConfig(level=level, handlers=[handler], force=True)
    logger.debug("Logging configured", extra={"structured": config.structured})
