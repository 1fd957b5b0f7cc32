"""Structured logging utilities for XML node parsing.

Every record emitted through :class:`CorrelationLogger` carries the component
name and an optional correlation ID in its ``extra`` mapping, so a single
parse can be followed across the grammar, builder and API layers.
"""

import logging
from typing import Any, Dict, Optional

# Longest content excerpt included in log records
PREVIEW_LENGTH = 80


class CorrelationLogger:
    """Logger that automatically includes correlation ID and component information."""

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID for request tracking
            component: Component name for structured logging
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.split(".")[-1]

    def _get_extra(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        combined_extra = {
            "component": self.component,
            "correlation_id": self.correlation_id,
        }
        if extra:
            combined_extra.update(extra)
        return combined_extra

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log debug message with correlation info."""
        self.logger.debug(message, extra=self._get_extra(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log info message with correlation info."""
        self.logger.info(message, extra=self._get_extra(extra))


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Optional correlation ID for request tracking
        component: Component name for structured logging

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)


class ComponentFilter(logging.Filter):
    """Give records from plain loggers a component so the CLI format applies."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "component"):
            record.component = record.name.split(".")[-1]
        return True


def configure_logging(level: str = "WARNING") -> None:
    """Install a basic stderr handler for command-line use.

    Args:
        level: Name of the minimum level to emit (DEBUG, INFO, ...)
    """
    handler = logging.StreamHandler()
    handler.addFilter(ComponentFilter())
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s [%(component)s] %(message)s")
    )
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        handlers=[handler],
    )


def preview(text: str, limit: int = PREVIEW_LENGTH) -> str:
    """Shorten ``text`` for inclusion in a log record."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
