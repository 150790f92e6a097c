"""
Ledger Event Logger

Every state change in the ledger is written to the local structured log.
The logger:
- Is synchronous (every action finishes before the next one starts)
- Never raises into the ledger (a logging failure must not lose user input)
- Logs locally only; nothing is persisted
"""

import logging
import sys
from typing import Any, Optional

import structlog

from bill_splitter.config import AppSettings, load_or_defaults
from bill_splitter.models.events import LedgerEvent, LedgerEventBuilder, LedgerEventSeverity


def configure_logging(level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    """
    Configure stdlib logging and structlog.

    Arguments default to the values in AppSettings. Safe to call more than
    once; the last call wins. Invalid AppSettings fall back to their
    defaults and a warning is logged once logging is up.
    """
    app_settings, settings_error = load_or_defaults(AppSettings)
    level = level or app_settings.log_level
    if json_output is None:
        json_output = app_settings.log_json

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level),
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if settings_error:
        EventLogger(structlog.get_logger("bill_splitter")).log(
            LedgerEventBuilder.settings_invalid("app", settings_error)
        )


class EventLogger:
    """
    Writes ledger events to the structured log.

    The severity of the event picks the log method.
    """

    def __init__(self, logger: Optional[Any] = None):
        """
        Initialize event logger.

        Args:
            logger: Any object with debug/info/warning/error methods taking
                    an event name and keyword context. Defaults to a
                    structlog logger named "bill_splitter".
        """
        if logger is None:
            if not structlog.is_configured():
                configure_logging()
            logger = structlog.get_logger("bill_splitter")
        self._logger = logger

    def log(self, event: LedgerEvent) -> None:
        """Log a ledger event at the level matching its severity."""
        log_dict = event.to_log_dict()
        method = {
            LedgerEventSeverity.DEBUG: self._logger.debug,
            LedgerEventSeverity.INFO: self._logger.info,
            LedgerEventSeverity.WARNING: self._logger.warning,
            LedgerEventSeverity.ERROR: self._logger.error,
        }[event.severity]

        try:
            method("ledger_event", **log_dict)
        except Exception as e:
            # Logging must never break a user action
            sys.stderr.write(f"ledger event logging failed: {e}\n")
