"""Ledger event logging package."""

from bill_splitter.events.logger import EventLogger, configure_logging

__all__ = ["EventLogger", "configure_logging"]
