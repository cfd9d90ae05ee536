"""History log service."""

from coin_maker.services.history.history_log import HistoryLog

__all__ = ["HistoryLog"]
