"""Trend collaborators.

This module exports the collector interface and its implementations.
"""

from dotsweep.trends.base import NullTrendCollector, TrendCollector
from dotsweep.trends.history import HistoryTrendCollector, OperationRecord

__all__ = ["HistoryTrendCollector", "NullTrendCollector", "OperationRecord", "TrendCollector"]
