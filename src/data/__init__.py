"""Data layer module for reading trader decision history."""

from src.data.models import DecisionRecord, TradePerformance

__all__ = [
    "DecisionRecord",
    "TradePerformance",
]
