"""Data models for decision history."""

from src.data.models.decision import DecisionRecord, TradePerformance

__all__ = [
    "DecisionRecord",
    "TradePerformance",
]
