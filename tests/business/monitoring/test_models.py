"""Tests for monitoring models"""

from datetime import datetime

from src.business.monitoring.models import (
    Alert,
    AlertLevel,
    AlertType,
    MetricsSnapshot,
    MonitorStatus,
)


class TestAlertEnums:
    """Tests for AlertLevel / AlertType enums"""

    def test_alert_levels(self):
        assert AlertLevel.INFO.value == "info"
        assert AlertLevel.WARNING.value == "warning"
        assert AlertLevel.CRITICAL.value == "critical"

    def test_alert_types(self):
        assert AlertType.RISK.value == "risk"
        assert AlertType.PERFORMANCE.value == "performance"
        assert AlertType.SYSTEM.value == "system"
        assert AlertType.TRADE.value == "trade"


class TestAlert:
    """Tests for Alert model"""

    def test_new_alert_is_open(self):
        alert = Alert(
            id="margin_usage_1",
            alert_type=AlertType.RISK,
            level=AlertLevel.CRITICAL,
            title="保证金使用率过高",
            message="保证金使用率 85.0%",
        )
        assert alert.is_open
        assert alert.dedup_key == (AlertType.RISK, AlertLevel.CRITICAL)

    def test_copy_is_independent(self):
        alert = Alert("a", AlertType.RISK, AlertLevel.WARNING, "t", "m")
        clone = alert.copy()
        clone.resolved_at = datetime.now()
        assert alert.is_open

    def test_to_dict(self):
        raised = datetime(2025, 1, 1, 10, 0)
        alert = Alert("a", AlertType.SYSTEM, AlertLevel.WARNING, "API延迟过高", "m", raised_at=raised)

        data = alert.to_dict()

        assert data["type"] == "system"
        assert data["level"] == "warning"
        assert data["raised_at"] == "2025-01-01T10:00:00"
        assert data["resolved"] is False
        assert data["resolved_at"] is None


class TestMetricsSnapshot:
    """Tests for MetricsSnapshot"""

    def test_defaults(self):
        metrics = MetricsSnapshot()
        assert metrics.risk_score == 0
        assert metrics.var_95 == 0.0
        assert metrics.last_updated is None

    def test_to_dict_serializes_timestamp(self):
        metrics = MetricsSnapshot(risk_score=40, last_updated=datetime(2025, 1, 1, 12, 0))
        data = metrics.to_dict()
        assert data["risk_score"] == 40
        assert data["last_updated"] == "2025-01-01T12:00:00"
        assert "overtrading_score" in data


class TestMonitorStatus:
    """Tests for MonitorStatus"""

    def test_to_dict(self):
        status = MonitorStatus(
            enabled=True,
            trader_id="trader-1",
            last_updated=None,
            alert_count=2,
            risk_score=65,
            risk_level="high",
        )
        data = status.to_dict()
        assert data["alerts_count"] == 2
        assert data["risk_level"] == "high"
        assert data["last_updated"] is None
