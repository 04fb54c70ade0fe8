"""Tests for riskmon CLI monitor commands"""

import json
from datetime import datetime, timedelta

import pytest
from click.testing import CliRunner

from src.business.cli.main import cli

T0 = datetime(2025, 1, 1, 9, 0)


def write_history(path, balances, margin=10.0, performance=None):
    data = {
        "performance": performance or {
            "total_trades": 2,
            "win_rate": 60.0,
            "profit_factor": 1.5,
            "sharpe_ratio": 1.0,
        },
        "records": [
            {
                "timestamp": (T0 + timedelta(hours=i)).isoformat(),
                "total_balance": b,
                "margin_used_pct": margin,
            }
            for i, b in enumerate(balances)
        ],
    }
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


@pytest.fixture
def runner():
    return CliRunner()


class TestSnapshotCommand:
    """Tests for `riskmon snapshot`"""

    def test_no_alerts(self, runner, tmp_path):
        records = write_history(tmp_path / "h.json", [1000, 1005, 1010])

        result = runner.invoke(cli, ["snapshot", "-r", records])

        assert result.exit_code == 0
        assert "风险指标" in result.output
        assert "无预警" in result.output

    def test_critical_alert_exit_code(self, runner, tmp_path):
        records = write_history(tmp_path / "h.json", [1000, 1005, 1010], margin=85.0)

        result = runner.invoke(cli, ["snapshot", "-r", records])

        assert result.exit_code == 2
        assert "保证金使用率过高" in result.output

    def test_warning_alert_exit_code(self, runner, tmp_path):
        records = write_history(
            tmp_path / "h.json",
            [1000, 1005, 1010],
            performance={"total_trades": 2, "win_rate": 60.0, "sharpe_ratio": -1.0},
        )

        result = runner.invoke(cli, ["snapshot", "-r", records])

        assert result.exit_code == 1
        assert "夏普比率过低" in result.output

    def test_json_output(self, runner, tmp_path):
        records = write_history(tmp_path / "h.json", [1000, 1200, 900, 950])

        result = runner.invoke(cli, ["snapshot", "-r", records, "-o", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["metrics"]["max_drawdown"] == pytest.approx(25.0)
        assert data["alerts"] == []

    def test_custom_config(self, runner, tmp_path):
        records = write_history(tmp_path / "h.json", [1000, 1005, 1010], margin=30.0)
        config = tmp_path / "risk.yaml"
        config.write_text(
            "risk_scores:\n  margin_medium_score: 65\n", encoding="utf-8"
        )

        result = runner.invoke(cli, ["snapshot", "-r", records, "-c", str(config), "-o", "json"])

        data = json.loads(result.stdout)
        assert data["metrics"]["risk_score"] == 65
        assert result.exit_code == 1

    def test_malformed_records(self, runner, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{oops", encoding="utf-8")

        result = runner.invoke(cli, ["snapshot", "-r", str(bad)])

        assert result.exit_code == 3


class TestWatchCommand:
    """Tests for `riskmon watch`"""

    def test_runs_fixed_iterations(self, runner, tmp_path):
        records = write_history(tmp_path / "h.json", [1000, 1005, 1010])

        result = runner.invoke(cli, ["watch", "-r", records, "-i", "0.01", "-n", "2"])

        assert result.exit_code == 0
        assert "开始监控 default" in result.output
        assert "监控已停止" in result.output

    def test_malformed_records(self, runner, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{oops", encoding="utf-8")

        result = runner.invoke(cli, ["watch", "-r", str(bad), "-i", "0.01", "-n", "1"])

        assert result.exit_code == 3
        assert "开始监控" not in result.output


class TestCliGroup:
    """Tests for the CLI entry point"""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert "snapshot" in result.output
        assert "watch" in result.output
