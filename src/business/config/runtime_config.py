"""
Runtime Configuration - 运行时配置

风险监控器每轮刷新都会重新读取的配置：
- QueryLimits: 查询条数限制
- RiskThresholds: 风险阈值
- RiskScores: 风险评分权重

提供两种实现：
- StaticRuntimeConfig: 固定配置（测试 / 嵌入使用）
- YamlRuntimeConfig: YAML 文件配置，文件修改后自动热加载

## 默认阈值

| 指标         | 中       | 高       | 危险     | 评分 (中/高/危险) |
|--------------|----------|----------|----------|-------------------|
| 保证金使用率 | >20%     | >50%     | -        | 10 / 20           |
| 最大回撤     | >10%     | >20%     | >30%     | 10 / 20 / 30      |
| 夏普比率     | -        | <0.0     | <-0.5    | 10 / 20           |
| 胜率         | -        | <30%     | -        | 10（固定）        |
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from pathlib import Path
from threading import Lock
from typing import Any

import yaml

from src.engine.models.risk import RiskScores, RiskThresholds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryLimits:
    """查询限制

    Attributes:
        performance_limit: 交易表现分析使用的最近交易数
        monitoring_limit: 风险计算使用的最近决策记录数
    """

    performance_limit: int = 100
    monitoring_limit: int = 50


class RuntimeConfigProvider(ABC):
    """运行时配置提供者

    监控器每轮刷新都调用这些方法，实现方可以随时返回新值（热加载）。
    """

    @abstractmethod
    def query_limits(self) -> QueryLimits:
        pass

    @abstractmethod
    def risk_thresholds(self) -> RiskThresholds:
        pass

    @abstractmethod
    def risk_scores(self) -> RiskScores:
        pass


class StaticRuntimeConfig(RuntimeConfigProvider):
    """固定配置"""

    def __init__(
        self,
        limits: QueryLimits | None = None,
        thresholds: RiskThresholds | None = None,
        scores: RiskScores | None = None,
    ) -> None:
        self.limits = limits or QueryLimits()
        self.thresholds = thresholds or RiskThresholds()
        self.scores = scores or RiskScores()

    def query_limits(self) -> QueryLimits:
        return self.limits

    def risk_thresholds(self) -> RiskThresholds:
        return self.thresholds

    def risk_scores(self) -> RiskScores:
        return self.scores


def _parse_section(cls: type, data: dict[str, Any] | None) -> Any:
    """按 dataclass 字段解析配置段，缺失字段使用默认值，未知字段忽略"""
    if not data:
        return cls()

    known = {f.name for f in fields(cls)}
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            logger.warning(f"Unknown {cls.__name__} key ignored: {key}")
            continue
        default = getattr(cls(), key)
        kwargs[key] = type(default)(value)
    return cls(**kwargs)


def parse_runtime_config(
    data: dict[str, Any] | None,
) -> tuple[QueryLimits, RiskThresholds, RiskScores]:
    """从字典解析三段配置

    Args:
        data: YAML 解析结果，包含 query_limits / risk_thresholds / risk_scores

    Returns:
        (QueryLimits, RiskThresholds, RiskScores)
    """
    data = data or {}
    return (
        _parse_section(QueryLimits, data.get("query_limits")),
        _parse_section(RiskThresholds, data.get("risk_thresholds")),
        _parse_section(RiskScores, data.get("risk_scores")),
    )


class YamlRuntimeConfig(RuntimeConfigProvider):
    """YAML 文件配置（支持热加载）

    每次读取时检查文件修改时间，变化则重新加载。
    加载失败时保留上一次成功加载的配置。

    使用方式：
        config = YamlRuntimeConfig.load()
        thresholds = config.risk_thresholds()
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = Lock()
        self._mtime: float | None = None
        self._limits = QueryLimits()
        self._thresholds = RiskThresholds()
        self._scores = RiskScores()
        self._reload_if_changed()

    @classmethod
    def load(cls) -> "YamlRuntimeConfig":
        """加载默认配置文件"""
        config_file = (
            Path(__file__).parent.parent.parent.parent
            / "config"
            / "monitoring"
            / "risk_monitor.yaml"
        )
        return cls(config_file)

    def _reload_if_changed(self) -> None:
        with self._lock:
            try:
                mtime = self.path.stat().st_mtime
            except OSError:
                if self._mtime is not None:
                    logger.warning(f"Runtime config {self.path} disappeared, keeping last values")
                    self._mtime = None
                return

            if mtime == self._mtime:
                return

            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
                limits, thresholds, scores = parse_runtime_config(data)
            except (OSError, yaml.YAMLError, AttributeError, TypeError, ValueError) as e:
                logger.error(f"Failed to reload runtime config {self.path}: {e}")
                return

            self._limits, self._thresholds, self._scores = limits, thresholds, scores
            self._mtime = mtime
            logger.info(f"Runtime config loaded from {self.path}")

    def query_limits(self) -> QueryLimits:
        self._reload_if_changed()
        return self._limits

    def risk_thresholds(self) -> RiskThresholds:
        self._reload_if_changed()
        return self._thresholds

    def risk_scores(self) -> RiskScores:
        self._reload_if_changed()
        return self._scores
