"""
Configuration Management - 配置管理

加载和管理业务层配置：
- QueryLimits / RiskThresholds / RiskScores: 运行时风险配置
- RuntimeConfigProvider: 运行时配置接口（热加载）
"""

from src.business.config.runtime_config import (
    QueryLimits,
    RuntimeConfigProvider,
    StaticRuntimeConfig,
    YamlRuntimeConfig,
    parse_runtime_config,
)
from src.engine.models.risk import RiskScores, RiskThresholds

__all__ = [
    "QueryLimits",
    "RiskScores",
    "RiskThresholds",
    "RuntimeConfigProvider",
    "StaticRuntimeConfig",
    "YamlRuntimeConfig",
    "parse_runtime_config",
]
