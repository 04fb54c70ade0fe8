"""
Performance Monitor - 交易员性能与风险监控器

每个交易员一个实例，后台线程按固定间隔刷新：
1. 读取运行时配置（查询限制 / 风险阈值 / 评分权重，每轮重新读取）
2. 从决策历史读取交易表现和最近决策记录（不持锁）
3. RiskCalculator 计算新指标，写锁内整体替换快照
4. 评估预警规则，AlertLedger 去重后加入
5. 新预警交给所有处理器，在线程池中各自独立执行

读取失败时跳过本轮，保留上一轮快照（last_updated 不变）。

使用方式：
    monitor = PerformanceMonitor("trader-1", history, runtime_config)
    monitor.register_handler(LoggingAlertHandler())
    monitor.start()
    ...
    monitor.stop()
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

from src.business.config.runtime_config import RuntimeConfigProvider
from src.business.monitoring.alert_ledger import AlertLedger
from src.business.monitoring.alert_rules import evaluate_alert_rules
from src.business.monitoring.handler import AlertHandler, HandlerError, as_handler
from src.business.monitoring.models import Alert, MetricsSnapshot, MonitorStatus
from src.business.monitoring.rwlock import ReadWriteLock
from src.data.providers.base import DataAccessError, DecisionHistoryProvider
from src.engine.models.risk import RiskComputation
from src.engine.risk.calculator import RiskCalculator
from src.engine.risk.scoring import classify_risk_level

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 30.0

# RiskComputation 字段中为 None 时沿用上一轮的值
_CARRY_OVER_FIELDS = (
    "max_drawdown",
    "current_drawdown",
    "var_95",
    "var_99",
    "margin_usage_rate",
    "current_balance",
    "available_balance",
    "unrealized_pnl",
    "total_pnl",
    "trades_per_hour",
    "overtrading_score",
    "error_rate",
)


class PerformanceMonitor:
    """交易员性能与风险监控器

    状态：Stopped（初始）→ Running（start）→ Stopped（stop）。
    重复 start / stop 不报错，也不会启动第二个刷新循环。

    快照和预警台账是唯一的共享可变状态，由一把读写锁保护：
    snapshot / alerts / status 取读锁；刷新、resolve_alert、register_handler 取写锁。
    """

    def __init__(
        self,
        trader_id: str,
        history: DecisionHistoryProvider,
        runtime_config: RuntimeConfigProvider,
        interval: float = DEFAULT_INTERVAL_SECONDS,
        handler_workers: int = 4,
        calculator: Optional[RiskCalculator] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """初始化监控器

        Args:
            trader_id: 交易员 ID
            history: 决策历史提供者
            runtime_config: 运行时配置提供者
            interval: 刷新间隔（秒）
            handler_workers: 预警处理线程数
            calculator: 风险计算器，默认新建
            clock: 时间来源（测试可注入）
        """
        self.trader_id = trader_id
        self._history = history
        self._runtime_config = runtime_config
        self._interval = interval
        self._calculator = calculator or RiskCalculator()
        self._clock = clock

        self._lock = ReadWriteLock()
        self._metrics = MetricsSnapshot()
        self._ledger = AlertLedger()
        self._handlers: list[AlertHandler] = []

        # 生命周期状态
        self._state_lock = threading.Lock()
        self._enabled = False
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._refresh_count = 0

        self._executor = ThreadPoolExecutor(
            max_workers=handler_workers,
            thread_name_prefix=f"alert-{trader_id}",
        )
        self._closed = False
        self._created_at = time.monotonic()

    def __enter__(self) -> "PerformanceMonitor":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # 生命周期
    # ------------------------------------------------------------------

    @property
    def is_running(self) -> bool:
        with self._state_lock:
            return self._enabled

    @property
    def refresh_count(self) -> int:
        """已完成的刷新轮数（含读取失败的轮次）"""
        with self._state_lock:
            return self._refresh_count

    def start(self) -> None:
        """启动后台刷新循环（立即返回）"""
        with self._state_lock:
            if self._enabled:
                return
            if self._closed:
                raise RuntimeError(f"Monitor {self.trader_id} is closed")

            self._enabled = True
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._monitoring_loop,
                args=(self._stop_event,),
                name=f"monitor-{self.trader_id}",
                daemon=True,
            )
            self._thread.start()

        logger.info(f"[{self.trader_id}] Performance monitor started (interval={self._interval}s)")

    def stop(self) -> None:
        """停止刷新循环

        协作式停止：正在进行的一轮刷新会先完成，然后才返回。
        """
        with self._state_lock:
            if not self._enabled:
                return
            self._enabled = False
            self._stop_event.set()
            thread = self._thread
            self._thread = None

        if thread is not None and thread is not threading.current_thread():
            thread.join()

        logger.info(f"[{self.trader_id}] Performance monitor stopped")

    def close(self) -> None:
        """停止循环并关闭预警处理线程池"""
        self.stop()
        with self._state_lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=True)

    def _monitoring_loop(self, stop_event: threading.Event) -> None:
        # wait() 在本轮刷新结束后才重新计时，两轮刷新不会重叠
        while not stop_event.wait(self._interval):
            try:
                self.refresh()
            except Exception:
                logger.exception(f"[{self.trader_id}] Refresh iteration failed")

    # ------------------------------------------------------------------
    # 刷新
    # ------------------------------------------------------------------

    def refresh(self) -> bool:
        """执行一轮刷新

        Returns:
            True 表示快照已更新；False 表示读取失败，本轮跳过
        """
        try:
            return self._refresh()
        finally:
            with self._state_lock:
                self._refresh_count += 1

    def _refresh(self) -> bool:
        limits = self._runtime_config.query_limits()
        thresholds = self._runtime_config.risk_thresholds()
        scores = self._runtime_config.risk_scores()

        # 外部 I/O 在锁外完成
        try:
            performance = self._history.analyze_performance(limits.performance_limit)
            records = self._history.latest_records(limits.monitoring_limit)
        except DataAccessError as e:
            logger.warning(f"[{self.trader_id}] Failed to fetch decision history: {e}")
            return False

        now = self._clock()
        computation = self._calculator.compute(
            records, performance, thresholds, scores, now=now
        )

        with self._lock.write():
            self._metrics = self._merge(self._metrics, computation, now)
            metrics = self._metrics

            admitted: list[Alert] = []
            for candidate in evaluate_alert_rules(metrics, thresholds, now):
                if self._ledger.admit(candidate):
                    admitted.append(candidate.copy())
            handlers = list(self._handlers)

        logger.info(
            f"[{self.trader_id}] Metrics updated - win rate: {metrics.win_rate:.1f}%, "
            f"sharpe: {metrics.sharpe_ratio:.2f}, risk score: {metrics.risk_score}"
        )

        for alert in admitted:
            logger.warning(
                f"[{self.trader_id}] {alert.level.value}: {alert.title} - {alert.message}"
            )
            self._dispatch(alert, handlers)

        return True

    def _merge(
        self,
        previous: MetricsSnapshot,
        computation: RiskComputation,
        now: datetime,
    ) -> MetricsSnapshot:
        """由上一轮快照和本轮计算结果生成新快照"""
        updates = {
            "total_trades": computation.total_trades,
            "win_rate": computation.win_rate,
            "profit_factor": computation.profit_factor,
            "sharpe_ratio": computation.sharpe_ratio,
            "risk_score": computation.risk_score,
            "system_uptime": (time.monotonic() - self._created_at) / 3600,
            "last_updated": now,
        }
        for name in _CARRY_OVER_FIELDS:
            value = getattr(computation, name)
            if value is not None:
                updates[name] = value

        return replace(previous, **updates)

    def _dispatch(self, alert: Alert, handlers: list[AlertHandler]) -> None:
        # close() 之后线程池拒绝提交，submit 抛出 RuntimeError
        for handler in handlers:
            try:
                self._executor.submit(self._run_handler, handler, alert)
            except RuntimeError:
                logger.debug(f"[{self.trader_id}] Executor shut down, alert {alert.id} not dispatched")
                return

    def _run_handler(self, handler: AlertHandler, alert: Alert) -> None:
        try:
            handler.handle(alert)
        except HandlerError as e:
            logger.error(f"[{self.trader_id}] Alert handler {handler.name} failed: {e}")
        except Exception:
            logger.exception(f"[{self.trader_id}] Alert handler {handler.name} raised")

    # ------------------------------------------------------------------
    # 外部访问
    # ------------------------------------------------------------------

    def snapshot(self) -> MetricsSnapshot:
        """当前指标快照（副本）"""
        with self._lock.read():
            return self._metrics.copy()

    def alerts(self, limit: int = 0) -> list[Alert]:
        """预警列表（最新在前，副本）

        Args:
            limit: 最多返回条数，<= 0 表示不限制
        """
        with self._lock.read():
            return self._ledger.list(limit)

    def resolve_alert(self, alert_id: str) -> Alert:
        """解决预警

        Raises:
            NotFoundError: 预警不存在
        """
        with self._lock.write():
            alert = self._ledger.resolve(alert_id, now=self._clock())
        logger.info(f"[{self.trader_id}] Alert {alert_id} resolved")
        return alert

    def register_handler(self, handler: AlertHandler | Callable[[Alert], None]) -> None:
        """注册预警处理器，从下一条新预警开始生效"""
        handler = as_handler(handler)
        with self._lock.write():
            self._handlers.append(handler)

    def record_latency(
        self,
        api_ms: Optional[float] = None,
        decision_ms: Optional[float] = None,
    ) -> None:
        """记录最新的 API / 决策延迟（毫秒）"""
        updates = {}
        if api_ms is not None:
            updates["api_latency"] = float(api_ms)
        if decision_ms is not None:
            updates["decision_latency"] = float(decision_ms)
        if not updates:
            return
        with self._lock.write():
            self._metrics = replace(self._metrics, **updates)

    def status(self) -> MonitorStatus:
        """监控状态摘要"""
        enabled = self.is_running
        with self._lock.read():
            return MonitorStatus(
                enabled=enabled,
                trader_id=self.trader_id,
                last_updated=self._metrics.last_updated,
                alert_count=len(self._ledger),
                risk_score=self._metrics.risk_score,
                risk_level=classify_risk_level(self._metrics.risk_score),
            )
