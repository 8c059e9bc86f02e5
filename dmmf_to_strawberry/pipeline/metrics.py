"""
Phase timing metrics of a generation run.

The driver reports one event per phase to an optional `MetricsListener`.
`SimpleMetricsCollector` keeps the events and logs a summary when the run
completes in verbose mode.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Protocol

logger = logging.getLogger(__name__)

# Phases slower than this are reported in the summary
SLOW_PHASE_THRESHOLD_MS = 50.0


@dataclass
class MetricData:
    phase: str
    duration: float | None = None  # milliseconds
    count: int | None = None
    details: dict[str, Any] | None = None
    timestamp: float = 0.0  # milliseconds since the collector was created


@dataclass
class PhaseStatistics:
    phase: str
    total_time: float
    avg_time: float
    count: int
    min_time: float
    max_time: float


class MetricsListener(Protocol):
    def emit_metric(
        self,
        phase: str,
        duration: float | None = None,
        count: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None: ...

    def on_complete(self) -> None: ...


class SimpleMetricsCollector:
    """Collects metric events in memory."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.metrics: list[MetricData] = []
        self._phase_timings: dict[str, list[float]] = {}
        self._start_time = time.perf_counter()

    def emit_metric(
        self,
        phase: str,
        duration: float | None = None,
        count: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        metric = MetricData(
            phase=phase,
            duration=duration,
            count=count,
            details=details,
            timestamp=(time.perf_counter() - self._start_time) * 1000,
        )
        self.metrics.append(metric)
        if duration is not None:
            self._phase_timings.setdefault(phase, []).append(duration)
        self._log_metric(metric)

    def _log_metric(self, metric: MetricData) -> None:
        parts = [f"[{metric.timestamp:.0f}ms] {metric.phase}"]
        if metric.duration is not None:
            parts.append(f"{metric.duration:.2f}ms")
        if metric.count is not None:
            parts.append(f"({metric.count} items)")
        message = " - ".join(parts)
        if self.verbose:
            logger.info(message)
        else:
            logger.debug(message)

    def on_complete(self) -> None:
        """Log the summary of the run (verbose mode only)."""
        if not self.verbose:
            return

        total_time = self.get_total_duration()
        logger.info("Generation metrics summary")
        logger.info(f"Total generation time: {total_time:.2f}ms")

        logger.info("Phase breakdown:")
        phase_stats = sorted(self.get_phase_statistics(), key=lambda s: s.total_time, reverse=True)
        for stat in phase_stats:
            percentage = stat.total_time / total_time * 100 if total_time else 0.0
            logger.info(f"  {stat.phase:<25} {stat.total_time:.2f}ms ({percentage:.1f}%)")
            if stat.count > 1:
                logger.info(f"  {'':<25} avg: {stat.avg_time:.2f}ms, runs: {stat.count}")

        slow_phases = [s for s in phase_stats if s.total_time > SLOW_PHASE_THRESHOLD_MS]
        if slow_phases:
            logger.info(f"Phases that took >{SLOW_PHASE_THRESHOLD_MS:.0f}ms:")
            for stat in slow_phases:
                logger.info(f"  - {stat.phase}: {stat.total_time:.2f}ms")
        else:
            logger.info(f"All phases completed in less than {SLOW_PHASE_THRESHOLD_MS:.0f}ms each")

        count_metrics = [m for m in self.metrics if m.count is not None]
        if count_metrics:
            logger.info("Item processing:")
            for metric in count_metrics:
                rate = metric.count / metric.duration * 1000 if metric.duration and metric.count else 0
                suffix = f" ({rate:.0f}/sec)" if rate > 0 else ""
                logger.info(f"  {metric.phase}: {metric.count} items{suffix}")

    def get_total_duration(self) -> float:
        """Sum of the durations of every event.

        `total-generation` covers the other phases, so it is left out unless
        it is the only event.
        """
        timed = [m for m in self.metrics if m.duration is not None]
        phases = [m for m in timed if m.phase != "total-generation"]
        return sum(m.duration for m in (phases or timed))

    def get_phase_statistics(self) -> list[PhaseStatistics]:
        return [
            PhaseStatistics(
                phase=phase,
                total_time=sum(durations),
                avg_time=sum(durations) / len(durations),
                count=len(durations),
                min_time=min(durations),
                max_time=max(durations),
            )
            for phase, durations in self._phase_timings.items()
        ]

    def get_metrics(self) -> list[MetricData]:
        return list(self.metrics)
