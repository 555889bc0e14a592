"""Per-component resolution timing."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class PerformanceStats:
    """Resolution timings of one display name, in milliseconds."""

    count: int = 0
    ms_total: float = 0.0
    ms_min: float = 0.0
    ms_max: float = 0.0

    @property
    def ms_mean(self) -> float:
        return self.ms_total / self.count if self.count else 0.0


@dataclass
class Telemetry:
    """Collects resolution timings when enabled."""

    enabled: bool = False
    performance: dict[str, PerformanceStats] = field(default_factory=dict)

    def record(self, display_name: str, duration_ms: float) -> None:
        if not self.enabled:
            return
        stats = self.performance.get(display_name)
        if stats is None:
            self.performance[display_name] = PerformanceStats(
                count=1, ms_total=duration_ms, ms_min=duration_ms, ms_max=duration_ms
            )
            return
        stats.count += 1
        stats.ms_total += duration_ms
        stats.ms_min = min(stats.ms_min, duration_ms)
        stats.ms_max = max(stats.ms_max, duration_ms)

    def reset(self) -> None:
        self.performance.clear()
