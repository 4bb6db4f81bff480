"""Performance profiler for JSON Reshaper operations."""

import json
import logging
import time
from contextlib import contextmanager
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

import psutil


@dataclass
class PerformanceMetrics:
    """Performance metrics for one reshaping operation."""
    operation_name: str
    duration: float
    input_size: int
    output_size: int
    memory_start_mb: float
    memory_peak_mb: float
    memory_end_mb: float
    rules_applied: int


class PerformanceProfiler:
    """
    Performance profiler for transform, translate and extraction runs.

    Records wall-clock duration and resident memory (via psutil) around an
    operation and keeps a history of the collected metrics.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the performance profiler.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.metrics_history: List[PerformanceMetrics] = []
        self.current_operation: Optional[str] = None
        self.start_time: Optional[float] = None
        self.start_memory: float = 0.0
        self.peak_memory: float = 0.0
        self.input_size = 0
        self.output_size = 0
        self.rules_applied = 0

    @contextmanager
    def profile_operation(self, operation_name: str, input_size: int = 0, rules_applied: int = 0):
        """
        Context manager for profiling operations.

        Args:
            operation_name: Name of the operation being profiled
            input_size: Size of input data in bytes
            rules_applied: Number of rules the operation runs
        """
        self.start_profiling(operation_name, input_size, rules_applied)
        try:
            yield self
        finally:
            self.stop_profiling()

    def start_profiling(self, operation_name: str, input_size: int = 0, rules_applied: int = 0):
        self.current_operation = operation_name
        self.start_time = time.perf_counter()
        self.input_size = input_size
        self.output_size = 0
        self.rules_applied = rules_applied
        self.start_memory = self._memory_mb()
        self.peak_memory = self.start_memory
        self.logger.debug(f"Started profiling: {operation_name}")

    def record_output(self, output_size: int) -> None:
        """Record the size of the produced output in bytes."""
        self.output_size = output_size
        self.sample_performance()

    def sample_performance(self) -> None:
        """Sample current memory usage."""
        if not self.current_operation:
            return
        self.peak_memory = max(self.peak_memory, self._memory_mb())

    def stop_profiling(self) -> PerformanceMetrics:
        """
        Stop profiling and return metrics.

        Returns:
            PerformanceMetrics object with collected data
        """
        if not self.current_operation or self.start_time is None:
            raise ValueError("No active profiling session")

        duration = time.perf_counter() - self.start_time
        end_memory = self._memory_mb()
        self.peak_memory = max(self.peak_memory, end_memory)

        metrics = PerformanceMetrics(
            operation_name=self.current_operation,
            duration=duration,
            input_size=self.input_size,
            output_size=self.output_size,
            memory_start_mb=self.start_memory,
            memory_peak_mb=self.peak_memory,
            memory_end_mb=end_memory,
            rules_applied=self.rules_applied,
        )
        self.metrics_history.append(metrics)

        self.logger.info(f"Performance Summary - {self.current_operation}:")
        self.logger.info(f"  Duration: {duration * 1000:.2f}ms")
        self.logger.info(f"  Input/Output: {self.input_size}B / {self.output_size}B")
        self.logger.info(f"  Memory Peak: {self.peak_memory:.1f} MB")
        self.logger.info(f"  Rules Applied: {self.rules_applied}")

        self.current_operation = None
        self.start_time = None
        return metrics

    def get_performance_summary(self) -> Dict[str, Any]:
        """Summarize all recorded operations."""
        if not self.metrics_history:
            return {"total_operations": 0}

        return {
            "total_operations": len(self.metrics_history),
            "total_duration": sum(m.duration for m in self.metrics_history),
            "max_memory_peak_mb": max(m.memory_peak_mb for m in self.metrics_history),
            "operations": [m.operation_name for m in self.metrics_history],
        }

    def export_metrics(self) -> str:
        """Export the metrics history as JSON text."""
        return json.dumps([asdict(m) for m in self.metrics_history], indent=2)

    def _memory_mb(self) -> float:
        try:
            return psutil.Process().memory_info().rss / 1024 / 1024
        except psutil.Error as e:
            self.logger.warning(f"Memory sampling failed: {e}")
            return self.start_memory
