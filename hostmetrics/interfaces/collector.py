"""
Collector interface definitions for hostmetrics.

Each collector turns one invocation of external tools into one
MetricSnapshot. Collection failures that the collector can describe end up
in the snapshot payload; the caller decides where the snapshot goes.
"""

from abc import ABC, abstractmethod

from hostmetrics.snapshot import MetricSnapshot


class MetricsCollectorInterface(ABC):
    """Interface for metric collectors.

    Example:
        class UptimeCollector(MetricsCollectorInterface):
            metric_type = 'uptime'

            def is_available(self):
                return os.path.exists('/proc/uptime')

            def collect(self):
                with open('/proc/uptime') as f:
                    seconds = float(f.read().split()[0])
                return MetricSnapshot(utc_now(), self.hostname, self.metric_type,
                                      {'uptime': seconds})
    """

    @property
    @abstractmethod
    def metric_type(self) -> str:
        """Metric category this collector produces, used in document keys and paths."""
        pass

    @abstractmethod
    def collect(self) -> MetricSnapshot:
        """Run one collection cycle.

        Returns:
            MetricSnapshot holding either the collected metrics or an error payload.
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether the external tools this collector drives are present.

        Returns:
            True if collector can be used, False otherwise.
        """
        pass
