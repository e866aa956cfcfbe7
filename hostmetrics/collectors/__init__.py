"""
Metric collectors.

    - SystemMetricsCollector: sar CPU/memory averages and pidstat per-process statistics
    - VMwareMetricsCollector: guest statistics from vmware-toolbox-cmd
"""

from hostmetrics.collectors.system import SystemMetricsCollector
from hostmetrics.collectors.vmware import VMwareMetricsCollector

__all__ = [
    'SystemMetricsCollector',
    'VMwareMetricsCollector',
]
