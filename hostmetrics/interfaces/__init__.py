"""
Interface definitions for hostmetrics.

Collector Interfaces:
    - MetricsCollectorInterface: Contract shared by the system and VMware collectors
"""

from hostmetrics.interfaces.collector import MetricsCollectorInterface

__all__ = [
    'MetricsCollectorInterface',
]
