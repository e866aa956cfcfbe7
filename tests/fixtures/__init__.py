"""
Test fixtures package for hostmetrics tests.

This package provides reusable mock classes and sample tool output
for testing parsers, collectors and the entry points.
"""

from tests.fixtures.mock_logger import MockLogger, create_mock_logger
from tests.fixtures.mock_executor import MockCommandExecutor
from tests.fixtures.sample_data import (
    SAMPLE_SAR_CPU,
    SAMPLE_SAR_CPU_PARSED,
    SAMPLE_SAR_MEMORY,
    SAMPLE_SAR_MEMORY_PARSED,
    SAMPLE_SAR_NO_AVERAGE,
    SAMPLE_PIDSTAT,
    SAMPLE_PIDSTAT_JAVA_RECORD,
    SAMPLE_PS,
    SAMPLE_PS_NO_MATCH,
    SAMPLE_VMWARE_LIST,
    SAMPLE_VMWARE_STATS,
    LAUNCHER_PID,
    vmware_stat_responses,
)

__all__ = [
    # Mock classes
    'MockLogger',
    'create_mock_logger',
    'MockCommandExecutor',
    # Sample data
    'SAMPLE_SAR_CPU',
    'SAMPLE_SAR_CPU_PARSED',
    'SAMPLE_SAR_MEMORY',
    'SAMPLE_SAR_MEMORY_PARSED',
    'SAMPLE_SAR_NO_AVERAGE',
    'SAMPLE_PIDSTAT',
    'SAMPLE_PIDSTAT_JAVA_RECORD',
    'SAMPLE_PS',
    'SAMPLE_PS_NO_MATCH',
    'SAMPLE_VMWARE_LIST',
    'SAMPLE_VMWARE_STATS',
    'LAUNCHER_PID',
    'vmware_stat_responses',
]
