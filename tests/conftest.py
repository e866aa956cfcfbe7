"""
Shared pytest fixtures for hostmetrics tests.

These fixtures provide mock loggers, executors and configuration objects
so collectors can be exercised without sar, pidstat or the VMware guest
tools installed.
"""

from argparse import Namespace
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

from hostmetrics.config import CollectorConfig, VMwareConfig
from tests.fixtures import LAUNCHER_PID, MockCommandExecutor, MockLogger


# =============================================================================
# Logger Fixtures
# =============================================================================

@pytest.fixture
def mock_logger():
    """
    Create a mock logger that accepts all log calls.

    Usage:
        def test_something(mock_logger):
            some_function(logger=mock_logger)
            mock_logger.warning.assert_called_once()
    """
    logger = MagicMock()
    for level in ['debug', 'info', 'warning', 'error', 'critical',
                  'status', 'verbose']:
        setattr(logger, level, MagicMock())
    return logger


@pytest.fixture
def capturing_logger():
    """
    Create a logger that captures messages per level.

    Usage:
        def test_something(capturing_logger):
            some_function(logger=capturing_logger)
            assert capturing_logger.has_message('error', 'expected')
    """
    return MockLogger()


# =============================================================================
# Executor Fixtures
# =============================================================================

@pytest.fixture
def mock_executor():
    """Empty MockCommandExecutor; tests add responses as needed."""
    return MockCommandExecutor()


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def make_config(tmp_path):
    """
    Factory for CollectorConfig with a temporary metrics directory.

    Usage:
        def test_something(make_config):
            config = make_config(metric_type='system_memory')
    """
    def _make(**overrides):
        values = {
            'polling_interval': 1,
            'file_interval': 3,
            'metric_type': 'system_cpu',
            'process_expression': 'puppet',
            'metrics_dir': str(tmp_path / 'metrics'),
        }
        values.update(overrides)
        return CollectorConfig(**values)
    return _make


@pytest.fixture
def vmware_config(tmp_path) -> VMwareConfig:
    return VMwareConfig(timeout=5, output_dir=str(tmp_path / 'metrics'))


@pytest.fixture
def system_args(tmp_path) -> Namespace:
    """Parsed-argument namespace as produced by the system collector parser."""
    return Namespace(
        polling_interval=1,
        file_interval=300,
        metric_type='system_cpu',
        process_expression='puppet',
        metrics_dir=str(tmp_path / 'metrics'),
        config_file=None,
        debug=False,
        verbose=False,
        stream_log_level=None,
    )


# =============================================================================
# Environment Fixtures
# =============================================================================

@pytest.fixture
def fixed_time():
    """A fixed UTC timestamp for snapshot tests."""
    return datetime(2025, 1, 15, 14, 30, 22, tzinfo=timezone.utc)


@pytest.fixture
def own_process_tree():
    """
    Patch psutil so the collector sees itself as PID 7000, started by the
    launcher shell in the sample ps output.
    """
    process = MagicMock()
    process.pid = 7000
    process.parents.return_value = [MagicMock(pid=LAUNCHER_PID), MagicMock(pid=1)]
    with patch('hostmetrics.collectors.system.psutil.Process', return_value=process):
        yield process


@pytest.fixture
def no_sleep():
    """Patch time.sleep in the system collector and record requested durations."""
    with patch('hostmetrics.collectors.system.time.sleep') as sleep:
        yield sleep
