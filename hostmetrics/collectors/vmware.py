"""
VMware guest statistics collector.

``vmware-toolbox-cmd stat raw`` lists the available stat categories, one per
line. Most are a bare category name; ``vscsi`` and ``vnet`` lines also name
an instance (a virtual disk or NIC). Each leaf is fetched as JSON with
``vmware-toolbox-cmd stat raw json <category> [<instance>]``.
"""

import json
import socket
from typing import Any, Dict, List, Optional, Tuple

from hostmetrics.config import VMWARE_INSTANCE_CATEGORIES, VMWARE_METRIC_TYPE, VMWARE_TOOLBOX_BIN, VMwareConfig
from hostmetrics.dependency_check import check_vmware_toolbox_available, probe_executable
from hostmetrics.error_messages import format_error
from hostmetrics.errors import ErrorCode, HostMetricsException, OutputParseError
from hostmetrics.interfaces.collector import MetricsCollectorInterface
from hostmetrics.parsers import split_lines
from hostmetrics.snapshot import MetricSnapshot, error_payload
from hostmetrics.utils import CommandExecutor, utc_now


class VMwareMetricsCollector(MetricsCollectorInterface):
    """Collects guest statistics exposed by the VMware guest tools.

    The toolbox CLI must resolve on the search path when the collector is
    created; a DependencyError is raised otherwise.

    Attributes:
        config: Immutable collector configuration.
        executor: Command executor for toolbox calls.
        hostname: Local hostname, resolved once.
    """

    def __init__(self, config: VMwareConfig, logger, executor: Optional[CommandExecutor] = None,
                 hostname: Optional[str] = None, toolbox_bin: str = VMWARE_TOOLBOX_BIN):
        self.config = config
        self.logger = logger
        self.executor = executor or CommandExecutor(logger, debug=config.debug)
        self.toolbox_bin = check_vmware_toolbox_available(self.executor, toolbox_bin)
        self.hostname = hostname or socket.gethostname()

    @property
    def metric_type(self) -> str:
        return VMWARE_METRIC_TYPE

    def is_available(self) -> bool:
        return probe_executable(self.executor, self.toolbox_bin)

    def _stat_raw(self, *args: str) -> str:
        result = self.executor.execute([self.toolbox_bin, 'stat', 'raw', *args], timeout=self.config.timeout)
        return result.stdout

    def list_stats(self) -> List[Tuple[str, Optional[str]]]:
        """List available stats as (category, instance) pairs.

        Returns:
            One pair per listed line; instance is None for single-instance categories.
        """
        stats = []
        for line in split_lines(self._stat_raw()):
            parts = line.split(None, 1)
            stats.append((parts[0], parts[1].strip() if len(parts) > 1 else None))
        return stats

    def fetch_stat(self, category: str, instance: Optional[str] = None) -> Any:
        """Fetch one stat category, or one instance of it, as parsed JSON.

        Raises:
            OutputParseError: If the toolbox returns something that is not JSON.
        """
        args = ['json', category] + ([instance] if instance else [])
        output = self._stat_raw(*args)
        try:
            return json.loads(output)
        except json.JSONDecodeError as e:
            raise OutputParseError(
                format_error('OUTPUT_INVALID_JSON', tool=f"{self.toolbox_bin} stat raw {' '.join(args)}", error=e),
                tool=self.toolbox_bin,
                output=output,
                code=ErrorCode.OUTPUT_INVALID_JSON,
            ) from e

    def gather(self) -> Dict[str, Any]:
        """Fetch every listed stat.

        Returns:
            Dictionary keyed by category. Multi-instance categories hold a
            nested dictionary keyed by instance name.
        """
        stats: Dict[str, Any] = {}
        for category, instance in self.list_stats():
            if category in VMWARE_INSTANCE_CATEGORIES:
                if instance is None:
                    self.logger.debug(f"Skipping {category} entry without an instance name")
                    continue
                stats.setdefault(category, {})[instance] = self.fetch_stat(category, instance)
            elif category not in stats:
                stats[category] = self.fetch_stat(category)

        self.logger.verbose(f"Collected {len(stats)} VMware stat categories")
        return stats

    def collect(self) -> MetricSnapshot:
        """Run one collection cycle.

        Any failure replaces the whole payload with an error; the document
        itself is always complete.
        """
        try:
            data = self.gather()
        except HostMetricsException as e:
            self.logger.error(f"Failed to collect VMware metrics: {e}")
            data = error_payload(e)
        except Exception as e:
            self.logger.error(f"Unexpected error collecting VMware metrics: {e}", exc_info=True)
            data = error_payload(e)

        return MetricSnapshot(
            timestamp=utc_now(),
            hostname=self.hostname,
            metric_type=self.metric_type,
            data=data,
        )
