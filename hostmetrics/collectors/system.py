"""
System and process metric collector.

One invocation covers one file interval. sar (CPU or memory) or pidstat
(per-process) is asked for ``times_to_poll`` samples ``polling_interval``
seconds apart, and only the ``Average:`` rows of the report are kept.

Command, timeout and parse failures do not escape ``collect()``: they become
an error payload so that every cycle leaves exactly one dated file behind.
"""

import re
import socket
import time
from datetime import datetime
from typing import Any, Dict, List, Optional, Set, Tuple

import psutil

from hostmetrics.config import (
    CollectorConfig, MetricType, PIDSTAT_BIN, PS_BIN, SAR_BIN,
)
from hostmetrics.dependency_check import check_system_dependencies
from hostmetrics.errors import DependencyError, HostMetricsException
from hostmetrics.interfaces.collector import MetricsCollectorInterface
from hostmetrics.parsers import parse_pidstat_output, parse_ps_output, parse_sar_output
from hostmetrics.progress import progress_context
from hostmetrics.services import key_records_by_service
from hostmetrics.snapshot import MetricSnapshot, error_payload
from hostmetrics.utils import CommandExecutor, CommandResult, utc_now

NO_PROCESSES_WARNING = "no processes found"


class SystemMetricsCollector(MetricsCollectorInterface):
    """Collects ``system_cpu``, ``system_memory`` or ``system_processes`` metrics.

    Attributes:
        config: Immutable collector configuration.
        executor: Command executor used for sar, ps and pidstat.
        hostname: Local hostname the snapshot is filed under.
    """

    def __init__(self, config: CollectorConfig, logger, executor: Optional[CommandExecutor] = None,
                 hostname: Optional[str] = None):
        self.config = config
        self.logger = logger
        self.executor = executor or CommandExecutor(logger, debug=config.debug)
        self.hostname = hostname or socket.gethostname()

    @property
    def metric_type(self) -> str:
        return self.config.metric_type.value

    def is_available(self) -> bool:
        try:
            check_system_dependencies(self.config.metric_type, logger=self.logger)
        except DependencyError:
            return False
        return True

    def collect(self) -> MetricSnapshot:
        """Run one collection cycle.

        Returns:
            MetricSnapshot with the parsed metrics, or with an error payload
            if any command or parse step failed. The timestamp is the moment
            the polling command finished, or now if it never did.
        """
        timestamp: Optional[datetime] = None
        try:
            if self.config.metric_type == MetricType.SYSTEM_PROCESSES:
                processes = self.discover_processes()
                if not processes:
                    timestamp, data = self.wait_without_processes()
                else:
                    result = self.poll_processes(processes)
                    timestamp = utc_now()
                    data = self.parse_processes(result.stdout, processes)
            else:
                result = self.poll_system()
                # Timestamp at completion rather than start, matching the other metrics on this host
                timestamp = utc_now()
                data = self.parse_system(result.stdout)
        except HostMetricsException as e:
            self.logger.error(f"Failed to collect {self.metric_type} metrics: {e}")
            data = error_payload(e)
        except Exception as e:
            self.logger.error(f"Unexpected error collecting {self.metric_type} metrics: {e}", exc_info=True)
            data = error_payload(e)

        return MetricSnapshot(
            timestamp=timestamp or utc_now(),
            hostname=self.hostname,
            metric_type=self.metric_type,
            data=data,
        )

    def build_sar_command(self) -> List[str]:
        command = [SAR_BIN]
        if self.config.metric_type == MetricType.SYSTEM_MEMORY:
            command.append('-r')
        command += [str(self.config.polling_interval), str(self.config.times_to_poll)]
        return command

    def build_pidstat_command(self, pids) -> List[str]:
        return [
            PIDSTAT_BIN, '-u', '-r', '-d',
            '-p', ','.join(str(pid) for pid in sorted(pids)),
            str(self.config.polling_interval), str(self.config.times_to_poll),
        ]

    def poll_system(self) -> CommandResult:
        with progress_context(self._polling_description(SAR_BIN), logger=self.logger):
            return self.executor.execute(self.build_sar_command())

    def parse_system(self, output: str) -> Dict[str, float]:
        data = parse_sar_output(output)
        self.logger.verbose(f"Parsed {len(data)} {self.metric_type} fields from sar")
        return data

    def wait_without_processes(self) -> Tuple[datetime, Dict[str, str]]:
        """Sleep through the nominal polling window and return the warning payload.

        File cadence stays the same whether or not polling happened.
        """
        duration = self.config.polling_interval * self.config.times_to_poll
        self.logger.warning(
            f"No processes match '{self.config.process_expression}', waiting {duration}s before writing"
        )
        time.sleep(duration)
        return utc_now(), {
            'warning': NO_PROCESSES_WARNING,
            'process_expression': self.config.process_expression,
        }

    def poll_processes(self, processes: Dict[int, str]) -> CommandResult:
        self.logger.verbose(f"Polling {len(processes)} processes: {', '.join(map(str, sorted(processes)))}")
        with progress_context(self._polling_description(PIDSTAT_BIN), logger=self.logger):
            return self.executor.execute(self.build_pidstat_command(processes))

    def parse_processes(self, output: str, processes: Dict[int, str]) -> Dict[str, Any]:
        records = parse_pidstat_output(output)
        payload = key_records_by_service(records, processes)
        self.logger.verbose(f"Parsed pidstat records for {len(payload)} processes")
        return payload

    def discover_processes(self) -> Dict[int, str]:
        """Find processes whose command line matches the process expression.

        The collector itself, its ancestors (a cron shell carrying the
        expression on its command line) and the ps invocation are excluded.

        Returns:
            Dictionary mapping PID to full command line.
        """
        result = self.executor.execute([PS_BIN, '-e', '-o', 'pid,args'])
        listing = parse_ps_output(result.stdout)

        excluded = self._own_process_tree()
        if result.pid is not None:
            excluded.add(result.pid)

        pattern = re.compile(self.config.process_expression)
        matches = {
            pid: command for pid, command in listing.items()
            if pid not in excluded and pattern.search(command)
        }
        self.logger.debug(f"Matched {len(matches)} of {len(listing)} processes "
                          f"against '{self.config.process_expression}'")
        return matches

    @staticmethod
    def _own_process_tree() -> Set[int]:
        me = psutil.Process()
        return {me.pid} | {parent.pid for parent in me.parents()}

    def _polling_description(self, tool: str) -> str:
        return (f"Polling {tool} {self.config.times_to_poll} times "
                f"every {self.config.polling_interval}s for {self.metric_type}")
