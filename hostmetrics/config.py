"""
Configuration constants and immutable run configuration for hostmetrics.

Everything a collector needs is folded into a frozen dataclass once at startup
(``CollectorConfig`` or ``VMwareConfig``) and passed explicitly to the
collector. Nothing reads process-wide mutable state after argument parsing.
"""

import enum
import math
import re
from dataclasses import dataclass
from typing import Any, Optional

from hostmetrics.error_messages import format_error
from hostmetrics.errors import ConfigurationError, ErrorCode


class EXIT_CODE(enum.IntEnum):
    SUCCESS = 0
    FAILURE = 1
    INVALID_ARGUMENTS = 2
    INTERRUPTED = 130


class MetricType(enum.Enum):
    """Metric categories produced by the system collector."""
    SYSTEM_CPU = "system_cpu"
    SYSTEM_MEMORY = "system_memory"
    SYSTEM_PROCESSES = "system_processes"

    @classmethod
    def values(cls):
        return [m.value for m in cls]


METRIC_TYPES = MetricType.values()
VMWARE_METRIC_TYPE = "vmware"

# Defaults for the system collector
DEFAULT_POLLING_INTERVAL = 1
DEFAULT_FILE_INTERVAL = 300
DEFAULT_METRIC_TYPE = MetricType.SYSTEM_CPU.value
DEFAULT_PROCESS_EXPRESSION = "puppet"
DEFAULT_METRICS_DIR = "/var/lib/hostmetrics"

# Defaults for the VMware collector
DEFAULT_VMWARE_TIMEOUT = 10

# External tools
SAR_BIN = "sar"
PIDSTAT_BIN = "pidstat"
PS_BIN = "ps"
VMWARE_TOOLBOX_BIN = "vmware-toolbox-cmd"

# Categories from ``vmware-toolbox-cmd stat raw`` that have one entry per named instance
VMWARE_INSTANCE_CATEGORIES = ("vscsi", "vnet")

# Interval between non-blocking process completion checks
COMMAND_POLL_SECONDS = 0.1
# Undecodable bytes in tool output (process names, mount labels) become U+FFFD
OUTPUT_ENCODING = 'utf-8'

# Timestamp formats
ISO8601_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
FILE_TIMESTAMP_FORMAT = "%Y%m%dT%H%M%SZ"


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded away from zero.

    ``round()`` rounds halves to even, which would poll 2 times for a 5s file
    at a 2s interval; collectors expect 3.
    """
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class CollectorConfig:
    """Immutable configuration for one system collector invocation.

    Attributes:
        polling_interval: Seconds between samples taken by sar/pidstat.
        file_interval: Seconds covered by one output file.
        metric_type: Metric category to collect.
        process_expression: Regular expression selecting processes in process mode.
        metrics_dir: Root directory for output files.
        verbose: Verbose logging requested.
        debug: Debug logging requested.
    """
    polling_interval: int = DEFAULT_POLLING_INTERVAL
    file_interval: int = DEFAULT_FILE_INTERVAL
    metric_type: MetricType = MetricType.SYSTEM_CPU
    process_expression: str = DEFAULT_PROCESS_EXPRESSION
    metrics_dir: str = DEFAULT_METRICS_DIR
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        if not isinstance(self.metric_type, MetricType):
            if self.metric_type not in METRIC_TYPES:
                raise ConfigurationError(
                    format_error('CONFIG_INVALID_CHOICE', param='metric_type',
                                 actual=self.metric_type, choices=", ".join(METRIC_TYPES)),
                    parameter='metric_type',
                    expected=METRIC_TYPES,
                    actual=self.metric_type,
                )
            object.__setattr__(self, 'metric_type', MetricType(self.metric_type))

        for name in ('polling_interval', 'file_interval'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ConfigurationError(
                    format_error('CONFIG_INVALID_VALUE', param=name, actual=value,
                                 expected="a positive number of seconds"),
                    parameter=name,
                    expected="> 0",
                    actual=value,
                )

        if self.polling_interval >= self.file_interval:
            raise ConfigurationError(
                format_error('CONFIG_INTERVAL_ORDER', polling_interval=self.polling_interval,
                             file_interval=self.file_interval),
                parameter='polling_interval',
                expected=f"< file_interval ({self.file_interval})",
                actual=self.polling_interval,
                code=ErrorCode.CONFIG_INCOMPATIBLE,
            )

        if not self.process_expression:
            raise ConfigurationError(
                "process_expression must not be empty",
                parameter='process_expression',
                code=ErrorCode.CONFIG_MISSING_REQUIRED,
            )
        try:
            re.compile(self.process_expression)
        except re.error as e:
            raise ConfigurationError(
                format_error('CONFIG_INVALID_VALUE', param='process_expression',
                             actual=self.process_expression, expected=f"a valid regular expression ({e})"),
                parameter='process_expression',
                expected="a valid regular expression",
                actual=self.process_expression,
            ) from e

    @property
    def times_to_poll(self) -> int:
        """Number of samples sar/pidstat take within one file interval."""
        return round_half_up(self.file_interval / self.polling_interval)

    @classmethod
    def from_args(cls, args: Any) -> 'CollectorConfig':
        """Build the configuration from parsed command line arguments."""
        return cls(
            polling_interval=args.polling_interval,
            file_interval=args.file_interval,
            metric_type=args.metric_type,
            process_expression=args.process_expression,
            metrics_dir=args.metrics_dir,
            verbose=bool(getattr(args, 'verbose', False)),
            debug=bool(getattr(args, 'debug', False)),
        )


@dataclass(frozen=True)
class VMwareConfig:
    """Immutable configuration for one VMware collector invocation.

    Attributes:
        timeout: Deadline in seconds for each vmware-toolbox-cmd call.
        output_dir: Root directory for output files. None prints to stdout.
        debug: Debug logging requested.
    """
    timeout: float = DEFAULT_VMWARE_TIMEOUT
    output_dir: Optional[str] = None
    debug: bool = False

    def __post_init__(self):
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)) or self.timeout <= 0:
            raise ConfigurationError(
                format_error('CONFIG_INVALID_VALUE', param='timeout', actual=self.timeout,
                             expected="a positive number of seconds"),
                parameter='timeout',
                expected="> 0",
                actual=self.timeout,
            )

    @classmethod
    def from_args(cls, args: Any) -> 'VMwareConfig':
        return cls(
            timeout=args.timeout,
            output_dir=args.output_dir or None,
            debug=bool(getattr(args, 'debug', False)),
        )
