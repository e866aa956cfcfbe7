#!/usr/bin/env python3
"""
hostmetrics - collector entry points

``hostmetrics-system`` and ``hostmetrics-vmware`` are meant to be started by
an external scheduler, one process per metric type per interval. Each run is
a single attempt; retries are the scheduler's business.

Exit codes:
    0   success
    1   collection failed (an error document was still written) or a
        required tool is missing
    2   invalid arguments or configuration
    130 interrupted
"""

import sys
from typing import List, Optional, TextIO

from hostmetrics.cli_parser import parse_system_arguments, parse_vmware_arguments
from hostmetrics.collectors import SystemMetricsCollector, VMwareMetricsCollector
from hostmetrics.config import EXIT_CODE, CollectorConfig, VMwareConfig
from hostmetrics.dependency_check import check_system_dependencies
from hostmetrics.error_messages import ErrorFormatter
from hostmetrics.errors import ConfigurationError, DependencyError, OutputWriteError
from hostmetrics.hm_logging import setup_logging, apply_logging_options
from hostmetrics.snapshot import write_snapshot

logger = setup_logging("hostmetrics")
error_formatter = ErrorFormatter(use_colors=sys.stderr.isatty())


def run_system_collector(config: CollectorConfig, logger, executor=None, hostname: Optional[str] = None) -> int:
    """
    Run one system collection cycle and write its document.

    Args:
        config: Validated collector configuration.
        logger: Logger instance.
        executor: Optional command executor (tests inject a mock).
        hostname: Optional hostname override.

    Returns:
        Exit code: SUCCESS, or FAILURE when the document carries an error
        or could not be written.
    """
    collector = SystemMetricsCollector(config, logger, executor=executor, hostname=hostname)
    snapshot = collector.collect()

    try:
        write_snapshot(snapshot, config.metrics_dir, logger)
    except OutputWriteError as e:
        logger.error(str(e))
        return EXIT_CODE.FAILURE

    return EXIT_CODE.FAILURE if snapshot.is_error else EXIT_CODE.SUCCESS


def run_vmware_collector(config: VMwareConfig, logger, executor=None, hostname: Optional[str] = None,
                         stream: Optional[TextIO] = None) -> int:
    """
    Run one VMware collection cycle and write or print its document.

    Args:
        config: Validated collector configuration.
        logger: Logger instance.
        executor: Optional command executor (tests inject a mock).
        hostname: Optional hostname override.
        stream: Where to print the document when no output_dir is set.

    Returns:
        Exit code: SUCCESS, or FAILURE when the document carries an error
        or could not be written.

    Raises:
        DependencyError: If vmware-toolbox-cmd is not available.
    """
    collector = VMwareMetricsCollector(config, logger, executor=executor, hostname=hostname)
    snapshot = collector.collect()

    if config.output_dir:
        try:
            write_snapshot(snapshot, config.output_dir, logger)
        except OutputWriteError as e:
            logger.error(str(e))
            return EXIT_CODE.FAILURE
    else:
        stream = stream or sys.stdout
        stream.write(snapshot.to_json(indent=2) + "\n")
        stream.flush()

    return EXIT_CODE.FAILURE if snapshot.is_error else EXIT_CODE.SUCCESS


def system_main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the system/process collector."""
    try:
        args = parse_system_arguments(argv)
        apply_logging_options(logger, args)
        config = CollectorConfig.from_args(args)
        logger.verbose(f"Collecting {config.metric_type.value} metrics: {config.times_to_poll} samples "
                       f"every {config.polling_interval}s")
        check_system_dependencies(config.metric_type, logger=logger)
    except ConfigurationError as e:
        print(error_formatter.format_exception(e), file=sys.stderr)
        return EXIT_CODE.INVALID_ARGUMENTS
    except DependencyError as e:
        print(error_formatter.format_exception(e), file=sys.stderr)
        return EXIT_CODE.FAILURE

    try:
        return run_system_collector(config, logger)
    except KeyboardInterrupt:
        logger.warning("Interrupted, no metrics written")
        return EXIT_CODE.INTERRUPTED


def vmware_main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the VMware collector."""
    try:
        args = parse_vmware_arguments(argv)
        apply_logging_options(logger, args)
        config = VMwareConfig.from_args(args)
    except ConfigurationError as e:
        print(error_formatter.format_exception(e), file=sys.stderr)
        return EXIT_CODE.INVALID_ARGUMENTS

    try:
        return run_vmware_collector(config, logger)
    except DependencyError as e:
        print(error_formatter.format_exception(e), file=sys.stderr)
        return EXIT_CODE.FAILURE
    except KeyboardInterrupt:
        logger.warning("Interrupted, no metrics written")
        return EXIT_CODE.INTERRUPTED
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return EXIT_CODE.FAILURE


def system_entry():
    sys.exit(system_main())


def vmware_entry():
    sys.exit(vmware_main())


if __name__ == "__main__":
    system_entry()
