"""
Common CLI arguments and help messages shared by both collectors.

This module contains:
- Help message definitions
- Program descriptions
- Output control arguments
"""

from hostmetrics.config import (
    DEFAULT_FILE_INTERVAL, DEFAULT_METRICS_DIR, DEFAULT_POLLING_INTERVAL,
    DEFAULT_PROCESS_EXPRESSION, DEFAULT_VMWARE_TIMEOUT,
)


# Help messages dictionary - shared across all argument builders
HELP_MESSAGES = {
    'polling_interval': (
        f"Seconds between individual samples taken by sar or pidstat. Must be smaller than the "
        f"file interval. Default: {DEFAULT_POLLING_INTERVAL}"
    ),
    'file_interval': (
        f"Seconds covered by one output file. The number of samples per file is "
        f"file_interval / polling_interval, rounded. Default: {DEFAULT_FILE_INTERVAL}"
    ),
    'metric_type': (
        "Metric category to collect: system_cpu and system_memory average sar output, "
        "system_processes polls pidstat for every process matching --process_expression."
    ),
    'process_expression': (
        f"Regular expression matched against full process command lines in system_processes "
        f"mode. Default: '{DEFAULT_PROCESS_EXPRESSION}'"
    ),
    'metrics_dir': (
        f"Root directory for output files. Files are written to "
        f"<metrics_dir>/<metric_type>/<hostname>/<timestamp>.json. Default: {DEFAULT_METRICS_DIR}"
    ),
    'timeout': (
        f"Seconds to wait for each vmware-toolbox-cmd call before giving up. "
        f"Default: {DEFAULT_VMWARE_TIMEOUT}"
    ),
    'output_dir': (
        "Root directory for output files. Files are written to "
        "<output_dir>/vmware/<hostname>/<timestamp>.json. When omitted the document is printed to stdout."
    ),
    'config_file': "Path to YAML file with argument overrides. Keys are the long option names.",
    'debug': "Enable debug logging, including the output of every command run.",
    'verbose': "Enable verbose logging.",
    'stream_log_level': "Log level for console output (e.g. WARNING, INFO, DEBUG).",
}

PROGRAM_DESCRIPTIONS = {
    'system': (
        "Poll sar or pidstat for one file interval and write the averaged system "
        "or per-process metrics as a JSON document."
    ),
    'vmware': (
        "Collect VMware guest statistics from vmware-toolbox-cmd and write them as a JSON document."
    ),
}


def add_config_file_argument(parser):
    """Add the YAML override file argument.

    Args:
        parser: Argparse parser to add arguments to.
    """
    parser.add_argument(
        '--config_file', '-c',
        type=str,
        help=HELP_MESSAGES['config_file']
    )


def add_output_control_arguments(parser, verbose: bool = True):
    """Add logging related arguments.

    Args:
        parser: Argparse parser to add arguments to.
        verbose: Also add --verbose.
    """
    output_control = parser.add_argument_group("Output Control")
    output_control.add_argument(
        "--debug",
        action="store_true",
        help=HELP_MESSAGES['debug']
    )
    if verbose:
        output_control.add_argument(
            "--verbose",
            action="store_true",
            help=HELP_MESSAGES['verbose']
        )
    output_control.add_argument(
        "--stream_log_level",
        type=str,
        default=None,
        help=HELP_MESSAGES['stream_log_level']
    )
