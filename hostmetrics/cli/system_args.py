"""
CLI arguments for the system/process metrics collector.
"""

from hostmetrics.cli.common_args import HELP_MESSAGES, add_config_file_argument, add_output_control_arguments
from hostmetrics.config import (
    DEFAULT_FILE_INTERVAL, DEFAULT_METRIC_TYPE, DEFAULT_METRICS_DIR, DEFAULT_POLLING_INTERVAL,
    DEFAULT_PROCESS_EXPRESSION, METRIC_TYPES,
)


def add_system_arguments(parser):
    """Add system collector arguments.

    Args:
        parser: Argparse parser to add arguments to.
    """
    collection = parser.add_argument_group("Collection")
    collection.add_argument(
        '--polling_interval',
        type=int,
        default=DEFAULT_POLLING_INTERVAL,
        help=HELP_MESSAGES['polling_interval']
    )
    collection.add_argument(
        '--file_interval',
        type=int,
        default=DEFAULT_FILE_INTERVAL,
        help=HELP_MESSAGES['file_interval']
    )
    collection.add_argument(
        '--metric_type',
        type=str,
        choices=METRIC_TYPES,
        default=DEFAULT_METRIC_TYPE,
        help=HELP_MESSAGES['metric_type']
    )
    collection.add_argument(
        '--process_expression',
        type=str,
        default=DEFAULT_PROCESS_EXPRESSION,
        help=HELP_MESSAGES['process_expression']
    )

    output = parser.add_argument_group("Output")
    output.add_argument(
        '--metrics_dir',
        type=str,
        default=DEFAULT_METRICS_DIR,
        help=HELP_MESSAGES['metrics_dir']
    )
    add_config_file_argument(output)

    add_output_control_arguments(parser, verbose=True)
