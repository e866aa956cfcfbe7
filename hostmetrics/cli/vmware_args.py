"""
CLI arguments for the VMware guest metrics collector.
"""

from hostmetrics.cli.common_args import HELP_MESSAGES, add_config_file_argument, add_output_control_arguments
from hostmetrics.config import DEFAULT_VMWARE_TIMEOUT


def add_vmware_arguments(parser):
    """Add VMware collector arguments.

    Args:
        parser: Argparse parser to add arguments to.
    """
    collection = parser.add_argument_group("Collection")
    collection.add_argument(
        '--timeout',
        type=float,
        default=DEFAULT_VMWARE_TIMEOUT,
        help=HELP_MESSAGES['timeout']
    )

    output = parser.add_argument_group("Output")
    output.add_argument(
        '--output_dir',
        type=str,
        default=None,
        help=HELP_MESSAGES['output_dir']
    )
    add_config_file_argument(output)

    add_output_control_arguments(parser, verbose=False)
