"""
CLI argument builders for the hostmetrics collectors.

Modules:
    - common_args: Shared help messages and output control arguments
    - system_args: System/process collector arguments
    - vmware_args: VMware collector arguments
"""

from hostmetrics.cli.common_args import (
    HELP_MESSAGES,
    PROGRAM_DESCRIPTIONS,
    add_config_file_argument,
    add_output_control_arguments,
)

from hostmetrics.cli.system_args import add_system_arguments
from hostmetrics.cli.vmware_args import add_vmware_arguments

__all__ = [
    'HELP_MESSAGES',
    'PROGRAM_DESCRIPTIONS',
    'add_config_file_argument',
    'add_output_control_arguments',
    'add_system_arguments',
    'add_vmware_arguments',
]
