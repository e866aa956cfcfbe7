"""
CLI argument parsing for the hostmetrics collectors.

This module provides the argument parsing entry points for both collectors,
using the modular argument builders from the cli package, plus YAML config
file overrides.
"""

import argparse
import sys
from typing import List, Optional

import yaml

from hostmetrics import VERSION
from hostmetrics.cli import PROGRAM_DESCRIPTIONS, add_system_arguments, add_vmware_arguments
from hostmetrics.error_messages import format_error
from hostmetrics.errors import ConfigurationError, ErrorCode


def build_system_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hostmetrics-system", description=PROGRAM_DESCRIPTIONS['system'])
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    add_system_arguments(parser)
    return parser


def build_vmware_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hostmetrics-vmware", description=PROGRAM_DESCRIPTIONS['vmware'])
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    add_vmware_arguments(parser)
    return parser


def parse_system_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for the system collector.

    Args:
        argv: Arguments to parse, defaults to sys.argv[1:].

    Returns:
        argparse.Namespace: Parsed arguments with config file overrides applied.

    Raises:
        ConfigurationError: If the config file is missing or invalid.
    """
    parsed_args = build_system_parser().parse_args(argv)
    if parsed_args.config_file:
        parsed_args = apply_yaml_config_overrides(parsed_args)
    return parsed_args


def parse_vmware_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for the VMware collector.

    Args:
        argv: Arguments to parse, defaults to sys.argv[1:].

    Returns:
        argparse.Namespace: Parsed arguments with config file overrides applied.

    Raises:
        ConfigurationError: If the config file is missing or invalid.
    """
    parsed_args = build_vmware_parser().parse_args(argv)
    if parsed_args.config_file:
        parsed_args = apply_yaml_config_overrides(parsed_args)
    return parsed_args


def apply_yaml_config_overrides(args: argparse.Namespace) -> argparse.Namespace:
    """
    Apply overrides from a YAML config file to the parsed arguments.

    Keys must match the long option names (``polling_interval``,
    ``metrics_dir``, ...). Unknown keys and null values are skipped.

    Args:
        args (argparse.Namespace): The parsed command-line arguments

    Returns:
        argparse.Namespace: The updated arguments with YAML overrides applied

    Raises:
        ConfigurationError: If the file does not exist or is not a YAML mapping.
    """
    try:
        with open(args.config_file, 'r') as f:
            yaml_config = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(
            format_error('CONFIG_FILE_NOT_FOUND', path=args.config_file),
            parameter='config_file',
            actual=args.config_file,
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
        ) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(
            format_error('CONFIG_PARSE_ERROR', path=args.config_file, error=e),
            parameter='config_file',
            actual=args.config_file,
            code=ErrorCode.CONFIG_PARSE_ERROR,
        ) from e

    if not yaml_config:
        print(f"Warning: Config file {args.config_file} is empty", file=sys.stderr)
        return args

    if not isinstance(yaml_config, dict):
        raise ConfigurationError(
            format_error('CONFIG_PARSE_ERROR', path=args.config_file,
                         error=f"expected a mapping, got {type(yaml_config).__name__}"),
            parameter='config_file',
            actual=args.config_file,
            code=ErrorCode.CONFIG_PARSE_ERROR,
        )

    args_dict = vars(args).copy()
    for key, value in yaml_config.items():
        if key not in args_dict or key == 'config_file':
            print(f"Warning: Config file contains unknown parameter '{key}', skipping", file=sys.stderr)
            continue

        # Skip if the value is None (to avoid overriding CLI args with None)
        if value is None:
            continue

        args_dict[key] = value

    return argparse.Namespace(**args_dict)
