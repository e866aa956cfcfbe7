"""
Dependency validation for hostmetrics collectors.

This module provides fail-fast checks for the external tools the collectors
drive (sar, pidstat, ps, vmware-toolbox-cmd). These checks run before any
collection starts, so a missing tool aborts the run with a clear message
and an OS-specific install command instead of producing an error document.

Public exports:
    check_executable_available: Find an executable in PATH or raise
    probe_executable: Ask a shell whether a command resolves, without raising
    check_system_dependencies: Validate the tools a system metric type needs
    check_vmware_toolbox_available: Validate the VMware guest tools CLI
"""

import shlex
import shutil
from typing import List, Optional

from hostmetrics.config import MetricType, PIDSTAT_BIN, PS_BIN, SAR_BIN, VMWARE_TOOLBOX_BIN
from hostmetrics.environment import detect_os, get_install_instruction
from hostmetrics.error_messages import format_error
from hostmetrics.errors import DependencyError


def check_executable_available(
    executable: str,
    dependency: str,
    message_key: str,
    **message_params
) -> str:
    """
    Check if an executable is available in PATH.

    Args:
        executable: Name of the executable to find.
        dependency: Package that provides the executable, used for install hints.
        message_key: Error message template used when the executable is missing.
        **message_params: Extra template parameters.

    Returns:
        Full path to the executable.

    Raises:
        DependencyError: If the executable is not found, with an OS-specific install command.
    """
    path = shutil.which(executable)
    if path:
        return path

    install_cmd = get_install_instruction(dependency, detect_os())
    raise DependencyError(
        message=format_error(message_key, executable=executable, install_cmd=install_cmd,
                             **message_params),
        dependency=executable,
        install_cmd=install_cmd,
        suggestion=install_cmd,
    )


def check_system_dependencies(metric_type: MetricType, logger=None) -> List[str]:
    """
    Validate the tools required to collect a system metric type.

    Args:
        metric_type: Metric type about to be collected.
        logger: Optional logger for debug output.

    Returns:
        List of resolved executable paths.

    Raises:
        DependencyError: If any required tool is missing.
    """
    if metric_type == MetricType.SYSTEM_PROCESSES:
        required = [(PS_BIN, 'procps', 'DEPENDENCY_PROCPS_MISSING'),
                    (PIDSTAT_BIN, 'sysstat', 'DEPENDENCY_SYSSTAT_MISSING')]
    else:
        required = [(SAR_BIN, 'sysstat', 'DEPENDENCY_SYSSTAT_MISSING')]

    paths = []
    for executable, dependency, message_key in required:
        if logger:
            logger.debug(f"Checking for {executable}...")
        path = check_executable_available(executable, dependency, message_key,
                                          metric_type=metric_type.value)
        if logger:
            logger.debug(f"Found {executable} at: {path}")
        paths.append(path)

    return paths


def probe_executable(executor, executable: str) -> bool:
    """
    Ask the shell whether a command resolves on the search path.

    Runs ``command -v`` through the executor with non-zero exits tolerated,
    so a missing tool is reported as False rather than an exception.

    Args:
        executor: CommandExecutor used to run the probe.
        executable: Name of the command to look up.

    Returns:
        True if the command resolves.
    """
    result = executor.execute(['sh', '-c', f'command -v {shlex.quote(executable)}'], check=False)
    return result.succeeded and bool(result.stdout.strip())


def check_vmware_toolbox_available(executor, executable: Optional[str] = None) -> str:
    """
    Check that the VMware guest tools CLI is available.

    Args:
        executor: CommandExecutor used to run the probe.
        executable: Name of the CLI, defaults to vmware-toolbox-cmd.

    Returns:
        The executable name.

    Raises:
        DependencyError: If the CLI does not resolve on the search path.
    """
    executable = executable or VMWARE_TOOLBOX_BIN
    if probe_executable(executor, executable):
        return executable

    install_cmd = get_install_instruction('open-vm-tools', detect_os())
    raise DependencyError(
        message=format_error('DEPENDENCY_VMWARE_TOOLS_MISSING', executable=executable,
                             install_cmd=install_cmd),
        dependency=executable,
        install_cmd=install_cmd,
        suggestion=install_cmd,
    )
