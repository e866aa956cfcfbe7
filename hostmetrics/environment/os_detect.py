"""
OS detection utilities for hostmetrics.

Public exports:
    OSInfo: Data class containing operating system information
    detect_os: Function to detect current OS and distribution
"""

import platform
from dataclasses import dataclass
from typing import Optional

import distro


@dataclass
class OSInfo:
    """
    Operating system information for install instruction lookup.

    Attributes:
        system: Operating system type ('Linux', 'Darwin', 'Windows')
        release: OS kernel release version
        machine: Machine architecture ('x86_64', 'arm64', etc.)
        distro_id: Linux distribution ID ('ubuntu', 'rhel', 'debian', etc.)
        distro_name: Full distribution name ('Ubuntu', 'Red Hat Enterprise Linux')
        distro_version: Distribution version ('22.04', '8.5', etc.)
    """
    system: str
    release: str
    machine: str
    distro_id: Optional[str] = None
    distro_name: Optional[str] = None
    distro_version: Optional[str] = None


def detect_os() -> OSInfo:
    """
    Detect the current operating system and Linux distribution.

    Returns:
        OSInfo: Detected operating system information

    Examples:
        >>> info = detect_os()
        >>> info.system
        'Linux'
        >>> info.distro_id
        'ubuntu'
    """
    info = OSInfo(
        system=platform.system(),
        release=platform.release(),
        machine=platform.machine(),
    )

    if info.system == 'Linux':
        info.distro_id = distro.id() or None
        info.distro_name = distro.name() or None
        info.distro_version = distro.version() or None

    return info
