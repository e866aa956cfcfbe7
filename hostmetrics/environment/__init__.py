"""
Environment detection for hostmetrics.

This module provides utilities for detecting the operating system and Linux
distribution, and for generating OS-specific installation instructions for
missing external tools.

Public exports:
    OSInfo: Data class containing operating system information
    detect_os: Function to detect current OS and distribution
    get_install_instruction: Function to get OS-specific install commands
    INSTALL_INSTRUCTIONS: Dictionary of install commands by OS/dependency
"""

from hostmetrics.environment.os_detect import OSInfo, detect_os
from hostmetrics.environment.install_hints import (
    get_install_instruction,
    INSTALL_INSTRUCTIONS,
)

__all__ = [
    "OSInfo",
    "detect_os",
    "get_install_instruction",
    "INSTALL_INSTRUCTIONS",
]
