"""
OS-specific installation instructions for the external tools the collectors drive.

Public exports:
    INSTALL_INSTRUCTIONS: Dictionary mapping (dependency, system, distro) to install commands
    get_install_instruction: Function to get the appropriate install command
"""

from typing import Dict, Optional, Tuple

from hostmetrics.environment.os_detect import OSInfo


# Installation instructions keyed by (dependency, system, distro_id)
# None values act as wildcards for less-specific lookups
INSTALL_INSTRUCTIONS: Dict[Tuple[str, Optional[str], Optional[str]], str] = {
    # sysstat provides sar and pidstat
    ('sysstat', 'Linux', 'ubuntu'): 'sudo apt-get install sysstat',
    ('sysstat', 'Linux', 'debian'): 'sudo apt-get install sysstat',
    ('sysstat', 'Linux', 'rhel'): 'sudo dnf install sysstat',
    ('sysstat', 'Linux', 'centos'): 'sudo yum install sysstat',
    ('sysstat', 'Linux', 'fedora'): 'sudo dnf install sysstat',
    ('sysstat', 'Linux', 'sles'): 'sudo zypper install sysstat',
    ('sysstat', 'Linux', None): 'Install sysstat via your package manager',

    # procps provides ps
    ('procps', 'Linux', 'ubuntu'): 'sudo apt-get install procps',
    ('procps', 'Linux', 'debian'): 'sudo apt-get install procps',
    ('procps', 'Linux', 'rhel'): 'sudo dnf install procps-ng',
    ('procps', 'Linux', 'centos'): 'sudo yum install procps-ng',
    ('procps', 'Linux', 'fedora'): 'sudo dnf install procps-ng',
    ('procps', 'Linux', None): 'Install procps via your package manager',

    # VMware guest tools provide vmware-toolbox-cmd
    ('open-vm-tools', 'Linux', 'ubuntu'): 'sudo apt-get install open-vm-tools',
    ('open-vm-tools', 'Linux', 'debian'): 'sudo apt-get install open-vm-tools',
    ('open-vm-tools', 'Linux', 'rhel'): 'sudo dnf install open-vm-tools',
    ('open-vm-tools', 'Linux', 'centos'): 'sudo yum install open-vm-tools',
    ('open-vm-tools', 'Linux', 'sles'): 'sudo zypper install open-vm-tools',
    ('open-vm-tools', 'Linux', None): 'Install open-vm-tools via your package manager',
    ('open-vm-tools', 'Windows', None): 'Install VMware Tools from the vSphere client',
}


def get_install_instruction(dependency: str, os_info: OSInfo) -> str:
    """
    Get the OS-specific installation instruction for a dependency.

    Looks up installation instructions in order of specificity:
    1. (dependency, system, distro_id) - Most specific
    2. (dependency, system, None) - System-specific, any distro
    3. (dependency, None, None) - Generic, any system

    Args:
        dependency: The dependency name ('sysstat', 'procps', 'open-vm-tools')
        os_info: OSInfo instance with detected OS information

    Returns:
        Installation instruction string appropriate for the OS

    Examples:
        >>> ubuntu = OSInfo(system='Linux', release='', machine='x86_64', distro_id='ubuntu')
        >>> get_install_instruction('sysstat', ubuntu)
        'sudo apt-get install sysstat'
    """
    lookups = [
        (dependency, os_info.system, os_info.distro_id),
        (dependency, os_info.system, None),
        (dependency, None, None),
    ]

    for key in lookups:
        if key in INSTALL_INSTRUCTIONS:
            return INSTALL_INSTRUCTIONS[key]

    return f"Install {dependency} using your system's package manager"
