"""Platform-specific functionality."""
import platform
from typing import NamedTuple, Optional

from .. import constants
from ..utils.exceptions import PlatformError


class Platform(NamedTuple):
    """Operating system and CPU architecture as spelled in release file names."""
    os: str
    arch: str

    def __str__(self) -> str:
        return f"{self.os}-{self.arch}"


def normalize_arch(machine: str) -> Optional[str]:
    """Map a machine name (x86_64, aarch64, ...) to its listing token."""
    return constants.ARCH_MAP.get(machine.lower())


def get_platform_os() -> str:
    """Get the listing token for the running operating system.

    Raises:
        PlatformError: If the operating system is not known
    """
    system = platform.system()
    os_name = constants.SYSTEM_MAP.get(system)
    if not os_name:
        raise PlatformError(f"Unsupported platform: {system}")
    return os_name


def get_platform_arch() -> str:
    """Get the listing token for the running CPU architecture.

    Raises:
        PlatformError: If the architecture is not known
    """
    machine = platform.machine()
    arch = normalize_arch(machine)
    if not arch:
        raise PlatformError(f"Unsupported architecture: {machine}")
    return arch


def get_platform_info(os_override: Optional[str] = None,
                      arch_override: Optional[str] = None) -> Platform:
    """Get the platform releases are filtered against.

    Overrides are taken as given, so archives for another target can be
    selected; only the values not overridden are detected.

    Returns:
        Platform: (os, arch) listing tokens
    """
    os_name = os_override or get_platform_os()
    if arch_override:
        arch = normalize_arch(arch_override) or arch_override
    else:
        arch = get_platform_arch()
    return Platform(os_name, arch)


def is_windows() -> bool:
    """Check if running on Windows."""
    return platform.system() == "Windows"
