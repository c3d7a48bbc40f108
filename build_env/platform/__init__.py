"""
Host platform detection
"""

import sys
import platform
from typing import Dict, Any, Optional

_host_platform: Optional[str] = None


class PlatformDetector:
    """Detects and provides information about the current platform"""

    def detect(self) -> Dict[str, Any]:
        """
        Detect current platform and architecture

        Returns:
            Dictionary with platform information
        """
        return {
            "os": platform.system(),
            "platform": self._get_platform_name(),
            "arch": self._get_architecture(),
            "machine": platform.machine(),
            "python_version": sys.version,
        }

    def _get_platform_name(self) -> str:
        """Get normalized platform name"""
        system = platform.system().lower()

        if system == "linux":
            return "linux"
        elif system == "darwin":
            return "darwin"
        elif system == "windows" or system.startswith(("cygwin", "msys", "mingw")):
            return "windows"
        else:
            return system

    def _get_architecture(self) -> str:
        """Get normalized architecture"""
        machine = platform.machine().lower()
        if machine in ["aarch64", "arm64"]:
            return "aarch64"
        elif machine in ["i386", "i686", "x86"]:
            return "x86"
        else:
            return "x64"


def detect_host_platform() -> str:
    """
    Get the normalized platform identifier of this host

    Detection runs once per process; later calls return the same value.
    """
    global _host_platform
    if _host_platform is None:
        _host_platform = PlatformDetector().detect()["platform"]
    return _host_platform


__all__ = ["PlatformDetector", "detect_host_platform"]
