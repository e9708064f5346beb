"""Platform detection and privilege checking utilities.

Handles Windows/Linux differences for:
- Admin/root privilege detection (ownership is only copied when privileged)
- Zero-copy transfer availability
"""

import ctypes
import os
import sys

# Import Platform enum from config to maintain single source of truth
from syncfile.config import Platform


def detect_platform() -> Platform:
    """Detect the current operating system platform.

    Returns:
        Platform.WINDOWS, Platform.LINUX, or Platform.MACOS based on sys.platform
    """
    if sys.platform == "win32":
        return Platform.WINDOWS
    elif sys.platform == "darwin":
        return Platform.MACOS
    elif sys.platform.startswith("linux"):
        return Platform.LINUX
    else:
        # Default to Linux for other Unix-like systems
        return Platform.LINUX


def is_admin() -> bool:
    """Check if the current process has elevated privileges.

    On Windows: Checks for Administrator rights
    On Linux/macOS: Checks for effective UID 0

    Returns:
        True if running with elevated privileges, False otherwise
    """
    platform = detect_platform()

    if platform == Platform.WINDOWS:
        try:
            return ctypes.windll.shell32.IsUserAnAdmin() != 0
        except (AttributeError, OSError):
            return False
    else:
        return os.geteuid() == 0


def supports_sendfile(platform: Platform = Platform.AUTO) -> bool:
    """Check whether os.sendfile can copy between two regular files.

    Only Linux accepts a regular file as the output descriptor; macOS and
    the BSDs require a socket.

    Args:
        platform: Platform to check (AUTO detects the running one)

    Returns:
        True if the zero-copy transfer can be used
    """
    if platform == Platform.AUTO:
        platform = detect_platform()

    return platform == Platform.LINUX and hasattr(os, "sendfile")
