"""Utility modules for syncfile.

This package provides:
- hashing: Content digests of open descriptors
- logging: Configured logging with JSON/text output support
- platform: Platform detection, privilege and sendfile checks
"""

from syncfile.utils.hashing import hash_fd, contents_equal
from syncfile.utils.logging import configure_root_logger
from syncfile.utils.platform import detect_platform, is_admin, supports_sendfile

__all__ = [
    "hash_fd",
    "contents_equal",
    "configure_root_logger",
    "detect_platform",
    "is_admin",
    "supports_sendfile",
]
