"""Fast file hashing utilities.

Uses xxhash for speed when available, falls back to md5.
Used for the optional content comparison, where speed matters more than
cryptographic security.
"""

import hashlib
import os

try:
    import xxhash
    XXHASH_AVAILABLE = True
except ImportError:
    XXHASH_AVAILABLE = False

# Buffer size for file reading (64KB is good for most filesystems)
BUFFER_SIZE = 65536


def _new_hasher(algorithm: str):
    """Create a hash object for the named algorithm.

    Args:
        algorithm: "auto", "xxhash", "md5" or "sha256"
                   "auto" uses xxhash if available, else md5
    """
    if algorithm == "auto":
        if XXHASH_AVAILABLE:
            return xxhash.xxh64()
        return hashlib.md5()
    elif algorithm == "xxhash":
        if not XXHASH_AVAILABLE:
            raise ImportError("xxhash not installed. Install with: pip install xxhash")
        return xxhash.xxh64()
    elif algorithm == "md5":
        return hashlib.md5()
    elif algorithm == "sha256":
        return hashlib.sha256()
    else:
        raise ValueError(f"Unknown algorithm: {algorithm}")


def hash_fd(fd: int, algorithm: str = "auto") -> str:
    """Hash the full contents of an open file descriptor.

    Reads from offset 0 regardless of the descriptor's current position and
    leaves the position at end of file.

    Args:
        fd: Open, readable file descriptor
        algorithm: Hash algorithm ("auto", "xxhash", "md5", "sha256")

    Returns:
        Hex digest of the contents

    Raises:
        OSError: If the descriptor can't be read
    """
    hasher = _new_hasher(algorithm)

    os.lseek(fd, 0, os.SEEK_SET)
    while True:
        data = os.read(fd, BUFFER_SIZE)
        if not data:
            break
        hasher.update(data)

    return hasher.hexdigest()


def contents_equal(fd_a: int, fd_b: int, algorithm: str = "auto") -> bool:
    """Compare two open descriptors by digest."""
    return hash_fd(fd_a, algorithm) == hash_fd(fd_b, algorithm)
