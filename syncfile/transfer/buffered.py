"""Buffered read/write transfer, used where sendfile is unavailable."""

import os

from .base import Transfer, TransferError

# Buffer size for copy loop (64KB is good for most filesystems)
BUFFER_SIZE = 65536


class BufferedTransfer(Transfer):
    """Fixed-size read/write loop through a user-space buffer."""

    name = "buffered"

    def __init__(self, buffer_size: int = BUFFER_SIZE):
        super().__init__()
        if buffer_size <= 0:
            raise ValueError(f"buffer_size must be > 0: {buffer_size}")
        self.buffer_size = buffer_size

    def copy(self, dst_fd: int, src_fd: int, size: int) -> int:
        os.lseek(src_fd, 0, os.SEEK_SET)

        copied = 0
        while copied < size:
            data = os.read(src_fd, min(self.buffer_size, size - copied))
            if not data:
                raise TransferError(
                    f"unexpected end of source after {copied} of {size} bytes"
                )
            written = os.write(dst_fd, data)
            if written != len(data):
                raise TransferError(
                    f"short write: {written} of {len(data)} bytes at offset {copied}"
                )
            copied += written
        self.logger.debug(f"buffered copy moved {copied} bytes")
        return copied
