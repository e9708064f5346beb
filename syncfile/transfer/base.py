"""Abstract base class for byte transfer strategies.

A transfer moves exactly ``size`` bytes from a source descriptor, starting at
offset 0, into a destination descriptor. It either completes or raises
TransferError; callers clean up the destination.
"""

from abc import ABC, abstractmethod
import logging


class TransferError(OSError):
    """A transfer could not move every requested byte."""


class Transfer(ABC):
    """Interface for descriptor-to-descriptor copies.

    Example:
        class SendfileTransfer(Transfer):
            name = "sendfile"
            def copy(self, dst_fd, src_fd, size) -> int:
                ...
    """

    name = "base"

    def __init__(self):
        """Initialize the transfer with a logger."""
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def copy(self, dst_fd: int, src_fd: int, size: int) -> int:
        """Copy ``size`` bytes from src_fd into dst_fd.

        Args:
            dst_fd: Descriptor open for writing, positioned at 0
            src_fd: Descriptor open for reading
            size: Exact number of bytes to move

        Returns:
            Number of bytes copied (always ``size``)

        Raises:
            TransferError: On a short write, premature EOF or zero progress
            OSError: On any other I/O failure
        """
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"
