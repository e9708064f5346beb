"""Byte transfer strategies.

Each strategy implements the Transfer interface:
    - SendfileTransfer: zero-copy kernel transfer (Linux)
    - BufferedTransfer: portable read/write loop

Usage:
    from syncfile.transfer import get_transfer

    transfer = get_transfer()  # Auto-detect platform capability
    transfer.copy(dst_fd, src_fd, size)
"""

from typing import Optional
import logging

from .base import Transfer, TransferError
from .buffered import BufferedTransfer
from .sendfile import SendfileTransfer
from ..utils.platform import supports_sendfile

logger = logging.getLogger(__name__)


def get_transfer(force: Optional[str] = None) -> Transfer:
    """Get the best transfer strategy for the current platform.

    Args:
        force: Override detection ("sendfile" or "buffered")

    Returns:
        Transfer: Strategy instance

    Raises:
        NotImplementedError: If the forced strategy is unknown or
            unsupported here
    """
    if force is None:
        force = "sendfile" if supports_sendfile() else "buffered"

    if force == "sendfile":
        if not supports_sendfile():
            raise NotImplementedError("sendfile transfer is not supported on this platform")
        transfer = SendfileTransfer()
    elif force == "buffered":
        transfer = BufferedTransfer()
    else:
        raise NotImplementedError(
            f"Transfer '{force}' is not supported. "
            f"Supported transfers: sendfile, buffered"
        )

    logger.debug(f"using {transfer.name} transfer")
    return transfer


__all__ = [
    "Transfer",
    "TransferError",
    "BufferedTransfer",
    "SendfileTransfer",
    "get_transfer",
]
