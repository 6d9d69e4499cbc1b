"""
Bounded Readers: window reads, position capture and tolerant rewinds.

PREFIX SNIFFING
───────────────
1. Never read more than the caller asked for: classification needs the
   first few hundred bytes, not the whole file.
2. Short reads are normal (pipes, sockets, raw streams): keep reading until
   the window is full or the source hits EOF.
3. Rewinding is best-effort.  A non-seekable or closed source simply stops
   producing matches; it never aborts classification.
4. Read errors are NOT swallowed: they belong to the caller.
"""

import os
import logging
from typing import Optional, BinaryIO, Union

logger = logging.getLogger(__name__)

# Conventional sniffing window for files and buffers
PREFIX_LIMIT = 8192


def read_window(stream: BinaryIO, size: int) -> bytes:
    """
    Read up to `size` bytes from the current position.

    Loops over short reads; stops early only at EOF.  A stream returning
    None (non-blocking, no data yet) is treated as EOF.
    """
    if size <= 0:
        return b""

    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)

    if len(chunks) == 1:
        return bytes(chunks[0])
    return b"".join(chunks)


def tell_start(stream: BinaryIO) -> Optional[int]:
    """Current position, or None when the stream can't report one."""
    try:
        return stream.tell()
    except (OSError, ValueError, AttributeError) as e:
        logger.debug("Stream position unavailable (%s), rewinds disabled", e)
        return None


def rewind(stream: BinaryIO, position: Optional[int]) -> bool:
    """
    Seek back to `position`.

    Returns False (and logs at DEBUG) instead of raising; later predicates
    will see trailing data and fail on their own.
    """
    if position is None:
        return False
    try:
        stream.seek(position)
        return True
    except (OSError, ValueError, AttributeError) as e:
        logger.debug("Rewind to %d failed: %s", position, e)
        return False


def read_path_prefix(
    path: Union[str, "os.PathLike[str]"],
    limit: int = PREFIX_LIMIT,
) -> bytes:
    """
    Read at most `limit` leading bytes of a file.

    Open and read failures raise OSError.  An empty file gives b"".
    """
    with open(path, "rb") as f:
        data = read_window(f, limit)
    logger.debug("Read %d byte prefix of %s", len(data), os.fspath(path))
    return data
