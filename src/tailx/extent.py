"""Line and byte counting for a single source"""

import logging

from tailx.extract import ByteSource
from tailx.models import Extent
from tailx.utils import NEWLINE_SYMBOL_BYTES, get_read_chunk_size

logger = logging.getLogger(__name__)


def count_extent(source: ByteSource, chunk_size: int | None = None) -> Extent:
    """Count lines and bytes in one forward pass from the current position.

    Lines are split on the newline byte and the terminator is counted as part of its
    line. A final line without a terminator still counts as one line. The source is
    read in fixed-size chunks, so a long line never has to fit in memory.

    Args:
        source: Binary source
        chunk_size: Read size in bytes (default: TAILX_READ_CHUNK_KB)

    Returns:
        Extent with total line and byte counts
    """
    chunk_size = chunk_size or get_read_chunk_size()
    total_lines = 0
    total_bytes = 0
    last_chunk = b''
    while chunk := source.read(chunk_size):
        total_lines += chunk.count(NEWLINE_SYMBOL_BYTES)
        total_bytes += len(chunk)
        last_chunk = chunk

    if last_chunk and not last_chunk.endswith(NEWLINE_SYMBOL_BYTES):
        total_lines += 1

    logger.debug(f"[EXTENT] {total_lines} lines, {total_bytes} bytes")
    return Extent(total_lines=total_lines, total_bytes=total_bytes)


def count_file_extent(filepath: str) -> Extent:
    with open(filepath, 'rb') as f:
        return count_extent(f)
