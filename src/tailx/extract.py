"""Extraction of everything from a start position onward.

Two-pass extractors work on a source whose extent is already known:

- ``extract_lines`` rescans a rewound source line by line
- ``extract_bytes`` seeks straight to the byte offset

Single-pass extractors (``stream_lines``, ``stream_bytes``) resolve the offset while
reading forward once, keeping at most the requested number of trailing units in memory.
They serve sources that cannot be rewound, such as standard input.

All extractors yield raw bytes. Decoding, when needed, happens at the output boundary.
"""

import logging
import sys
from collections import deque
from collections.abc import Iterator
from typing import Protocol

from tailx.offset import Offset, ZeroFromStart
from tailx.utils import get_read_chunk_size

logger = logging.getLogger(__name__)


class LineSource(Protocol):
    """Anything that hands out newline-terminated byte lines."""

    def readline(self, size: int = -1, /) -> bytes: ...


class ByteSource(Protocol):
    """Anything that hands out raw bytes in bulk."""

    def read(self, size: int = -1, /) -> bytes: ...


class SeekableSource(ByteSource, Protocol):
    """A byte source supporting absolute positioning."""

    def seek(self, offset: int, whence: int = 0, /) -> int: ...


def extract_lines(source: LineSource, start: int | None) -> Iterator[bytes]:
    """Yield every line at zero-based index ``start`` or later, bytes preserved.

    The source must already be positioned at its first line.
    """
    if start is None:
        return

    line_num = 0
    while line := source.readline():
        if line_num >= start:
            yield line
        line_num += 1


def extract_bytes(source: SeekableSource, start: int | None, chunk_size: int | None = None) -> Iterator[bytes]:
    """Seek to absolute byte ``start`` and yield the remainder in chunks.

    No seek happens when ``start`` is None.
    """
    if start is None:
        return

    chunk_size = chunk_size or get_read_chunk_size()
    source.seek(start)
    logger.debug(f"[EXTRACT] Seeked to byte {start}, reading in {chunk_size} byte chunks")
    while chunk := source.read(chunk_size):
        yield chunk


def _trailing_capacity(count: int) -> int:
    # deque maxlen must fit in a C ssize_t; 2**63 does not
    return min(count, sys.maxsize)


def stream_lines(source: LineSource, offset: Offset) -> Iterator[bytes]:
    """Single forward pass line extraction for sources that cannot be rewound."""
    if isinstance(offset, ZeroFromStart):
        while line := source.readline():
            yield line
        return

    num = offset.value
    if num == 0:
        return

    if num > 0:
        line_num = 0
        while line := source.readline():
            if line_num >= num - 1:
                yield line
            line_num += 1
        return

    tail = deque(maxlen=_trailing_capacity(-num))
    while line := source.readline():
        tail.append(line)
    yield from tail


def stream_bytes(source: ByteSource, offset: Offset, chunk_size: int | None = None) -> Iterator[bytes]:
    """Single forward pass byte extraction for sources that cannot seek."""
    chunk_size = chunk_size or get_read_chunk_size()

    if isinstance(offset, ZeroFromStart):
        while chunk := source.read(chunk_size):
            yield chunk
        return

    num = offset.value
    if num == 0:
        return

    if num > 0:
        to_skip = num - 1
        while chunk := source.read(chunk_size):
            if to_skip >= len(chunk):
                to_skip -= len(chunk)
                continue
            yield chunk[to_skip:]
            to_skip = 0
        return

    keep = -num
    buffer = bytearray()
    while chunk := source.read(chunk_size):
        buffer += chunk
        if len(buffer) > keep:
            del buffer[: len(buffer) - keep]
    if buffer:
        yield bytes(buffer)
