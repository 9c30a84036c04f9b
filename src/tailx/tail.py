"""Multi-source tail driver.

Sources are processed strictly one after another, in the order given:
open, count the extent, resolve the start position, then rescan or seek.
A source that fails to open or read is reported and skipped; the rest still run.
"""

import logging
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import BinaryIO

from tailx.errors import SourceOpenError, SourceReadError, TailError
from tailx.extent import count_extent
from tailx.extract import extract_bytes, extract_lines, stream_bytes, stream_lines
from tailx.models import SourcePlan, SourceReport, Unit, format_header
from tailx.offset import Offset
from tailx.resolve import resolve_start_index
from tailx.utils import display_path, fs_bytes

logger = logging.getLogger(__name__)

STDIN_PATH = '-'


@dataclass
class TailSummary:
    """Counts of sources handled by one run"""

    sources_processed: int = 0
    sources_failed: int = 0

    @property
    def total(self) -> int:
        return self.sources_processed + self.sources_failed


def _describe(e: OSError) -> str:
    return e.strerror or str(e)


@contextmanager
def open_source(path: str) -> Iterator[BinaryIO]:
    """Open a source for binary reading; ``-`` is standard input, left open afterwards.

    Raises:
        SourceOpenError: the source cannot be opened
    """
    if path == STDIN_PATH:
        yield sys.stdin.buffer
        return

    try:
        handle = open(path, 'rb')
    except OSError as e:
        raise SourceOpenError(path, _describe(e)) from e

    with handle:
        yield handle


def _is_seekable(handle: BinaryIO) -> bool:
    try:
        return handle.seekable()
    except (AttributeError, ValueError, OSError):
        return False


def plan_source(handle: BinaryIO, offset: Offset, unit: Unit) -> SourcePlan | None:
    """Count the extent of a seekable source and resolve its start position.

    Counting starts at the current position, which becomes the base for all later seeks.
    Returns None for sources that cannot be rewound; those are handled in a single pass.
    """
    if not _is_seekable(handle):
        return None

    base_offset = handle.tell()
    extent = count_extent(handle)
    start_index = resolve_start_index(offset, extent.total(unit))
    logger.debug(f"[TAIL] extent={extent} unit={unit.value} start_index={start_index} base_offset={base_offset}")
    return SourcePlan(extent=extent, start_index=start_index, base_offset=base_offset)


def emit_source(handle: BinaryIO, offset: Offset, unit: Unit, plan: SourcePlan | None) -> Iterator[bytes]:
    """Yield the selected part of an opened source."""
    if plan is None:
        logger.debug(f"[TAIL] Source is not seekable, using single pass {unit.value} extraction")
        if unit == Unit.BYTES:
            yield from stream_bytes(handle, offset)
        else:
            yield from stream_lines(handle, offset)
        return

    if plan.start_index is None:
        return

    if unit == Unit.BYTES:
        yield from extract_bytes(handle, plan.base_offset + plan.start_index)
    else:
        handle.seek(plan.base_offset)
        yield from extract_lines(handle, plan.start_index)


def tail_paths(
    paths: list[str],
    offset: Offset,
    unit: Unit = Unit.LINES,
    quiet: bool = False,
    write: Callable[[bytes], None] | None = None,
    report_error: Callable[[TailError], None] | None = None,
    colorize: bool = False,
) -> TailSummary:
    """Tail every source in order, writing output through ``write``.

    Args:
        paths: Source identifiers, ``-`` for standard input
        offset: Parsed offset shared by all sources
        unit: Count lines or bytes
        quiet: Never print header banners
        write: Sink for primary output (raw bytes)
        report_error: Sink for per-source errors
        colorize: Style header banners

    Returns:
        TailSummary with processed and failed source counts
    """
    write = write or sys.stdout.buffer.write
    report_error = report_error or (lambda e: None)

    show_headers = not quiet and len(paths) > 1
    summary = TailSummary()
    headers_written = 0

    logger.info(f"[TAIL] Tailing {len(paths)} source(s) by {unit.value}")

    for path in paths:
        try:
            with open_source(path) as handle:
                if show_headers:
                    header = format_header(path, first=headers_written == 0, colorize=colorize)
                    write(fs_bytes(header))
                    headers_written += 1
                try:
                    plan = plan_source(handle, offset, unit)
                    for chunk in emit_source(handle, offset, unit, plan):
                        write(chunk)
                except BrokenPipeError:
                    raise
                except OSError as e:
                    raise SourceReadError(path, _describe(e)) from e
        except (SourceOpenError, SourceReadError) as e:
            logger.info(f"[TAIL] Skipping '{path}': {e.reason}")
            summary.sources_failed += 1
            report_error(e)
            continue

        summary.sources_processed += 1

    logger.info(f"[TAIL] Completed: {summary.sources_processed} processed, {summary.sources_failed} failed")
    return summary


def tail_source_report(path: str, offset: Offset, unit: Unit) -> SourceReport:
    """Tail one source into a SourceReport, decoding the output lossily."""
    try:
        with open_source(path) as handle:
            try:
                plan = plan_source(handle, offset, unit)
                data = b''.join(emit_source(handle, offset, unit, plan))
            except OSError as e:
                raise SourceReadError(path, _describe(e)) from e
    except (SourceOpenError, SourceReadError) as e:
        logger.info(f"[TAIL] Skipping '{path}': {e.reason}")
        return SourceReport(path=display_path(path), error=e.reason)

    return SourceReport(
        path=display_path(path),
        extent=plan.extent if plan else None,
        start_index=plan.start_index if plan else None,
        content=data.decode('utf-8', errors='replace'),
    )


def collect_reports(paths: list[str], offset: Offset, unit: Unit = Unit.LINES) -> list[SourceReport]:
    """Tail every source in order and return one report per source."""
    return [tail_source_report(path, offset, unit) for path in paths]
