"""Pydantic models for tail results and API responses"""

from enum import Enum
from typing import Any

import click
from pydantic import BaseModel, ConfigDict, Field


class Unit(str, Enum):
    """Counting granularity for offsets."""

    LINES = 'lines'
    BYTES = 'bytes'


class Extent(BaseModel):
    """Total size of one fully scanned source."""

    model_config = ConfigDict(frozen=True)

    total_lines: int = Field(default=0, ge=0, example=10, description='Number of lines, unterminated last line included')
    total_bytes: int = Field(default=0, ge=0, example=49, description='Number of bytes, line terminators included')

    def total(self, unit: Unit) -> int:
        return self.total_bytes if unit == Unit.BYTES else self.total_lines


class SourcePlan(BaseModel):
    """Extent of a seekable source and the start position resolved against it."""

    model_config = ConfigDict(frozen=True)

    extent: Extent
    start_index: int | None = Field(
        None, example=7, description='Zero-based start position in the active unit, or None to emit nothing'
    )
    base_offset: int = Field(default=0, ge=0, description='Byte position the source was at when counting began')


class SourceReport(BaseModel):
    """Result of tailing one source

    Attributes:
        path: Source identifier as given by the caller
        extent: Line and byte totals (None for non-seekable sources or failures)
        start_index: Resolved zero-based start position (None means nothing emitted)
        content: Emitted data, decoded as UTF-8 with replacement characters
        error: Error message when the source could not be opened or read
    """

    path: str = Field(..., example='/var/log/app.log')
    extent: Extent | None = Field(None, description='Line and byte totals of the source')
    start_index: int | None = Field(None, example=7, description='Zero-based start position')
    content: str = Field(default='', description='Emitted content (lossy UTF-8)')
    error: str | None = Field(None, example='No such file or directory', description='Per-source error message')


class TailResponse(BaseModel):
    """Response from tail command and endpoint"""

    unit: Unit = Field(..., example='lines')
    offset: str = Field(..., example='-10', description='Offset token as given')
    sources: list[SourceReport] = Field(default_factory=list)


class ExtentResponse(BaseModel):
    """Response from extent command and endpoint"""

    path: str = Field(..., example='/var/log/app.log')
    extent: Extent


class HealthResponse(BaseModel):
    """Health check response with system introspection data"""

    status: str = Field(..., example='ok')
    app_version: str = Field(..., example='0.1.0', description='Application version')
    python_version: str = Field(..., example='3.13.1', description='Python interpreter version')
    os_info: dict[str, str] = Field(
        ...,
        example={'system': 'Linux', 'release': '6.8.0', 'version': '#1 SMP'},
        description='Operating system information',
    )
    system_resources: dict[str, Any] = Field(
        ...,
        example={'cpu_cores': 8, 'ram_total_gb': 16.0, 'ram_available_gb': 8.5},
        description='System resources (CPU cores and RAM)',
    )
    constants: dict[str, Any] = Field(
        default_factory=dict,
        example={'LOG_LEVEL': 'INFO', 'READ_CHUNK_SIZE': 65536},
        description='Application configuration constants',
    )
    environment: dict[str, str] = Field(
        default_factory=dict, example={'TAILX_LOG_LEVEL': 'INFO'}, description='Application-related environment variables'
    )


def format_header(path: str, first: bool, colorize: bool = False) -> str:
    """Banner written before a source when several sources are tailed."""
    separator = '' if first else '\n'
    if colorize:
        return (
            separator
            + click.style('==> ', fg='bright_black')
            + click.style(path, fg='cyan', bold=True)
            + click.style(' <==', fg='bright_black')
            + '\n'
        )
    return f'{separator}==> {path} <==\n'
