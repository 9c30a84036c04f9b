"""Shared constants and environment helpers"""

import logging
import os

NEWLINE_SYMBOL = '\n'
NEWLINE_SYMBOL_BYTES = b'\n'

ENV_PREFIX = 'TAILX_'


def get_int_env(name: str, default: int = 0) -> int:
    """Read an integer from the environment, falling back to default on missing or bad values."""
    value = os.environ.get(name, '').strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def get_bool_env(name: str) -> bool:
    return os.environ.get(name, '').lower() in ('1', 'true', 'yes')


def get_read_chunk_size() -> int:
    """Chunk size in bytes for byte-mode reads.

    Controlled by TAILX_READ_CHUNK_KB environment variable.
    Default: 64KB
    """
    chunk_kb = get_int_env('TAILX_READ_CHUNK_KB')
    if chunk_kb <= 0:
        chunk_kb = 64
    return chunk_kb * 1024


def setup_logging(default_level: str = 'WARNING') -> str:
    """Configure root logging from TAILX_LOG_LEVEL; log records always go to stderr.

    Returns:
        The effective level name
    """
    log_level_name = os.getenv('TAILX_LOG_LEVEL', default_level).upper()
    log_level = getattr(logging, log_level_name, logging.WARNING)
    logging.basicConfig(level=log_level, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    return log_level_name


def fs_bytes(text: str) -> bytes:
    """Encode text that may carry undecodable file name bytes back to those bytes."""
    return text.encode('utf-8', errors='surrogateescape')


def display_path(path: str) -> str:
    """Printable form of a path; undecodable bytes become replacement characters."""
    return fs_bytes(path).decode('utf-8', errors='replace')
