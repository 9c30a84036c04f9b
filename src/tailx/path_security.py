"""Restricting API file access to a search root"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

_search_root: Path | None = None


def set_search_root(root: str | None) -> Path:
    """Set the directory below which the API may read files. Defaults to cwd."""
    global _search_root
    _search_root = Path(root if root else os.getcwd()).resolve()
    logger.debug(f"[SECURITY] Search root set to {_search_root}")
    return _search_root


def get_search_root() -> Path | None:
    return _search_root


def validate_path_within_root(path: str) -> Path:
    """Resolve a path and make sure it stays within the search root.

    Symlinks are resolved before the check.

    Raises:
        PermissionError: path resolves outside the search root
    """
    root = _search_root or set_search_root(None)
    resolved = Path(path)
    if not resolved.is_absolute():
        resolved = root / resolved
    resolved = resolved.resolve()

    if resolved != root and root not in resolved.parents:
        logger.warning(f"[SECURITY] Rejected path outside search root: {path}")
        raise PermissionError(f"Access denied: {path} is outside the search root {root}")
    return resolved
