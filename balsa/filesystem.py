"""Small helpers for building paths relative to other files."""

from __future__ import annotations

import os
from pathlib import Path

__all__ = ["get_relative_path", "prepend_to_filename"]


def get_relative_path(base_file: str | os.PathLike, new_path: str | os.PathLike) -> Path:
    """Return ``new_path`` resolved against the directory holding ``base_file``."""
    return Path(base_file).parent / new_path


def prepend_to_filename(orig: str | os.PathLike, prefix: str) -> Path:
    """Return ``orig`` with ``prefix`` put in front of its file name."""
    path = Path(orig)
    return path.parent / (prefix + path.name)