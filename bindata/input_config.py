"""Input directories and files to be converted."""

from __future__ import annotations

import os
from dataclasses import dataclass

_RECURSIVE_SUFFIX = "/..."


def _clean_path(path: str) -> str:
    """Return the shortest equivalent form of a path ('.' for an empty one)."""
    if not path:
        return "."
    cleaned = os.path.normpath(path)
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


@dataclass
class InputConfig:
    """A path holding assets and whether its subdirectories are included."""

    path: str
    recursive: bool = False


def create_input_config(path: str) -> InputConfig:
    """Build an input from a path; a trailing '/...' marks it recursive.

    '/path/to/foo/...' gives ('/path/to/foo', True) and
    '/path/to/bar' gives ('/path/to/bar', False).
    """
    if path.endswith(_RECURSIVE_SUFFIX):
        return InputConfig(_clean_path(path[: -len(_RECURSIVE_SUFFIX)]), True)
    return InputConfig(_clean_path(path), False)