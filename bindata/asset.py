"""Assets found on disk and the names of the functions that return them."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .config import Config


@dataclass
class Asset:
    """A single file to be embedded in the generated code."""

    path: str
    """Path of the file on disk."""

    name: str
    """Key in the table of contents by which the asset is referenced."""

    func_name: str = ""
    """Name of the generated function returning the asset contents."""

    info: Optional[os.stat_result] = None
    """File information gathered while scanning."""


def _upper(ch: str) -> str:
    upper = ch.upper()
    return upper if len(upper) == 1 else ch


def normalize(name: str) -> str:
    """Turn a path into a CamelCase identifier.

    Letters and digits are kept; every other character is dropped.  The
    first letter or digit, and the first one after a '/' or '.', is upper
    cased.
    """
    parts = []
    up = True
    for ch in name:
        if ch.isalpha() or ch.isdecimal():
            parts.append(_upper(ch) if up else ch)
            up = False
        elif ch in "/.":
            up = True
    return "".join(parts)


def _to_slash(path: str) -> str:
    if os.sep == "/":
        return path
    return path.replace(os.sep, "/")


def new_asset(
    config: "Config",
    path: str,
    name: str,
    real_path: str,
    info: Optional[os.stat_result],
) -> Asset:
    """Create an asset; its function name comes from the real path if given."""
    source = real_path if real_path else name
    return Asset(
        path=path,
        name=_to_slash(name),
        func_name=config.asset_prefix + normalize(source),
        info=info,
    )