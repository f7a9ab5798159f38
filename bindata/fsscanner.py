"""Walking the file system to collect the assets to embed."""

from __future__ import annotations

import errno
import os
import stat
from typing import Dict, List, Optional, Set

from .asset import Asset, new_asset
from .config import Config
from .input_config import _clean_path

_MAX_LINKS = 255


def _eval_symlinks(path: str) -> str:
    """Resolve every symbolic link in ``path``.

    A relative path stays relative as long as the links it goes through are
    relative; an absolute link target makes the result absolute.
    """
    if os.sep != "/":
        return os.path.realpath(path)

    dest = "/" if path.startswith("/") else ""
    rest = path
    links = 0
    while rest:
        comp, _, rest = rest.partition("/")
        if comp in ("", "."):
            continue
        if comp == "..":
            if dest in ("", "..") or dest.endswith("/.."):
                dest = os.path.join(dest, "..") if dest else ".."
            elif dest != "/":
                dest = os.path.dirname(dest)
            continue
        candidate = os.path.join(dest, comp) if dest else comp
        st = os.lstat(candidate)
        if not stat.S_ISLNK(st.st_mode):
            dest = candidate
            continue
        links += 1
        if links > _MAX_LINKS:
            raise OSError(errno.ELOOP, "too many links", path)
        target = os.readlink(candidate)
        if target.startswith("/"):
            dest = "/"
        rest = f"{target}/{rest}" if rest else target
    return _clean_path(dest)


class FSScanner:
    """Collects assets from files and directories, following symlinks."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self.known_funcs: Dict[str, int] = {}
        self.visited_dirs: Set[str] = set()
        self.assets: Dict[str, Asset] = {}
        self.depth = 0

    def reset(self) -> None:
        """Forget all previously visited directories and found assets."""
        self.known_funcs = {}
        self.visited_dirs = set()
        self.assets = {}
        self.depth = 0

    def is_ignored(self, path: str) -> bool:
        """Tell whether ``path`` is excluded by the ignore and include patterns.

        A path matching an ignore pattern is ignored; otherwise one matching
        an include pattern is kept; otherwise it is ignored only when include
        patterns are defined.
        """
        if any(pattern.search(path) for pattern in self.config.ignore):
            return True
        if any(pattern.search(path) for pattern in self.config.include):
            return False
        return bool(self.config.include)

    def clean_prefix(self, path: str) -> str:
        """Strip the configured prefix pattern from ``path``."""
        if self.config.prefix is None:
            return path
        return self.config.prefix.sub("", path)

    def add_asset(
        self, path: str, real_path: str, info: Optional[os.stat_result]
    ) -> None:
        """Record the file at ``path`` unless an asset of that name exists.

        Function names that collide get a numeric suffix.
        """
        name = self.clean_prefix(path)
        asset = new_asset(self.config, path, name, real_path, info)

        if name in self.assets:
            if self.config.verbose:
                print(f"= {path}")
            return

        count = self.known_funcs.get(asset.func_name)
        if count is None:
            self.known_funcs[asset.func_name] = 2
        else:
            self.known_funcs[asset.func_name] = count + 1
            asset.func_name = f"{asset.func_name}_{count}"

        if self.config.verbose:
            print(f"+ {path}")

        self.assets[name] = asset

    def _list_dir(self, path: str) -> List[str]:
        self.visited_dirs.add(path)
        return sorted(os.listdir(path))

    def _enter_dir(self, recursive: bool) -> bool:
        if recursive:
            return True
        if self.depth > 0:
            return False
        self.depth += 1
        return True

    def _scan_symlink(self, path: str, recursive: bool) -> None:
        real_path = _eval_symlinks(path)
        info = os.lstat(real_path)
        if stat.S_ISREG(info.st_mode):
            self.add_asset(path, real_path, info)
            return

        if not self._enter_dir(recursive):
            return
        if real_path in self.visited_dirs:
            return

        for entry in self._list_dir(path):
            self.scan(
                os.path.join(path, entry),
                os.path.join(real_path, entry),
                recursive,
            )

    def scan(self, path: str, real_path: str, recursive: bool) -> None:
        """Scan the file at ``path`` or the content of the directory there."""
        path = _clean_path(path)

        if self.is_ignored(path):
            if self.config.verbose:
                print(f"- {path}")
            return

        info = os.lstat(path)
        if stat.S_ISLNK(info.st_mode):
            self._scan_symlink(path, recursive)
            return

        if stat.S_ISREG(info.st_mode):
            self.add_asset(path, real_path, info)
            return

        if not self._enter_dir(recursive):
            return
        if path in self.visited_dirs:
            return

        for entry in self._list_dir(path):
            self.scan(os.path.join(path, entry), "", recursive)