"""Options for converting assets into generated code."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field, replace
from typing import List, Optional, Pattern, Union

from .input_config import InputConfig, _clean_path

DEF_PACKAGE_NAME = "main"
"""Default package name."""

DEF_OUTPUT_NAME = "bindata.go"
"""Default generated file name."""

DEF_ASSET_PREFIX_NAME = "bindata"
"""Default prefix for asset functions."""


class BindataError(Exception):
    """Base error for invalid configuration or failed conversion."""


class NoInputError(BindataError):
    """No usable input path was given."""

    def __init__(self, message: str = "no input") -> None:
        super().__init__(message)


class NoPackageNameError(BindataError):
    """The package name is empty."""

    def __init__(self, message: str = "missing package name") -> None:
        super().__init__(message)


def _compile(pattern: Union[str, Pattern[str]]) -> Pattern[str]:
    return re.compile(pattern) if isinstance(pattern, str) else pattern


def _split_dir_file(path: str) -> tuple:
    seps = [os.sep] + ([os.altsep] if os.altsep else [])
    idx = max(path.rfind(sep) for sep in seps) + 1
    return path[:idx], path[idx:]


@dataclass
class Config:
    """A set of options for the asset conversion."""

    package: str = DEF_PACKAGE_NAME
    """Name of the package of the generated code."""

    tags: str = ""
    """Build tags written to a '// +build' line of the output."""

    inputs: List[InputConfig] = field(default_factory=list)
    """Paths containing the asset files."""

    output: str = DEF_OUTPUT_NAME
    """Output file, or output directory when splitting."""

    asset_prefix: str = DEF_ASSET_PREFIX_NAME
    """String prepended to every asset function name."""

    prefix: Optional[Pattern[str]] = None
    """Regular expression stripped from file names to make the TOC keys."""

    ignore: List[Pattern[str]] = field(default_factory=list)
    """Paths matching any of these are skipped."""

    include: List[Pattern[str]] = field(default_factory=list)
    """When not empty, only paths matching one of these are taken."""

    mode: int = 0
    """When nonzero, used as the mode of every file."""

    mod_time: int = 0
    """When nonzero, used as the unix modification time of every file."""

    no_metadata: bool = False
    """Do not preserve size, mode and modification time."""

    no_mem_copy: bool = False
    """Generate string data read in place instead of byte slices."""

    no_compress: bool = False
    """Do not gzip the assets."""

    debug: bool = False
    """Generate code that reads the assets from their original location."""

    dev: bool = False
    """Like debug, but paths are relative to a 'rootDir' variable."""

    split: bool = False
    """Write one file per asset plus a common file into the output directory."""

    md5_checksum: bool = False
    """Compute MD5 checksums of the files."""

    verbose: bool = False
    """Print progress to standard output."""

    cwd: str = ""
    """Current working directory; determined on validation when empty."""

    def __post_init__(self) -> None:
        if self.prefix is not None:
            self.prefix = _compile(self.prefix)
        self.ignore = [_compile(p) for p in self.ignore]
        self.include = [_compile(p) for p in self.include]

    def validate_input(self) -> None:
        """Clean the input paths, drop duplicates and check that each exists."""
        seen = set()
        inputs = []
        for inp in self.inputs:
            path = _clean_path(inp.path)
            if path in seen:
                continue
            try:
                os.lstat(path)
            except OSError as exc:
                raise BindataError(
                    f"failed to stat input path '{path}': {exc.strerror or exc}"
                ) from exc
            seen.add(path)
            inputs.append(replace(inp, path=path))
        if not inputs:
            raise NoInputError()
        self.inputs = inputs

    def validate_output(self) -> None:
        """Settle the output path and make sure it can be written.

        An empty output becomes the working directory when splitting, or the
        default file name inside it otherwise.  A given output has its
        directory created; without a file name the default one is used unless
        splitting.  A single output file is created (truncated) to check it.
        """
        if not self.output:
            if self.split:
                self.output = self.cwd
            else:
                self.output = _clean_path(os.path.join(self.cwd, DEF_OUTPUT_NAME))
            return

        directory, filename = _split_dir_file(self.output)
        if directory:
            try:
                os.makedirs(directory, 0o700, exist_ok=True)
            except OSError as exc:
                raise BindataError(f"create output directory: {exc}") from exc

        if not filename and not self.split:
            self.output = _clean_path(os.path.join(directory, DEF_OUTPUT_NAME))

        if self.split:
            return

        with open(self.output, "w"):
            pass

    def validate(self) -> None:
        """Check that the configuration holds sane values."""
        if not self.cwd:
            try:
                self.cwd = os.getcwd()
            except OSError as exc:
                raise BindataError(
                    "unable to determine current working directory"
                ) from exc
        if not self.package:
            raise NoPackageNameError()
        self.validate_input()
        self.validate_output()