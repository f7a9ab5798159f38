"""Generated functions restoring embedded assets onto disk."""

from __future__ import annotations

from typing import TextIO

from .toc import (
    _call,
    _canonical,
    _comment,
    _define,
    _for,
    _func,
    _go,
    _on_err,
    _q,
    _ret,
    _set,
)

_NAME_PARAMS = "dir, name string"
_TARGET = _call("_filePath", "dir", "name")
_MOD_TIME = _call("info.ModTime")

TMPL_RESTORE = "\n" + _go(
    _comment("RestoreAsset restores an asset under the given directory"),
    _func(
        "RestoreAsset",
        _NAME_PARAMS,
        "error",
        _define("data, err", _call("Asset", "name")),
        _on_err(),
        _define("info, err", _call("AssetInfo", "name")),
        _on_err(),
        _set(
            "err",
            _call(
                "os.MkdirAll",
                _call("_filePath", "dir", _call("filepath.Dir", "name")),
                _call("os.FileMode", "0755"),
            ),
        ),
        _on_err(),
        _set(
            "err",
            _call("ioutil.WriteFile", _TARGET, "data", _call("info.Mode")),
        ),
        _on_err(),
        _ret(_call("os.Chtimes", _TARGET, _MOD_TIME, _MOD_TIME)),
    ),
    "",
    _comment("RestoreAssets restores an asset under the given directory recursively"),
    _func(
        "RestoreAssets",
        _NAME_PARAMS,
        "error",
        _define("children, err", _call("AssetDir", "name")),
        _comment("File"),
        _on_err(_call("RestoreAsset", "dir", "name")),
        _comment("Dir"),
        _for(
            "_, child := range children",
            _set(
                "err",
                _call("RestoreAssets", "dir", _call("filepath.Join", "name", "child")),
            ),
            _on_err(),
        ),
        _ret("nil"),
    ),
    "",
    _func(
        "_filePath",
        _NAME_PARAMS,
        "string",
        _canonical(),
        _ret(
            _call(
                "filepath.Join",
                _call(
                    "append",
                    "[]string{dir}",
                    _call("strings.Split", "cannonicalName", _q("/")) + "...",
                )
                + "...",
            )
        ),
    ),
    "",
)


def write_restore(out: TextIO) -> None:
    """Write the RestoreAsset and RestoreAssets functions."""
    out.write(TMPL_RESTORE)