# bindata

`bindata` collects files from disk and writes Go source code that embeds their
contents, together with a small generated Go API for reading them back
(`Asset`, `MustAsset`, `AssetInfo`, `AssetNames`, `AssetDir`, `RestoreAsset`,
`RestoreAssets`).

The package provides the pieces of that job: configuration and validation,
a file-system scanner, and writer functions that each emit one part of the
generated Go file. You put them together yourself, as shown below.

## Installing

```
pip install .
```

## Modules

- `bindata.config`: `Config`, the options of a conversion, with
  `validate()`, `validate_input()` and `validate_output()`; the errors
  `BindataError`, `NoInputError` and `NoPackageNameError`.
- `bindata.input_config`: `InputConfig` (a path and a `recursive` flag) and
  `create_input_config(path)`; a path ending in `/...` is made recursive.
- `bindata.fsscanner`: `FSScanner`, which walks files and directories
  (following symbolic links), applies the ignore/include patterns and the
  name prefix, and collects `Asset` objects in its `assets` dictionary.
- `bindata.asset`: `Asset`, `normalize(name)` (turns a path into a CamelCase
  identifier) and `new_asset(...)`.
- `bindata.release`: `write_release`, `write_release_header`,
  `write_release_asset`, `write_one_file_release` (embedded data, gzipped
  unless `no_compress` is set) and `sanitize(data)`, which turns UTF-8 bytes
  into a Go raw-string expression.
- `bindata.toc`: `write_toc` (the `Asset`, `MustAsset`, `AssetInfo`,
  `AssetNames` functions and the `_bindata` table), `write_toc_tree` (the
  `AssetDir` function and the `_bintree` tree) and `AssetTree`.
- `bindata.restore`: `write_restore`, which writes `RestoreAsset` and
  `RestoreAssets`.
- `bindata.stringwriter`: `StringWriter`, a file-like sink that writes every
  byte given to it as a `\xNN` escape onto a text stream.

## Usage

```python
import re

from bindata.config import Config
from bindata.fsscanner import FSScanner
from bindata.input_config import create_input_config
from bindata.release import write_release
from bindata.restore import write_restore
from bindata.toc import write_toc, write_toc_tree

config = Config(
    package="assets",
    output="internal/assets/bindata.go",
    prefix=re.compile(".*/static/"),
    ignore=[re.compile(r"\.gitignore$")],
    inputs=[create_input_config("web/static/...")],
    mod_time=1586263518,
)
config.validate()  # cleans inputs, creates the output directory and file

scanner = FSScanner(config)
toc = {}
for inp in config.inputs:
    scanner.scan(inp.path, "", inp.recursive)
    for name, asset in scanner.assets.items():
        toc.setdefault(name, asset)
    scanner.reset()
keys = sorted(toc)

with open(config.output, "w") as out:
    out.write(f"package {config.package}\n")
    write_release(out, config, keys, toc)
    write_toc(out, keys, toc)
    write_toc_tree(out, keys, toc)
    write_restore(out)
```

Patterns given to `Config` as strings are compiled on construction.

### Options on `Config` used by the writers and scanner

- `package`: Go package name (default `main`); `validate()` rejects an empty
  one with `NoPackageNameError`.
- `inputs`: list of `InputConfig`; `validate()` drops duplicates and raises
  `NoInputError` when none is left, or `BindataError` for a path that does
  not exist.
- `output`: the output file (default `bindata.go`); when empty it becomes
  `bindata.go` in `cwd`, or `cwd` itself when `split` is set.
- `asset_prefix`: prefix of the generated function names (default `bindata`).
- `prefix`, `ignore`, `include`: regular expressions for stripping names and
  filtering paths. Ignore patterns win; when include patterns are given only
  matching paths are kept.
- `mode`, `mod_time`, `no_metadata`, `md5_checksum`: the file metadata
  recorded in the generated code.
- `no_compress`, `no_mem_copy`: how the data is embedded.
- `verbose`: print each file added (`+`), skipped as a duplicate (`=`) or
  ignored (`-`).

## What this package does not do

- There is no single call that produces the finished output, and no
  command-line program; the file header, the `package` line and the order of
  the parts are up to the caller, as in the example above.
- `Config` has `debug`, `dev`, `split` and `tags` fields, but no writer here
  acts on them: there is no output that reads assets from disk at run time,
  no writing of one file per asset plus a common file, and no `// +build`
  line. `write_one_file_release` writes only the body of a per-asset file.

## Running the tests

```
pip install .[test]
pytest
```