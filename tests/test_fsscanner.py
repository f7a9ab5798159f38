import os

import pytest

from bindata.config import Config
from bindata.fsscanner import FSScanner


def _write(path, content):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    root = tmp_path / "testdata"
    for idx in range(1, 5):
        _write(root / "symlinkSrc" / f"file{idx}", f"// symlink file {idx}\n")
    _write(root / "in" / "a" / "test.asset", "// sample file\n")
    _write(root / "symlinkRecursiveParent" / "file1", "// file1\n")
    _write(root / "dupname" / "foo" / "bar", "bar\n")
    _write(root / "dupname" / "foo_bar", "foo_bar\n")
    (root / "symlinkFile").mkdir()
    (root / "symlinkParent").mkdir()
    os.symlink("../symlinkSrc/file1", root / "symlinkFile" / "file1")
    os.symlink("../symlinkSrc", root / "symlinkParent" / "symlinkTarget")
    os.symlink(
        "../symlinkRecursiveParent",
        root / "symlinkRecursiveParent" / "symlinkTarget",
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _src(prefix="testdata/symlinkSrc", func="bindataTestdataSymlinkSrcFile"):
    return {
        f"{prefix}/file{i}": (f"{prefix}/file{i}", f"{prefix}/file{i}", f"{func}{i}")
        for i in range(1, 5)
    }


SRC = _src()
PARENT = {
    f"testdata/symlinkParent/symlinkTarget/file{i}": (
        f"testdata/symlinkParent/symlinkTarget/file{i}",
        f"testdata/symlinkParent/symlinkTarget/file{i}",
        f"bindataTestdataSymlinkSrcFile{i}",
    )
    for i in range(1, 5)
}
SYMFILE = {
    "testdata/symlinkFile/file1": (
        "testdata/symlinkFile/file1",
        "testdata/symlinkFile/file1",
        "bindataTestdataSymlinkSrcFile1",
    )
}
RECURSIVE = {
    "testdata/symlinkRecursiveParent/file1": (
        "testdata/symlinkRecursiveParent/file1",
        "testdata/symlinkRecursiveParent/file1",
        "bindataTestdataSymlinkRecursiveParentFile1",
    )
}

SCAN_CASES = [
    (
        "single file",
        [("./testdata/symlinkSrc/file1", False)],
        {"testdata/symlinkSrc/file1": SRC["testdata/symlinkSrc/file1"]},
    ),
    ("single directory", [("./testdata/symlinkSrc", True)], SRC),
    (
        "directory and a file",
        [("./testdata/in/a", False), ("./testdata/in/a/test.asset", False)],
        {
            "testdata/in/a/test.asset": (
                "testdata/in/a/test.asset",
                "testdata/in/a/test.asset",
                "bindataTestdataInATestAsset",
            )
        },
    ),
    ("symlink to file", [("./testdata/symlinkFile", True)], SYMFILE),
    (
        "symlink to file and duplicate",
        [("./testdata/symlinkSrc", True), ("./testdata/symlinkFile", True)],
        {**SRC, **SYMFILE},
    ),
    (
        "symlink to file and duplicate reversed",
        [("./testdata/symlinkFile", True), ("./testdata/symlinkSrc", True)],
        {**SYMFILE, **SRC},
    ),
    (
        "symlink to parent directory",
        [("./testdata/symlinkParent", True), ("./testdata/symlinkSrc", True)],
        {**PARENT, **SRC},
    ),
    (
        "symlink to parent directory reversed",
        [("./testdata/symlinkSrc", True), ("./testdata/symlinkParent", True)],
        {**SRC, **PARENT},
    ),
    (
        "recursive symlink to directory",
        [("./testdata/symlinkRecursiveParent", True), ("./testdata/symlinkSrc", True)],
        {**RECURSIVE, **SRC},
    ),
    (
        "recursive symlink to directory reversed",
        [("./testdata/symlinkSrc", True), ("./testdata/symlinkRecursiveParent", True)],
        {**SRC, **RECURSIVE},
    ),
    (
        "false duplicate function name",
        [("./testdata/dupname", True)],
        {
            "testdata/dupname/foo/bar": (
                "testdata/dupname/foo/bar",
                "testdata/dupname/foo/bar",
                "bindataTestdataDupnameFooBar",
            ),
            "testdata/dupname/foo_bar": (
                "testdata/dupname/foo_bar",
                "testdata/dupname/foo_bar",
                "bindataTestdataDupnameFoobar",
            ),
        },
    ),
]


@pytest.mark.parametrize(
    "inputs, expected", [c[1:] for c in SCAN_CASES], ids=[c[0] for c in SCAN_CASES]
)
def test_scan(workdir, inputs, expected):
    scanner = FSScanner(Config(asset_prefix="bindata", cwd=str(workdir)))
    assets = {}
    for path, recursive in inputs:
        scanner.scan(path, "", recursive)
        for key, asset in scanner.assets.items():
            assets.setdefault(key, asset)
        scanner.reset()

    got = {k: (a.path, a.name, a.func_name) for k, a in assets.items()}
    assert got == expected


def test_scan_absolute_symlink(workdir):
    link_dir = workdir / "linkdir"
    link_dir.mkdir()
    link = link_dir / "file1"
    os.symlink(os.path.abspath("testdata/symlinkSrc/file1"), link)

    scanner = FSScanner(Config(asset_prefix="bindata", cwd=str(workdir)))
    scanner.scan(str(link_dir), "", True)

    assert len(scanner.assets) == 1
    (asset,) = scanner.assets.values()
    assert asset.path == str(link)
    assert asset.name == str(link)


def test_scan_missing_path_raises(workdir):
    scanner = FSScanner(Config(cwd=str(workdir)))
    with pytest.raises(FileNotFoundError):
        scanner.scan("testdata/notexist", "", True)


def test_non_recursive_skips_subdirectories(workdir):
    scanner = FSScanner(Config(cwd=str(workdir)))
    scanner.scan("testdata/in", "", False)
    assert scanner.assets == {}


def test_colliding_function_names_get_suffix(workdir):
    _write(workdir / "dup" / "a-b", "x")
    _write(workdir / "dup" / "ab", "y")
    scanner = FSScanner(Config(cwd=str(workdir)))
    scanner.scan("dup", "", True)
    assert scanner.assets["dup/a-b"].func_name == "bindataDupAb"
    assert scanner.assets["dup/ab"].func_name == "bindataDupAb_2"


def test_prefix_is_stripped_from_names(workdir):
    scanner = FSScanner(Config(prefix=".*testdata/", cwd=str(workdir)))
    scanner.scan("testdata/in/a", "", True)
    assert list(scanner.assets) == ["in/a/test.asset"]
    assert scanner.assets["in/a/test.asset"].path == "testdata/in/a/test.asset"
    assert scanner.assets["in/a/test.asset"].func_name == "bindataInATestAsset"


def test_is_ignored_rules():
    scanner = FSScanner(Config(ignore=["split/"], include=[r"\.asset$"]))
    assert scanner.is_ignored("in/split/test.asset") is True
    assert scanner.is_ignored("in/a/test.asset") is False
    assert scanner.is_ignored("in/a/test.txt") is True

    plain = FSScanner(Config())
    assert plain.is_ignored("anything") is False


def test_ignored_files_are_skipped(workdir):
    scanner = FSScanner(Config(ignore=["file[12]"], cwd=str(workdir)))
    scanner.scan("testdata/symlinkSrc", "", True)
    assert sorted(scanner.assets) == [
        "testdata/symlinkSrc/file3",
        "testdata/symlinkSrc/file4",
    ]


def test_verbose_output(workdir, capsys):
    scanner = FSScanner(Config(verbose=True, ignore=["file2"], cwd=str(workdir)))
    scanner.scan("testdata/symlinkSrc/file1", "", False)
    scanner.scan("testdata/symlinkSrc/file1", "", False)
    scanner.scan("testdata/symlinkSrc/file2", "", False)
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "+ testdata/symlinkSrc/file1",
        "= testdata/symlinkSrc/file1",
        "- testdata/symlinkSrc/file2",
    ]