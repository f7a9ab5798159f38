"""Table of contents and directory tree of the generated assets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, TextIO, Tuple, Union


@dataclass(frozen=True)
class _Block:
    """A braced block of generated code; ``head`` carries the opening brace."""

    head: str
    body: Tuple["_Node", ...]


_Node = Union[str, _Block]


def _render(nodes: Iterable[_Node], depth: int) -> Iterator[str]:
    pad = "\t" * depth
    for node in nodes:
        if isinstance(node, _Block):
            yield pad + node.head
            yield from _render(node.body, depth + 1)
            yield pad + "}"
        elif node:
            yield pad + node
        else:
            yield ""


def _go(*nodes: _Node) -> str:
    """Render nodes of generated code, one tab per nesting level."""
    return "\n".join(_render(nodes, 0))


def _q(text: str) -> str:
    return f'"{text}"'


def _call(func: str, *args: str) -> str:
    return f"{func}({', '.join(args)})"


def _define(lhs: str, rhs: str) -> str:
    return f"{lhs} := {rhs}"


def _set(lhs: str, rhs: str) -> str:
    return f"{lhs} = {rhs}"


def _ret(*values: str) -> str:
    return "return " + ", ".join(values)


def _comment(text: str) -> str:
    return f"// {text}"


def _func(name: str, params: str, results: str, *body: _Node) -> _Block:
    return _Block(f"func {name}({params}) {results} {{", body)


def _if(cond: str, *body: _Node) -> _Block:
    return _Block(f"if {cond} {{", body)


def _for(clause: str, *body: _Node) -> _Block:
    return _Block(f"for {clause} {{", body)


def _on_err(result: str = "err") -> _Block:
    return _if("err != nil", _ret(result))


def _canonical() -> str:
    return _define(
        "cannonicalName",
        _call("strings.Replace", "name", _q("\\\\"), _q("/"), "-1"),
    )


def _doc(*text: str) -> Tuple[str, ...]:
    return ("//", *(_comment(line) for line in text), "//")


_PATH_ERROR_FIELDS = (("Op", _q("open")), ("Path", "name"), ("Err", "os.ErrNotExist"))


def _not_exist() -> _Block:
    return _Block(
        _ret("nil", "&os.PathError{"),
        tuple(f"{key}: {value}," for key, value in _PATH_ERROR_FIELDS),
    )


def _not_exist_inline() -> str:
    fields = ", ".join(f"{key}: {value}" for key, value in _PATH_ERROR_FIELDS)
    return _ret("nil", "&os.PathError{" + fields + "}")


def _strings(*items: str) -> str:
    return "[]string{" + ", ".join(_q(item) for item in items) + "}"


def _lookup(func: str, result: str, field: str) -> _Block:
    failure = _q(f"{func} %s can't read by error: %v")
    return _func(
        func,
        "name string",
        f"({result}, error)",
        _canonical(),
        _if(
            "f, ok := _bindata[cannonicalName]; ok",
            _define("a, err", _call("f")),
            _if("err != nil", _ret("nil", _call("fmt.Errorf", failure, "name", "err"))),
            _ret(f"a.{field}", "nil"),
        ),
        _not_exist_inline(),
    )


def _field(name: str, kind: str) -> str:
    return f"{name:<8} {kind}"


TMPL_TYPE_BINTREE = "\n" + _go(
    _Block(
        "type bintree struct {",
        (
            _field("Func", "func() (*asset, error)"),
            _field("Children", "map[string]*bintree"),
        ),
    ),
    "",
    "var _bintree = &bintree",
)

_EXAMPLE_TREE = ((0, "data/"), (1, "foo.txt"), (1, "img/"), (2, "a.png"), (2, "b.png"))


def _asset_dir(arg: str) -> str:
    return _call("AssetDir", _q(arg))


TMPL_FUNC_ASSET_DIR = "\n" + _go(
    *_doc(
        "AssetDir returns the file names below a certain",
        "directory embedded in the file by go-bindata.",
        "For example if you run go-bindata on data/... and data contains the",
        "following hierarchy:",
        *("    " + "  " * depth + entry for depth, entry in _EXAMPLE_TREE),
        f"then {_asset_dir('data')} would return {_strings('foo.txt', 'img')}",
        f"{_asset_dir('data/img')} would return {_strings('a.png', 'b.png')}",
        f"{_asset_dir('foo.txt')} and {_asset_dir('notexist')} would return an error",
        f"{_asset_dir('')} will return {_strings('data')}.",
    ),
    _func(
        "AssetDir",
        "name string",
        "([]string, error)",
        _define("node", "_bintree"),
        _if(
            "len(name) != 0",
            _canonical(),
            _define("pathList", _call("strings.Split", "cannonicalName", _q("/"))),
            _for(
                "_, p := range pathList",
                _set("node", "node.Children[p]"),
                _if("node == nil", _not_exist()),
            ),
        ),
        _if("node.Func != nil", _not_exist()),
        _define("rv", _call("make", "[]string", "0", _call("len", "node.Children"))),
        _for(
            "childName := range node.Children",
            _set("rv", _call("append", "rv", "childName")),
        ),
        _ret("rv", "nil"),
    ),
    "",
    "",
)

TMPL_FUNC_ASSET = "\n" + _go(
    *_doc(
        "Asset loads and returns the asset for the given name.",
        "It returns an error if the asset could not be found or",
        "could not be loaded.",
    ),
    _lookup("Asset", "[]byte", "bytes"),
    "",
    *_doc(
        "MustAsset is like Asset but panics when Asset would return an error.",
        "It simplifies safe initialization of global variables.",
        "nolint: deadcode",
    ),
    _func(
        "MustAsset",
        "name string",
        "[]byte",
        _define("a, err", _call("Asset", "name")),
        _if(
            "err != nil",
            _call(
                "panic",
                " + ".join((_q("asset: Asset("), "name", _q("): "), _call("err.Error"))),
            ),
        ),
        "",
        _ret("a"),
    ),
    "",
    *_doc(
        "AssetInfo loads and returns the asset info for the given name.",
        "It returns an error if the asset could not be found or could not be loaded.",
    ),
    _lookup("AssetInfo", "os.FileInfo", "info"),
    "",
    *_doc("AssetNames returns the names of the assets.", "nolint: deadcode"),
    _func(
        "AssetNames",
        "",
        "[]string",
        _define("names", _call("make", "[]string", "0", _call("len", "_bindata"))),
        _for("name := range _bindata", _set("names", _call("append", "names", "name"))),
        _ret("names"),
    ),
    "",
    *_doc("_bindata is a table, holding each asset generator, mapped to its name."),
    "var _bindata = map[string]func() (*asset, error){",
    "",
)


class AssetTree:
    """A node of the directory hierarchy of the assets."""

    def __init__(self) -> None:
        self.asset = None
        self.children: Dict[str, "AssetTree"] = {}

    def add(self, route: Iterable[str], asset) -> None:
        """Place ``asset`` at the node reached by following ``route``."""
        node = self
        for name in route:
            node = node.children.setdefault(name, AssetTree())
        node.asset = asset

    def _func_or_nil(self) -> str:
        if self.asset is None or not self.asset.func_name:
            return "nil"
        return self.asset.func_name

    def _write_go_map(self, out: TextIO, indent: int) -> None:
        out.write(f"{{Func: {self._func_or_nil()}, Children: map[string]*bintree{{")
        if self.children:
            out.write("\n")
            for name in sorted(self.children):
                out.write("\t" * (indent + 1))
                out.write(f'"{name}": ')
                self.children[name]._write_go_map(out, indent + 1)
            out.write("\t" * indent)
        out.write("}}")
        if indent > 0:
            out.write(",")
        out.write("\n")

    def write_as_go_map(self, out: TextIO) -> None:
        """Write the tree as the '_bintree' variable of the generated code."""
        out.write(TMPL_TYPE_BINTREE)
        self._write_go_map(out, 0)


def write_toc_tree(out: TextIO, keys: Iterable[str], toc: Dict) -> None:
    """Write the AssetDir function and the hierarchical tree of assets."""
    out.write(TMPL_FUNC_ASSET_DIR)
    tree = AssetTree()
    for key in keys:
        asset = toc[key]
        tree.add(asset.name.split("/"), asset)
    tree.write_as_go_map(out)


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def write_toc(out: TextIO, keys: Iterable[str], toc: Dict) -> None:
    """Write the asset access functions and the table of contents."""
    keys_list: List[str] = list(keys)
    out.write(TMPL_FUNC_ASSET)
    longest = max((_byte_len(key) for key in keys_list), default=0)
    for key in keys_list:
        asset = toc[key]
        padding = " " * (1 + max(0, longest - _byte_len(asset.name)))
        out.write(f'\t"{asset.name}":{padding}{asset.func_name},\n')
    out.write("}\n")