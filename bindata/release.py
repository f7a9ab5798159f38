"""Generated code for release builds, with the asset data embedded."""

from __future__ import annotations

import gzip
import hashlib
import os
import shutil
import stat
from typing import Dict, Iterable, List, TextIO

from .asset import Asset
from .config import Config
from .stringwriter import StringWriter

_GO_MODE_PERM = 0o777
_GO_MODE_DIR = 1 << 31
_GO_MODE_SYMLINK = 1 << 27
_GO_MODE_DEVICE = 1 << 26
_GO_MODE_NAMED_PIPE = 1 << 25
_GO_MODE_SOCKET = 1 << 24
_GO_MODE_SETUID = 1 << 23
_GO_MODE_SETGID = 1 << 22
_GO_MODE_CHAR_DEVICE = 1 << 21
_GO_MODE_STICKY = 1 << 20

_BACKQUOTE = b"`"
_BOM = b"\xef\xbb\xbf"

_SIMPLE_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}

TMPL_IMPORT = '''
import (
	"os"
	"time"
)

'''

TMPL_IMPORT_COMPRESS_NOMEMCOPY = '''
import (
	"bytes"
	"compress/gzip"
	"fmt"
	"io"
	"io/ioutil"
	"os"
	"path/filepath"
	"strings"
	"time"
)

func bindataRead(data, name string) ([]byte, error) {
	gz, err := gzip.NewReader(strings.NewReader(data))
	if err != nil {
		return nil, fmt.Errorf("Read %q: %v", name, err)
	}

	var buf bytes.Buffer
	_, err = io.Copy(&buf, gz)
	clErr := gz.Close()

	if err != nil {
		return nil, fmt.Errorf("Read %q: %v", name, err)
	}
	if clErr != nil {
		return nil, err
	}

	return buf.Bytes(), nil
}

'''

TMPL_IMPORT_COMPRESS_MEMCOPY = '''
import (
	"bytes"
	"compress/gzip"
	"fmt"
	"io"
	"io/ioutil"
	"os"
	"path/filepath"
	"strings"
	"time"
)

func bindataRead(data []byte, name string) ([]byte, error) {
	gz, err := gzip.NewReader(bytes.NewBuffer(data))
	if err != nil {
		return nil, fmt.Errorf("Read %q: %v", name, err)
	}

	var buf bytes.Buffer
	_, err = io.Copy(&buf, gz)
	clErr := gz.Close()

	if err != nil {
		return nil, fmt.Errorf("Read %q: %v", name, err)
	}
	if clErr != nil {
		return nil, err
	}

	return buf.Bytes(), nil
}

'''

TMPL_IMPORT_NOCOMPRESS_NOMEMCOPY = '''
import (
	"fmt"
	"io/ioutil"
	"os"
	"path/filepath"
	"reflect"
	"strings"
	"time"
	"unsafe"
)

// nolint: deadcode, gas
func bindataRead(data, name string) ([]byte, error) {
	var empty [0]byte
	sx := (*reflect.StringHeader)(unsafe.Pointer(&data))
	b := empty[:]
	bx := (*reflect.SliceHeader)(unsafe.Pointer(&b))
	bx.Data = sx.Data
	bx.Len = len(data)
	bx.Cap = bx.Len
	return b, nil
}

'''

TMPL_IMPORT_NOCOMPRESS_MEMCOPY = '''
import (
	"fmt"
	"io/ioutil"
	"os"
	"path/filepath"
	"strings"
	"time"
)

'''

TMPL_RELEASE_HEADER = '''
type asset struct {
	bytes []byte
	info  fileInfoEx
}

type fileInfoEx interface {
	os.FileInfo
	MD5Checksum() string
}

type bindataFileInfo struct {
	name        string
	size        int64
	mode        os.FileMode
	modTime     time.Time
	md5checksum string
}

func (fi bindataFileInfo) Name() string {
	return fi.name
}
func (fi bindataFileInfo) Size() int64 {
	return fi.size
}
func (fi bindataFileInfo) Mode() os.FileMode {
	return fi.mode
}
func (fi bindataFileInfo) ModTime() time.Time {
	return fi.modTime
}
func (fi bindataFileInfo) MD5Checksum() string {
	return fi.md5checksum
}
func (fi bindataFileInfo) IsDir() bool {
	return false
}
func (fi bindataFileInfo) Sys() interface{} {
	return nil
}

'''

_TMPL_FUNC_STRING = '''"

func %sBytes() ([]byte, error) {
	return bindataRead(
		_%s,
		%s,
	)
}

'''

_TMPL_FUNC_COMPRESS_MEMCOPY = '''")

func %sBytes() ([]byte, error) {
	return bindataRead(
		_%s,
		%s,
	)
}

'''

_TMPL_FUNC_NOCOMPRESS_MEMCOPY = ''')

func %sBytes() ([]byte, error) {
	return _%s, nil
}

'''

_TMPL_RELEASE_COMMON = '''

func %s() (*asset, error) {
	bytes, err := %sBytes()
	if err != nil {
		return nil, err
	}

	info := bindataFileInfo{
		name: %s,
		size: %d,
		md5checksum: %s,
		mode: os.FileMode(%d),
		modTime: time.Unix(%d, 0),
	}

	a := &asset{bytes: bytes, info: info}

	return a, nil
}

'''


def _escape_char(ch: str, ascii_only: bool) -> str:
    code = ord(ch)
    if ch in ('"', "\\"):
        return "\\" + ch
    if 0xDC80 <= code <= 0xDCFF:
        # A byte that is not part of valid UTF-8.
        return f"\\x{code - 0xDC00:02x}"
    if ch.isprintable() and (not ascii_only or code < 0x80):
        return ch
    if ch in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[ch]
    if code < 0x20 or code == 0x7F:
        return f"\\x{code:02x}"
    if 0xD800 <= code <= 0xDFFF:
        return "\\ufffd"
    if code < 0x10000:
        return f"\\u{code:04x}"
    return f"\\U{code:08x}"


def _quote(text: str, ascii_only: bool = False) -> str:
    """Quote ``text`` as a double-quoted Go string literal."""
    return '"' + "".join(_escape_char(ch, ascii_only) for ch in text) + '"'


def _quote_bytes_ascii(data: bytes) -> str:
    """Quote raw bytes as an ASCII-only Go string literal."""
    return _quote(data.decode("utf-8", errors="surrogateescape"), ascii_only=True)


def _sanitize_chunks(chunks: List[bytes]) -> bytes:
    if len(chunks) >= 2:
        half = len(chunks) // 2
        return (
            b"("
            + _sanitize_chunks(chunks[:half])
            + b" + "
            + _sanitize_chunks(chunks[half:])
            + b")"
        )
    chunk = chunks[0]
    if chunk == _BACKQUOTE:
        return b'"`"'
    if chunk == _BOM:
        return b'"\\xEF\\xBB\\xBF"'
    return b"`" + chunk + b"`"


def sanitize(data: bytes) -> bytes:
    """Turn valid UTF-8 into a Go expression of raw string constants.

    Backquotes and byte order marks cannot appear in a raw string, so they
    are written as interpreted strings and concatenated.
    """
    chunks: List[bytes] = []
    for i, part in enumerate(data.split(_BACKQUOTE)):
        if i > 0:
            chunks.append(_BACKQUOTE)
        for j, piece in enumerate(part.split(_BOM)):
            if j > 0:
                chunks.append(_BOM)
            if piece:
                chunks.append(piece)
    if not chunks:
        return b"``"
    return _sanitize_chunks(chunks)


def _gzip_escaped(out: TextIO, path: str) -> None:
    with open(path, "rb") as src, gzip.GzipFile(
        fileobj=StringWriter(out), mode="wb", compresslevel=6, mtime=0
    ) as gz:
        shutil.copyfileobj(src, gz)


def _compress_nomemcopy(out: TextIO, asset: Asset) -> None:
    out.write(f'var _{asset.func_name} = "')
    _gzip_escaped(out, asset.path)
    out.write(_TMPL_FUNC_STRING % (asset.func_name, asset.func_name, _quote(asset.name)))


def _compress_memcopy(out: TextIO, asset: Asset) -> None:
    out.write(f'var _{asset.func_name} = []byte("')
    _gzip_escaped(out, asset.path)
    out.write(
        _TMPL_FUNC_COMPRESS_MEMCOPY
        % (asset.func_name, asset.func_name, _quote(asset.name))
    )


def _nocompress_nomemcopy(out: TextIO, asset: Asset) -> None:
    out.write(f'var _{asset.func_name} = "')
    with open(asset.path, "rb") as src:
        shutil.copyfileobj(src, StringWriter(out))
    out.write(_TMPL_FUNC_STRING % (asset.func_name, asset.func_name, _quote(asset.name)))


def _nocompress_memcopy(out: TextIO, asset: Asset) -> None:
    out.write(f"var _{asset.func_name} = []byte(")
    with open(asset.path, "rb") as src:
        data = src.read()
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        text = None
    if text is not None and b"\x00" not in data:
        out.write(sanitize(data).decode("utf-8"))
    else:
        out.write(_quote_bytes_ascii(data))
    out.write(_TMPL_FUNC_NOCOMPRESS_MEMCOPY % (asset.func_name, asset.func_name))


def _go_file_mode(st: os.stat_result) -> int:
    mode = st.st_mode & _GO_MODE_PERM
    kind = st.st_mode
    if stat.S_ISDIR(kind):
        mode |= _GO_MODE_DIR
    elif stat.S_ISLNK(kind):
        mode |= _GO_MODE_SYMLINK
    elif stat.S_ISFIFO(kind):
        mode |= _GO_MODE_NAMED_PIPE
    elif stat.S_ISSOCK(kind):
        mode |= _GO_MODE_SOCKET
    elif stat.S_ISCHR(kind):
        mode |= _GO_MODE_DEVICE | _GO_MODE_CHAR_DEVICE
    elif stat.S_ISBLK(kind):
        mode |= _GO_MODE_DEVICE
    if kind & stat.S_ISUID:
        mode |= _GO_MODE_SETUID
    if kind & stat.S_ISGID:
        mode |= _GO_MODE_SETGID
    if kind & stat.S_ISVTX:
        mode |= _GO_MODE_STICKY
    return mode


def _write_release_common(out: TextIO, config: Config, asset: Asset) -> None:
    st = os.stat(asset.path)
    mode = _go_file_mode(st)
    mod_time = st.st_mtime_ns // 1_000_000_000
    size = st.st_size
    if config.no_metadata:
        mode = mod_time = size = 0
    if config.mode > 0:
        mode = _GO_MODE_PERM & config.mode
    if config.mod_time > 0:
        mod_time = config.mod_time

    checksum = ""
    if config.md5_checksum:
        with open(asset.path, "rb") as src:
            checksum = hashlib.md5(src.read()).hexdigest()

    out.write(
        _TMPL_RELEASE_COMMON
        % (
            asset.func_name,
            asset.func_name,
            _quote(asset.name),
            size,
            _quote(checksum),
            mode,
            mod_time,
        )
    )


def write_release_header(out: TextIO, config: Config) -> None:
    """Write the imports and shared declarations of a release build."""
    if config.no_compress:
        imports = (
            TMPL_IMPORT_NOCOMPRESS_NOMEMCOPY
            if config.no_mem_copy
            else TMPL_IMPORT_NOCOMPRESS_MEMCOPY
        )
    else:
        imports = (
            TMPL_IMPORT_COMPRESS_NOMEMCOPY
            if config.no_mem_copy
            else TMPL_IMPORT_COMPRESS_MEMCOPY
        )
    out.write(imports)
    out.write(TMPL_RELEASE_HEADER)


def write_release_asset(out: TextIO, config: Config, asset: Asset) -> None:
    """Write the functions that embed and return one asset's content."""
    if config.no_compress:
        if config.no_mem_copy:
            _nocompress_nomemcopy(out, asset)
        else:
            _nocompress_memcopy(out, asset)
    elif config.no_mem_copy:
        _compress_nomemcopy(out, asset)
    else:
        _compress_memcopy(out, asset)
    _write_release_common(out, config, asset)


def write_one_file_release(out: TextIO, config: Config, asset: Asset) -> None:
    """Write the body of the separate file holding one asset."""
    out.write(TMPL_IMPORT)
    write_release_asset(out, config, asset)


def write_release(
    out: TextIO, config: Config, keys: Iterable[str], toc: Dict[str, Asset]
) -> None:
    """Write the release code of all assets, in the order of ``keys``."""
    write_release_header(out, config)
    for key in keys:
        write_release_asset(out, config, toc[key])