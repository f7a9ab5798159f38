"""Writing raw bytes as escaped characters of a string literal."""

from __future__ import annotations

from typing import TextIO, Union

_BytesLike = Union[bytes, bytearray, memoryview]


class StringWriter:
    """File-like sink writing each byte as a '\\xNN' escape to a text stream."""

    def __init__(self, out: TextIO) -> None:
        self.out = out

    def write(self, data: _BytesLike) -> int:
        """Write the escaped form of ``data``; return the number of bytes taken."""
        raw = bytes(data)
        if raw:
            self.out.write("".join(f"\\x{b:02x}" for b in raw))
        return len(raw)

    def flush(self) -> None:
        """Flush the underlying stream if it can be flushed."""
        flush = getattr(self.out, "flush", None)
        if flush is not None:
            flush()