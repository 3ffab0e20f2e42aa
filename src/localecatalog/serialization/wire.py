"""Self-describing binary encoding of plain values.

Layout of every blob:

    magic (4 bytes) | version (1 byte) | value

where value is a one-byte tag followed by its body:

    none, false, true    no body
    int                  signed 64-bit big-endian
    str                  u32 length + UTF-8 bytes
    bytes                u32 length + raw bytes
    list                 u32 count + values
    map                  u32 count + (key value) pairs

Lengths and counts are big-endian u32. Map keys must be scalars. The version
byte is checked on read; blobs from an unknown version are rejected.

Python 3.13+.
"""

from __future__ import annotations

import struct
from collections.abc import Mapping
from typing import Any

from localecatalog.constants import FORMAT_VERSION, MAX_DECODE_DEPTH
from localecatalog.core.depth_guard import DepthGuard
from localecatalog.enums import WIRE_CODE_TAGS, WIRE_TAG_CODES, WireTag

__all__ = ["WireFormatError", "dumps", "loads"]

_HEADER = struct.Struct(">4sB")
_U32 = struct.Struct(">I")
_I64 = struct.Struct(">q")

_SCALAR_KEY_TYPES = (str, int, bytes, type(None))


class WireFormatError(ValueError):
    """Malformed, truncated, or unsupported wire data."""


def dumps(value: Any, magic: bytes) -> bytes:
    """Encode value behind a magic + version header.

    Raises:
        TypeError: If value contains an unsupported type
        ValueError: If an int is outside the signed 64-bit range
    """
    out = bytearray(_HEADER.pack(magic, FORMAT_VERSION))
    _write(out, value)
    return bytes(out)


def loads(data: bytes, magic: bytes, *, max_depth: int = MAX_DECODE_DEPTH) -> Any:
    """Decode a blob written by dumps() with the same magic.

    Raises:
        WireFormatError: On wrong magic, unknown version, truncation, unknown
            tags, non-scalar map keys, excessive nesting, or trailing bytes
    """
    view = memoryview(data)
    if len(view) < _HEADER.size:
        msg = f"Blob too short for header: {len(view)} bytes"
        raise WireFormatError(msg)
    found_magic, version = _HEADER.unpack_from(view, 0)
    if found_magic != magic:
        msg = f"Bad magic {found_magic!r}, expected {magic!r}"
        raise WireFormatError(msg)
    if version != FORMAT_VERSION:
        msg = f"Unsupported format version {version} (supported: {FORMAT_VERSION})"
        raise WireFormatError(msg)

    reader = _Reader(view, _HEADER.size, DepthGuard(max_depth=max_depth))
    value = reader.read_value()
    if reader.offset != len(view):
        msg = f"Trailing data: {len(view) - reader.offset} bytes after value"
        raise WireFormatError(msg)
    return value


def _write(out: bytearray, value: Any) -> None:
    match value:
        case None:
            out.append(WIRE_TAG_CODES[WireTag.NONE])
        case bool():
            out.append(WIRE_TAG_CODES[WireTag.TRUE if value else WireTag.FALSE])
        case int():
            out.append(WIRE_TAG_CODES[WireTag.INT])
            try:
                out += _I64.pack(value)
            except struct.error as e:
                msg = f"Integer out of 64-bit range: {value}"
                raise ValueError(msg) from e
        case str():
            encoded = value.encode("utf-8")
            out.append(WIRE_TAG_CODES[WireTag.STR])
            out += _U32.pack(len(encoded))
            out += encoded
        case bytes() | bytearray() | memoryview():
            raw = bytes(value)
            out.append(WIRE_TAG_CODES[WireTag.BYTES])
            out += _U32.pack(len(raw))
            out += raw
        case list() | tuple():
            out.append(WIRE_TAG_CODES[WireTag.LIST])
            out += _U32.pack(len(value))
            for item in value:
                _write(out, item)
        case Mapping():
            out.append(WIRE_TAG_CODES[WireTag.MAP])
            out += _U32.pack(len(value))
            for key, item in value.items():
                if not isinstance(key, _SCALAR_KEY_TYPES):
                    msg = f"Map keys must be scalars, got {type(key).__name__}"
                    raise TypeError(msg)
                _write(out, key)
                _write(out, item)
        case _:
            msg = f"Cannot encode value of type {type(value).__name__}"
            raise TypeError(msg)


class _Reader:
    """Cursor over a blob body."""

    __slots__ = ("_data", "_guard", "offset")

    def __init__(self, data: memoryview, offset: int, guard: DepthGuard) -> None:
        self._data = data
        self._guard = guard
        self.offset = offset

    def _take(self, size: int) -> memoryview:
        end = self.offset + size
        if end > len(self._data):
            msg = f"Truncated data: need {size} bytes at offset {self.offset}"
            raise WireFormatError(msg)
        chunk = self._data[self.offset : end]
        self.offset = end
        return chunk

    def _u32(self) -> int:
        return _U32.unpack(self._take(_U32.size))[0]

    def _count(self) -> int:
        # Every element occupies at least one byte.
        count = self._u32()
        if count > len(self._data) - self.offset:
            msg = f"Element count {count} exceeds remaining data at offset {self.offset}"
            raise WireFormatError(msg)
        return count

    def read_value(self) -> Any:
        code = self._take(1)[0]
        tag = WIRE_CODE_TAGS.get(code)
        match tag:
            case WireTag.NONE:
                return None
            case WireTag.FALSE:
                return False
            case WireTag.TRUE:
                return True
            case WireTag.INT:
                return _I64.unpack(self._take(_I64.size))[0]
            case WireTag.STR:
                raw = self._take(self._u32())
                try:
                    return str(raw, "utf-8")
                except UnicodeDecodeError as e:
                    msg = f"Invalid UTF-8 string ending at offset {self.offset}"
                    raise WireFormatError(msg) from e
            case WireTag.BYTES:
                return bytes(self._take(self._u32()))
            case WireTag.LIST:
                count = self._count()
                with self._guard:
                    return [self.read_value() for _ in range(count)]
            case WireTag.MAP:
                count = self._count()
                result: dict[Any, Any] = {}
                with self._guard:
                    for _ in range(count):
                        key = self.read_value()
                        if not isinstance(key, _SCALAR_KEY_TYPES):
                            msg = f"Non-scalar map key at offset {self.offset}"
                            raise WireFormatError(msg)
                        result[key] = self.read_value()
                return result
            case _:
                msg = f"Unknown tag byte 0x{code:02x} at offset {self.offset - 1}"
                raise WireFormatError(msg)
