from __future__ import annotations
import struct
from typing import BinaryIO

from ..errors import TruncatedReadError

_LE = {
    (1, False): struct.Struct("<B"), (1, True): struct.Struct("<b"),
    (2, False): struct.Struct("<H"), (2, True): struct.Struct("<h"),
    (4, False): struct.Struct("<I"), (4, True): struct.Struct("<i"),
}


class ByteCursor:
    """Position-tracking reader over a seekable binary file object."""
    __slots__ = ("fp",)

    def __init__(self, fp: BinaryIO):
        self.fp = fp

    def tell(self) -> int: return self.fp.tell()

    def seek(self, pos: int) -> None:
        if pos < 0: raise ValueError("seek out of bounds")
        self.fp.seek(pos)

    def skip(self, n: int) -> None: self.seek(self.tell() + n)

    def take(self, n: int) -> bytes:
        pos = self.tell()
        out = self.fp.read(n)
        if len(out) < n: raise TruncatedReadError(pos, n, len(out))
        return out

    def peek(self, n: int) -> bytes:
        pos = self.tell()
        out = self.fp.read(n)
        self.fp.seek(pos)
        return out

    def at_end(self) -> bool: return not self.peek(1)

    def readline(self) -> bytes:
        return self.fp.readline()

    # little-endian reads
    def unpack(self, st: struct.Struct) -> tuple:
        return st.unpack(self.take(st.size))

    def _read(self, width: int, signed: bool) -> int:
        try:
            st = _LE[(width, signed)]
        except KeyError:
            raise ValueError(f"unsupported integer width {width}") from None
        return st.unpack(self.take(width))[0]

    def read_uint(self, width: int) -> int: return self._read(width, False)
    def read_int(self, width: int) -> int: return self._read(width, True)

    def u8(self) -> int:  return self._read(1, False)
    def s8(self) -> int:  return self._read(1, True)
    def u16(self) -> int: return self._read(2, False)
    def s16(self) -> int: return self._read(2, True)
    def u32(self) -> int: return self._read(4, False)
    def s32(self) -> int: return self._read(4, True)
