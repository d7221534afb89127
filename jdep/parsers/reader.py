"""
Big-Endian Binary Reader
=========================

Forward-only cursor over a class file.  The class-file format stores
every multi-byte integer in big-endian order regardless of the host, so
decoding goes straight through :mod:`struct` with the ``>`` prefix and
no host byte-order test is needed.

References:
    - Oracle. (2023). The Java Virtual Machine Specification, SE 21.
      Chapter 4: The class File Format.
"""

from __future__ import annotations

import io
import struct
from typing import BinaryIO

from jdep.core.errors import TruncatedInput


_U16 = struct.Struct(">H")
_U32 = struct.Struct(">I")


class BinaryReader:
    """Sequential reader producing u1/u2/u4 values and opaque blocks.

    Usage::

        with open("Foo.class", "rb") as fh:
            reader = BinaryReader(fh, source_name="Foo.class")
            magic = reader.read_u32()

    Args:
        source:      A readable binary stream, or a ``bytes`` buffer.
        source_name: Name used in error messages.
    """

    def __init__(self, source: BinaryIO | bytes, source_name: str = "<bytes>") -> None:
        if isinstance(source, (bytes, bytearray, memoryview)):
            source = io.BytesIO(bytes(source))
        self._stream: BinaryIO = source
        self._source_name = source_name
        self._position = 0

    @property
    def source_name(self) -> str:
        return self._source_name

    @property
    def position(self) -> int:
        """Number of bytes consumed so far."""
        return self._position

    def read_block(self, length: int) -> bytes:
        """Read exactly *length* bytes.

        Raises:
            TruncatedInput: If the source ends early.
        """
        if length == 0:
            return b""
        data = self._stream.read(length)
        if len(data) < length:
            raise TruncatedInput(
                self._source_name, self._position, length, len(data)
            )
        self._position += length
        return data

    def read_u8(self) -> int:
        return self.read_block(1)[0]

    def read_u16(self) -> int:
        return _U16.unpack(self.read_block(2))[0]

    def read_u32(self) -> int:
        return _U32.unpack(self.read_block(4))[0]

    def skip_u16_array(self, count: int) -> None:
        """Consume *count* consecutive u2 values without decoding them."""
        self.read_block(2 * count)
