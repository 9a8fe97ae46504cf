"""
Sequential little-endian byte reader.

This module provides the ByteReader cursor used by the header parser and
the sample stream. It only pulls bytes forward from a binary source and
keeps a derived position counter, so non-seekable sources work too.
"""

import struct
from typing import BinaryIO

from audio_defects.exceptions import UnexpectedEndError


_U16 = struct.Struct('<H')
_U32 = struct.Struct('<I')

SKIP_CHUNK_SIZE = 64 * 1024


class ByteReader:
    """
    Pull-based reader over a binary stream.

    Attributes:
        position: Number of bytes consumed so far
    """

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self.position = 0

    def read_up_to(self, size: int) -> bytes:
        """
        Reads at most ``size`` bytes, fewer only at end of data.

        Short reads from the underlying stream are retried until either
        ``size`` bytes are gathered or the stream reports end of data.
        """
        if size <= 0:
            return b''

        chunks = []
        remaining = size
        while remaining > 0:
            chunk = self._stream.read(remaining)
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)

        data = b''.join(chunks)
        self.position += len(data)
        return data

    def read_exact(self, size: int) -> bytes:
        """
        Reads exactly ``size`` bytes.

        Raises:
            UnexpectedEndError: If the stream ends first
        """
        data = self.read_up_to(size)
        if len(data) != size:
            raise UnexpectedEndError(
                f'Unexpected end of stream at byte {self.position}: '
                f'needed {size} bytes, got {len(data)}',
                expected=size,
                received=len(data)
            )
        return data

    def skip(self, size: int) -> None:
        """
        Discards ``size`` bytes by reading them.

        Raises:
            UnexpectedEndError: If the stream ends first
        """
        remaining = size
        while remaining > 0:
            step = min(remaining, SKIP_CHUNK_SIZE)
            data = self.read_up_to(step)
            remaining -= len(data)
            if len(data) < step:
                raise UnexpectedEndError(
                    f'Unexpected end of stream while skipping {size} bytes',
                    expected=size,
                    received=size - remaining
                )

    def read_u16(self) -> int:
        return _U16.unpack(self.read_exact(2))[0]

    def read_u32(self) -> int:
        return _U32.unpack(self.read_exact(4))[0]

    def read_tag(self) -> bytes:
        """Reads a 4-byte RIFF identifier."""
        return self.read_exact(4)
