"""IFF85 chunk primitives: the chunk base class, raw data chunks and signatures."""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from typing import BinaryIO, Union

VERSION = (0, 0, 1)

ATNT_SIGN = b"AT&T"
FORM_SIGN = b"FORM"
DOCUMENT_SIGN = b"DJVM"
PAGE_SIGN = b"DJVU"
DIR_SIGN = b"DIRM"
INFO_SIGN = b"INFO"
BG44_SIGN = b"BG44"
BGJP_SIGN = b"BGjp"
SJBZ_SIGN = b"Sjbz"
SMMR_SIGN = b"Smmr"
FG44_SIGN = b"FG44"
FGJP_SIGN = b"FGjp"

HEADER_SIZE = 8
MAX_CHUNK_LENGTH = 0xFFFFFFFF

SignLike = Union[bytes, bytearray, str]


class DjvuError(Exception):
    """Raised when a DjVu structure cannot be read, written or interpreted."""


def get_version() -> tuple[int, int, int]:
    """Return the library version as (major, minor, revision)."""
    return VERSION


def _normalize_sign(sign: SignLike) -> bytes:
    """Turn a four-character signature into bytes, rejecting anything else."""
    if isinstance(sign, str):
        try:
            sign = sign.encode("latin-1")
        except UnicodeEncodeError as exc:
            raise ValueError(f"signature {sign!r} is not a byte string") from exc
    sign = bytes(sign)
    if len(sign) != 4:
        raise ValueError(f"signature must be 4 bytes long, got {sign!r}")
    return sign


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    """Read exactly ``size`` bytes or raise DjvuError."""
    data = stream.read(size)
    if data is None or len(data) != size:
        raise DjvuError(f"unexpected end of data: wanted {size} bytes")
    return data


def _skip_padding(stream: BinaryIO) -> None:
    """Move to an even offset, as chunks start on two-byte boundaries."""
    if stream.tell() % 2:
        stream.seek(1, 1)


class Chunk(ABC):
    """A chunk: a four-byte signature followed by a big-endian length and a body."""

    def __init__(self, sign: SignLike) -> None:
        self.sign = _normalize_sign(sign)

    @abstractmethod
    def _body_size(self) -> int:
        """Size of the body in bytes, without the eight-byte header."""

    @abstractmethod
    def _render_body(self, stream: BinaryIO) -> None:
        """Write the body of the chunk to ``stream``."""

    def size(self) -> int:
        """Return the size of the chunk including its header."""
        return HEADER_SIZE + self._body_size()

    def render(self, stream: BinaryIO) -> None:
        """Write the chunk at the current position, padding to an even offset."""
        start = stream.tell()
        if start % 2:
            stream.write(b"\x00")
            start += 1
        stream.write(self.sign)
        stream.write(b"\x00\x00\x00\x00")
        self._render_body(stream)
        end = stream.tell()
        length = end - start - HEADER_SIZE
        if length > MAX_CHUNK_LENGTH:
            raise DjvuError(f"chunk {self.sign!r} is too large: {length} bytes")
        stream.seek(start + 4)
        stream.write(struct.pack(">I", length))
        stream.seek(end)


class RawChunk(Chunk):
    """A chunk whose body is kept as opaque bytes."""

    def __init__(self, sign: SignLike, data: bytes = b"") -> None:
        super().__init__(sign)
        self.data = bytes(data)

    def _body_size(self) -> int:
        return len(self.data)

    def _render_body(self, stream: BinaryIO) -> None:
        stream.write(self.data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RawChunk):
            return NotImplemented
        return self.sign == other.sign and self.data == other.data

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sign={self.sign!r}, {len(self.data)} bytes)"


def read_raw_chunk(stream: BinaryIO) -> RawChunk:
    """Read one raw chunk from ``stream``, skipping a padding byte if needed."""
    _skip_padding(stream)
    sign = _read_exact(stream, 4)
    (length,) = struct.unpack(">I", _read_exact(stream, 4))
    data = _read_exact(stream, length)
    return RawChunk(sign, data)