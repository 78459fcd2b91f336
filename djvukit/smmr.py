"""Smmr chunks: G4/MMR-encoded bilevel masks."""

from __future__ import annotations

from .chunks import SMMR_SIGN, Chunk, DjvuError, RawChunk

MMR_FLAG_MIN_IS_BLACK = 0x1
MMR_FLAG_DATA_IN_STRIPES = 0x2

_HEADER_MAGIC = b"MMR"
_HEADER_SIZE = 8


def is_smmr(chunk: Chunk) -> bool:
    """Tell whether ``chunk`` is an Smmr chunk."""
    return isinstance(chunk, Chunk) and chunk.sign == SMMR_SIGN


def _parse_header(data: bytes) -> tuple[int, int, int]:
    if len(data) < _HEADER_SIZE:
        raise DjvuError("MMR header is truncated")
    if data[:3] != _HEADER_MAGIC:
        raise DjvuError("MMR header has a wrong signature")
    flags = data[3]
    if flags & 0xFC:
        raise DjvuError(f"MMR header has unknown flags {flags:#x}")
    width = data[4] * 256 + data[5]
    height = data[6] * 256 + data[7]
    return width, height, flags


def _smmr_data(chunk: Chunk) -> bytes:
    if not is_smmr(chunk) or not isinstance(chunk, RawChunk):
        raise DjvuError("chunk is not an Smmr chunk")
    if not chunk.data:
        raise DjvuError("Smmr chunk is empty")
    return chunk.data


def smmr_info(chunk: Chunk) -> tuple[int, int]:
    """Return (width, height) from the MMR header of an Smmr chunk."""
    width, height, _ = _parse_header(_smmr_data(chunk))
    return width, height


def decode_smmr(chunk: Chunk, width: int, height: int) -> bytearray:
    """Decode an Smmr chunk into a one-byte-per-pixel buffer.

    The MMR bitstream decoder is not available, so the mask comes back blank
    (all pixels 255) once the header has been checked against the size.
    """
    mmr_width, mmr_height, _ = _parse_header(_smmr_data(chunk))
    if (mmr_width, mmr_height) != (width, height):
        raise DjvuError(
            f"Smmr size {mmr_width}x{mmr_height} does not match {width}x{height}"
        )
    return bytearray(b"\xff" * (width * height))