"""INFO chunks: page size, resolution, gamma and rotation."""

from __future__ import annotations

from dataclasses import dataclass

from .chunks import INFO_SIGN, Chunk, DjvuError, RawChunk

INFO_LENGTH = 10
INFO_MINOR_VERSION = 26
INFO_MAJOR_VERSION = 0

ROTATION_0 = 1
ROTATION_90 = 5
ROTATION_180 = 2
ROTATION_270 = 6
VALID_ROTATIONS = (ROTATION_0, ROTATION_180, ROTATION_90, ROTATION_270)

DEFAULT_GAMMA = 22


@dataclass
class PageInfo:
    """Page information; gamma is tenths (22 means 2.2), rotation is 1, 5, 2 or 6."""

    width: int = 0
    height: int = 0
    dpi: int = 0
    gamma: int = DEFAULT_GAMMA
    rotation: int = ROTATION_0


def _check_range(name: str, value: int, limit: int) -> None:
    if not 0 <= value <= limit:
        raise ValueError(f"{name} must be in 0..{limit}, got {value}")


def _validate(info: PageInfo) -> None:
    _check_range("width", info.width, 0xFFFF)
    _check_range("height", info.height, 0xFFFF)
    _check_range("dpi", info.dpi, 0xFFFF)
    _check_range("gamma", info.gamma, 0xFF)


def _rotation_flag(rotation: int) -> int:
    return rotation if rotation in VALID_ROTATIONS else ROTATION_0


def create_info(info: PageInfo) -> RawChunk:
    """Build an INFO chunk; an unknown rotation is stored as 1 (no rotation)."""
    _validate(info)
    data = bytes(
        [
            info.width // 256,
            info.width % 256,
            info.height // 256,
            info.height % 256,
            INFO_MINOR_VERSION,
            INFO_MAJOR_VERSION,
            info.dpi % 256,
            info.dpi // 256,
            info.gamma,
            _rotation_flag(info.rotation),
        ]
    )
    return RawChunk(INFO_SIGN, data)


def is_info(chunk: Chunk) -> bool:
    """Tell whether ``chunk`` is an INFO chunk."""
    return isinstance(chunk, Chunk) and chunk.sign == INFO_SIGN


def _info_data(chunk: Chunk) -> bytes:
    if not is_info(chunk) or not isinstance(chunk, RawChunk):
        raise DjvuError("chunk is not an INFO chunk")
    if len(chunk.data) != INFO_LENGTH:
        raise DjvuError(f"INFO chunk must be {INFO_LENGTH} bytes, got {len(chunk.data)}")
    return chunk.data


def get_info(chunk: Chunk) -> PageInfo:
    """Decode an INFO chunk."""
    data = _info_data(chunk)
    return PageInfo(
        width=data[0] * 256 + data[1],
        height=data[2] * 256 + data[3],
        dpi=data[6] + data[7] * 256,
        gamma=data[8],
        rotation=data[9] & 7,
    )


def put_info(chunk: Chunk, info: PageInfo) -> None:
    """Store ``info`` into an existing INFO chunk, keeping its version and flag bits."""
    data = bytearray(_info_data(chunk))
    _validate(info)
    data[0] = info.width // 256
    data[1] = info.width % 256
    data[2] = info.height // 256
    data[3] = info.height % 256
    data[6] = info.dpi % 256
    data[7] = info.dpi // 256
    data[8] = info.gamma
    data[9] = (data[9] & 0xF8) + _rotation_flag(info.rotation)
    assert isinstance(chunk, RawChunk)
    chunk.data = bytes(data)