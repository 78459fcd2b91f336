"""Pixel buffer helpers: rotation by INFO rotation flags and fine resizing."""

from __future__ import annotations

from typing import Sequence

from PIL import Image

ROTATE_0 = 1
ROTATE_180 = 2
ROTATE_90 = 5
ROTATE_270 = 6

_MODES = {1: "L", 2: "LA", 3: "RGB", 4: "RGBA"}


def _check_buffer(width: int, height: int, channels: int, buffer: Sequence[int]) -> int:
    size = width * height * channels
    if len(buffer) < size:
        raise ValueError(f"buffer holds {len(buffer)} bytes, {size} needed")
    return size


def rotate(
    old_width: int,
    old_height: int,
    new_width: int,
    new_height: int,
    channels: int,
    rotation: int,
    buffer: Sequence[int],
) -> bytearray:
    """Rotate an interleaved pixel buffer and return the rotated copy.

    ``rotation`` uses the INFO chunk flags: 1 none, 5 90 degrees,
    2 180 degrees, 6 270 degrees; any other value leaves pixels unchanged.
    """
    if not (old_width and old_height and new_width and new_height and channels):
        raise ValueError("image dimensions and channel count must be non-zero")
    if rotation in (ROTATE_90, ROTATE_270):
        if old_width != new_height or old_height != new_width:
            raise ValueError("rotated dimensions must swap width and height")
    elif old_width != new_width or old_height != new_height:
        raise ValueError("dimensions must not change for this rotation")

    size = _check_buffer(old_width, old_height, channels, buffer)
    data = bytes(buffer[:size])
    pixels = [data[i : i + channels] for i in range(0, size, channels)]
    rows = [pixels[y * old_width : (y + 1) * old_width] for y in range(old_height)]

    if rotation == ROTATE_180:
        out = reversed(pixels)
    elif rotation == ROTATE_90:
        out = (
            rows[y][x]
            for x in range(old_width)
            for y in reversed(range(old_height))
        )
    elif rotation == ROTATE_270:
        out = (
            rows[y][new_height - 1 - r]
            for r in range(new_height)
            for y in range(old_height)
        )
    else:
        out = iter(pixels)
    return bytearray(b"".join(out))


def resize(
    old_width: int,
    old_height: int,
    buffer: Sequence[int],
    new_width: int,
    new_height: int,
    channels: int,
) -> bytearray:
    """Resample an interleaved buffer of 1 to 4 channels to a new size."""
    mode = _MODES.get(channels)
    if mode is None:
        raise ValueError(f"unsupported channel count {channels}")
    if not (old_width and old_height and new_width and new_height):
        raise ValueError("image dimensions must be non-zero")
    size = _check_buffer(old_width, old_height, channels, buffer)
    image = Image.frombytes(mode, (old_width, old_height), bytes(buffer[:size]))
    resized = image.resize((new_width, new_height), Image.Resampling.BICUBIC)
    return bytearray(resized.tobytes())