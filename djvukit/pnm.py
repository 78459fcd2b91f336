"""Writers for the netpbm family: PGM/PPM, PAM and PBM."""

from __future__ import annotations

from typing import BinaryIO, Sequence

_TUPLE_TYPES = ("GRAYSCALE", "GRAYSCALE_ALPHA", "RGB", "RGB_ALPHA")


def _pixels(width: int, height: int, channels: int, buffer: Sequence[int]) -> bytes:
    if width <= 0 or height <= 0:
        raise ValueError("image dimensions must be positive")
    if buffer is None:
        raise ValueError("no pixel buffer given")
    size = width * height * channels
    if len(buffer) < size:
        raise ValueError(f"buffer holds {len(buffer)} bytes, {size} needed")
    return bytes(buffer[:size])


def save_ppm(
    width: int, height: int, channels: int, buffer: Sequence[int], stream: BinaryIO
) -> None:
    """Write a binary PGM (1 channel) or PPM (3 channels) image."""
    if channels not in (1, 3):
        raise ValueError(f"PPM supports 1 or 3 channels, got {channels}")
    data = _pixels(width, height, channels, buffer)
    magic = "P5" if channels == 1 else "P6"
    stream.write(f"{magic}\n{width} {height}\n255\n".encode("ascii"))
    stream.write(data)


def save_pam(
    width: int, height: int, channels: int, buffer: Sequence[int], stream: BinaryIO
) -> None:
    """Write a PAM image with 1 to 4 channels."""
    if not 1 <= channels <= 4:
        raise ValueError(f"PAM supports 1 to 4 channels, got {channels}")
    data = _pixels(width, height, channels, buffer)
    header = (
        "P7\n"
        f"WIDTH {width}\n"
        f"HEIGHT {height}\n"
        f"DEPTH {channels}\n"
        "MAXVAL 255\n"
        f"TUPLTYPE {_TUPLE_TYPES[channels - 1]}\n"
        "ENDHDR\n"
    )
    stream.write(header.encode("ascii"))
    stream.write(data)


def save_pbm(width: int, height: int, buffer: Sequence[int], stream: BinaryIO) -> None:
    """Write a binary PBM image; pixels below 128 become black."""
    data = _pixels(width, height, 1, buffer)
    packed = bytearray()
    for y in range(height):
        row = data[y * width : (y + 1) * width]
        for start in range(0, width, 8):
            byte = 0
            for bit, value in enumerate(row[start : start + 8]):
                if value < 128:
                    byte |= 1 << (7 - bit)
            packed.append(byte)
    stream.write(f"P4\n{width} {height}\n".encode("ascii"))
    stream.write(bytes(packed))