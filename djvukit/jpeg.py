"""JPEG-coded background (BGjp) and foreground (FGjp) chunks."""

from __future__ import annotations

import io

from PIL import Image, UnidentifiedImageError

from .chunks import BGJP_SIGN, FGJP_SIGN, Chunk, DjvuError
from .image import resize

_MAX_DIMENSION = 0xFFFF


def _chunk_data(chunk: Chunk) -> bytes:
    data = getattr(chunk, "data", None)
    if not data:
        raise DjvuError("image chunk holds no data")
    return bytes(data)


def _open(data: bytes) -> Image.Image:
    try:
        return Image.open(io.BytesIO(data))
    except (UnidentifiedImageError, OSError) as exc:
        raise DjvuError(f"cannot read image data: {exc}") from exc


def jpeg_info(chunk: Chunk) -> tuple[int, int]:
    """Return (width, height) of the image stored in ``chunk``."""
    width, height = _open(_chunk_data(chunk)).size
    if width > _MAX_DIMENSION or height > _MAX_DIMENSION:
        raise DjvuError(f"image {width}x{height} is too large")
    return width, height


def decode_jpeg(chunk: Chunk, width: int, height: int) -> bytearray:
    """Decode ``chunk`` into an RGB buffer of ``width`` x ``height``.

    A smaller image is scaled up to the requested size; a larger one is an error.
    """
    if width <= 0 or height <= 0:
        raise ValueError("target dimensions must be positive")
    image = _open(_chunk_data(chunk))
    try:
        rgb = image.convert("RGB")
    except OSError as exc:
        raise DjvuError(f"cannot decode image data: {exc}") from exc
    img_width, img_height = rgb.size
    pixels = rgb.tobytes()
    if (img_width, img_height) == (width, height):
        return bytearray(pixels)
    if img_width > width or img_height > height:
        raise DjvuError(
            f"image {img_width}x{img_height} is larger than {width}x{height}"
        )
    return resize(img_width, img_height, pixels, width, height, 3)


def is_bgjp(chunk: Chunk) -> bool:
    """Tell whether ``chunk`` is a BGjp chunk."""
    return isinstance(chunk, Chunk) and chunk.sign == BGJP_SIGN


def bgjp_info(chunk: Chunk) -> tuple[int, int]:
    """Return (width, height) of a BGjp chunk."""
    if not is_bgjp(chunk):
        raise DjvuError("chunk is not a BGjp chunk")
    return jpeg_info(chunk)


def decode_bgjp(chunk: Chunk, width: int, height: int) -> bytearray:
    """Decode a BGjp chunk into an RGB buffer."""
    if not is_bgjp(chunk):
        raise DjvuError("chunk is not a BGjp chunk")
    return decode_jpeg(chunk, width, height)


def is_fgjp(chunk: Chunk) -> bool:
    """Tell whether ``chunk`` is an FGjp chunk."""
    return isinstance(chunk, Chunk) and chunk.sign == FGJP_SIGN


def fgjp_info(chunk: Chunk) -> tuple[int, int]:
    """Return (width, height) of an FGjp chunk."""
    if not is_fgjp(chunk):
        raise DjvuError("chunk is not an FGjp chunk")
    return jpeg_info(chunk)


def decode_fgjp(chunk: Chunk, width: int, height: int) -> bytearray:
    """Decode a foreground JPEG chunk into an RGB buffer."""
    return decode_jpeg(chunk, width, height)