import io

import pytest
from PIL import Image

from djvukit.chunks import (
    BG44_SIGN,
    BGJP_SIGN,
    FGJP_SIGN,
    SMMR_SIGN,
    DjvuError,
    RawChunk,
)
from djvukit.container import Container, create_page
from djvukit.image import rotate
from djvukit.info import PageInfo, create_info
from djvukit.jpeg import decode_bgjp, decode_fgjp
from djvukit.render import PageRenderer, RenderStage


def _jpeg(width, height, color):
    stream = io.BytesIO()
    Image.new("RGB", (width, height), color).save(stream, "JPEG")
    return stream.getvalue()


def _smmr(width, height):
    return b"MMR\x00" + bytes([width >> 8, width & 0xFF, height >> 8, height & 0xFF])


def _page(width, height, rotation=1, chunks=()):
    page = create_page()
    page.append(create_info(PageInfo(width=width, height=height, dpi=300, rotation=rotation)))
    for chunk in chunks:
        page.append(chunk)
    return page


def test_background_only():
    bg = RawChunk(BGJP_SIGN, _jpeg(4, 3, (200, 10, 10)))
    renderer = PageRenderer(_page(4, 3, chunks=[bg]))
    assert (renderer.width, renderer.height, renderer.channels) == (4, 3, 3)
    assert renderer.stage is RenderStage.BGJP
    result = renderer.render()
    assert result == decode_bgjp(bg, 4, 3)
    assert renderer.stage is RenderStage.LAST


def test_background_rotated():
    bg = RawChunk(BGJP_SIGN, _jpeg(4, 2, (0, 100, 200)))
    renderer = PageRenderer(_page(4, 2, rotation=5, chunks=[bg]))
    assert (renderer.width, renderer.height) == (2, 4)
    result = renderer.render()
    assert result == rotate(4, 2, 2, 4, 3, 5, decode_bgjp(bg, 4, 2))


def test_mask_only_is_blank():
    renderer = PageRenderer(_page(5, 3, chunks=[RawChunk(SMMR_SIGN, _smmr(5, 3))]))
    assert renderer.channels == 1
    assert renderer.render() == bytearray(b"\xff" * 15)


def test_layered_page_uses_foreground_under_mask():
    bg = RawChunk(BGJP_SIGN, _jpeg(4, 3, (250, 250, 250)))
    fg = RawChunk(FGJP_SIGN, _jpeg(4, 3, (0, 0, 255)))
    page = _page(4, 3, chunks=[bg, RawChunk(SMMR_SIGN, _smmr(4, 3)), fg])
    renderer = PageRenderer(page)
    assert renderer.next() is True
    assert renderer.buffer == decode_fgjp(fg, 4, 3)
    assert renderer.next() is True


def test_background_and_mask_without_foreground():
    bg = RawChunk(BGJP_SIGN, _jpeg(4, 3, (30, 60, 90)))
    page = _page(4, 3, chunks=[bg, RawChunk(SMMR_SIGN, _smmr(4, 3))])
    result = PageRenderer(page).render()
    assert result == decode_bgjp(bg, 4, 3)


def test_mask_size_mismatch_fails():
    renderer = PageRenderer(_page(4, 3, chunks=[RawChunk(SMMR_SIGN, _smmr(4, 2))]))
    with pytest.raises(DjvuError):
        renderer.next()
    assert renderer.stage is RenderStage.ERROR
    with pytest.raises(DjvuError):
        renderer.next()


def test_unsupported_bg44_fails():
    renderer = PageRenderer(_page(4, 3, chunks=[RawChunk(BG44_SIGN, b"\x00")]))
    assert renderer.channels == 3
    with pytest.raises(DjvuError):
        renderer.render()


def test_page_without_image_layers():
    with pytest.raises(DjvuError):
        PageRenderer(_page(4, 3))


def test_page_must_start_with_info():
    page = create_page()
    page.append(RawChunk(SMMR_SIGN, _smmr(4, 3)))
    with pytest.raises(DjvuError):
        PageRenderer(page)


def test_rejects_non_page_and_bad_document():
    with pytest.raises(DjvuError):
        PageRenderer(Container(b"DJVI"))
    page = _page(4, 3, chunks=[RawChunk(SMMR_SIGN, _smmr(4, 3))])
    with pytest.raises(DjvuError):
        PageRenderer(page, Container(b"DJVI"))
    assert PageRenderer(page, page).render() == bytearray(b"\xff" * 12)