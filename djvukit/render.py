"""Rendering a page into a pixel buffer, stage by stage: background, mask, foreground."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from .chunks import (
    BG44_SIGN,
    BGJP_SIGN,
    FG44_SIGN,
    FGJP_SIGN,
    SJBZ_SIGN,
    SMMR_SIGN,
    Chunk,
    DjvuError,
)
from .container import Container, is_page
from .document import Document, is_document
from .image import ROTATE_90, ROTATE_270, rotate
from .info import get_info, is_info
from .jpeg import decode_bgjp, decode_fgjp
from .smmr import decode_smmr


class RenderStage(Enum):
    """The layer a renderer will decode next."""

    ERROR = 0
    BG44 = 1
    BGJP = 2
    SJBZ = 3
    SMMR = 4
    FG44 = 5
    FGJP = 6
    LAST = 7


_BACKGROUND = (RenderStage.BG44, RenderStage.BGJP)
_MASK = (RenderStage.SJBZ, RenderStage.SMMR)
_FOREGROUND = (RenderStage.FG44, RenderStage.FGJP)


class PageRenderer:
    """Render a FORM:DJVU page into ``buffer`` (``width`` x ``height`` x ``channels``)."""

    def __init__(self, page: Container, document: Optional[Union[Document, Chunk]] = None) -> None:
        if not is_page(page):
            raise DjvuError("chunk is not a page")
        if document is not None and not isinstance(document, Document) and not is_document(document):
            raise DjvuError("document is not a DjVu document")
        if len(page) == 0 or not is_info(page[0]):
            raise DjvuError("page does not start with an INFO chunk")

        self.page = page
        self.info = get_info(page[0])
        if self.info.rotation in (ROTATE_90, ROTATE_270):
            self.width, self.height = self.info.height, self.info.width
        else:
            self.width, self.height = self.info.width, self.info.height

        self._counts = {
            sign: page.count_by_sign(sign)
            for sign in (BG44_SIGN, BGJP_SIGN, SJBZ_SIGN, SMMR_SIGN, FG44_SIGN, FGJP_SIGN)
        }
        if self._counts[BG44_SIGN]:
            self.stage = RenderStage.BG44
        elif self._counts[BGJP_SIGN]:
            self.stage = RenderStage.BGJP
        elif self._counts[SJBZ_SIGN]:
            self.stage = RenderStage.SJBZ
        elif self._counts[SMMR_SIGN]:
            self.stage = RenderStage.SMMR
        else:
            raise DjvuError("page has no background or mask to render")

        self.channels = 3 if self.stage in _BACKGROUND else 1
        self.buffer = bytearray(self.width * self.height * self.channels)
        self.mask: Optional[bytearray] = None
        self._background_read = False

    def _chunk(self, sign: bytes) -> Chunk:
        chunk = self.page.get_by_sign(sign)
        if chunk is None:
            raise DjvuError(f"page has no {sign!r} chunk")
        return chunk

    def _rotate(self, channels: int, pixels: bytearray) -> bytearray:
        return rotate(
            self.info.width,
            self.info.height,
            self.width,
            self.height,
            channels,
            self.info.rotation,
            pixels,
        )

    def _render_background(self) -> None:
        if self.stage is RenderStage.BG44 and self._counts[BGJP_SIGN]:
            self.stage = RenderStage.BGJP
        if self.stage is RenderStage.BG44:
            raise DjvuError("BG44 backgrounds are not supported")

        pixels = decode_bgjp(self._chunk(BGJP_SIGN), self.info.width, self.info.height)
        self.buffer[:] = self._rotate(3, pixels)

        has_mask = self._counts[SMMR_SIGN] or self._counts[SJBZ_SIGN]
        has_foreground = self._counts[FG44_SIGN] or self._counts[FGJP_SIGN]
        if has_mask and has_foreground:
            self.stage = RenderStage.SJBZ if self._counts[SJBZ_SIGN] else RenderStage.SMMR
            self._background_read = True
            return
        self.stage = RenderStage.LAST

    def _render_mask(self) -> None:
        if self.stage is RenderStage.SJBZ and self._counts[SMMR_SIGN]:
            self.stage = RenderStage.SMMR
        if self.stage is RenderStage.SJBZ:
            raise DjvuError("JB2 masks are not supported")

        bits = decode_smmr(self._chunk(SMMR_SIGN), self.info.width, self.info.height)
        mask = self._rotate(1, bits)
        if self._background_read:
            self.mask = mask
        else:
            self.buffer[:] = mask

        if self._counts[FG44_SIGN] or self._counts[FGJP_SIGN]:
            self.stage = RenderStage.FG44 if self._counts[FG44_SIGN] else RenderStage.FGJP
            return
        if self._background_read:
            self.mask = None
            self._background_read = False
            raise DjvuError("mask over a background needs a foreground")
        self.stage = RenderStage.LAST

    def _render_foreground(self) -> None:
        if self.mask is None or not self._background_read:
            raise DjvuError("foreground needs a decoded background and mask")
        if self.stage is RenderStage.FG44 and self._counts[BGJP_SIGN]:
            self.stage = RenderStage.FGJP
        if self.stage is RenderStage.FG44:
            raise DjvuError("FG44 foregrounds are not supported")

        pixels = decode_fgjp(self._chunk(FGJP_SIGN), self.info.width, self.info.height)
        foreground = self._rotate(3, pixels)
        for pixel, flag in enumerate(self.mask):
            if flag:
                start = pixel * 3
                self.buffer[start : start + 3] = foreground[start : start + 3]
        self.stage = RenderStage.LAST

    def next(self) -> bool:
        """Run the pending stages; return True once the image is complete."""
        if self.stage is RenderStage.ERROR:
            raise DjvuError("renderer has already failed")
        if self.stage is RenderStage.LAST:
            return True
        try:
            if self.stage in _BACKGROUND:
                self._render_background()
            if self.stage in _MASK:
                self._render_mask()
            if self.stage in _FOREGROUND:
                self._render_foreground()
        except (DjvuError, ValueError) as exc:
            self.stage = RenderStage.ERROR
            if isinstance(exc, DjvuError):
                raise
            raise DjvuError(str(exc)) from exc
        return self.stage is RenderStage.LAST

    def render(self) -> bytearray:
        """Run all stages and return the finished pixel buffer."""
        while not self.next():
            pass
        return self.buffer