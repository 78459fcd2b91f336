"""Render one page of a DjVu file into a netpbm image."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Sequence, Union

from .builders import _atoi
from .chunks import Chunk, DjvuError
from .container import Container
from .document import Document, read_document
from .pnm import save_pbm, save_ppm
from .render import PageRenderer

FORMAT_PNM = "pnm"

_PROG = "djvukit-decode"

_USAGE = (
    f"{_PROG} -format=fmt [-page=pagenum] document.djvu output.fmt\n"
    "\tfmt is a file format. The only file format supported is pnm\n"
    "\tpagenum is a single page number. Default is 1"
)


def render_page_to_file(
    page: Container,
    document: Optional[Union[Document, Chunk]],
    fmt: str,
    path: Union[str, Path],
) -> None:
    """Render ``page`` and save it to ``path`` in format ``fmt``.

    Grey masks are written as PBM, colour images as PPM.
    """
    if fmt != FORMAT_PNM:
        raise ValueError(f"unsupported output format {fmt!r}")
    renderer = PageRenderer(page, document)
    buffer = renderer.render()
    if renderer.channels not in (1, 3):
        raise DjvuError(f"cannot save an image with {renderer.channels} channels")
    try:
        with open(path, "wb") as stream:
            if renderer.channels == 1:
                save_pbm(renderer.width, renderer.height, buffer, stream)
            else:
                save_ppm(renderer.width, renderer.height, 3, buffer, stream)
    except ValueError as exc:
        raise DjvuError(str(exc)) from exc


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Decode a page of a DjVu file into an image file."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 3:
        print(_USAGE)
        return 0

    if not args[0].startswith("-format="):
        print("Please specify output file format")
        return 1
    fmt = args[0][len("-format="):]
    if fmt != FORMAT_PNM:
        print("Error: format can be only pnm")
        return 1

    index = 0
    start = 1
    if args[1].startswith("-page="):
        index = _atoi(args[1][len("-page="):]) - 1
        start = 2

    if len(args) - start < 2:
        print("Please specify document name and output filename")
        return 1

    try:
        with open(args[start], "rb") as stream:
            document = read_document(stream)
    except (OSError, DjvuError):
        return 1

    try:
        page = document.get_page(index)
    except (DjvuError, IndexError):
        return 1

    try:
        render_page_to_file(page, document, fmt, args[start + 1])
    except (DjvuError, OSError, ValueError):
        print("Can't decode page to file")

    try:
        document.put_page(page, False)
    except DjvuError:
        print("Can't put page back")
    return 0