"""Fix INFO chunks of DjVu pages: set the resolution and repair a zero rotation."""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from .builders import _atoi
from .chunks import Chunk, DjvuError
from .container import Container
from .document import read_document
from .info import ROTATION_0, get_info, is_info, put_info

_PROG = "djvukit-fix"

_USAGE = f"{_PROG} [-page=pagenum] document.djvu [new_dpi]"


def fix_page(page: Chunk, new_dpi: int = 0) -> bool:
    """Update the INFO chunk of ``page``; return False if there is none to fix.

    A non-zero ``new_dpi`` replaces the resolution; a rotation of 0 becomes 1.
    """
    if not isinstance(page, Container) or len(page) == 0:
        return False
    info_chunk = page[0]
    if not is_info(info_chunk):
        return False
    try:
        info = get_info(info_chunk)
    except DjvuError:
        return False
    if new_dpi:
        info.dpi = new_dpi
    if info.rotation == 0:
        info.rotation = ROTATION_0
    try:
        put_info(info_chunk, info)
    except (DjvuError, ValueError):
        return False
    return True


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Fix the pages of a DjVu file in place."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(_USAGE)
        return 0

    index = 0
    index_supplied = False
    start = 0
    if args[0].startswith("-page="):
        if len(args) < 2:
            print("Please specify document name")
            return 1
        index = _atoi(args[0][len("-page="):]) - 1
        index_supplied = True
        start = 1

    new_dpi = 0
    if len(args) > start + 1:
        new_dpi = _atoi(args[start + 1]) & 0xFFFF

    path = args[start]
    try:
        with open(path, "rb") as stream:
            document = read_document(stream)
    except (OSError, DjvuError):
        return 1

    if document.is_single_page:
        fix_page(document.root, new_dpi)
    elif index_supplied:
        try:
            page = document.get_page(index)
        except (DjvuError, IndexError):
            print("Can't get specified page")
        else:
            fix_page(page, new_dpi)
            document.put_page(page, True)
    else:
        for page_index in range(document.count_pages()):
            try:
                page = document.get_page(page_index)
            except (DjvuError, IndexError):
                continue
            fix_page(page, new_dpi)
            document.put_page(page, True)

    try:
        with open(path, "wb+") as stream:
            document.render(stream)
    except (OSError, DjvuError):
        return 1
    return 0