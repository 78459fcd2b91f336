"""Build a single-page DjVu file from chunk files."""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from .builders import insert_chunk, parse_chunk_argument
from .chunks import BG44_SIGN, BGJP_SIGN, INFO_SIGN, SJBZ_SIGN, SMMR_SIGN, DjvuError, RawChunk
from .container import Container, create_page
from .document import write_document
from .info import DEFAULT_GAMMA, ROTATION_0, PageInfo, create_info
from .jpeg import bgjp_info
from .smmr import smmr_info

DEFAULT_DPI = 300

_PROG = "djvukit-make"

_USAGE = (
    f"{_PROG} page.djvu CHUNK1=param1 CHUNK2=param2 ...\n"
    '\tfor INFO chunk there are special parameters "INFO=width,height,dpi,rotation,gamma", '
    "some parameters can be empty\n"
    "\t\trotation 1 is 0deg, 5 - 90deg, 2 - 180deg, 6 - 270deg\n"
    "\t\tgamma 22 stands for gamma value 2.2\n"
    "\t\tIf no chunk presented it will be generated from the following chunks in following order\n"
    "\t\t\tSjbz, Smmr, BG44, BGjp\n"
    "\tfor other chunks parameter is a path to a file containing chunk data "
    '(i.e. "Sjbz=page.sjbz")\n'
    "\tChunks FG44 and BG44 should be a IFF85 file with a group of PM44 subchunks "
    "(can be created with extract utility)\n"
    "\t\tchunk FG44 extracts only one PM44 chunk from file\n"
    '\t\tchunk BG44 can be defined like "BG44=file.bg44,n" where n is a number of chunks to copy'
)


def generate_info(page: Container) -> Optional[RawChunk]:
    """Add an INFO chunk at the front of ``page`` if it has none.

    The size is taken from an Smmr mask or a BGjp background. Returns the new
    chunk, or None when the page already has INFO or no size can be found.
    """
    if page.find(INFO_SIGN) != len(page):
        return None

    size = None
    if page.find(SJBZ_SIGN) != len(page):
        print("Generate INFO chunk: Found Sjbz chunk, but it is unsupported")

    smmr = page.get_by_sign(SMMR_SIGN)
    if smmr is not None:
        try:
            size = smmr_info(smmr)
        except DjvuError:
            print("Generate INFO chunk: Can't get info from Smmr chunk")

    if size is None and page.find(BG44_SIGN) != len(page):
        print("Generate INFO chunk: Found BG44 chunk, but it is unsupported")

    if size is None:
        bgjp = page.get_by_sign(BGJP_SIGN)
        if bgjp is not None:
            try:
                size = bgjp_info(bgjp)
            except DjvuError:
                print("Generate INFO chunk: Can't get info from BGjp chunk")

    if size is None:
        print("No INFO chunk generated")
        return None

    width, height = size
    info_chunk = create_info(
        PageInfo(width=width, height=height, dpi=DEFAULT_DPI, gamma=DEFAULT_GAMMA, rotation=ROTATION_0)
    )
    page.insert(0, info_chunk)
    return info_chunk


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Create a page from SIGN=param arguments and save it."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(_USAGE)
        return 0

    page = create_page()
    for argument in args[1:]:
        try:
            sign, param = parse_chunk_argument(argument)
        except ValueError:
            print(f'Unknown argument: "{argument}"')
            continue
        try:
            insert_chunk(page, sign, param)
        except (DjvuError, OSError, ValueError) as exc:
            print(exc)
            print(f"Can't append chunk {sign.decode('latin-1')}")

    generate_info(page)

    try:
        with open(args[0], "wb+") as stream:
            write_document(page, stream)
    except (OSError, DjvuError):
        return 1
    return 0