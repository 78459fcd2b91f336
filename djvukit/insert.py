"""Add chunks to a single-page DjVu file."""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from .builders import insert_chunk, parse_chunk_argument
from .chunks import DjvuError
from .container import is_page
from .document import read_document, write_document

_PROG = "djvukit-insert"

_USAGE = (
    f"{_PROG} document.djvu CHUNK1=param1 CHUNK2=param2 ...\n"
    '\tfor INFO chunk there are special parameters "INFO=width,height,dpi,rotation,gamma", '
    "some parameters can be empty\n"
    "\t\trotation 1 is 0deg, 5 - 90deg, 2 - 180deg, 6 - 270deg\n"
    "\t\tgamma 22 stands for gamma value 2.2\n"
    "\tfor other chunks parameter is a path to a file containing chunk data "
    '(i.e. "Sjbz=page.sjbz")\n'
    "\tChunks FG44 and BG44 should be a IFF85 file with a group of PM44 subchunks "
    "(can be created with extract utility)\n"
    "\t\tchunk FG44 extracts only one PM44 chunk from file\n"
    '\t\tchunk BG44 can be defined like "BG44=file.bg44,n" where n is a number of chunks to copy'
)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Append the chunks given as SIGN=param arguments to a page and save it in place."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(_USAGE)
        return 0

    path = args[0]
    try:
        with open(path, "rb") as stream:
            document = read_document(stream)
    except (OSError, DjvuError):
        return 1
    if not is_page(document.root):
        return 1
    page = document.root

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

    try:
        with open(path, "wb+") as stream:
            document.render(stream)
    except (OSError, DjvuError):
        return 1
    return 0


__all__ = ["main", "write_document"]