"""Extract chunk data from a page of a DjVu file into separate files."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Sequence, Union

from .builders import PM44_SIGN, _atoi, parse_chunk_argument
from .chunks import BG44_SIGN, FG44_SIGN, DjvuError, RawChunk, SignLike, _normalize_sign
from .container import Container
from .document import read_document

_PROG = "djvukit-extract"

_USAGE = (
    f"{_PROG} [-page=pagenum] document.djvu CHUNK1=param1 CHUNK2=param2 ...\n"
    '\tParameter is a path to a file containing chunk data (i.e. "Sjbz=page.sjbz")\n'
    "\tFor chunks FG44 and BG44 an IFF85 file with a group of PM44 subchunks will be produced"
)

PathLike = Union[str, Path]


def extract_iw44_chunks(page: Container, sign: SignLike, path: PathLike) -> None:
    """Write all ``sign`` chunks of ``page`` as an IFF85 FORM:PM44 file."""
    sign = _normalize_sign(sign)
    count = page.count_by_sign(sign)
    if not count:
        raise DjvuError(f"page has no {sign!r} chunk")

    pm44 = Container(PM44_SIGN)
    for index in range(count):
        chunk = page.get_by_sign(sign, None, index)
        if chunk is None:
            raise DjvuError(f"cannot retrieve {sign!r} chunk {index}")
        data = getattr(chunk, "data", b"")
        if not data:
            continue
        pm44.append(RawChunk(PM44_SIGN, data))

    try:
        with open(path, "wb") as stream:
            pm44.render(stream)
    except OSError as exc:
        raise DjvuError(f'cannot write "{path}"') from exc


def extract_chunk(page: Container, sign: SignLike, path: PathLike) -> None:
    """Write the data of the first ``sign`` chunk of ``page`` to ``path``."""
    sign = _normalize_sign(sign)
    if sign in (FG44_SIGN, BG44_SIGN):
        extract_iw44_chunks(page, sign, path)
        return

    chunk = page.get_by_sign(sign)
    if chunk is None:
        raise DjvuError(f"page has no {sign!r} chunk")
    data = getattr(chunk, "data", b"")
    if not data:
        raise DjvuError(f"{sign!r} chunk holds no data")
    try:
        with open(path, "wb") as stream:
            stream.write(data)
    except OSError as exc:
        raise DjvuError(f'cannot write "{path}"') from exc


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Extract the chunks given as SIGN=path arguments from a page."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(_USAGE)
        return 0

    index = 0
    start = 0
    if args[0].startswith("-page="):
        if len(args) < 2:
            print("Please specify document name and chunks")
            return 1
        index = _atoi(args[0][len("-page="):]) - 1
        start = 1

    try:
        with open(args[start], "rb") as stream:
            document = read_document(stream)
    except (OSError, DjvuError):
        return 1

    try:
        page = document.get_page(index)
    except (DjvuError, IndexError):
        return 1

    for argument in args[start + 1:]:
        try:
            sign, path = parse_chunk_argument(argument)
        except ValueError:
            print(f'Unknown argument: "{argument}"')
            continue
        try:
            extract_chunk(page, sign, path)
        except (DjvuError, ValueError):
            print(f"Can't extract chunk {sign.decode('latin-1')}")

    try:
        document.put_page(page, False)
    except DjvuError:
        print("Can't put page back")
    return 0