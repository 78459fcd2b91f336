"""Print the chunk tree of a DjVu file."""

from __future__ import annotations

import sys
from typing import Optional, Sequence, Union

from .chunks import Chunk, DjvuError
from .container import Container, is_container
from .document import Directory, Document, is_directory, read_document
from .info import get_info, is_info

_PROG = "djvukit-tree"
_ROOT_OFFSET = 4
_CONTAINER_HEADER = 12


def _sign_text(sign: bytes) -> str:
    return sign.decode("latin-1")


def _lines(
    chunk: Chunk, level: int, offset: int, directory: Optional[Directory]
) -> list[str]:
    prefix = "-" * level
    if is_container(chunk):
        assert isinstance(chunk, Container)
        lines = [
            f"{prefix}Chunk {_sign_text(chunk.sign)}:{_sign_text(chunk.subsign)} "
            f"(size {chunk.size()} offset {offset})"
        ]
        offset += _CONTAINER_HEADER
        for subchunk in chunk:
            if offset % 2:
                offset += 1
            lines.extend(_lines(subchunk, level + 1, offset, directory))
            offset += subchunk.size()
        return lines

    lines = [f"{prefix}Chunk {_sign_text(chunk.sign)} (size {chunk.size()} offset {offset})"]
    if is_directory(chunk):
        pages = directory.count_pages() if directory is not None else 0
        lines.append(f"\t# of pages = {pages}")
    elif is_info(chunk):
        try:
            info = get_info(chunk)
        except DjvuError:
            return lines
        lines.extend(
            [
                f"\twidth = {info.width}",
                f"\theight = {info.height}",
                f"\tdpi = {info.dpi}",
                f"\tgamma = {info.gamma // 10}.{info.gamma % 10}",
                f"\trotation {info.rotation}",
            ]
        )
    return lines


def format_tree(chunk: Union[Document, Chunk]) -> str:
    """Describe ``chunk`` and its subchunks, one per line, with sizes and file offsets."""
    directory = None
    if isinstance(chunk, Document):
        directory = chunk.directory
        chunk = chunk.root
    return "\n".join(_lines(chunk, 0, _ROOT_OFFSET, directory)) + "\n"


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Print the chunk tree of the file named in ``argv``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(f"{_PROG} filename.djvu\n\tprints filename.djvu content with a tree")
        return 0

    filename = args[0]
    print(f'Opening "{filename}"')
    try:
        stream = open(filename, "rb")
    except OSError:
        print("Can't open file")
        return 1
    with stream:
        try:
            document = read_document(stream)
        except DjvuError:
            print("Can't open document")
            return 1

    sys.stdout.write(format_tree(document))
    return 0