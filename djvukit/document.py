"""DjVu documents: single pages (FORM:DJVU) and bundled ones (FORM:DJVM with DIRM)."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import BinaryIO, Optional

from .chunks import (
    ATNT_SIGN,
    DIR_SIGN,
    DOCUMENT_SIGN,
    PAGE_SIGN,
    Chunk,
    DjvuError,
    RawChunk,
    _read_exact,
)
from .container import Container, is_container, is_page, read_container

DIR_FLAG_BUNDLED = 0x80

# "AT&T" magic plus the FORM header and subsignature of the root container.
_FIRST_CHUNK_OFFSET = 16
_DIR_HEADER_SIZE = 3


class FileType(IntEnum):
    """Kind of a component file listed in a DIRM chunk."""

    SHARED = 0
    PAGE = 1
    THUMB = 2


@dataclass
class DirectoryEntry:
    """One component file of a multi-page document."""

    chunk: Optional[Chunk] = None
    id: Optional[str] = None
    name: Optional[str] = None
    title: Optional[str] = None
    type: FileType = FileType.SHARED


@dataclass
class Directory:
    """Decoded DIRM chunk: flags and the list of component files."""

    flags: int
    entries: list[DirectoryEntry] = field(default_factory=list)

    @property
    def bundled(self) -> bool:
        """True when the component files are stored inside the document."""
        return bool(self.flags & DIR_FLAG_BUNDLED)

    def _page_entries(self) -> list[DirectoryEntry]:
        return [entry for entry in self.entries if entry.type is FileType.PAGE]

    def count_pages(self) -> int:
        """Return the number of pages known to the directory."""
        return len(self._page_entries())

    def get_page(self, index: int) -> Container:
        """Return the page container at ``index`` (counting from 0)."""
        pages = self._page_entries()
        if not 0 <= index < len(pages):
            raise IndexError(f"page {index} out of range 0..{len(pages) - 1}")
        chunk = pages[index].chunk
        if chunk is None or not is_page(chunk):
            raise DjvuError(f"component of page {index} is not a page")
        return chunk  # type: ignore[return-value]

    def put_page(self, page: Chunk, changed: bool = False) -> bool:
        """Hand back a page taken with get_page.

        Bundled pages are edited in place, so nothing has to be written back.
        """
        if not isinstance(page, Chunk):
            raise TypeError(f"expected a Chunk, got {type(page).__name__}")
        return True


def is_directory(chunk: Chunk) -> bool:
    """Tell whether ``chunk`` is a DIRM chunk."""
    return isinstance(chunk, Chunk) and chunk.sign == DIR_SIGN


def parse_directory(dir_chunk: Chunk, document: Container) -> Directory:
    """Decode a DIRM chunk and bind its entries to the chunks of ``document``."""
    if not is_directory(dir_chunk) or not isinstance(dir_chunk, RawChunk):
        raise DjvuError("chunk is not a DIRM chunk")
    data = dir_chunk.data
    if not data:
        raise DjvuError("DIRM chunk is empty")
    if len(data) < _DIR_HEADER_SIZE:
        raise DjvuError("DIRM chunk is truncated")

    flags = data[0]
    nof_files = data[1] * 256 + data[2]
    directory = Directory(flags, [DirectoryEntry() for _ in range(nof_files)])

    if directory.bundled:
        table_end = _DIR_HEADER_SIZE + 4 * nof_files
        if len(data) < table_end:
            raise DjvuError("DIRM offset table is truncated")
        first_file_at: dict[int, int] = {}
        for file_index, (offset,) in enumerate(
            struct.iter_unpack(">I", data[_DIR_HEADER_SIZE:table_end])
        ):
            first_file_at.setdefault(offset, file_index)

        offset = _FIRST_CHUNK_OFFSET
        for subchunk in document:
            if offset % 2:
                offset += 1
            file_index = first_file_at.get(offset)
            if file_index is not None:
                directory.entries[file_index].chunk = subchunk
            offset += subchunk.size()

    for entry in directory.entries:
        if entry.chunk is not None and is_page(entry.chunk):
            entry.type = FileType.PAGE
    return directory


def is_document(chunk: Chunk) -> bool:
    """Tell whether ``chunk`` is a FORM:DJVM document or a FORM:DJVU page."""
    return is_container(chunk, DOCUMENT_SIGN) or is_container(chunk, PAGE_SIGN)


class Document:
    """A DjVu document rooted at a FORM:DJVM or FORM:DJVU container."""

    def __init__(self, root: Container) -> None:
        if not is_document(root):
            raise DjvuError("root chunk is neither FORM:DJVM nor FORM:DJVU")
        self.root = root
        self.directory: Optional[Directory] = None
        if is_container(root, DOCUMENT_SIGN):
            if len(root) == 0:
                raise DjvuError("multi-page document has no directory")
            dir_chunk = root[0]
            if not is_directory(dir_chunk):
                raise DjvuError("first chunk of a multi-page document is not DIRM")
            self.directory = parse_directory(dir_chunk, root)

    @property
    def is_single_page(self) -> bool:
        """True when the document is one FORM:DJVU page."""
        return is_page(self.root)

    def _require_directory(self) -> Directory:
        if self.directory is None:
            raise DjvuError("document has no directory")
        return self.directory

    def count_pages(self) -> int:
        """Return the number of pages."""
        if self.is_single_page:
            return 1
        return self._require_directory().count_pages()

    def get_page(self, index: int) -> Container:
        """Return page ``index``; a single-page document always returns its root."""
        if self.is_single_page:
            return self.root
        return self._require_directory().get_page(index)

    def put_page(self, page: Chunk, changed: bool = False) -> bool:
        """Hand back a page taken with get_page."""
        if self.is_single_page:
            if page is not self.root:
                raise DjvuError("page does not belong to this document")
            return True
        return self._require_directory().put_page(page, changed)

    def render(self, stream: BinaryIO) -> None:
        """Write the whole document, with its AT&T magic, to ``stream``."""
        write_document(self.root, stream)

    def __repr__(self) -> str:
        return f"Document({self.root!r})"


def read_document(stream: BinaryIO) -> Document:
    """Read a DjVu file from ``stream``."""
    magic = _read_exact(stream, 4)
    if magic != ATNT_SIGN:
        raise DjvuError(f"not a DjVu file: magic {magic!r}")
    return Document(read_container(stream))


def write_document(chunk: Chunk, stream: BinaryIO) -> None:
    """Write the AT&T magic followed by ``chunk`` to ``stream``."""
    stream.write(ATNT_SIGN)
    chunk.render(stream)