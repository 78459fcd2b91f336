"""FORM containers: chunks that hold a subsignature and an ordered list of subchunks."""

from __future__ import annotations

from typing import BinaryIO, Iterable, Iterator, Optional

from .chunks import (
    FORM_SIGN,
    HEADER_SIZE,
    PAGE_SIGN,
    Chunk,
    DjvuError,
    SignLike,
    _normalize_sign,
    _read_exact,
    _skip_padding,
    read_raw_chunk,
)

_SUBSIGN_SIZE = 4


class Container(Chunk):
    """A FORM chunk carrying a subsignature (such as DJVU or DJVM) and subchunks."""

    def __init__(self, subsign: SignLike, chunks: Optional[Iterable[Chunk]] = None) -> None:
        super().__init__(FORM_SIGN)
        self.subsign = _normalize_sign(subsign)
        self.chunks: list[Chunk] = list(chunks) if chunks is not None else []

    def _body_size(self) -> int:
        size = _SUBSIGN_SIZE
        for chunk in self.chunks:
            if size % 2:
                size += 1
            size += chunk.size()
        return size

    def _render_body(self, stream: BinaryIO) -> None:
        stream.write(self.subsign)
        for chunk in self.chunks:
            chunk.render(stream)

    def insert(self, index: int, chunk: Chunk) -> None:
        """Insert ``chunk`` before position ``index`` (0..len inclusive)."""
        if not isinstance(chunk, Chunk):
            raise TypeError(f"expected a Chunk, got {type(chunk).__name__}")
        if index < 0 or index > len(self.chunks):
            raise IndexError(f"insert position {index} out of range 0..{len(self.chunks)}")
        self.chunks.insert(index, chunk)

    def append(self, chunk: Chunk) -> None:
        """Add ``chunk`` after the last subchunk."""
        self.insert(len(self.chunks), chunk)

    def __len__(self) -> int:
        return len(self.chunks)

    def __getitem__(self, index: int) -> Chunk:
        return self.chunks[index]

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self.chunks)

    def find(self, sign: SignLike, subsign: Optional[SignLike] = None, start: int = 0) -> int:
        """Return the index of the first matching subchunk at or after ``start``.

        Returns ``len(self)`` when nothing matches.
        """
        sign = _normalize_sign(sign)
        for index in range(max(start, 0), len(self.chunks)):
            chunk = self.chunks[index]
            if chunk.sign != sign:
                continue
            if subsign is None or is_container(chunk, subsign):
                return index
        return len(self.chunks)

    def get_by_sign(
        self, sign: SignLike, subsign: Optional[SignLike] = None, index: int = 0
    ) -> Optional[Chunk]:
        """Return the ``index``-th subchunk matching the signature, or None."""
        position = 0
        for count in range(index + 1):
            position = self.find(sign, subsign, position)
            if position >= len(self.chunks):
                return None
            if count == index:
                return self.chunks[position]
            position += 1
        return None

    def count_by_sign(self, sign: SignLike, subsign: Optional[SignLike] = None) -> int:
        """Count the subchunks matching the signature."""
        count = 0
        position = self.find(sign, subsign, 0)
        while position < len(self.chunks):
            count += 1
            position = self.find(sign, subsign, position + 1)
        return count

    def __repr__(self) -> str:
        return f"Container(subsign={self.subsign!r}, {len(self.chunks)} chunks)"


def is_container(chunk: Chunk, subsign: Optional[SignLike] = None) -> bool:
    """Tell whether ``chunk`` is a FORM container, optionally with ``subsign``."""
    if not isinstance(chunk, Container) or chunk.sign != FORM_SIGN:
        return False
    if subsign is None:
        return True
    return chunk.subsign == _normalize_sign(subsign)


def read_chunk(stream: BinaryIO) -> Chunk:
    """Read the next chunk, a container or a raw chunk depending on its signature."""
    _skip_padding(stream)
    sign = _read_exact(stream, 4)
    stream.seek(-4, 1)
    if sign == FORM_SIGN:
        return read_container(stream)
    return read_raw_chunk(stream)


def read_container(stream: BinaryIO) -> Container:
    """Read a FORM container and all its subchunks from ``stream``."""
    _skip_padding(stream)
    start = stream.tell()
    sign = _read_exact(stream, 4)
    if sign != FORM_SIGN:
        raise DjvuError(f"expected a FORM chunk, found {sign!r}")
    length = int.from_bytes(_read_exact(stream, 4), "big")
    subsign = _read_exact(stream, _SUBSIGN_SIZE)
    end = start + HEADER_SIZE + length

    container = Container(subsign)
    while stream.tell() < end:
        container.append(read_chunk(stream))
    return container


def create_page() -> Container:
    """Create an empty single-page (FORM:DJVU) container."""
    return Container(PAGE_SIGN)


def is_page(chunk: Chunk) -> bool:
    """Tell whether ``chunk`` is a FORM:DJVU page."""
    return is_container(chunk, PAGE_SIGN)