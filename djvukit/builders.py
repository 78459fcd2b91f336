"""Building chunks from command-line parameters and files, and adding them to pages."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Union

from .chunks import (
    ATNT_SIGN,
    BG44_SIGN,
    FG44_SIGN,
    INFO_SIGN,
    SJBZ_SIGN,
    SMMR_SIGN,
    DjvuError,
    RawChunk,
    SignLike,
    _normalize_sign,
)
from .container import Container, is_container, read_container
from .info import DEFAULT_GAMMA, ROTATION_0, PageInfo, create_info

INCL_SIGN = b"INCL"
PM44_SIGN = b"PM44"

PathLike = Union[str, Path]

_INFO_FIELDS = (("width", 16), ("height", 16), ("dpi", 16), ("rotation", 8), ("gamma", 8))


def _atoi(text: str) -> int:
    """Parse a leading decimal integer the lenient way; 0 when there is none."""
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def _digit(char: str) -> int:
    """Digit value of ``char``; non-digits give the remainder of their distance from '0'."""
    distance = ord(char) - ord("0")
    remainder = abs(distance) % 10
    return remainder if distance >= 0 else -remainder


def _parse_number(text: str, bits: int) -> int:
    value = 0
    for char in text:
        value = (value * 10 + _digit(char)) % (1 << bits)
    return value


def incl_chunk_from_params(params: str) -> RawChunk:
    """Create an INCL chunk naming an included file."""
    data = params.encode("utf-8").split(b"\x00", 1)[0]
    return RawChunk(INCL_SIGN, data)


def info_chunk_from_params(params: str) -> RawChunk:
    """Create an INFO chunk from "width,height,dpi,rotation,gamma".

    Any field may be empty; an empty gamma becomes 22 and an empty rotation 1.
    """
    fields = params.split("\x00", 1)[0].split(",")
    fields += [""] * (len(_INFO_FIELDS) - len(fields))
    values = {
        name: _parse_number(text, bits)
        for (name, bits), text in zip(_INFO_FIELDS, fields)
    }
    if not fields[3]:
        values["rotation"] = ROTATION_0
    if not fields[4]:
        values["gamma"] = DEFAULT_GAMMA
    return create_info(PageInfo(**values))


def _read_file(path: PathLike) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise DjvuError(f'Can\'t open file "{path}" for chunk') from exc


def raw_chunk_from_file(sign: SignLike, path: PathLike) -> RawChunk:
    """Create a chunk whose body is the whole content of ``path``."""
    return RawChunk(_normalize_sign(sign), _read_file(path))


def raw_chunk_from_file_or_document(sign: SignLike, path: PathLike) -> RawChunk:
    """Create a chunk from a plain file, or copy the first such chunk from a DjVu file."""
    sign = _normalize_sign(sign)
    try:
        with open(path, "rb") as stream:
            magic = stream.read(4)
            if len(magic) != 4:
                raise DjvuError(f'Can\'t read file "{path}" for chunk')
            if magic != ATNT_SIGN:
                return raw_chunk_from_file(sign, path)
            try:
                document = read_container(stream)
            except DjvuError as exc:
                raise DjvuError(f'Can\'t read file "{path}" for chunk') from exc
    except OSError as exc:
        raise DjvuError(f'Can\'t open file "{path}" for chunk') from exc

    found = document.get_by_sign(sign)
    if not isinstance(found, RawChunk):
        raise DjvuError(f'Can\'t find subchunk in file "{path}"')
    return RawChunk(sign, found.data)


def append_iw44_chunks(page: Container, sign: SignLike, path: PathLike, count: int = 0) -> int:
    """Append PM44 subchunks of an IFF85 FORM:PM44 file to ``page`` under ``sign``.

    ``count`` limits how many are copied; 0 copies them all. Returns the number added.
    """
    sign = _normalize_sign(sign)
    try:
        with open(path, "rb") as stream:
            pm44 = read_container(stream)
    except OSError as exc:
        raise DjvuError(f'Can\'t open file "{path}" for chunk') from exc
    except DjvuError as exc:
        raise DjvuError(f'Can\'t open file "{path}" for chunk') from exc
    if not is_container(pm44, PM44_SIGN):
        raise DjvuError(f'File "{path}" is not a IFF85 PM44 file')

    remaining = count if count > 0 else len(pm44)
    added = 0
    for subchunk in pm44:
        if remaining <= 0:
            break
        if subchunk.sign != PM44_SIGN or not isinstance(subchunk, RawChunk):
            continue
        page.append(RawChunk(sign, subchunk.data))
        remaining -= 1
        added += 1
    return added


def insert_chunk(page: Container, sign: SignLike, param: str) -> None:
    """Build the chunk described by ``sign`` and ``param`` and add it to ``page``."""
    sign = _normalize_sign(sign)
    if sign == INFO_SIGN:
        chunk = info_chunk_from_params(param)
    elif sign == INCL_SIGN:
        chunk = incl_chunk_from_params(param)
    elif sign == FG44_SIGN:
        append_iw44_chunks(page, sign, param, 1)
        return
    elif sign == BG44_SIGN:
        path, separator, number = param.rpartition(",")
        count = 0
        if separator:
            count = max(_atoi(number), 0)
        else:
            path = param
        append_iw44_chunks(page, sign, path, count)
        return
    elif sign in (SJBZ_SIGN, SMMR_SIGN):
        chunk = raw_chunk_from_file_or_document(sign, param)
    else:
        chunk = raw_chunk_from_file(sign, param)
    page.append(chunk)


def parse_chunk_argument(argument: str) -> tuple[bytes, str]:
    """Split "SIGN=param" into the four-byte signature and the parameter."""
    if len(argument) < 5 or argument[4] != "=":
        raise ValueError(f'Unknown argument: "{argument}"')
    sign = bytes(ord(char) & 0xFF for char in argument[:4])
    return sign, argument[5:]