import pytest

from djvukit.chunks import DjvuError, RawChunk
from djvukit.info import PageInfo, create_info, get_info, is_info, put_info


def test_create_info_layout():
    chunk = create_info(PageInfo(width=256, height=1, dpi=256, gamma=22, rotation=1))
    assert chunk.sign == b"INFO"
    assert len(chunk.data) == 10
    assert chunk.data[0:2] == b"\x01\x00"
    assert chunk.data[4:6] == bytes([26, 0])
    assert chunk.data[6:8] == b"\x00\x01"


@pytest.mark.parametrize("rotation", [1, 2, 5, 6])
def test_round_trip(rotation):
    info = PageInfo(width=1234, height=567, dpi=600, gamma=22, rotation=rotation)
    assert get_info(create_info(info)) == info


def test_invalid_rotation_stored_as_none():
    info = PageInfo(width=10, height=20, dpi=300, gamma=22, rotation=3)
    assert get_info(create_info(info)).rotation == 1


def test_default_values():
    info = PageInfo()
    assert info.gamma == 22
    assert info.rotation == 1


def test_create_info_rejects_out_of_range():
    with pytest.raises(ValueError):
        create_info(PageInfo(width=70000, height=1, dpi=1))


def test_is_info():
    assert is_info(create_info(PageInfo(width=1, height=1, dpi=1)))
    assert not is_info(RawChunk(b"Smmr", b"MMR\x00"))


def test_get_info_rejects_wrong_length():
    with pytest.raises(DjvuError):
        get_info(RawChunk(b"INFO", bytes(9)))


def test_get_info_rejects_other_chunk():
    with pytest.raises(DjvuError):
        get_info(RawChunk(b"BGjp", bytes(10)))


def test_get_info_masks_rotation_flags():
    chunk = create_info(PageInfo(width=5, height=6, dpi=72, rotation=5))
    chunk.data = chunk.data[:9] + bytes([chunk.data[9] | 0xF8])
    assert get_info(chunk).rotation == 5


def test_put_info_updates_and_keeps_other_bytes():
    original = create_info(PageInfo(width=5, height=6, dpi=72, rotation=1))
    original.data = original.data[:4] + b"\x07\x09" + original.data[6:9] + bytes([0xF8 | 1])
    new_info = PageInfo(width=800, height=600, dpi=150, gamma=18, rotation=6)
    put_info(original, new_info)
    assert get_info(original) == new_info
    assert original.data[4:6] == b"\x07\x09"
    assert original.data[9] & 0xF8 == 0xF8


def test_put_info_invalid_rotation():
    chunk = create_info(PageInfo(width=5, height=6, dpi=72, rotation=2))
    put_info(chunk, PageInfo(width=5, height=6, dpi=72, rotation=0))
    assert get_info(chunk).rotation == 1


def test_put_info_rejects_wrong_chunk():
    with pytest.raises(DjvuError):
        put_info(RawChunk(b"INFO", bytes(3)), PageInfo())