import pytest

from djvukit.builders import append_iw44_chunks
from djvukit.chunks import FG44_SIGN, SMMR_SIGN, DjvuError, RawChunk
from djvukit.container import create_page, read_container
from djvukit.document import write_document
from djvukit.extract import extract_chunk, extract_iw44_chunks, main
from djvukit.info import PageInfo, create_info

SMMR_DATA = b"MMR\x00\x00\x08\x00\x02payload"


def _page():
    page = create_page()
    page.append(create_info(PageInfo(width=8, height=2, dpi=300)))
    page.append(RawChunk(SMMR_SIGN, SMMR_DATA))
    page.append(RawChunk(FG44_SIGN, b"one"))
    page.append(RawChunk(FG44_SIGN, b"two"))
    return page


def _write(path, page):
    with open(path, "wb") as stream:
        write_document(page, stream)


def test_extract_raw_chunk_writes_data(tmp_path):
    out = tmp_path / "mask.smmr"
    extract_chunk(_page(), b"Smmr", out)
    assert out.read_bytes() == SMMR_DATA


def test_extract_iw44_writes_pm44_form(tmp_path):
    out = tmp_path / "fg.fg44"
    extract_chunk(_page(), "FG44", out)
    with open(out, "rb") as stream:
        form = read_container(stream)
    assert form.subsign == b"PM44"
    assert [chunk.sign for chunk in form] == [b"PM44", b"PM44"]
    assert [chunk.data for chunk in form] == [b"one", b"two"]


def test_extracted_iw44_can_be_inserted_again(tmp_path):
    out = tmp_path / "fg.fg44"
    extract_iw44_chunks(_page(), FG44_SIGN, out)
    target = create_page()
    assert append_iw44_chunks(target, FG44_SIGN, out, 0) == 2
    assert [chunk.data for chunk in target] == [b"one", b"two"]


def test_extract_missing_chunk_raises(tmp_path):
    with pytest.raises(DjvuError):
        extract_chunk(_page(), b"Sjbz", tmp_path / "x")


def test_extract_missing_iw44_raises(tmp_path):
    with pytest.raises(DjvuError):
        extract_iw44_chunks(_page(), b"BG44", tmp_path / "x")


def test_extract_empty_chunk_raises(tmp_path):
    page = _page()
    page.append(RawChunk(b"ANTa", b""))
    with pytest.raises(DjvuError):
        extract_chunk(page, b"ANTa", tmp_path / "x")


def test_main_extracts_chunk(tmp_path):
    doc = tmp_path / "page.djvu"
    _write(doc, _page())
    out = tmp_path / "mask.smmr"
    assert main([str(doc), f"Smmr={out}"]) == 0
    assert out.read_bytes() == SMMR_DATA


def test_main_with_page_option(tmp_path):
    doc = tmp_path / "page.djvu"
    _write(doc, _page())
    out = tmp_path / "mask.smmr"
    assert main(["-page=1", str(doc), f"Smmr={out}"]) == 0
    assert out.read_bytes() == SMMR_DATA


def test_main_reports_unknown_argument(capsys, tmp_path):
    doc = tmp_path / "page.djvu"
    _write(doc, _page())
    assert main([str(doc), "Smmr"]) == 0
    assert 'Unknown argument: "Smmr"' in capsys.readouterr().out


def test_main_reports_missing_chunk(capsys, tmp_path):
    doc = tmp_path / "page.djvu"
    _write(doc, _page())
    assert main([str(doc), f"Sjbz={tmp_path / 'x'}"]) == 0
    assert "Can't extract chunk Sjbz" in capsys.readouterr().out


def test_main_usage(capsys):
    assert main([]) == 0
    assert "[-page=pagenum]" in capsys.readouterr().out


def test_main_page_option_needs_document(capsys):
    assert main(["-page=1"]) == 1
    assert "Please specify document name" in capsys.readouterr().out


def test_main_missing_document_fails(tmp_path):
    assert main([str(tmp_path / "none.djvu")]) == 1