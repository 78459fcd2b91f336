import io

from PIL import Image

from djvukit.chunks import BGJP_SIGN, INFO_SIGN, SJBZ_SIGN, SMMR_SIGN, RawChunk
from djvukit.container import create_page
from djvukit.document import read_document
from djvukit.info import PageInfo, create_info, get_info
from djvukit.make import generate_info, main

SMMR_DATA = b"MMR\x00\x00\x08\x00\x02"


def _jpeg(width, height):
    image = Image.new("RGB", (width, height), (10, 120, 200))
    buffer = io.BytesIO()
    image.save(buffer, "JPEG")
    return buffer.getvalue()


def _read(path):
    with open(path, "rb") as stream:
        return read_document(stream)


def test_main_with_info_parameters(tmp_path):
    out = tmp_path / "page.djvu"
    assert main([str(out), "INFO=10,20,300"]) == 0
    root = _read(out).root
    assert len(root) == 1
    info = get_info(root[0])
    assert info == PageInfo(width=10, height=20, dpi=300, gamma=22, rotation=1)


def test_main_generates_info_from_smmr(tmp_path):
    mask = tmp_path / "mask.smmr"
    mask.write_bytes(SMMR_DATA)
    out = tmp_path / "page.djvu"
    assert main([str(out), f"Smmr={mask}"]) == 0
    root = _read(out).root
    assert [chunk.sign for chunk in root] == [INFO_SIGN, SMMR_SIGN]
    info = get_info(root[0])
    assert (info.width, info.height, info.dpi) == (8, 2, 300)
    assert root[1].data == SMMR_DATA


def test_generate_info_on_empty_page(capsys):
    page = create_page()
    assert generate_info(page) is None
    assert len(page) == 0
    assert "No INFO chunk generated" in capsys.readouterr().out


def test_generate_info_keeps_existing_info():
    page = create_page()
    page.append(RawChunk(SMMR_SIGN, SMMR_DATA))
    page.append(create_info(PageInfo(width=1, height=1)))
    assert generate_info(page) is None
    assert len(page) == 2
    assert page[0].sign == SMMR_SIGN


def test_generate_info_from_bgjp():
    page = create_page()
    page.append(RawChunk(BGJP_SIGN, _jpeg(4, 2)))
    chunk = generate_info(page)
    assert page[0] is chunk
    info = get_info(chunk)
    assert (info.width, info.height) == (4, 2)
    assert (info.gamma, info.rotation) == (22, 1)


def test_generate_info_prefers_smmr_over_bgjp():
    page = create_page()
    page.append(RawChunk(BGJP_SIGN, _jpeg(4, 2)))
    page.append(RawChunk(SMMR_SIGN, SMMR_DATA))
    info = get_info(generate_info(page))
    assert (info.width, info.height) == (8, 2)


def test_generate_info_reports_unsupported_sjbz(capsys):
    page = create_page()
    page.append(RawChunk(SJBZ_SIGN, b"jb2"))
    assert generate_info(page) is None
    out = capsys.readouterr().out
    assert "Found Sjbz chunk, but it is unsupported" in out
    assert "No INFO chunk generated" in out


def test_main_reports_unknown_argument(capsys, tmp_path):
    out = tmp_path / "page.djvu"
    assert main([str(out), "XY"]) == 0
    assert 'Unknown argument: "XY"' in capsys.readouterr().out
    assert len(_read(out).root) == 0


def test_main_usage(capsys):
    assert main([]) == 0
    assert "Sjbz, Smmr, BG44, BGjp" in capsys.readouterr().out


def test_main_unwritable_output_fails(tmp_path):
    assert main([str(tmp_path / "missing" / "page.djvu"), "INFO=1,1,1"]) == 1