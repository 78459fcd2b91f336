# djvukit

A small toolkit for working with DjVu files at the chunk level. It reads the
IFF85 structure of single-page and bundled multi-page documents, lets you
inspect and change chunks, writes documents back out, and renders pages whose
image layers it can decode into PNM files.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## What is supported

- Reading and writing the chunk tree (`FORM` containers and raw chunks),
  including the even-offset padding the format requires.
- `INFO` chunks: width, height, resolution, gamma and rotation.
- Bundled multi-page documents (`DJVM` with a `DIRM` directory) and single
  pages (`DJVU`).
- Rendering pages with a `BGjp` background, an `FGjp` foreground and an
  `Smmr` mask, with rotation applied, to PGM/PPM/PBM.

## What is not supported

- `BG44`, `FG44` and `Sjbz` layers are not decoded. These chunks are still
  read, kept and written back unchanged, and can be moved in and out of pages
  with the commands below. A page whose only image layers are of these kinds
  cannot be rendered.
- The `Smmr` decoder checks the MMR header and size, but does not decode the
  bitstream: it yields a blank (white) mask.
- The compressed part of a `DIRM` directory (file ids, names and titles) is
  not decoded; pages are found from the bundled offset table only.
- Indirect multi-page documents, whose pages live in separate files, are not
  followed: such a document reports no pages.

## Commands

Print the chunk tree of a document, with sizes, offsets, the page count of a
`DIRM` directory and the `INFO` fields:

```
djvukit-tree filename.djvu
```

Build a new single-page document from chunk files:

```
djvukit-make page.djvu INFO=2480,3508,300,1,22 BGjp=background.jpg
```

If no `INFO` chunk is given, one is generated from an `Smmr` or `BGjp` chunk
with 300 dpi, gamma 2.2 and no rotation.

Append chunks to an existing single-page document:

```
djvukit-insert document.djvu CHUNK1=param1 CHUNK2=param2 ...
```

- `INFO=width,height,dpi,rotation,gamma`; any field may be left empty.
  Rotation 1 is 0°, 5 is 90°, 2 is 180°, 6 is 270°. Gamma 22 means 2.2.
- `INCL=name` adds an `INCL` chunk naming an included file.
- For other chunks the parameter is the path of a file holding the chunk data,
  e.g. `Sjbz=page.sjbz`. `Sjbz` and `Smmr` may also be taken from another
  DjVu file, in which case its first chunk of that kind is copied.
- `FG44` and `BG44` take an IFF85 file with a group of `PM44` chunks (as made
  by `djvukit-extract`). `FG44` copies one of them; `BG44=file.bg44,n` copies
  `n` of them, or all when `n` is omitted or 0.

Extract chunks from a page to files:

```
djvukit-extract [-page=pagenum] document.djvu Sjbz=page.sjbz BG44=page.bg44
```

For `FG44` and `BG44` an IFF85 file with a group of `PM44` chunks is written;
for other chunks the raw chunk data is written.

Render a page to a PNM file:

```
djvukit-decode -format=pnm [-page=pagenum] document.djvu output.pnm
```

Colour pages are written as PPM, mask-only pages as PBM. Page numbers start
at 1.

Repair the `INFO` chunks of a document in place: a rotation of 0 becomes 1,
and a new resolution can be set for one page or for all of them:

```
djvukit-fix [-page=pagenum] document.djvu [new_dpi]
```

## Library use

```python
from djvukit.document import read_document

with open("book.djvu", "rb") as stream:
    document = read_document(stream)

print(document.count_pages())
page = document.get_page(0)
```

Errors in reading or interpreting a file raise `djvukit.chunks.DjvuError`.

Pages can be rendered to pixel buffers with `djvukit.render.PageRenderer`
(its `render()` method returns the finished buffer), and written with
`djvukit.pnm.save_ppm`, `djvukit.pnm.save_pbm` or `djvukit.pnm.save_pam`.
The `djvukit.container`, `djvukit.info` and `djvukit.chunks` modules give
direct access to the chunk tree, and `djvukit.builders` creates chunks from
parameters and files.