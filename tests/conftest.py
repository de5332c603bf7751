import io
import struct
import zipfile
import zlib
from typing import List, Sequence

import pytest
from docx import Document
from PIL import Image


def make_docx(paragraphs: Sequence[str] = (), table: Sequence[Sequence[str]] = ()) -> bytes:
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)
    if table:
        rows, cols = len(table), max(len(r) for r in table)
        tbl = doc.add_table(rows=rows, cols=cols)
        for r, row in enumerate(table):
            for c, text in enumerate(row):
                tbl.cell(r, c).text = text
    out = io.BytesIO()
    doc.save(out)
    return out.getvalue()


def make_jpeg(size=(32, 32), color="white") -> bytes:
    out = io.BytesIO()
    Image.new("RGB", size, color).save(out, "JPEG")
    return out.getvalue()


def make_png(size=(16, 16), color="white") -> bytes:
    out = io.BytesIO()
    Image.new("RGB", size, color).save(out, "PNG")
    return out.getvalue()


def make_oversized_png(width: int = 20000, height: int = 20000) -> bytes:
    """A tiny PNG whose header claims more pixels than Pillow agrees to open."""
    def chunk(kind: bytes, body: bytes) -> bytes:
        return struct.pack(">I", len(body)) + kind + body + struct.pack(">I", zlib.crc32(kind + body) & 0xFFFFFFFF)

    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", ihdr)
        + chunk(b"IDAT", zlib.compress(b""))
        + chunk(b"IEND", b"")
    )


def replace_docx_part(data: bytes, name: str, content: bytes) -> bytes:
    """Copy a DOCX package, swapping the bytes of one part."""
    out = io.BytesIO()
    with zipfile.ZipFile(io.BytesIO(data)) as src, zipfile.ZipFile(out, "w", zipfile.ZIP_DEFLATED) as dst:
        for item in src.infolist():
            dst.writestr(item.filename, content if item.filename == name else src.read(item.filename))
    return out.getvalue()


def _stream(entries: bytes, data: bytes) -> bytes:
    return b"<< " + entries + b" /Length %d >>\nstream\n" % len(data) + data + b"\nendstream"


def make_pdf(pages: Sequence[Sequence[str]], images: Sequence[bytes] = (), forms: int = 0) -> bytes:
    """Assemble a small PDF by hand.

    Each page is a list of text lines drawn in Helvetica. Images and
    empty form XObjects are placed on the first page.
    """
    objects: List[bytes] = [b"", b"", b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>"]

    def add(body: bytes) -> int:
        objects.append(body)
        return len(objects)

    xobjects = []
    for i, image in enumerate(images):
        # JPEG data is stored DCT-encoded, anything else unfiltered
        filt = b" /Filter /DCTDecode" if image[:2] == b"\xff\xd8" else b""
        num = add(_stream(
            b"/Type /XObject /Subtype /Image /Width 32 /Height 32 /ColorSpace /DeviceRGB "
            b"/BitsPerComponent 8" + filt,
            image,
        ))
        xobjects.append((b"/Im%d" % (i + 1), num))
    for i in range(forms):
        num = add(_stream(b"/Type /XObject /Subtype /Form /BBox [0 0 10 10] /Resources << >>", b""))
        xobjects.append((b"/Fm%d" % (i + 1), num))

    kids = []
    for index, lines in enumerate(pages):
        ops = [b"BT /F1 12 Tf 14 TL 72 720 Td"]
        for line in lines:
            ops.append(b"(" + line.encode("latin-1") + b") Tj T*")
        ops.append(b"ET")
        resources = b"/Font << /F1 3 0 R >>"
        if index == 0 and xobjects:
            for name, _ in xobjects:
                ops.append(b"q 32 0 0 32 72 72 cm " + name + b" Do Q")
            resources += b" /XObject << " + b" ".join(b"%s %d 0 R" % (n, num) for n, num in xobjects) + b" >>"
        content = add(_stream(b"", b"\n".join(ops)))
        kids.append(add(
            b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Resources << "
            + resources + b" >> /Contents %d 0 R >>" % content
        ))

    objects[0] = b"<< /Type /Catalog /Pages 2 0 R >>"
    objects[1] = b"<< /Type /Pages /Kids [" + b" ".join(b"%d 0 R" % k for k in kids) + b"] /Count %d >>" % len(kids)

    out = bytearray(b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n")
    offsets = []
    for num, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % num + body + b"\nendobj\n"
    xref_at = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for off in offsets:
        out += b"%010d 00000 n \n" % off
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref_at)
    return bytes(out)


class FakeRecognizer:
    """Records every image handed to OCR and returns canned text."""

    def __init__(self, text: str = "", error: Exception = None) -> None:
        self.text = text
        self.error = error
        self.calls: List[bytes] = []

    def __call__(self, image_bytes: bytes) -> str:
        self.calls.append(image_bytes)
        if self.error is not None:
            raise self.error
        return self.text


LONG_LINES = [f"Line {i:02d}: the quick brown fox jumps over the lazy dog" for i in range(8)]


@pytest.fixture
def long_text_pdf() -> bytes:
    return make_pdf([LONG_LINES[:4], LONG_LINES[4:]])


@pytest.fixture
def short_text_pdf() -> bytes:
    return make_pdf([["Scanned page"]])
