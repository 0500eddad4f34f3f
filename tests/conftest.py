from __future__ import annotations

import struct
import zipfile
from pathlib import Path
from typing import Callable, Mapping

import pytest

# 1x1 transparent PNG
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)

CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="{opf_path}" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""


def build_opf(
    manifest: list[tuple[str, str, str]],
    spine: list[str],
    title: str = "Test Book",
    creator: str = "Jane Doe",
) -> str:
    items = "\n".join(
        f'    <item id="{item_id}" href="{href}" media-type="{media_type}"/>'
        for item_id, href, media_type in manifest
    )
    refs = "\n".join(f'    <itemref idref="{idref}"/>' for idref in spine)
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0" unique-identifier="uid">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:title>{title}</dc:title>
    <dc:creator>{creator}</dc:creator>
    <dc:identifier id="uid">urn:uuid:1234</dc:identifier>
  </metadata>
  <manifest>
{items}
  </manifest>
  <spine>
{refs}
  </spine>
</package>
"""


def xhtml(body: str, title: str = "Chapter") -> str:
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<html xmlns="http://www.w3.org/1999/xhtml" xmlns:xlink="http://www.w3.org/1999/xlink">
<head><title>{title}</title></head>
<body class="main">{body}</body>
</html>
"""


def write_zip(path: Path, files: Mapping[str, str | bytes]) -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("mimetype", "application/epub+zip")
        for name, content in files.items():
            zf.writestr(name, content)
    return path


def corrupt_entry(path: Path, name: str) -> None:
    """Flip one byte of a stored entry's data so its CRC no longer matches."""
    with zipfile.ZipFile(path) as zf:
        info = zf.getinfo(name)
    raw = bytearray(path.read_bytes())
    name_len, extra_len = struct.unpack_from("<HH", raw, info.header_offset + 26)
    data_start = info.header_offset + 30 + name_len + extra_len
    raw[data_start + info.compress_size // 2] ^= 0xFF
    path.write_bytes(bytes(raw))


@pytest.fixture
def make_epub(tmp_path: Path) -> Callable[..., Path]:
    """Build an EPUB whose package document lives at ``opf_path``."""

    def _make(
        files: Mapping[str, str | bytes],
        manifest: list[tuple[str, str, str]],
        spine: list[str],
        opf_path: str = "OEBPS/content.opf",
        name: str = "book.epub",
        **opf_kwargs: str,
    ) -> Path:
        entries: dict[str, str | bytes] = {
            "META-INF/container.xml": CONTAINER_XML.format(opf_path=opf_path),
            opf_path: build_opf(manifest, spine, **opf_kwargs),
        }
        entries.update(files)
        return write_zip(tmp_path / name, entries)

    return _make


@pytest.fixture
def sample_epub(make_epub: Callable[..., Path]) -> Path:
    """Two chapters, one style sheet, images in a sibling directory."""
    return make_epub(
        files={
            "OEBPS/Text/ch1.xhtml": xhtml(
                '<h1>Opening</h1><p>One two three.</p><img src="../Images/pic.png" alt="x"/>',
                title="First",
            ),
            "OEBPS/Text/ch2.xhtml": xhtml("<h2>Second</h2><p>Four five.</p>"),
            "OEBPS/Styles/book.css": "body { background: url('../Images/pic.png'); }",
            "OEBPS/Images/pic.png": PNG_BYTES,
        },
        manifest=[
            ("ch1", "Text/ch1.xhtml", "application/xhtml+xml"),
            ("ch2", "Text/ch2.xhtml", "application/xhtml+xml"),
            ("css", "Styles/book.css", "text/css"),
            ("pic", "Images/pic.png", "image/png"),
        ],
        spine=["ch1", "ch2"],
    )
