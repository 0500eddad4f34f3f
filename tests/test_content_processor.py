from __future__ import annotations

from conftest import xhtml
from epub2pdf.core.content_processor import ContentProcessor
from epub2pdf.models.book import Chapter


def test_display_title_prefers_h1() -> None:
    chapter = Chapter(label="c1", content=xhtml("<h1>The Start</h1><h2>Sub</h2>", title="Doc"), order=0)
    assert ContentProcessor().display_title(chapter) == "The Start"


def test_display_title_falls_back_to_title_then_label() -> None:
    processor = ContentProcessor()
    with_title = Chapter(label="c2", content=xhtml("<p>x</p>", title="Doc Title"), order=0)
    bare = Chapter(label="c3", content="<p>no headings</p>", order=1)

    assert processor.display_title(with_title) == "Doc Title"
    assert processor.display_title(bare) == "c3"


def test_count_words_ignores_styles() -> None:
    content = "<html><head><style>p { color: red; }</style></head><body><p>one two three</p></body></html>"
    assert ContentProcessor().count_words(content) == 3
