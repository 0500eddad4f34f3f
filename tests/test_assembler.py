from __future__ import annotations

from epub2pdf.core.assembler import BASE_CSS, assemble, escape_text, extract_body_content
from epub2pdf.models.book import Book, Chapter


def test_escape_text_order_and_single_pass() -> None:
    assert escape_text('Tom & "Jerry" <3>') == "Tom &amp; &quot;Jerry&quot; &lt;3&gt;"
    assert escape_text("&amp;") == "&amp;amp;"
    assert escape_text("it's") == "it's"


def test_extract_body_content() -> None:
    doc = '<html><head><title>t</title></head><BODY class="x">\n<p>inner</p>\n</Body></html>'
    assert extract_body_content(doc) == "\n<p>inner</p>\n"


def test_extract_body_uses_last_closing_tag() -> None:
    doc = "<body><p>a</p></body><p>b</p></body>"
    assert extract_body_content(doc) == "<p>a</p></body><p>b</p>"


def test_extract_body_without_body_is_verbatim() -> None:
    fragment = "<p>just a fragment</p>"
    assert extract_body_content(fragment) == fragment
    assert extract_body_content("<body") == "<body"


def test_extract_body_without_closing_tag_runs_to_end() -> None:
    assert extract_body_content("<body><p>x</p>") == "<p>x</p>"


def test_assemble_layout() -> None:
    book = Book(
        title="A <Great> Book",
        author="Smith & Jones",
        chapters=[
            Chapter(label="c1", content="<html><body><p>One</p></body></html>", order=0),
            Chapter(label="c2", content="<p>Two</p>", order=1),
        ],
        style_sheets=["p { color: red; }", ".x { margin: 0; }"],
    )

    html = assemble(book)

    assert html.startswith("<!DOCTYPE html>\n<html>\n<head>\n")
    assert '<meta charset="UTF-8">' in html
    assert "<title>A &lt;Great&gt; Book</title>" in html
    assert BASE_CSS + "p { color: red; }\n.x { margin: 0; }\n</style>" in html
    assert "<h1>A &lt;Great&gt; Book</h1>" in html
    assert '<p class="author">Smith &amp; Jones</p>' in html
    assert html.index("<p>One</p>") < html.index("<p>Two</p>")
    assert '<div class="chapter">\n<p>One</p>\n</div>\n' in html
    assert html.endswith("</body>\n</html>")


def test_assemble_omits_empty_author() -> None:
    html = assemble(Book(title="T"))
    assert 'class="author"' not in html
    assert html == assemble(Book(title="T"))
