"""Assemble a parsed book into one self-contained HTML document."""

from epub2pdf.models.book import Book

BASE_CSS = """
body {
    font-family: Georgia, 'Times New Roman', serif;
    line-height: 1.6;
    max-width: 800px;
    margin: 0 auto;
    padding: 40px 20px;
    color: #333;
}
h1, h2, h3, h4, h5, h6 {
    margin-top: 1.5em;
    margin-bottom: 0.5em;
}
p {
    margin: 0.8em 0;
    text-align: justify;
}
img {
    max-width: 100%;
    height: auto;
}
.chapter {
    page-break-before: always;
}
.chapter:first-child {
    page-break-before: avoid;
}
.title-page {
    text-align: center;
    padding: 100px 0;
}
.title-page h1 {
    font-size: 2.5em;
    margin-bottom: 0.5em;
}
.title-page .author {
    font-size: 1.3em;
    color: #666;
}
"""

_ESCAPES = (("&", "&amp;"), ("<", "&lt;"), (">", "&gt;"), ('"', "&quot;"))


def escape_text(value: str) -> str:
    """Escape &, <, > and \" for use in element text."""
    for char, entity in _ESCAPES:
        value = value.replace(char, entity)
    return value


def extract_body_content(markup: str) -> str:
    """Return what sits inside <body>...</body>, or the markup unchanged."""
    lowered = markup.lower()
    body_start = lowered.find("<body")
    if body_start == -1:
        return markup

    tag_end = markup.find(">", body_start)
    if tag_end == -1:
        return markup

    body_end = lowered.rfind("</body>")
    if body_end == -1 or body_end <= tag_end:
        body_end = len(markup)

    return markup[tag_end + 1 : body_end]


def assemble(book: Book) -> str:
    """Render the book as a single HTML string."""
    parts = [
        "<!DOCTYPE html>\n<html>\n<head>\n",
        '<meta charset="UTF-8">\n',
        f"<title>{escape_text(book.title)}</title>\n",
        "<style>\n",
        BASE_CSS,
    ]
    for css in book.style_sheets:
        parts.append(css)
        parts.append("\n")
    parts.append("</style>\n")
    parts.append("</head>\n<body>\n")

    # Title page
    parts.append('<div class="title-page">\n')
    parts.append(f"<h1>{escape_text(book.title)}</h1>\n")
    if book.author:
        parts.append(f'<p class="author">{escape_text(book.author)}</p>\n')
    parts.append("</div>\n")

    for chapter in book.chapters:
        parts.append('<div class="chapter">\n')
        parts.append(extract_body_content(chapter.content))
        parts.append("\n</div>\n")

    parts.append("</body>\n</html>")
    return "".join(parts)
