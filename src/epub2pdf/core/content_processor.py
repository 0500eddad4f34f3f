"""Summaries of chapter markup for display."""

import warnings

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning

from epub2pdf.models.book import Chapter

# Chapters are usually XHTML
warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)


class ContentProcessor:
    """Extract display titles and word counts from chapter markup."""

    TITLE_TAGS = ("h1", "h2", "title")

    def display_title(self, chapter: Chapter) -> str:
        """First heading or <title> text, falling back to the chapter label."""
        return self.extract_title(chapter.content) or chapter.label

    def extract_title(self, content: str) -> str | None:
        soup = BeautifulSoup(content, "lxml")
        for tag in self.TITLE_TAGS:
            element = soup.find(tag)
            if element:
                text = element.get_text(" ", strip=True)
                if text:
                    return text
        return None

    def count_words(self, content: str) -> int:
        soup = BeautifulSoup(content, "lxml")
        for tag in soup(["script", "style"]):
            tag.decompose()
        text = soup.get_text(separator=" ", strip=True)
        return len(text.split())
