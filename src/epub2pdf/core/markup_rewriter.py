"""Rewrite asset references in markup and CSS text to inline data URIs.

Three reference grammars are recognized. Each match is split into a prefix,
the reference itself and a suffix; only the reference is ever replaced.
"""

import re
from typing import Callable

from epub2pdf.core.asset_inliner import AssetInliner, is_image_reference

# <img ... src="ref"> / <img ... src='ref'>
IMG_SRC = re.compile(
    r"""(?P<prefix><img\b[^>]*?\ssrc\s*=\s*)"""
    r"""(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)')""",
    re.IGNORECASE,
)

# xlink:href="ref" on SVG <image> and friends
XLINK_HREF = re.compile(
    r"""(?P<prefix>\bxlink:href\s*=\s*)"""
    r"""(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)')""",
    re.IGNORECASE,
)

# url(ref) / url("ref") / url('ref')
CSS_URL = re.compile(
    r"""(?P<prefix>\burl\s*\(\s*)(?P<quote>["']?)(?P<ref>[^"')]+?)(?P<suffix>(?P=quote)\s*\))""",
    re.IGNORECASE,
)


def _attribute_replacer(
    inline: Callable[[str], str | None], images_only: bool
) -> Callable[[re.Match], str]:
    def replace(match: re.Match) -> str:
        if match.group("dq") is not None:
            quote, reference = '"', match.group("dq")
        else:
            quote, reference = "'", match.group("sq")

        if not reference or (images_only and not is_image_reference(reference)):
            return match.group(0)

        payload = inline(reference)
        if payload is None:
            return match.group(0)
        return f"{match.group('prefix')}{quote}{payload}{quote}"

    return replace


def _url_replacer(inline: Callable[[str], str | None]) -> Callable[[re.Match], str]:
    def replace(match: re.Match) -> str:
        reference = match.group("ref")
        if not is_image_reference(reference):
            return match.group(0)

        payload = inline(reference)
        if payload is None:
            return match.group(0)
        return f"{match.group('prefix')}{match.group('quote')}{payload}{match.group('suffix')}"

    return replace


class MarkupRewriter:
    """Apply the three reference grammars to one file's text."""

    def __init__(self, inliner: AssetInliner):
        self.inliner = inliner

    def rewrite(self, text: str, base_directory: str) -> str:
        def inline(reference: str) -> str | None:
            return self.inliner.inline(reference, base_directory)

        text = IMG_SRC.sub(_attribute_replacer(inline, images_only=False), text)
        text = XLINK_HREF.sub(_attribute_replacer(inline, images_only=True), text)
        text = CSS_URL.sub(_url_replacer(inline), text)
        return text


def rewrite(text: str, base_directory: str, inliner: AssetInliner) -> str:
    return MarkupRewriter(inliner).rewrite(text, base_directory)
