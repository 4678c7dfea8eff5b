"""Plain-text rendering of inbound message bodies."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup

_BLANK_RUN = re.compile(r"\n[ \t]*\n(?:[ \t]*\n)+")
_BLOCK_TAGS = ("p", "div", "li", "tr", "h1", "h2", "h3", "h4", "h5", "h6")


def html_to_text(html: str | None) -> str:
    """Strip tags, turning ``<br>`` and block endings into newlines."""

    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for node in soup(["script", "style", "head"]):
        node.decompose()
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for block in soup.find_all(list(_BLOCK_TAGS)):
        block.append("\n")
    text = soup.get_text()
    lines = (line.strip() for line in text.splitlines())
    return _BLANK_RUN.sub("\n\n", "\n".join(lines)).strip()


def message_text(*, html: str | None, plain: str | None) -> str:
    """Return the text to classify, preferring the HTML part when present."""

    if html and html.strip():
        return html_to_text(html)
    return (plain or "").strip()
