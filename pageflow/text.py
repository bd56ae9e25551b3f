"""
Text helpers for hyphenation and paste handling.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup
from pyphen import Pyphen

from .cleaning import normalize_whitespace

WORD_RE = re.compile(r"[A-Za-z]{7,}")
_BLOCK_TAGS = ("p", "div", "li", "h1", "h2", "h3", "h4", "h5", "h6", "tr", "pre")


def hyphenate_html(html: str, dic: Pyphen) -> str:
    """Insert soft hyphens into long words inside an HTML fragment.

    Example:
        >>> dic = Pyphen(lang='en_US')
        >>> hyphenate_html('everlasting', dic)
        'ev\u00ader\u00adlast\u00ading'
    """

    soup = BeautifulSoup(html, "html.parser")
    for text_node in list(soup.strings):

        def repl(match: re.Match[str]) -> str:
            return dic.inserted(match.group(0), hyphen="\u00ad")

        text_node.replace_with(WORD_RE.sub(repl, str(text_node)))
    return soup.decode_contents()


def plain_text_from_html(html: str) -> str:
    """Flatten rich clipboard HTML into plain text, one line per block.

    Example:
        >>> plain_text_from_html("<p>One <b>two</b></p><p>three</p>")
        'One two\\nthree'
    """

    soup = BeautifulSoup(html, "html.parser")
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for block in soup.find_all(_BLOCK_TAGS):
        block.append("\n")
    lines = (normalize_whitespace(line) for line in soup.get_text().split("\n"))
    return "\n".join(line for line in lines if line)
