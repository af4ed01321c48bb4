from __future__ import annotations

import re
from html.parser import HTMLParser

# GPO appends this marker after the last line of every bill.
END_MARKER = "<all>"

_MULTI_WS_RE = re.compile(r"\s{2,}")
_UNDERSCORE_RULE_RE = re.compile(r"_{2,}")
_SPLIT_WORD_RE = re.compile(r"(\w)-\s+(\w)")


def clean_text(text: str) -> str:
    """
    Normalize the body of a GPO version page into one line of plain text.

    The steps run in a fixed order: de-hyphenation relies on newlines already
    being collapsed to spaces.
    """
    text = text.replace(END_MARKER, "")

    text = text.replace("\n", " ")
    text = text.replace("\t", " ")
    text = _MULTI_WS_RE.sub(" ", text)

    text = text.replace("``", '"')
    text = text.replace("''", '"')

    text = _UNDERSCORE_RULE_RE.sub("", text)

    text = _SPLIT_WORD_RE.sub(r"\1\2", text)

    return text.strip()


class _PreTextParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self._depth = 0
        self._done = False
        self._chunks: list[str] = []
        self.found = False

    def handle_starttag(self, tag: str, attrs) -> None:  # noqa: ANN001
        if self._done or tag.lower() != "pre":
            return
        self.found = True
        self._depth += 1

    def handle_endtag(self, tag: str) -> None:
        if self._depth == 0 or tag.lower() != "pre":
            return
        self._depth -= 1
        if self._depth == 0:
            self._done = True

    def handle_data(self, data: str) -> None:
        if self._depth > 0:
            self._chunks.append(data)

    def text(self) -> str:
        return "".join(self._chunks)


def extract_pre_text(html: str) -> str | None:
    """
    Raw text of the first <pre> block of a version page, or None if it has none.
    """
    parser = _PreTextParser()
    parser.feed(html)
    parser.close()
    if not parser.found:
        return None
    return parser.text()
