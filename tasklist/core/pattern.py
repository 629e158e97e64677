import re

from tasklist.core.config import COMPLETE, INCOMPLETE
from tasklist.core.item import ItemState

# Matches a task marker at the start of the text, after an optional
# bullet (`-`, `+`, `*`) or ordinal (`1.`) prefix. Whitespace is ASCII only,
# so a non-breaking space after the marker does not count.
ITEM_PATTERN = re.compile(
    r"""
    ^
    (?:\s*[-+*]|(?:\d+\.))?     # optional list prefix
    \s*                         # optional whitespace prefix
    (?P<checkbox>
        {complete}|
        {incomplete}
    )
    (?=\s)                      # followed by whitespace
    """.format(complete=re.escape(COMPLETE), incomplete=re.escape(INCOMPLETE)),
    re.VERBOSE | re.ASCII,
)


class ItemMatch:
    """Result of matching a marker: the token, where it sits, and the text it came from."""

    __slots__ = ("token", "start", "end", "text")

    def __init__(self, token, start, end, text):
        self.token = token
        self.start = start
        self.end = end
        self.text = text

    @property
    def state(self):
        return ItemState.from_token(self.token)

    @property
    def complete(self):
        return self.state is ItemState.COMPLETE

    def substitute(self, replacement, text=None):
        """
        Replace only the marker span with `replacement`.

        `text` defaults to the matched string; pass the untrimmed original
        when the match was made against a trimmed copy (offsets are the same,
        trimming only removes trailing characters).
        """
        source = self.text if text is None else text
        return source[:self.start] + replacement + source[self.end:]

    def __repr__(self):
        return f"ItemMatch({self.token!r}, {self.start}, {self.end})"


def match_item(text):
    """
    Recognize a task list marker at the start of `text`.

    Returns an ItemMatch, or None when the text is not a task list item.
    """
    if not text:
        return None
    match = ITEM_PATTERN.match(text)
    if match is None:
        return None
    return ItemMatch(match.group("checkbox"), match.start("checkbox"), match.end("checkbox"), text)


def starts_with_marker(text):
    """Cheap structural check used by the list selector."""
    return bool(text) and (text.startswith(INCOMPLETE) or text.startswith(COMPLETE))
