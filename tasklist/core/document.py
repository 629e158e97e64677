import logging

from bs4 import BeautifulSoup, FeatureNotFound, NavigableString, Tag
from bs4.element import PreformattedString

from tasklist.core.config import (
    DEFAULT_PARSER,
    FALLBACK_PARSER,
    FRAGMENT_ENCODING,
    MAX_FILTER_HTML_SIZE,
)

logger = logging.getLogger(__name__)


def parse_html(html, parser=None):
    """
    Parse an HTML string (or bytes) into a BeautifulSoup tree.

    Falls back to the stdlib `html.parser` builder when the requested
    one (e.g. lxml) is not installed.
    """
    if isinstance(html, bytes):
        size = len(html)
    else:
        size = len(html.encode(FRAGMENT_ENCODING))
    if size > MAX_FILTER_HTML_SIZE:
        raise ValueError(f"Content too large ({size/1024/1024:.2f} MB). Max {MAX_FILTER_HTML_SIZE/1024/1024} MB.")

    parser = parser or DEFAULT_PARSER
    try:
        return BeautifulSoup(html, parser)
    except FeatureNotFound:
        logger.warning(f"Parser '{parser}' not available, falling back to '{FALLBACK_PARSER}'")
        return BeautifulSoup(html, FALLBACK_PARSER)


def first_text_node(node):
    """First direct text child of `node` (comments and CDATA excluded), or None."""
    for child in node.children:
        if isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            return child
    return None


def first_child_tag(node, name):
    """First direct child element named `name`, or None."""
    return node.find(name, recursive=False)


class SoupDocument:
    """
    Thin adapter over a BeautifulSoup tree.

    Exposes the handful of tree operations the filter needs: structural
    queries, class attribute access and inner HTML read/replace.
    """

    def __init__(self, root):
        if not isinstance(root, Tag):
            raise TypeError(f"Expected a BeautifulSoup Tag, got {type(root).__name__}")
        self.root = root

    @classmethod
    def from_html(cls, html, parser=None):
        return cls(parse_html(html, parser))

    def query(self, predicate, names=("ul", "ol")):
        """Descendant elements named in `names` satisfying `predicate`, in document order."""
        return [node for node in self.root.find_all(list(names)) if predicate(node)]

    def children(self, node, name):
        """Snapshot of the direct child elements named `name`."""
        return list(node.find_all(name, recursive=False))

    def get_attribute(self, node, name, default=None):
        return node.get(name, default)

    def set_attribute(self, node, name, value):
        node[name] = value

    def add_css_class(self, node, *class_names):
        """Add class names to `node`, keeping existing ones and dropping duplicates."""
        current = self.get_attribute(node, "class") or []
        if isinstance(current, str):
            current = current.split()
        merged = []
        for name in list(current) + list(class_names):
            if name not in merged:
                merged.append(name)
        self.set_attribute(node, "class", merged)

    def inner_html(self, node):
        return node.decode_contents()

    def set_inner_html(self, node, html, encoding=FRAGMENT_ENCODING):
        """
        Replace the children of `node` with `html`.

        The markup is parsed on its own from explicitly encoded bytes so the
        new nodes come out as clean unicode regardless of what encoding the
        surrounding document was originally read with.
        """
        fragment = BeautifulSoup(html.encode(encoding), FALLBACK_PARSER, from_encoding=encoding)
        node.clear()
        for child in list(fragment.contents):
            node.append(child.extract())
        return node
