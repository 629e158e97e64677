import logging

from tasklist.core.config import (
    CHECKBOX_CLASS,
    FRAGMENT_ENCODING,
    TASK_LIST_CLASS,
    TASK_LIST_ITEM_CLASS,
)
from tasklist.core.document import first_child_tag
from tasklist.core.item import TaskItem
from tasklist.core.pattern import match_item
from tasklist.core.selector import select_task_lists

logger = logging.getLogger(__name__)


def render_item_checkbox(item):
    """Disabled checkbox input for `item`; `checked` is left off entirely when incomplete."""
    checked = ' checked="checked"' if item.complete else ''
    return f'<input type="checkbox" class="{CHECKBOX_CLASS}"{checked} disabled="disabled" />'


def render_task_list_item(match, source, item):
    """`source` with only the marker span swapped for the checkbox markup."""
    return match.substitute(render_item_checkbox(item), source)


class ItemOrder:
    """Document positions of every list item, taken before any rewriting."""

    def __init__(self, document):
        # Keep the nodes referenced so their ids stay valid
        self._nodes = document.root.find_all("li")
        self._index = {id(li): i for i, li in enumerate(self._nodes)}

    def position(self, li):
        # Items created by an earlier rewrite sort after everything known
        return self._index.get(id(li), len(self._index))


def rewrite_list(document, node):
    """
    Mark up one ordered/unordered list in place.

    Returns `(li, TaskItem)` pairs for the list's matching items in
    document order. Items that don't match are left as they are.
    """
    document.add_css_class(node, TASK_LIST_CLASS)

    pairs = []
    # Reverse so replacing a later item's content never touches an earlier one
    for li in reversed(document.children(node, "li")):
        para = first_child_tag(li, "p")
        target = para if para is not None else li
        inner = document.inner_html(target)

        match = match_item(inner.rstrip())
        if match is None:
            continue

        item = TaskItem(match.token, inner)
        pairs.insert(0, (li, item))

        document.add_css_class(li, TASK_LIST_ITEM_CLASS)
        document.set_inner_html(target, render_task_list_item(match, inner, item), encoding=FRAGMENT_ENCODING)

    logger.debug(f"Task list <{node.name}>: {len(pairs)} item(s) marked up")
    return pairs


def filter_task_lists(document):
    """
    Find every task list in `document` and mark it up.

    Returns `(document, items)` where `items` holds every recognized
    TaskItem in document order, nested list items included.
    """
    order = ItemOrder(document)
    lists = select_task_lists(document)

    # Lists are rewritten last-first: nested lists come after their parent in
    # document order, so their markup is final before the parent item's
    # content gets re-parsed.
    pairs = []
    for node in reversed(lists):
        pairs.extend(rewrite_list(document, node))
    pairs.sort(key=lambda pair: order.position(pair[0]))

    items = [item for _, item in pairs]
    logger.info(f"Filtered {len(items)} task list item(s) from {len(lists)} list(s)")
    return document, items
