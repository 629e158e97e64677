import bisect
import logging

from bs4 import Tag

from tasklist.core import rewriter
from tasklist.core.config import DEFAULT_PARSER, RESULT_KEY
from tasklist.core.document import SoupDocument
from tasklist.core.selector import select_task_lists
from tasklist.features.registry import Feature, FeatureState, FeatureType

logger = logging.getLogger(__name__)


class TaskListFilter:
    """
    Replaces task list item markers (`[ ]` and `[x]`) with checkboxes.

    Run it on HTML produced by the Markdown renderer, after sanitization.
    Task list items must be in a list:

        - [ ] incomplete
        - [x] complete

    Recognized items are written to the result dict under
    `task_list_items`, in document order.
    """

    def __init__(self, doc, context=None, result=None, parser=None):
        self.context = context or {}
        if isinstance(doc, (str, bytes)):
            self.document = SoupDocument.from_html(doc, parser or self.context.get("parser", DEFAULT_PARSER))
        elif isinstance(doc, Tag):
            self.document = SoupDocument(doc)
        else:
            raise TypeError(f"TaskListFilter expects HTML or a BeautifulSoup tree, got {type(doc).__name__}")
        self.doc = self.document.root
        self.result = result if result is not None else {}

        # Records from this document go after anything already in the result,
        # sorted by the position of their list item
        self._order = rewriter.ItemOrder(self.document)
        self._start = len(self.task_list_items)
        self._positions = []

    @property
    def task_list_items(self):
        """TaskItem objects recognized so far, shared through the result dict."""
        return self.result.setdefault(RESULT_KEY, [])

    def render_item_checkbox(self, item):
        return rewriter.render_item_checkbox(item)

    def render_task_list_item(self, match, source, item):
        return rewriter.render_task_list_item(match, source, item)

    def task_lists(self):
        return select_task_lists(self.document)

    def _record(self, pairs):
        items = self.task_list_items
        for li, item in pairs:
            position = self._order.position(li)
            index = bisect.bisect_right(self._positions, position)
            self._positions.insert(index, position)
            items.insert(self._start + index, item)

    def filter_list(self, node):
        """Mark up a single ul/ol in place and record its items."""
        pairs = rewriter.rewrite_list(self.document, node)
        self._record(pairs)
        return [item for _, item in pairs]

    def call(self):
        lists = self.task_lists()
        count = 0
        # Last-first, so nested lists are done before their parent item is re-parsed
        for node in reversed(lists):
            pairs = rewriter.rewrite_list(self.document, node)
            self._record(pairs)
            count += len(pairs)
        logger.info(f"Filtered {count} task list item(s) from {len(lists)} list(s)")
        return self.doc


def filter(doc, context=None, result=None):
    """Run the task list filter over `doc` and return the (mutated) tree."""
    return TaskListFilter(doc, context, result).call()


def filter_html(html, result):
    """String in, string out handler for the rendering pipeline."""
    return str(TaskListFilter(html, result=result).call())


def get_features():
    return [
        Feature(
            name="task_list",
            handler=filter_html,
            feature_type=FeatureType.ALGORITHM,
            state=FeatureState.STANDARD,
            meta={
                "result_key": RESULT_KEY,
                "description": "Turns [ ] / [x] list items into disabled checkboxes.",
            }
        )
    ]


PLUGIN_METADATA = {
    'name': 'Task Lists',
    'description': 'Renders GitHub-style task list items as checkboxes and reports their state.',
    'category': 'markdown',
    'icon': 'fa-check-square',
    'preinstalled': True
}
