from tasklist.core.document import first_child_tag, first_text_node
from tasklist.core.pattern import starts_with_marker


def _starts_with_marker(node):
    text = first_text_node(node)
    return text is not None and starts_with_marker(str(text))


def is_task_list(node):
    """
    True if the list's first item starts with a task marker, either as
    bare text (`<li>[ ] ...`) or wrapped in a paragraph (`<li><p>[ ] ...`).
    """
    first_item = first_child_tag(node, "li")
    if first_item is None:
        return False
    if _starts_with_marker(first_item):
        return True
    para = first_child_tag(first_item, "p")
    return para is not None and _starts_with_marker(para)


def select_task_lists(document):
    """All `ul`/`ol` elements of `document` that qualify as task lists, in document order."""
    return document.query(is_task_list, names=("ul", "ol"))
