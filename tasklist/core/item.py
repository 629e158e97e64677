from enum import Enum

from tasklist.core.config import COMPLETE, INCOMPLETE


class ItemState(Enum):
    INCOMPLETE = "incomplete"
    COMPLETE = "complete"

    @staticmethod
    def from_token(token):
        """Map a marker token (`[ ]` or `[x]`) to its state."""
        if token == COMPLETE:
            return ItemState.COMPLETE
        if token == INCOMPLETE:
            return ItemState.INCOMPLETE
        raise ValueError(f"Unknown task marker: {token!r}")


class TaskItem:
    """
    A single recognized task list entry.

    `source` is the inner HTML of the item (or of its first paragraph)
    before it was rewritten, marker included.
    """

    __slots__ = ("_checkbox_text", "_state", "_source")

    def __init__(self, checkbox_text, source):
        object.__setattr__(self, "_state", ItemState.from_token(checkbox_text))
        object.__setattr__(self, "_checkbox_text", checkbox_text)
        object.__setattr__(self, "_source", source)

    def __setattr__(self, name, value):
        raise AttributeError(f"TaskItem is immutable (tried to set '{name}')")

    @property
    def checkbox_text(self):
        return self._checkbox_text

    @property
    def state(self):
        return self._state

    @property
    def source(self):
        return self._source

    @property
    def complete(self):
        return self._state is ItemState.COMPLETE

    @property
    def incomplete(self):
        return self._state is ItemState.INCOMPLETE

    def __eq__(self, other):
        if not isinstance(other, TaskItem):
            return NotImplemented
        return (self._state, self._source) == (other._state, other._source)

    def __hash__(self):
        return hash((self._state, self._source))

    def __repr__(self):
        return f"TaskItem({self._state.name}, {self._source!r})"
