# Global configuration for the task list filter.
# Class names and markup constants shared by the selector, rewriter and plugin.

# CSS classes
TASK_LIST_CLASS = "task-list"
TASK_LIST_ITEM_CLASS = "task-list-item"
CHECKBOX_CLASS = "task-list-item-checkbox"

# Parsing
DEFAULT_PARSER = "html.parser"
FALLBACK_PARSER = "html.parser"
FRAGMENT_ENCODING = "utf-8"

# Result hash key used by the pipeline stage
RESULT_KEY = "task_list_items"

# Limits
MAX_FILTER_HTML_SIZE = 50 * 1024 * 1024  # 50 MB

# Task markers
INCOMPLETE = "[ ]"
COMPLETE = "[x]"
