import sys
import os
import logging
import markdown
import pytest
from bs4 import BeautifulSoup

# Setup paths
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.dirname(current_dir)
sys.path.insert(0, project_root)

from tasklist.core.renderer import render_html
from tasklist.features.registry import Feature, FeatureType
from tests.config import FIXTURES_DIR, MARKDOWN_EXTENSIONS, TEST_PARSER

logger = logging.getLogger("PipelineTest")


def render_markdown(text):
    # Upstream renderer; the filter only ever sees its HTML output
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)


@pytest.fixture
def checklist_html():
    md_path = FIXTURES_DIR / "task_lists.md"
    md_content = md_path.read_text(encoding="utf-8")
    logger.info(f"Read {len(md_content)} bytes from {md_path.name}.")
    return render_markdown(md_content)


def test_fixture_items(checklist_html):
    html, meta = render_html(checklist_html)
    items = meta["task_list_items"]

    assert [(item.checkbox_text, item.complete) for item in items] == [
        ("[ ]", False),
        ("[x]", True),
        ("[ ]", False),
        ("[x]", True),
        ("[ ]", False),
        ("[x]", True),
        ("[ ]", False),
    ]
    assert items[2].source == "[ ] buy <strong>milk</strong> for the team"


def test_fixture_markup(checklist_html):
    html, meta = render_html(checklist_html)
    soup = BeautifulSoup(html, TEST_PARSER)

    task_lists = soup.find_all(class_="task-list")
    assert [node.name for node in task_lists] == ["ul", "ol", "ul"]

    boxes = soup.find_all("input", class_="task-list-item-checkbox")
    assert len(boxes) == len(meta["task_list_items"])
    assert all(box.has_attr("disabled") for box in boxes)
    assert sum(1 for box in boxes if box.has_attr("checked")) == 3

    # Loose list items keep their paragraphs; the checkbox goes inside
    loose = task_lists[2]
    for li in loose.find_all("li"):
        assert li.p.input is not None

    # Lists that don't qualify are passed through untouched
    assert "[X] shouted" in html
    assert "[ ] second item is not enough" in html


@pytest.mark.parametrize("source, expected", [
    ("- [ ] a\n- [x] b\n- [ ] c\n", [False, True, False]),
    ("1. [x] one\n2. [x] two\n", [True, True]),
    ("- [x] done\n\n- [ ] later\n", [True, False]),
    ("- [X] nope\n", []),
    ("Some [x] text in a paragraph.\n", []),
    ("- a[x]b\n", []),
])
def test_rendered_markdown(source, expected):
    _, meta = render_html(render_markdown(source))
    assert [item.complete for item in meta.get("task_list_items", [])] == expected


def test_no_lists_leaves_html_unchanged():
    source = render_markdown("# Title\n\nJust text.\n")
    html, meta = render_html(source)
    assert html == source
    assert meta["task_list_items"] == []


def test_custom_features_run_in_order():
    calls = []

    def shout(html, result):
        calls.append("shout")
        result["shouted"] = True
        return html.replace("<!-- UPPERCASE_ME -->", "I WAS UPPERCASED BY PIPELINE!")

    def count(html, result):
        calls.append("count")
        result["length"] = len(html)
        return html

    features = [
        Feature("shout", handler=shout),
        Feature("ui", handler=None, feature_type=FeatureType.UI_EXTENSION),
        Feature("count", handler=count),
    ]
    html, meta = render_html("<p><!-- UPPERCASE_ME --></p>", features)

    assert calls == ["shout", "count"]
    assert html == "<p>I WAS UPPERCASED BY PIPELINE!</p>"
    assert meta == {"shouted": True, "length": len(html)}


def test_failing_feature_is_logged_and_raised(caplog):
    def broken(html, result):
        raise RuntimeError("boom")

    with caplog.at_level(logging.ERROR):
        with pytest.raises(RuntimeError, match="boom"):
            render_html("<p>x</p>", [Feature("broken", handler=broken)])
    assert "Feature 'broken' failed" in caplog.text
