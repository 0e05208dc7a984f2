"""Unit tests for core/tokenize/lists.py"""

from mdblocks.core.tokenize.lists import parse_list, parse_task_list


def _dicts(result):
    return [t.to_dict() for t in result.tokens]


def test_flat_unordered_list():
    """Consecutive bullets form one ul token."""
    result = parse_list(["- a", "- b", "", "text"], 0, 0)
    assert _dicts(result) == [{"type": "ul", "items": [{"content": "a"}, {"content": "b"}]}]
    assert result.end_index == 2


def test_ordered_list_keeps_start():
    """The first item's number is the list start."""
    result = parse_list(["3. three", "4. four"], 0, 0)
    token = result.tokens[0]
    assert token.type == "ol"
    assert token.ordered
    assert token.start == 3
    assert [i.content for i in token.items] == ["three", "four"]


def test_nested_lists():
    """Deeper-indented items nest under the preceding item."""
    lines = ["- a", "  - a1", "    1. deep", "  - a2", "- b"]
    result = parse_list(lines, 0, 0)
    assert _dicts(result) == [{
        "type": "ul",
        "items": [
            {"content": "a", "children": [{
                "type": "ul",
                "items": [
                    {"content": "a1", "children": [{"type": "ol", "items": [{"content": "deep"}], "start": 1}]},
                    {"content": "a2"},
                ],
            }]},
            {"content": "b"},
        ],
    }]
    assert result.end_index == 5


def test_single_blank_line_does_not_end_list():
    """A blank line between items keeps the list open."""
    result = parse_list(["- a", "", "- b"], 0, 0)
    assert len(result.tokens) == 1
    assert len(result.tokens[0].items) == 2
    assert result.end_index == 3


def test_marker_change_opens_new_token():
    """Switching from bullets to numbers starts a second list token."""
    result = parse_list(["- a", "1. one"], 0, 0)
    assert [t.type for t in result.tokens] == ["ul", "ol"]


def test_two_blank_lines_and_kind_change_ends_list():
    """After two blank lines a list of the other kind is not absorbed."""
    result = parse_list(["- a", "", "", "1. one"], 0, 0)
    assert [t.type for t in result.tokens] == ["ul"]
    assert result.end_index == 1


def test_indent_regression_ends_nested_list():
    """A nested list stops at a line indented less than its base."""
    result = parse_list(["  - a", "- b"], 0, 2)
    assert len(result.tokens[0].items) == 1
    assert result.end_index == 1


def test_not_a_list():
    """A non-marker line yields no tokens and an unchanged index."""
    result = parse_list(["text"], 0, 0)
    assert result.tokens == []
    assert result.end_index == 0


def test_task_list():
    """Checkbox items become a task list with checked flags."""
    result = parse_task_list(["- [x] done", "- [ ] todo", "- [X] also"], 0)
    assert result.token.to_dict() == {
        "type": "task_list",
        "items": [
            {"checked": True, "content": "done"},
            {"checked": False, "content": "todo"},
            {"checked": True, "content": "also"},
        ],
    }
    assert result.end_index == 3


def test_task_list_requires_checkbox():
    """Plain bullets are not tasks."""
    assert parse_task_list(["- item"], 0) is None


def test_ordered_list_start_five():
    """Numbering need not begin at one."""
    result = parse_list(["5. x", "6. y"], 0, 0)
    assert _dicts(result) == [{"type": "ol", "items": [{"content": "x"}, {"content": "y"}], "start": 5}]
    assert result.end_index == 2
