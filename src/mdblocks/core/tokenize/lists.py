"""Indentation-nested list and task list parsing"""

from typing import Optional

from mdblocks.core.models import ListItem, ListResult, ListToken, ParseResult, TaskItem, TaskListToken
from mdblocks.core.tokenize.matchers import TASK_RE, get_indent, is_blank, match_list_marker


def _next_non_blank(lines: list[str], index: int) -> Optional[int]:
    """Return the index of the first non-blank line at or after index, else None."""
    while index < len(lines):
        if not is_blank(lines[index]):
            return index
        index += 1
    return None


def _continues_after_blanks(lines: list[str], blank_at: int, base_indent: int, kind: str) -> Optional[int]:
    """Decide whether a blank run starting at blank_at stays inside the current list.

    Returns the index to resume at, or None when the list ends before the blank run.
    """
    j = _next_non_blank(lines, blank_at)
    if j is None:
        return None
    indent = get_indent(lines[j])
    if indent < base_indent:
        return None
    marker = match_list_marker(lines[j].strip())
    if marker is None:
        return None
    if j - blank_at >= 2 and indent == base_indent and marker.kind != kind:
        return None
    return j


def _parse_children(lines: list[str], index: int, item_indent: int) -> tuple[list[ListToken], int]:
    """Parse every nested list indented deeper than item_indent that follows an item."""
    children: list[ListToken] = []
    while True:
        j = _next_non_blank(lines, index)
        if j is None:
            break
        child_indent = get_indent(lines[j])
        if child_indent <= item_indent or match_list_marker(lines[j].strip()) is None:
            break
        nested = parse_list(lines, j, child_indent)
        if not nested.tokens:
            break
        children.extend(nested.tokens)
        index = nested.end_index
    return children, index


def parse_list(lines: list[str], start_index: int, base_indent: int) -> ListResult:
    """Parse consecutive list items at base_indent (and their nested lists) into list tokens.

    Returns ListResult([], start_index) when the starting line is not a list item.
    A change of marker kind at the base level closes the current list and opens a new
    one; single blank lines never terminate a list, indent regression does.
    """
    tokens: list[ListToken] = []
    current: Optional[ListToken] = None
    i = start_index

    while i < len(lines):
        line = lines[i]
        if is_blank(line):
            if current is None:
                break
            resume = _continues_after_blanks(lines, i, base_indent, current.type)
            if resume is None:
                break
            i = resume
            continue

        indent = get_indent(line)
        if indent < base_indent:
            break
        marker = match_list_marker(line.strip())
        if marker is None:
            break

        if current is None or marker.kind != current.type:
            current = ListToken(type=marker.kind, start=marker.number)
            tokens.append(current)

        item = ListItem(content=marker.content)
        current.items.append(item)
        i += 1

        children, after = _parse_children(lines, i, indent)
        if children:
            item.children = children
            i = after

    return ListResult(tokens=tokens, end_index=i if tokens else start_index)


def parse_task_list(lines: list[str], index: int) -> Optional[ParseResult]:
    """Collect consecutive `- [ ]` / `- [x]` items; blank lines are skipped between tasks."""
    items: list[TaskItem] = []
    i = index
    while i < len(lines):
        if is_blank(lines[i]):
            j = _next_non_blank(lines, i)
            if not items or j is None or not TASK_RE.match(lines[j].strip()):
                break
            i = j
            continue
        m = TASK_RE.match(lines[i].strip())
        if not m:
            break
        items.append(TaskItem(checked=m.group(1) in 'xX', content=m.group(2).strip()))
        i += 1

    if not items:
        return None
    return ParseResult(TaskListToken(items=items), i)
