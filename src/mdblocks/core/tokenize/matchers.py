"""Pure line classifiers shared by the block parsers"""

import re
from typing import NamedTuple, Optional


HEADING_RE = re.compile(r'^(#{1,6})\s+(.+)$')
FENCE_RE = re.compile(r'^```(.*)$')
RULE_RE = re.compile(r'^(-{3,}|\*{3,}|_{3,})$')
BULLET_RE = re.compile(r'^[-*+]\s+(.*)$')
ORDERED_RE = re.compile(r'^(\d+)\.\s+(.*)$')
TASK_RE = re.compile(r'^[-*+]\s+\[([ xX])\]\s+(.*)$')


class ListMarker(NamedTuple):
    kind: str                       # "ul" or "ol"
    number: Optional[int]
    content: str


def get_indent(line: str) -> int:
    """Return the leading-whitespace width of line, counting tabs as 2 columns."""
    stripped = line.lstrip()
    return len(line[:len(line) - len(stripped)].replace('\t', '  '))


def is_blank(line: str) -> bool:
    return not line.strip()


def is_heading(trimmed: str) -> bool:
    return trimmed.startswith('#')


def is_fence(trimmed: str) -> bool:
    return trimmed.startswith('```')


def is_quote(trimmed: str) -> bool:
    return trimmed.startswith('>')


def is_rule(trimmed: str) -> bool:
    return RULE_RE.match(trimmed) is not None


def is_list_item(trimmed: str) -> bool:
    return BULLET_RE.match(trimmed) is not None or ORDERED_RE.match(trimmed) is not None


def is_block_starter(trimmed: str) -> bool:
    """True if the trimmed line unconditionally begins a non-paragraph block.

    `{` and `[` are deliberately absent: template syntax like `{{x}}` and markdown
    links start with them, so the paragraph parser checks them with a lookahead.
    """
    return (
        is_heading(trimmed)
        or is_fence(trimmed)
        or is_quote(trimmed)
        or is_list_item(trimmed)
        or is_rule(trimmed)
    )


def match_list_marker(trimmed: str) -> Optional[ListMarker]:
    """Split a trimmed list line into marker kind, ordinal and item text."""
    if m := ORDERED_RE.match(trimmed):
        return ListMarker("ol", int(m.group(1)), m.group(2).strip())
    if m := BULLET_RE.match(trimmed):
        return ListMarker("ul", None, m.group(1).strip())
    return None
