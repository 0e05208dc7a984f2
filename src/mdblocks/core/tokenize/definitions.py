"""Definition list parsing: a term line followed by `: definition` lines"""

import re
from typing import Optional

from mdblocks.core.models import DefinitionItem, DefinitionListToken, ParseResult
from mdblocks.core.tokenize.matchers import is_blank


DEFINITION_RE = re.compile(r'^:\s+(.+)$')
TERM_EXCLUDED_STARTS = ('-', '*', '+', '#', '>', ':')


def _definition(line: str) -> Optional[str]:
    m = DEFINITION_RE.match(line.strip())
    return m.group(1).strip() if m else None


def _is_term(line: str) -> bool:
    trimmed = line.strip()
    return bool(trimmed) and not trimmed[0].isdigit() and not trimmed.startswith(TERM_EXCLUDED_STARTS)


def _starts_entry(lines: list[str], index: int) -> bool:
    return index + 1 < len(lines) and _is_term(lines[index]) and _definition(lines[index + 1]) is not None


def parse_definition_list(lines: list[str], index: int) -> Optional[ParseResult]:
    """Collect term/definition groups; blank lines between groups are skipped.

    Trailing blank lines are left for the caller.
    """
    items: list[DefinitionItem] = []
    i = index
    while i < len(lines):
        if is_blank(lines[i]):
            j = i
            while j < len(lines) and is_blank(lines[j]):
                j += 1
            if not items or not _starts_entry(lines, j):
                break
            i = j
            continue
        if not _starts_entry(lines, i):
            break

        item = DefinitionItem(term=lines[i].strip())
        i += 1
        while i < len(lines) and (definition := _definition(lines[i])) is not None:
            item.definitions.append(definition)
            i += 1
        items.append(item)

    if not items:
        return None
    return ParseResult(DefinitionListToken(items=items), i)
