"""Pipe table parsing"""

import re
from typing import Optional

from mdblocks.core.models import ParseResult, TableToken


SEPARATOR_CELL_RE = re.compile(r'^:?-+:?$')
_PIPE_PLACEHOLDER = '\uE0FF'


def parse_pipe_row(line: str) -> list[str]:
    """Split a pipe-delimited row into trimmed cells; `\\|` stays a literal pipe."""
    row = line.strip().replace('\\|', _PIPE_PLACEHOLDER)
    if row.startswith('|'):
        row = row[1:]
    if row.endswith('|'):
        row = row[:-1]
    return [cell.replace(_PIPE_PLACEHOLDER, '|').strip() for cell in row.split('|')]


def _alignment(cell: str) -> Optional[str]:
    left, right = cell.startswith(':'), cell.endswith(':')
    if left and right:
        return "center"
    if right:
        return "right"
    if left:
        return "left"
    return None


def _is_separator(line: str) -> bool:
    if '-' not in line:
        return False
    cells = parse_pipe_row(line)
    return bool(cells) and all(SEPARATOR_CELL_RE.match(c) for c in cells)


def parse_table(lines: list[str], index: int) -> Optional[ParseResult]:
    """Parse a header row, an alignment separator and any following `|` rows."""
    if index + 1 >= len(lines) or '|' not in lines[index]:
        return None
    if not _is_separator(lines[index + 1]):
        return None

    headers = parse_pipe_row(lines[index])
    alignments = [_alignment(c) for c in parse_pipe_row(lines[index + 1])]

    rows: list[list[str]] = []
    i = index + 2
    while i < len(lines) and lines[i].strip() and '|' in lines[i]:
        rows.append(parse_pipe_row(lines[i]))
        i += 1
    return ParseResult(TableToken(headers=headers, alignments=alignments, rows=rows), i)
