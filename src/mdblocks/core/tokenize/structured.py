"""Auto-detection of unfenced JSON and YAML blocks"""

import re
from typing import Optional

from mdblocks.core.models import CodeBlockToken, ParseResult
from mdblocks.core.utils.data_format import is_json, is_structured_data


# `key: value` or `- key: value`; plain `- value` items belong to the list parser.
YAML_LINE_RE = re.compile(r'^-?\s*\w[\w\s]*:\s+.+')
YAML_MIN_LINES = 2                  # single lines are presumed prose ("Note: this is important")


def bracket_depth(line: str) -> int:
    """Return the net bracket depth change of line, ignoring brackets inside JSON strings."""
    depth = 0
    in_string = False
    chars = iter(line)
    for ch in chars:
        if in_string:
            if ch == '\\':
                next(chars, None)
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in '{[':
            depth += 1
        elif ch in '}]':
            depth -= 1
    return depth


def parse_json_block(lines: list[str], index: int) -> Optional[ParseResult]:
    """Collect a bracket-balanced run of lines starting with `{`/`[` and validate it as JSON."""
    trimmed = lines[index].strip()
    if not trimmed or trimmed[0] not in '{[':
        return None

    collected: list[str] = []
    depth = 0
    i = index
    while i < len(lines):
        line = lines[i]
        if not line.strip() and depth > 0:
            break
        depth += bracket_depth(line)
        collected.append(line)
        i += 1
        if depth == 0:
            break

    if depth != 0:
        return None
    content = '\n'.join(collected)
    if not is_json(content):
        return None
    return ParseResult(CodeBlockToken(language="json", content=content, auto_detected=True), i)


def parse_yaml_block(lines: list[str], index: int) -> Optional[ParseResult]:
    """Collect consecutive non-blank lines opening with a `key: value` line and validate as YAML."""
    if not YAML_LINE_RE.match(lines[index].strip()):
        return None

    collected: list[str] = []
    i = index
    while i < len(lines) and lines[i].strip():
        collected.append(lines[i])
        i += 1

    if len(collected) < YAML_MIN_LINES:
        return None
    content = '\n'.join(collected)
    if not is_structured_data(content):
        return None
    return ParseResult(CodeBlockToken(language="yaml", content=content, auto_detected=True), i)


def parse_structured_data(lines: list[str], index: int) -> Optional[ParseResult]:
    """Return a json or yaml code_block for unfenced structured data at index, else None."""
    if index >= len(lines):
        return None
    return parse_json_block(lines, index) or parse_yaml_block(lines, index)
