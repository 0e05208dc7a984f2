"""Single-purpose block parsers: headings, code blocks, quotes and rules"""

import re
from typing import Optional

from mdblocks.core.models import (
    BlockquoteToken,
    CodeBlockToken,
    HeadingToken,
    HorizontalRuleToken,
    ParseResult,
)
from mdblocks.core.tokenize.matchers import FENCE_RE, HEADING_RE, is_blank, is_block_starter, is_rule


SETEXT_H1_RE = re.compile(r'^=+$')
SETEXT_H2_RE = re.compile(r'^-+$')
INDENT_PREFIXES = ('    ', '\t')


def parse_atx_heading(line: str, index: int) -> Optional[ParseResult]:
    """Parse `# Title` through `###### Title`; a bare `#` run is not a heading."""
    m = HEADING_RE.match(line.strip())
    if not m:
        return None
    return ParseResult(HeadingToken(level=len(m.group(1)), content=m.group(2).strip()), index + 1)


def parse_setext_heading(lines: list[str], index: int) -> Optional[ParseResult]:
    """Parse a text line underlined with `=` (level 1) or `-` (level 2)."""
    if index + 1 >= len(lines):
        return None
    text = lines[index].strip()
    if not text or is_block_starter(text):
        return None
    underline = lines[index + 1].strip()
    if SETEXT_H1_RE.match(underline):
        level = 1
    elif SETEXT_H2_RE.match(underline):
        level = 2
    else:
        return None
    return ParseResult(HeadingToken(level=level, content=text), index + 2)


def parse_fenced_code_block(lines: list[str], index: int) -> Optional[ParseResult]:
    """Parse a ``` fenced block; an unclosed fence runs to the end of input."""
    m = FENCE_RE.match(lines[index].strip())
    if not m:
        return None
    language = m.group(1).strip()

    content: list[str] = []
    i = index + 1
    while i < len(lines):
        if lines[i].strip().startswith('```'):
            i += 1
            break
        content.append(lines[i])
        i += 1
    return ParseResult(CodeBlockToken(language=language, content='\n'.join(content)), i)


def _strip_indent(line: str) -> Optional[str]:
    for prefix in INDENT_PREFIXES:
        if line.startswith(prefix):
            return line[len(prefix):]
    return None


def parse_indented_code_block(lines: list[str], index: int) -> Optional[ParseResult]:
    """Parse lines indented by 4 spaces or a tab; trailing blank lines are consumed but dropped."""
    if _strip_indent(lines[index]) is None:
        return None

    content: list[str] = []
    i = index
    while i < len(lines):
        stripped = _strip_indent(lines[i])
        if stripped is not None:
            content.append(stripped)
        elif is_blank(lines[i]):
            content.append('')
        else:
            break
        i += 1

    while content and not content[-1].strip():
        content.pop()
    if not content:
        return None
    return ParseResult(CodeBlockToken(language="", content='\n'.join(content)), i)


def parse_blockquote(lines: list[str], index: int) -> Optional[ParseResult]:
    """Collect consecutive `>` lines, stripping the marker and one optional space."""
    content: list[str] = []
    i = index
    while i < len(lines):
        trimmed = lines[i].strip()
        if not trimmed.startswith('>'):
            break
        text = trimmed[1:]
        content.append(text[1:] if text.startswith(' ') else text)
        i += 1

    if not content:
        return None
    return ParseResult(BlockquoteToken(content='\n'.join(content)), i)


def parse_horizontal_rule(line: str, index: int) -> Optional[ParseResult]:
    if not is_rule(line.strip()):
        return None
    return ParseResult(HorizontalRuleToken(), index + 1)
