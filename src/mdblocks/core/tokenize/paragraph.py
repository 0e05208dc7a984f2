"""Paragraph collection: consecutive non-block lines"""

from typing import Optional

from mdblocks.core.models import ParagraphToken, ParseResult
from mdblocks.core.tokenize.matchers import is_block_starter
from mdblocks.core.tokenize.structured import parse_structured_data


def parse_paragraph(lines: list[str], start_index: int) -> Optional[ParseResult]:
    """Collect lines until a blank line or block starter; None if nothing was collected.

    A terminating blank line is consumed. Lines opening with `{` or `[` end the
    paragraph only when they begin valid structured data.
    """
    collected: list[str] = []
    i = start_index

    while i < len(lines):
        line = lines[i]
        trimmed = line.strip()
        if not trimmed:
            i += 1
            break
        if is_block_starter(trimmed):
            break
        if trimmed[0] in '{[' and parse_structured_data(lines, i):
            break
        collected.append(line)
        i += 1

    if not collected:
        return None
    return ParseResult(ParagraphToken(content='\n'.join(collected)), i)
