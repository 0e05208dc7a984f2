"""Line-by-line block tokenizer driving the matchers and block parsers"""

from mdblocks.core.models import BaseToken, ParagraphToken
from mdblocks.core.tokenize.blocks import (
    parse_atx_heading,
    parse_blockquote,
    parse_fenced_code_block,
    parse_horizontal_rule,
    parse_indented_code_block,
    parse_setext_heading,
)
from mdblocks.core.tokenize.definitions import parse_definition_list
from mdblocks.core.tokenize.lists import parse_list, parse_task_list
from mdblocks.core.tokenize.matchers import get_indent, is_blank
from mdblocks.core.tokenize.paragraph import parse_paragraph
from mdblocks.core.tokenize.structured import parse_structured_data
from mdblocks.core.tokenize.table import parse_table


def split_lines(markdown: str) -> list[str]:
    """Split text into lines, normalising CRLF and CR line endings."""
    return markdown.replace('\r\n', '\n').replace('\r', '\n').split('\n')


def tokenize_lines(lines: list[str]) -> list[BaseToken]:
    """Tokenize a line sequence into ordered block tokens.

    Parsers are tried in priority order at each line; the first that produces a
    token owns its lines. Any non-blank line nobody claims becomes a one-line
    paragraph, so the cursor always advances.
    """
    tokens: list[BaseToken] = []
    i = 0

    while i < len(lines):
        line = lines[i]
        if is_blank(line):
            i += 1
            continue

        result = (
            parse_fenced_code_block(lines, i)
            or parse_atx_heading(line, i)
            or parse_setext_heading(lines, i)
            or parse_horizontal_rule(line, i)
            or parse_blockquote(lines, i)
            or parse_table(lines, i)
            or parse_definition_list(lines, i)
            or parse_task_list(lines, i)
        )
        if result is None:
            listed = parse_list(lines, i, get_indent(line))
            if listed.tokens:
                tokens.extend(listed.tokens)
                i = listed.end_index
                continue
            result = (
                parse_indented_code_block(lines, i)
                or parse_structured_data(lines, i)
                or parse_paragraph(lines, i)
            )

        if result is None:
            tokens.append(ParagraphToken(content=line))
            i += 1
            continue

        tokens.append(result.token)
        i = result.end_index

    return tokens


def tokenize_blocks(markdown: str) -> list[BaseToken]:
    """Tokenize a markdown string into block tokens."""
    if not markdown:
        return []
    return tokenize_lines(split_lines(markdown))
