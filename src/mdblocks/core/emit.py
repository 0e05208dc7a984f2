"""Emit block tokens back to markdown, JSON or YAML"""

import json
from typing import Any, Iterable

import yaml
from pydantic import TypeAdapter

from mdblocks.core.models import (
    BaseToken,
    BlockquoteToken,
    CodeBlockToken,
    DefinitionListToken,
    HeadingToken,
    HorizontalRuleToken,
    ListToken,
    ParagraphToken,
    TableToken,
    TaskListToken,
    Token,
)


_ALIGN_CELLS = {None: '---', 'left': ':---', 'center': ':---:', 'right': '---:'}


def _emit_list(token: ListToken, indent: int = 0) -> list[str]:
    lines = []
    for n, item in enumerate(token.items):
        marker = f"{(token.start or 1) + n}. " if token.ordered else "- "
        lines.append(f"{' ' * indent}{marker}{item.content}")
        for child in item.children or []:
            lines.extend(_emit_list(child, indent + len(marker)))
    return lines


def _row(cells: Iterable[str]) -> str:
    return "| " + " | ".join(c.replace('|', '\\|') for c in cells) + " |"


def emit_block(token: BaseToken) -> str:
    """Render a single token as markdown source."""
    if isinstance(token, HeadingToken):
        return f"{'#' * token.level} {token.content}"
    if isinstance(token, ParagraphToken):
        return token.content
    if isinstance(token, ListToken):
        return "\n".join(_emit_list(token))
    if isinstance(token, CodeBlockToken):
        return f"```{token.language}\n{token.content}\n```"
    if isinstance(token, BlockquoteToken):
        return "\n".join(f"> {line}" if line else ">" for line in token.content.split("\n"))
    if isinstance(token, HorizontalRuleToken):
        return "---"
    if isinstance(token, TaskListToken):
        return "\n".join(f"- [{'x' if t.checked else ' '}] {t.content}" for t in token.items)
    if isinstance(token, DefinitionListToken):
        return "\n".join("\n".join([item.term, *(f": {d}" for d in item.definitions)]) for item in token.items)
    if isinstance(token, TableToken):
        lines = [_row(token.headers), "| " + " | ".join(_ALIGN_CELLS[a] for a in token.alignments) + " |"]
        lines.extend(_row(r) for r in token.rows)
        return "\n".join(lines)
    raise TypeError(f"Cannot emit token of type {type(token).__name__}")


def emit_markdown(tokens: list[BaseToken]) -> str:
    """Join rendered blocks with blank lines; the tokenizer reads this back to the same tokens."""
    return "\n\n".join(emit_block(t) for t in tokens)


def tokens_to_dicts(tokens: list[BaseToken]) -> list[dict[str, Any]]:
    return [t.to_dict() for t in tokens]


_TOKEN_LIST = TypeAdapter(list[Token])


def tokens_from_dicts(data: list[dict[str, Any]]) -> list[BaseToken]:
    """Validate serialised token dicts back into token models."""
    return _TOKEN_LIST.validate_python(data)


def tokens_to_json(tokens: list[BaseToken]) -> str:
    return json.dumps(tokens_to_dicts(tokens), indent=2, ensure_ascii=False)


def tokens_to_yaml(tokens: list[BaseToken]) -> str:
    return yaml.safe_dump(tokens_to_dicts(tokens), sort_keys=False, allow_unicode=True)
