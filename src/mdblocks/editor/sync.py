"""Build an editable tree from tokens and read tokens back from the tree"""

from typing import Callable, Optional

from mdblocks.core.models import (
    BaseToken,
    BlockquoteToken,
    CodeBlockToken,
    DefinitionItem,
    DefinitionListToken,
    HeadingToken,
    HorizontalRuleToken,
    ListItem,
    ListToken,
    ParagraphToken,
    TableToken,
    TaskItem,
    TaskListToken,
)
from mdblocks.editor.code_blocks import create_island_element
from mdblocks.editor.store import CodeBlockStore
from mdblocks.editor.tree import Element


HEADING_TAGS = {f"h{n}": n for n in range(1, 7)}


def _list_element(token: ListToken) -> Element:
    attrs = {"start": str(token.start)} if token.ordered and token.start is not None else {}
    items = []
    for item in token.items:
        children = [_list_element(c) for c in item.children or []]
        items.append(Element("li", text=item.content, children=children))
    return Element(token.type, attrs, children=items)


def _table_element(token: TableToken) -> Element:
    head = Element("tr", children=[
        Element("th", {"data-align": a} if a else {}, text=h)
        for h, a in zip(token.headers, token.alignments)
    ])
    rows = [Element("tr", children=[Element("td", text=c) for c in row]) for row in token.rows]
    return Element("table", children=[head, *rows])


def _definition_list_element(token: DefinitionListToken) -> Element:
    children = []
    for item in token.items:
        children.append(Element("dt", text=item.term))
        children.extend(Element("dd", text=d) for d in item.definitions)
    return Element("dl", children=children)


def token_to_element(token: BaseToken, new_id: Callable[[], str],
                     register: Callable[[str, str, str], None]) -> Element:
    """Build the tree node for one token; code blocks become registered islands."""
    if isinstance(token, HeadingToken):
        return Element(f"h{token.level}", text=token.content)
    if isinstance(token, ParagraphToken):
        return Element("p", text=token.content)
    if isinstance(token, ListToken):
        return _list_element(token)
    if isinstance(token, CodeBlockToken):
        island_id = new_id()
        register(island_id, token.content, token.language)
        return create_island_element(island_id, token.content, token.language, token.auto_detected)
    if isinstance(token, BlockquoteToken):
        return Element("blockquote", text=token.content)
    if isinstance(token, HorizontalRuleToken):
        return Element("hr")
    if isinstance(token, TaskListToken):
        return Element("ul", {"class": "task-list"}, children=[
            Element("li", {"data-checked": "true" if t.checked else "false"}, text=t.content)
            for t in token.items
        ])
    if isinstance(token, DefinitionListToken):
        return _definition_list_element(token)
    if isinstance(token, TableToken):
        return _table_element(token)
    raise TypeError(f"Cannot build element for token of type {type(token).__name__}")


def build_tree(root: Element, tokens: list[BaseToken], new_id: Callable[[], str],
               register: Callable[[str, str, str], None]) -> None:
    for token in tokens:
        root.append(token_to_element(token, new_id, register))


def _list_token(el: Element) -> ListToken:
    items = []
    for li in el.children:
        nested = [_list_token(c) for c in li.children if c.tag in ("ul", "ol")]
        items.append(ListItem(content=li.text, children=nested or None))
    if el.tag == "ol":
        return ListToken(type="ol", items=items, start=int(el.get_attribute("start", "1") or 1))
    return ListToken(type="ul", items=items)


def _table_token(el: Element) -> TableToken:
    head, *rows = el.children
    return TableToken(
        headers=[c.text_content for c in head.children],
        alignments=[c.get_attribute("data-align") for c in head.children],
        rows=[[c.text_content for c in row.children] for row in rows],
    )


def _definition_list_token(el: Element) -> DefinitionListToken:
    items: list[DefinitionItem] = []
    for child in el.children:
        if child.tag == "dt":
            items.append(DefinitionItem(term=child.text_content))
        elif child.tag == "dd" and items:
            items[-1].definitions.append(child.text_content)
    return DefinitionListToken(items=items)


def element_to_token(el: Element, store: CodeBlockStore) -> Optional[BaseToken]:
    """Read one top-level node back as a token; empty paragraphs yield None."""
    if el.island_id is not None:
        state = store.get(el.island_id)
        if state is not None:
            return CodeBlockToken(language=state.language, content=state.content)
        mount_point = el.find_mount_point()
        attrs = mount_point.attrs if mount_point is not None else {}
        return CodeBlockToken(language=attrs.get("data-language", ""), content=attrs.get("data-content", ""))
    if el.tag in HEADING_TAGS:
        return HeadingToken(level=HEADING_TAGS[el.tag], content=el.text_content)
    if el.tag in ("p", "div"):
        text = el.text_content
        return ParagraphToken(content=text) if text.strip() else None
    if el.tag == "ul" and "task-list" in el.classes:
        return TaskListToken(items=[
            TaskItem(checked=li.get_attribute("data-checked") == "true", content=li.text_content)
            for li in el.children
        ])
    if el.tag in ("ul", "ol"):
        return _list_token(el)
    if el.tag == "blockquote":
        return BlockquoteToken(content=el.text_content)
    if el.tag == "hr":
        return HorizontalRuleToken()
    if el.tag == "table":
        return _table_token(el)
    if el.tag == "dl":
        return _definition_list_token(el)
    return None


def tree_to_tokens(root: Element, store: CodeBlockStore) -> list[BaseToken]:
    tokens = (element_to_token(el, store) for el in root.children)
    return [t for t in tokens if t is not None]
