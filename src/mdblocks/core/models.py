"""Block token models produced by the tokenizer and consumed by renderers"""

from dataclasses import dataclass, field
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field


class BaseToken(BaseModel):
    """Common serialisation for every block token."""

    def to_dict(self) -> dict[str, Any]:
        """Return the token shape with unset optional keys omitted (absence is meaningful)."""
        return self.model_dump(exclude_none=True)


class HeadingToken(BaseToken):
    type: Literal["heading"] = "heading"
    level: int = Field(..., ge=1, le=6)
    content: str


class ParagraphToken(BaseToken):
    type: Literal["paragraph"] = "paragraph"
    content: str                    # source lines joined by "\n", untrimmed


class ListItem(BaseModel):
    """A single list entry; children is None (omitted) unless nested lists exist."""
    content: str
    children: Optional[list["ListToken"]] = None


class ListToken(BaseToken):
    type: Literal["ul", "ol"]
    items: list[ListItem] = Field(default_factory=list)
    start: Optional[int] = None     # first item's number; ordered lists only

    @property
    def ordered(self) -> bool:
        return self.type == "ol"


class CodeBlockToken(BaseToken):
    type: Literal["code_block"] = "code_block"
    language: str = ""
    content: str = ""
    auto_detected: bool = Field(default=False, exclude=True, description="Unfenced JSON/YAML detection")


class BlockquoteToken(BaseToken):
    type: Literal["blockquote"] = "blockquote"
    content: str


class HorizontalRuleToken(BaseToken):
    type: Literal["hr"] = "hr"


class TaskItem(BaseModel):
    checked: bool
    content: str


class TaskListToken(BaseToken):
    type: Literal["task_list"] = "task_list"
    items: list[TaskItem] = Field(default_factory=list)


class DefinitionItem(BaseModel):
    term: str
    definitions: list[str] = Field(default_factory=list)


class DefinitionListToken(BaseToken):
    type: Literal["dl"] = "dl"
    items: list[DefinitionItem] = Field(default_factory=list)


class TableToken(BaseToken):
    type: Literal["table"] = "table"
    headers: list[str]
    alignments: list[Optional[Literal["left", "center", "right"]]]
    rows: list[list[str]] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        # Alignment entries are positional, so None cells must survive serialisation.
        return self.model_dump()


Token = Annotated[
    Union[
        HeadingToken,
        ParagraphToken,
        ListToken,
        CodeBlockToken,
        BlockquoteToken,
        HorizontalRuleToken,
        TaskListToken,
        TableToken,
        DefinitionListToken,
    ],
    Field(discriminator="type"),
]

ListItem.model_rebuild()


@dataclass
class ParseResult:
    """A single token plus the index of the first line the parser did not consume."""
    token: BaseToken
    end_index: int


@dataclass
class ListResult:
    """List tokens plus end index; an empty token list means "no list here"."""
    tokens: list[ListToken] = field(default_factory=list)
    end_index: int = 0
