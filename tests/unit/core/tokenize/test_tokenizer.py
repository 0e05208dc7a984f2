"""Unit tests for core/tokenize/tokenizer.py"""

from mdblocks.core.emit import emit_markdown, tokens_to_dicts
from mdblocks.core.tokenize.tokenizer import split_lines, tokenize_blocks, tokenize_lines


DOCUMENT = """# Title

Intro paragraph
spanning two lines.

- one
- two
  - nested

3. three
4. four

```python
print("hi")
```

{"a": 1, "b": [1, 2]}

name: demo
version: 2

> quoted

---

- [x] done
- [ ] todo

| A | B |
| :--- | ---: |
| 1 | 2 |
"""


def _types(markdown):
    return [t.type for t in tokenize_blocks(markdown)]


def test_empty_input():
    """Empty input produces no tokens."""
    assert tokenize_blocks("") == []
    assert tokenize_blocks("\n\n  \n") == []


def test_split_lines_normalises_line_endings():
    """CRLF and CR are treated as LF."""
    assert split_lines("a\r\nb\rc") == ["a", "b", "c"]


def test_document_block_order():
    """Every block kind is recognised in document order."""
    assert _types(DOCUMENT) == [
        "heading", "paragraph", "ul", "ol", "code_block", "code_block", "code_block",
        "blockquote", "hr", "task_list", "table",
    ]


def test_auto_detected_blocks():
    """Unfenced JSON and YAML are flagged auto-detected; fenced code is not."""
    code = [t for t in tokenize_blocks(DOCUMENT) if t.type == "code_block"]
    assert [(c.language, c.auto_detected) for c in code] == [
        ("python", False), ("json", True), ("yaml", True),
    ]


def test_auto_detected_flag_not_serialised():
    """The detection flag is internal and absent from the token dict."""
    token = tokenize_blocks('{"a": 1}')[0]
    assert token.to_dict() == {"type": "code_block", "language": "json", "content": '{"a": 1}'}


def test_prose_then_json_boundary():
    """Prose directly followed by JSON splits into a paragraph and a code block."""
    tokens = tokenize_blocks('Response:\n{"ok": true}\nThanks')
    assert [t.type for t in tokens] == ["paragraph", "code_block", "paragraph"]
    assert tokens[0].content == "Response:"
    assert tokens[2].content == "Thanks"


def test_link_line_stays_paragraph():
    """A markdown link line is never structured data."""
    tokens = tokenize_blocks("[home](http://example.com)")
    assert tokens[0].to_dict() == {"type": "paragraph", "content": "[home](http://example.com)"}


def test_incomplete_json_is_paragraph():
    """Unbalanced JSON falls back to prose."""
    assert _types('{"a": 1,\n"b": 2') == ["paragraph"]


def test_single_yaml_line_is_paragraph():
    """One key: value line is prose."""
    assert _types("Note: this is important") == ["paragraph"]


def test_unclaimed_line_becomes_paragraph():
    """A line nobody claims still advances as a one-line paragraph."""
    tokens = tokenize_blocks("#")
    assert tokens[0].to_dict() == {"type": "paragraph", "content": "#"}


def test_tokenize_is_idempotent_through_emit():
    """Tokenizing emitted markdown reproduces the same token shapes."""
    first = tokenize_blocks(DOCUMENT)
    second = tokenize_blocks(emit_markdown(first))
    assert tokens_to_dicts(second) == tokens_to_dicts(first)


def test_definition_list_between_blocks():
    """Term and definition lines tokenize as a dl between surrounding blocks."""
    tokens = tokenize_blocks("Intro\n\nApple\n: A fruit\n: Red or green\n\n# Next")
    assert [t.type for t in tokens] == ["paragraph", "dl", "heading"]
    assert tokens[1].to_dict() == {
        "type": "dl",
        "items": [{"term": "Apple", "definitions": ["A fruit", "Red or green"]}],
    }


def test_definition_list_is_idempotent_through_emit():
    """Emitted definition lists tokenize back to the same shape."""
    first = tokenize_blocks("Apple\n: A fruit\n\nCarrot\n: A vegetable\n: Orange")
    second = tokenize_blocks(emit_markdown(first))
    assert tokens_to_dicts(second) == tokens_to_dicts(first)


def test_colon_prose_that_fails_to_load_is_paragraph():
    """Key-like prose that YAML rejects stays a paragraph."""
    text = "Deadline: 2024-02-30\nOwner: Sam"
    tokens = tokenize_blocks(text)
    assert [t.to_dict() for t in tokens] == [{"type": "paragraph", "content": text}]


def test_deeply_nested_brackets_are_paragraph():
    """Bracket nesting too deep for the JSON decoder stays a paragraph."""
    text = "[" * 5000 + "]" * 5000
    tokens = tokenize_blocks(text)
    assert [t.type for t in tokens] == ["paragraph"]
    assert tokens[0].content == text


def test_json_with_brackets_inside_strings():
    """Brackets inside string values do not disturb the block boundary."""
    tokens = tokenize_blocks('{"key": "[value]", "other": "{braces}"}')
    assert [t.to_dict() for t in tokens] == [
        {"type": "code_block", "language": "json", "content": '{"key": "[value]", "other": "{braces}"}'},
    ]


def test_prose_blank_json_blank_prose():
    """Prose, a JSON line and trailing prose split into three blocks."""
    tokens = tokenize_lines(["Here is some data:", "", '{"name": "John", "age": 30}', "", "More text after."])
    assert [t.type for t in tokens] == ["paragraph", "code_block", "paragraph"]
    assert tokens[1].content == '{"name": "John", "age": 30}'
    assert tokens[2].content == "More text after."
