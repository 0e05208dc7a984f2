"""Structured data format checks (JSON, YAML)"""

import json

import yaml


STRUCTURED_FORMATS = ("json", "yaml")


def is_json(text: str) -> bool:
    """Return True if text parses as JSON."""
    if not text:
        return False
    try:
        json.loads(text)
    except (ValueError, RecursionError):
        return False
    return True


def is_structured_data(text: str) -> bool:
    """Return True for JSON, or YAML that parses to a mapping or sequence (scalars are prose)."""
    if is_json(text):
        return True
    try:
        parsed = yaml.safe_load(text)
    except (yaml.YAMLError, ValueError, RecursionError):
        return False
    return isinstance(parsed, (dict, list))


def is_structured_format(fmt: str) -> bool:
    return fmt in STRUCTURED_FORMATS


def convert_structured(content: str, source: str, target: str) -> str:
    """Re-serialise JSON/YAML content in the target format.

    Content that does not parse in the source format is returned unchanged.
    """
    if source == target or not (is_structured_format(source) and is_structured_format(target)):
        return content
    try:
        data = json.loads(content) if source == "json" else yaml.safe_load(content)
    except (yaml.YAMLError, ValueError, RecursionError):
        return content
    if not isinstance(data, (dict, list)):
        return content
    if target == "json":
        return json.dumps(data, indent=2, ensure_ascii=False)
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True).rstrip("\n")
