"""
Structured-text (YAML) writer.

A small recursive formatter over three value kinds: scalars, lists and
maps. Written by hand so the quoting and block-literal rules stay exactly
as documented below, independent of any YAML library's own choices.

Rules:
- booleans and numbers are written literally
- strings containing a newline become a literal block, every line
  indented one level past the key; `|-` unless the string ends with a
  line break, then `|+`, so parsers read back the exact string
- strings containing `:`, `#` or `'`, starting with `{` or `[`, or empty,
  are double-quoted with `\\` and `"` escaped
- non-empty lists are block sequences (`- `), empty lists are `[]`
- maps recurse one level deeper, empty maps are `{}`
- None values are skipped inside maps
"""

from typing import Any, List

from ontology_compiler.serializers.plain import to_plain


INDENT = "  "
QUOTE_TRIGGERS = (":", "#", "'")
QUOTE_PREFIXES = ("{", "[")


def _indent(level: int) -> str:
    return INDENT * level


def needs_quotes(value: str) -> bool:
    return (
        value == ""
        or any(ch in value for ch in QUOTE_TRIGGERS)
        or value.startswith(QUOTE_PREFIXES)
    )


def quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def format_key(key: Any) -> str:
    text = str(key)
    # Numeric keys (response codes) must stay strings
    if needs_quotes(text) or text.isdigit():
        return quote(text)
    return text


def format_block(text: str, level: int) -> str:
    # `|-` strips the final line break, `|+` keeps trailing ones verbatim
    if text.endswith("\n"):
        indicator, text = "|+", text[:-1]
    else:
        indicator = "|-"

    block = [
        _indent(level + 1) + line if line else ""
        for line in text.split("\n")
    ]
    return indicator + "\n" + "\n".join(block)


def format_scalar(value: Any, level: int) -> str:
    if value is None:
        return "null"

    if isinstance(value, bool):
        return "true" if value else "false"

    if isinstance(value, int):
        return str(value)

    if isinstance(value, float):
        return repr(value)

    text = str(value)

    if "\n" in text:
        return format_block(text, level)

    if needs_quotes(text):
        return quote(text)

    return text


def format_sequence(items: list, level: int) -> List[str]:
    lines: List[str] = []
    dash = _indent(level) + "- "

    for item in items:
        if isinstance(item, dict) and item:
            nested = format_mapping(item, level + 1)
        elif isinstance(item, list) and item:
            nested = format_sequence(item, level + 1)
        else:
            nested = None

        if nested:
            # First key shares the dash line, the rest stay aligned under it
            lines.append(dash + nested[0].lstrip(" "))
            lines.extend(nested[1:])
        elif isinstance(item, dict):
            lines.append(dash + "{}")
        elif isinstance(item, list):
            lines.append(dash + "[]")
        else:
            lines.append(dash + format_scalar(item, level))

    return lines


def format_mapping(obj: dict, level: int) -> List[str]:
    lines: List[str] = []

    for key, value in obj.items():
        if value is None:
            continue

        prefix = _indent(level) + format_key(key) + ":"

        if isinstance(value, dict):
            if value:
                lines.append(prefix)
                lines.extend(format_mapping(value, level + 1))
            else:
                lines.append(prefix + " {}")
        elif isinstance(value, list):
            if value:
                lines.append(prefix)
                lines.extend(format_sequence(value, level))
            else:
                lines.append(prefix + " []")
        else:
            lines.append(prefix + " " + format_scalar(value, level))

    return lines


def spec_to_yaml(spec: Any) -> str:
    """Serialize a whole document in memory and return it as one string."""
    data = to_plain(spec)

    if isinstance(data, dict):
        return "\n".join(format_mapping(data, 0))
    if isinstance(data, list):
        return "\n".join(format_sequence(data, 0))
    return format_scalar(data, 0)
