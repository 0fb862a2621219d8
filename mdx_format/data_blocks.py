"""Fenced code block rendering and embedded JSON pretty-printing."""

from __future__ import annotations

import json
import logging
import textwrap

from .constants import DATA_LANGUAGES
from .models import CodeBlock, FormatOptions

logger = logging.getLogger(__name__)

OPENING_BRACKETS = "{["
CLOSING_BRACKETS = "}]"


def is_data_language(language: str, data_languages: tuple[str, ...] = DATA_LANGUAGES) -> bool:
    return language.strip().lower() in data_languages


def _reject_duplicate_keys(pairs: list[tuple[str, object]]) -> dict[str, object]:
    keys = [key for key, _ in pairs]
    if len(keys) != len(set(keys)):
        raise ValueError("duplicate object key")
    return dict(pairs)


def format_data_fallback(lines: list[str], depth: int, options: FormatOptions) -> list[str]:
    """Re-indent data that failed to parse by tracking bracket depth.

    Each non-blank line is trimmed. A line starting with a closing bracket
    dedents before it is emitted; a line ending with an opening bracket
    indents the lines after it. Never raises.

    Examples:
        format_data_fallback(['{"a": [', "1", "]"], 0, FormatOptions(indent_width=2))
        # ['{"a": [', "  1", "]"]
    """
    prefix = options.indent(depth)
    result = []
    level = 0

    for line in lines:
        trimmed = line.strip()
        if not trimmed:
            continue

        if trimmed[0] in CLOSING_BRACKETS:
            level = max(0, level - 1)

        result.append(prefix + options.indent(level) + trimmed)

        if trimmed[-1] in OPENING_BRACKETS:
            level += 1

    return result


def format_data_block(lines: list[str], depth: int, options: FormatOptions) -> list[str]:
    """Pretty-print JSON content at the given tag depth.

    The content is parsed and dumped again with one indent unit per nesting
    level, keeping key order and non-ASCII characters. Content that does not
    parse (including objects with duplicate keys, which would lose a value)
    goes through `format_data_fallback` instead.

    Args:
        lines: Lines buffered between the fences.
        depth: Tag depth used as the base indentation.
        options: Indentation preferences.

    Returns:
        list[str]: Formatted content lines, without the fences.
    """
    content = "\n".join(line.strip() for line in lines)
    try:
        value = json.loads(content, object_pairs_hook=_reject_duplicate_keys)
    except (ValueError, RecursionError) as error:
        logger.debug("Embedded data did not parse, using bracket indentation: %s", error)
        return format_data_fallback(lines, depth, options)

    indent = options.indent_width if options.use_spaces else "\t"
    dumped = json.dumps(value, indent=indent, ensure_ascii=False)

    prefix = options.indent(depth)
    return [prefix + line if line.strip() else "" for line in dumped.split("\n")]


def format_code_lines(lines: list[str], depth: int, options: FormatOptions) -> list[str]:
    """Indent code content to the tag depth, keeping its relative indentation.

    Whitespace common to every non-blank line is removed before the depth
    indentation is applied. Blank lines are emitted empty.
    """
    prefix = options.indent(depth)
    dedented = textwrap.dedent("\n".join(lines)).split("\n") if lines else []
    return [prefix + line if line.strip() else "" for line in dedented]


def render_code_block(
    block: CodeBlock,
    depth: int,
    options: FormatOptions,
    data_languages: tuple[str, ...] = DATA_LANGUAGES,
) -> list[str]:
    """Render a closed code block, fences included, at the given tag depth.

    Args:
        block: Block collected by the dispatcher.
        depth: Tag depth used as the base indentation.
        options: Indentation preferences.
        data_languages: Languages whose content is pretty-printed as JSON.

    Returns:
        list[str]: Opening fence, content and closing fence lines.

    Examples:
        render_code_block(CodeBlock("json", "```", ['{"a":1}']), 0, FormatOptions())
        # ["```json", "{", '    "a": 1', "}", "```"]
    """
    prefix = options.indent(depth)
    result = [prefix + block.fence + block.language]

    has_content = any(line.strip() for line in block.lines)
    if has_content and is_data_language(block.language, data_languages):
        result.extend(format_data_block(block.lines, depth, options))
    else:
        result.extend(format_code_lines(block.lines, depth, options))

    result.append(prefix + block.fence)
    return result
