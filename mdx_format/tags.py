"""Tag depth tracking for component markup lines."""

from __future__ import annotations

import re

from .constants import (
    SPLIT_ELEMENTS,
    TAG_NAME_PATTERN,
    TEMPLATE_ATTRIBUTE_END_PATTERN,
    TEMPLATE_ATTRIBUTE_PATTERN,
    VOID_ELEMENTS,
)
from .models import FormatOptions, FormatterState

TEMPLATE_CLOSE_PATTERN = re.compile(r"`\s*\}")


def tag_name(line: str) -> str | None:
    """Return the name of the tag opening `line`.

    Fragments (``<>``) have an empty name; lines that do not open a tag
    return None.

    Examples:
        tag_name('<Card title="x">')  # "Card"
        tag_name("<>")  # ""
    """
    if line.startswith("<>"):
        return ""
    match = TAG_NAME_PATTERN.match(line)
    return match.group(1) if match else None


def is_complete_element(line: str) -> bool:
    """Check whether `line` opens a tag and also closes it.

    Examples:
        is_complete_element("<b>bold</b>")  # True
        is_complete_element("<Card>")  # False
    """
    name = tag_name(line)
    if name is None:
        return False
    return f"</{name}>" in line[1:]


def split_element(line: str) -> tuple[str, str, str] | None:
    """Split a one-line element whose children belong on their own line.

    Only names in `SPLIT_ELEMENTS` are split, and only when the inner content
    is non-empty and holds no nested element of the same name.

    Returns:
        tuple[str, str, str] | None: Opening tag, trimmed content and closing
            tag, or None when the line is left as-is.

    Examples:
        split_element("<Step>Install</Step>")  # ("<Step>", "Install", "</Step>")
    """
    name = tag_name(line)
    if name not in SPLIT_ELEMENTS:
        return None

    escaped = re.escape(name)
    match = re.match(rf"^(<{escaped}\b[^>]*>)(.*)(</{escaped}>)$", line)
    if not match:
        return None

    opening, content, closing = match.groups()
    content = content.strip()
    if not content or f"<{name}" in content:
        return None
    return opening, content, closing


def opens_template_attribute(line: str) -> bool:
    """Check whether a tag head line starts a backtick template it does not close."""
    match = TEMPLATE_ATTRIBUTE_PATTERN.search(line)
    if not match:
        return False
    return line[match.start() :].count("`") % 2 == 1


def track_tag(state: FormatterState, line: str, options: FormatOptions) -> list[str]:
    """Emit a trimmed line starting with ``<`` and update the tag depth.

    Args:
        state: Formatter state; `tag_depth` and possibly `mode` are updated.
        line: Trimmed line starting with ``<``.
        options: Indentation preferences.

    Returns:
        list[str]: Lines to emit, normally one; three when a split element
            is spread over several lines.

    Examples:
        state = FormatterState()
        track_tag(state, "<Card>", FormatOptions())  # ["<Card>"], depth becomes 1
    """
    name = tag_name(line)
    state.close_tag_head()

    if line.startswith("<!") or (name in VOID_ELEMENTS and line.endswith(">")):
        return [options.indent(state.tag_depth) + line]

    if line.startswith("</"):
        state.pop_tag()
        return [options.indent(state.tag_depth) + line]

    if line.endswith("/>"):
        return [options.indent(state.tag_depth) + line]

    if is_complete_element(line):
        parts = split_element(line)
        if parts is None:
            return [options.indent(state.tag_depth) + line]
        opening, content, closing = parts
        return [
            options.indent(state.tag_depth) + opening,
            options.indent(state.tag_depth + 1) + content,
            options.indent(state.tag_depth) + closing,
        ]

    if line.endswith(">"):
        emitted = options.indent(state.tag_depth) + line
        state.push_tag()
        return [emitted]

    emitted = options.indent(state.tag_depth) + line
    if opens_template_attribute(line):
        state.enter_tag_attribute()
    else:
        state.open_tag_head()
    return [emitted]


def is_attribute_continuation(line: str) -> bool:
    """Check whether a trimmed line closes a multi-line tag head.

    Examples:
        is_attribute_continuation('title="Setup">')  # True
        is_attribute_continuation("plain text")  # False
    """
    if line.startswith("<"):
        return False
    if "=" not in line and "{" not in line:
        return False
    return line.endswith(">")


def track_attribute_continuation(
    state: FormatterState, line: str, options: FormatOptions
) -> list[str]:
    emitted = options.indent(state.tag_depth) + line
    state.close_tag_head()
    if not line.endswith("/>"):
        state.push_tag()
    return [emitted]


def track_template_line(state: FormatterState, line: str, options: FormatOptions) -> list[str]:
    """Handle a line inside a backtick template attribute.

    Template lines are emitted untouched. The line that ends the tag head
    (``}>`` or ``}/>``) is emitted at the depth of the tag that opened the
    template and leaves template mode; ``}>`` opens the tag. A line that
    only closes the template leaves template mode without opening the tag,
    so the attributes after it are handled as a regular tag head.
    """
    trimmed = line.strip()

    if TEMPLATE_ATTRIBUTE_END_PATTERN.search(trimmed):
        emitted = options.indent(state.tag_attribute_base_depth) + trimmed
        state.exit_tag_attribute()
        if not trimmed.endswith("/>"):
            state.push_tag()
        return [emitted]

    if TEMPLATE_CLOSE_PATTERN.match(trimmed):
        emitted = options.indent(state.tag_attribute_base_depth) + trimmed
        state.exit_tag_attribute()
        state.open_tag_head()
        return [emitted]

    return [line]


def track_tag_head_line(state: FormatterState, line: str, options: FormatOptions) -> list[str]:
    """Emit a trimmed line that continues an open multi-line tag head.

    Attribute lines stay at the depth of the tag. A line that closes the head
    opens the tag (unless self-closing); a line that starts a backtick
    template attribute switches to template mode.

    Examples:
        state = FormatterState(tag_head_open=True)
        track_tag_head_line(state, 'title="Setup">', FormatOptions())
        # ['title="Setup">'], depth becomes 1
    """
    if is_attribute_continuation(line):
        return track_attribute_continuation(state, line, options)

    emitted = options.indent(state.tag_depth) + line
    if opens_template_attribute(line):
        state.enter_tag_attribute()
    return [emitted]
