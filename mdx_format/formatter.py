"""Line-oriented MDX formatting engine."""

from __future__ import annotations

import logging

from .constants import (
    CODE_FENCE_PATTERN,
    DATA_LANGUAGES,
    FRONTMATTER_MARKER,
    MODULE_STATEMENT_PREFIXES,
)
from .data_blocks import render_code_block
from .exceptions import InvalidOptionsError
from .models import FormatOptions, FormatResult, FormatterMode, FormatterState
from .tables import format_table, is_table_row
from .tags import track_tag, track_tag_head_line, track_template_line

logger = logging.getLogger(__name__)


def validate_options(options: FormatOptions) -> None:
    """Reject options that cannot produce an indent unit.

    Raises:
        InvalidOptionsError: If `indent_width` is not a positive integer or
            `use_spaces` is not a boolean.
    """
    width = options.indent_width
    if isinstance(width, bool) or not isinstance(width, int) or width <= 0:
        raise InvalidOptionsError("indent_width", width)
    if not isinstance(options.use_spaces, bool):
        raise InvalidOptionsError("use_spaces", options.use_spaces, "a boolean")


def closes_fence(fence: str, line: str) -> bool:
    """Check whether a trimmed line closes a block opened by `fence`."""
    if not fence or not line or line[0] != fence[0]:
        return False
    return line == fence[0] * len(line) and len(line) >= len(fence)


def _flush_table(state: FormatterState, options: FormatOptions) -> list[str]:
    return format_table(state.end_table(), state.tag_depth, options)


def _process_line(
    state: FormatterState,
    index: int,
    line: str,
    options: FormatOptions,
    data_languages: tuple[str, ...],
) -> list[str]:
    trimmed = line.strip()

    if state.mode is FormatterMode.FRONTMATTER:
        if trimmed == FRONTMATTER_MARKER:
            state.exit_frontmatter()
        return [line]

    if state.mode is FormatterMode.CODE_BLOCK:
        if closes_fence(state.code_fence, trimmed):
            block = state.close_code_block()
            return render_code_block(block, state.tag_depth, options, data_languages)
        state.code_block_buffer.append(line.rstrip())
        state.code_block_source.append(line)
        return []

    if state.mode is FormatterMode.TAG_ATTRIBUTE:
        return track_template_line(state, line, options)

    if index == 0 and trimmed == FRONTMATTER_MARKER:
        state.enter_frontmatter()
        return [line]

    output: list[str] = []
    in_table = state.mode is FormatterMode.TABLE

    if not trimmed:
        if in_table:
            output.extend(_flush_table(state, options))
        output.append("")
        return output

    fence_match = CODE_FENCE_PATTERN.match(trimmed)
    if fence_match:
        if in_table:
            output.extend(_flush_table(state, options))
        state.open_code_block(
            fence_match.group("fence"), fence_match.group("info").strip(), line
        )
        return output

    if is_table_row(trimmed):
        if not in_table:
            state.start_table()
        state.table_buffer.append(trimmed)
        return output

    if in_table:
        output.extend(_flush_table(state, options))

    if trimmed.startswith("<"):
        output.extend(track_tag(state, trimmed, options))
    elif trimmed.startswith(MODULE_STATEMENT_PREFIXES):
        output.append(trimmed)
    elif state.tag_head_open:
        output.extend(track_tag_head_line(state, trimmed, options))
    else:
        output.append(options.indent(state.tag_depth) + trimmed)
    return output


def _finish(state: FormatterState, options: FormatOptions) -> list[str]:
    if state.mode is FormatterMode.TABLE:
        return _flush_table(state, options)

    if state.mode is FormatterMode.CODE_BLOCK:
        # An unterminated block is kept exactly as written.
        source = state.code_block_source
        state.close_code_block()
        logger.debug("Code block opened by %r is never closed", source[0].strip())
        return source

    return []


def format_document(
    text: str,
    options: FormatOptions | None = None,
    data_languages: tuple[str, ...] = DATA_LANGUAGES,
) -> str:
    """Re-indent an MDX document in a single pass.

    Frontmatter is copied verbatim; tag nesting drives the indentation of
    prose, tables and code blocks; pipe tables are aligned; JSON code blocks
    are pretty-printed. Formatting the result again returns it unchanged.

    Args:
        text: Full document text.
        options: Indentation preferences. Defaults to four spaces.
        data_languages: Code fence languages pretty-printed as JSON.

    Returns:
        str: The reformatted document, using the input's line endings.

    Raises:
        InvalidOptionsError: If `options` cannot produce an indent unit.

    Examples:
        format_document("<Card>\\ntext\\n</Card>\\n")
        # "<Card>\\n    text\\n</Card>\\n"
    """
    options = options or FormatOptions()
    validate_options(options)

    newline = "\r\n" if "\r\n" in text else "\n"
    lines = [line.removesuffix("\r") for line in text.split("\n")]

    state = FormatterState()
    output: list[str] = []
    for index, line in enumerate(lines):
        output.extend(_process_line(state, index, line, options, data_languages))
    output.extend(_finish(state, options))

    return newline.join(output)


def format_text(
    text: str,
    options: FormatOptions | None = None,
    *,
    enabled: bool = True,
    data_languages: tuple[str, ...] = DATA_LANGUAGES,
) -> FormatResult:
    """Format a document without letting failures escape.

    Args:
        text: Full document text.
        options: Indentation preferences. Defaults to four spaces.
        enabled: Configuration flag; when False the document is returned as-is.
        data_languages: Code fence languages pretty-printed as JSON.

    Returns:
        FormatResult: The formatted text and whether it changed. When the pass
            fails, the original text is returned with `error` describing why.

    Examples:
        result = format_text(content, FormatOptions(indent_width=2))
        if result.error is None and result.changed:
            path.write_text(result.text)
    """
    if not enabled:
        logger.debug("Formatter disabled, leaving document unchanged")
        return FormatResult(text=text)

    try:
        formatted = format_document(text, options, data_languages)
    except Exception as error:
        logger.exception("MDX formatter error")
        return FormatResult(text=text, error=str(error) or type(error).__name__)

    return FormatResult(text=formatted, changed=formatted != text)
