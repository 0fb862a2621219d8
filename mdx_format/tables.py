"""Pipe table parsing and column alignment."""

from __future__ import annotations

import logging

from .constants import ALIGNMENT_MARKER_PATTERN, MIN_COLUMN_WIDTH, TABLE_SEPARATOR_PATTERN
from .models import FormatOptions, ParsedTable

logger = logging.getLogger(__name__)


def is_escaped(text: str, pos: int) -> bool:
    """Determine whether a character is escaped by preceding backslashes.

    Counts consecutive backslashes immediately before `pos`; an odd count marks
    the character as escaped.

    Args:
        text: Text containing the character.
        pos: Zero-based index of the character to inspect.

    Returns:
        bool: True when the character is escaped, otherwise False.

    Examples:
        is_escaped("\\\\|", 2)  # False, two backslashes
        is_escaped("\\|", 1)  # True, one backslash
    """
    backslash_count = 0
    i = pos - 1
    while i >= 0 and text[i] == "\\":
        backslash_count += 1
        i -= 1

    return backslash_count % 2 == 1


def find_inline_code_spans(text: str) -> list[tuple[int, int]]:
    """Locate inline code spans delimited by equal-length backtick runs.

    Args:
        text: The text to scan for inline code spans.

    Returns:
        list[tuple[int, int]]: Start (inclusive) and end (exclusive) positions
            for each inline code span.

    Examples:
        find_inline_code_spans("`a|b`")  # [(0, 5)]
    """
    spans = []
    i = 0

    while i < len(text):
        if text[i] == "`" and not is_escaped(text, i):
            start = i
            backtick_count = 0
            while i < len(text) and text[i] == "`":
                backtick_count += 1
                i += 1

            while i < len(text):
                if text[i] == "`" and not is_escaped(text, i):
                    close_count = 0
                    while i < len(text) and text[i] == "`":
                        close_count += 1
                        i += 1

                    if close_count == backtick_count:
                        spans.append((start, i))
                        break
                else:
                    i += 1
        else:
            i += 1

    return spans


def is_table_row(line: str) -> bool:
    """Check whether a trimmed line has the shape of a table row.

    Examples:
        is_table_row("| a | b |")  # True
        is_table_row("no pipes")  # False
    """
    if "|" not in line:
        return False
    return len(line) > 1 or bool(TABLE_SEPARATOR_PATTERN.match(line))


def parse_table_row(row: str) -> list[str]:
    """Split a table row into trimmed cells.

    One leading and one trailing pipe are dropped. Pipes escaped with a
    backslash or inside inline code do not split cells.

    Examples:
        parse_table_row("| a | `b|c` |")  # ["a", "`b|c`"]
    """
    row = row.strip()
    code_spans = find_inline_code_spans(row)
    pipes = [
        index
        for index, character in enumerate(row)
        if character == "|"
        and not is_escaped(row, index)
        and not any(start <= index < end for start, end in code_spans)
    ]

    start, end = 0, len(row)
    if pipes and pipes[0] == 0:
        start = 1
        pipes = pipes[1:]
    if pipes and pipes[-1] == len(row) - 1:
        end = len(row) - 1
        pipes = pipes[:-1]

    cells = []
    cursor = start
    for pipe in pipes:
        cells.append(row[cursor:pipe].strip())
        cursor = pipe + 1
    cells.append(row[cursor:end].strip())
    return cells


def parse_table(rows: list[str]) -> ParsedTable | None:
    """Parse buffered rows into a table.

    Returns None when the rows do not form a table: fewer than two rows,
    a separator whose cell count differs from the header, or a separator
    cell that is not an alignment marker.
    """
    if len(rows) < 2:
        return None

    headers = parse_table_row(rows[0])
    separator = parse_table_row(rows[1])
    if len(separator) != len(headers):
        return None
    if not all(ALIGNMENT_MARKER_PATTERN.match(cell) for cell in separator):
        return None

    body = []
    for row in rows[2:]:
        cells = parse_table_row(row)
        cells.extend([""] * (len(headers) - len(cells)))
        body.append(cells)

    return ParsedTable(headers=headers, separator=separator, rows=body)


def column_widths(table: ParsedTable) -> list[int]:
    widths = []
    for index, header in enumerate(table.headers):
        width = len(header)
        for row in table.rows:
            width = max(width, len(row[index]))
        widths.append(max(width, MIN_COLUMN_WIDTH))
    return widths


def _width_for(widths: list[int], index: int) -> int:
    return widths[index] if index < len(widths) else MIN_COLUMN_WIDTH


def render_row(cells: list[str], widths: list[int]) -> str:
    padded = [cell.ljust(_width_for(widths, index)) for index, cell in enumerate(cells)]
    return "| " + " | ".join(padded) + " |"


def render_separator(markers: list[str], widths: list[int]) -> str:
    """Render the alignment row, keeping each column's alignment.

    Examples:
        render_separator([":-:", "-:", "-"], [5, 4, 3])  # "| :---: | ---: | --- |"
    """
    cells = []
    for index, marker in enumerate(markers):
        width = _width_for(widths, index)
        marker = marker.strip()
        if len(marker) > 1 and marker.startswith(":") and marker.endswith(":"):
            cells.append(":" + "-" * max(1, width - 2) + ":")
        elif marker.endswith(":"):
            cells.append("-" * max(1, width - 1) + ":")
        else:
            cells.append("-" * width)
    return "| " + " | ".join(cells) + " |"


def format_table(rows: list[str], depth: int, options: FormatOptions) -> list[str]:
    """Render buffered rows as an aligned table at the given tag depth.

    Args:
        rows: Trimmed candidate rows, in document order.
        depth: Tag depth used as the base indentation.
        options: Indentation preferences.

    Returns:
        list[str]: Output lines. Rows that do not form a valid table are
            returned unchanged apart from the base indentation.

    Examples:
        format_table(["|a|b|", "|-|-|", "|1|22|"], 0, FormatOptions())
    """
    if not rows:
        return []

    prefix = options.indent(depth)
    table = parse_table(rows)
    if table is None:
        logger.debug("Rows do not form a table, keeping %d line(s) as-is", len(rows))
        return [prefix + row for row in rows]

    widths = column_widths(table)
    lines = [render_row(table.headers, widths), render_separator(table.separator, widths)]
    lines.extend(render_row(row, widths) for row in table.rows)
    return [prefix + line for line in lines]
