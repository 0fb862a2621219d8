"""Split MDX documents into frontmatter, markdown, JSX and module blocks."""

from __future__ import annotations

import re

from .constants import CODE_FENCE_PATTERN, FRONTMATTER_MARKER
from .formatter import closes_fence
from .models import BlockType, DocumentBlock

JSX_LINE_PATTERNS = (
    re.compile(r"^<[A-Z]"),  # component
    re.compile(r"</[A-Z]"),  # component closing tag
    re.compile(r"^\{.*\}$"),  # expression
    re.compile(r"^<[a-z]+.*/>$"),  # self-closing element
)


def is_jsx_line(line: str) -> bool:
    """Check whether a line holds component markup or an expression.

    Examples:
        is_jsx_line('<Card title="x">')  # True
        is_jsx_line("<div>plain html</div>")  # False
    """
    trimmed = line.strip()
    if "={" in trimmed:
        return True
    return any(pattern.search(trimmed) for pattern in JSX_LINE_PATTERNS)


def classify_line(line: str) -> BlockType:
    trimmed = line.strip()
    if trimmed.startswith("import "):
        return BlockType.IMPORT
    if trimmed.startswith("export "):
        return BlockType.EXPORT
    if is_jsx_line(trimmed):
        return BlockType.JSX
    return BlockType.MARKDOWN


def _make_block(block_type: BlockType, lines: list[str], start: int, end: int) -> DocumentBlock:
    return DocumentBlock(
        type=block_type,
        content="\n".join(lines[start : end + 1]),
        start_line=start,
        end_line=end,
    )


def split_blocks(text: str) -> list[DocumentBlock]:
    """Group consecutive lines of the same kind into blocks.

    Leading frontmatter forms one block. Lines inside fenced code blocks are
    always markdown, so markup shown in examples is not mistaken for JSX.

    Args:
        text: Full document text.

    Returns:
        list[DocumentBlock]: Blocks in document order, covering every line.

    Examples:
        [block.type for block in split_blocks("import X from 'x'\\n\\n<X />")]
        # [BlockType.IMPORT, BlockType.MARKDOWN, BlockType.JSX]
    """
    lines = [line.removesuffix("\r") for line in text.split("\n")]
    blocks: list[DocumentBlock] = []
    block_type: BlockType | None = None
    block_start = 0
    in_frontmatter = False
    fence = ""

    for index, line in enumerate(lines):
        trimmed = line.strip()

        if index == 0 and trimmed == FRONTMATTER_MARKER:
            in_frontmatter = True
            block_type = BlockType.FRONTMATTER
            continue

        if in_frontmatter:
            if trimmed == FRONTMATTER_MARKER:
                in_frontmatter = False
                blocks.append(_make_block(BlockType.FRONTMATTER, lines, block_start, index))
                block_type = None
            continue

        if fence:
            if closes_fence(fence, trimmed):
                fence = ""
            line_type = BlockType.MARKDOWN
        else:
            fence_match = CODE_FENCE_PATTERN.match(trimmed)
            if fence_match:
                fence = fence_match.group("fence")
                line_type = BlockType.MARKDOWN
            else:
                line_type = classify_line(trimmed)

        if line_type is not block_type:
            if block_type is not None:
                blocks.append(_make_block(block_type, lines, block_start, index - 1))
            block_type = line_type
            block_start = index

    if block_type is not None:
        blocks.append(_make_block(block_type, lines, block_start, len(lines) - 1))

    return blocks
