from __future__ import annotations

from mdx_format.blocks import classify_line, is_jsx_line, split_blocks
from mdx_format.models import BlockType

DOCUMENT = "\n".join(
    [
        "---",
        "title: x",
        "---",
        "import A from 'a'",
        "import B from 'b'",
        "",
        "# Title",
        "<Card>",
        "text",
        "</Card>",
        "```",
        "<Fake />",
        "```",
        "export const meta = {}",
    ]
)


def test_split_blocks_types_and_ranges():
    blocks = split_blocks(DOCUMENT)

    assert [(block.type, block.start_line, block.end_line) for block in blocks] == [
        (BlockType.FRONTMATTER, 0, 2),
        (BlockType.IMPORT, 3, 4),
        (BlockType.MARKDOWN, 5, 6),
        (BlockType.JSX, 7, 7),
        (BlockType.MARKDOWN, 8, 8),
        (BlockType.JSX, 9, 9),
        (BlockType.MARKDOWN, 10, 12),
        (BlockType.EXPORT, 13, 13),
    ]


def test_split_blocks_content():
    blocks = split_blocks(DOCUMENT)

    assert blocks[0].content == "---\ntitle: x\n---"
    assert blocks[1].content == "import A from 'a'\nimport B from 'b'"
    assert blocks[6].content == "```\n<Fake />\n```"


def test_split_blocks_unclosed_frontmatter():
    blocks = split_blocks("---\na: 1")

    assert len(blocks) == 1
    assert blocks[0].type is BlockType.FRONTMATTER
    assert (blocks[0].start_line, blocks[0].end_line) == (0, 1)


def test_split_blocks_empty_document():
    blocks = split_blocks("")

    assert len(blocks) == 1
    assert blocks[0].type is BlockType.MARKDOWN


def test_is_jsx_line():
    assert is_jsx_line('<Card title="x">')
    assert is_jsx_line("text </Card>")
    assert is_jsx_line("{props.value}")
    assert is_jsx_line("Value prop={x}")
    assert is_jsx_line("<br />")
    assert not is_jsx_line("<div>plain html</div>")
    assert not is_jsx_line("# Heading")


def test_classify_line():
    assert classify_line("import X from 'x'") is BlockType.IMPORT
    assert classify_line("export default X") is BlockType.EXPORT
    assert classify_line("<Card />") is BlockType.JSX
    assert classify_line("plain") is BlockType.MARKDOWN
