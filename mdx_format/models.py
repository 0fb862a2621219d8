"""Data models for mdx-format."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class FormatterMode(Enum):
    """Line modes used while walking an MDX document.

    Exactly one mode is active at a time.

    Attributes:
        NORMAL: Prose, tags, imports and exports.
        FRONTMATTER: Inside the leading ``---`` metadata block.
        CODE_BLOCK: Inside a fenced code block.
        TABLE: Buffering a run of pipe-delimited rows.
        TAG_ATTRIBUTE: Inside a backtick template attribute of a tag head.
    """

    NORMAL = auto()
    FRONTMATTER = auto()
    CODE_BLOCK = auto()
    TABLE = auto()
    TAG_ATTRIBUTE = auto()


@dataclass
class FormatOptions:
    """Indentation preferences supplied by the caller.

    Attributes:
        indent_width: Number of spaces per nesting level when `use_spaces` is set.
        use_spaces: Indent with spaces when True, with one tab per level otherwise.
    """

    indent_width: int = 4
    use_spaces: bool = True

    @property
    def indent_unit(self) -> str:
        return " " * self.indent_width if self.use_spaces else "\t"

    def indent(self, depth: int) -> str:
        return self.indent_unit * depth


@dataclass
class FormatterState:
    """Mutable state for one formatting pass.

    The mode only changes through the transition methods below, so the
    buffers never belong to a mode other than the active one.

    Attributes:
        tag_depth: Number of currently open, non-self-closing tags.
        mode: Active line mode.
        code_language: Language declared on the open code fence.
        code_fence: Fence run (for example ````` ``` `````) that opened the block.
        code_block_buffer: Lines buffered inside the open code block.
        code_block_source: Raw lines of the open code block, opening fence included.
        table_buffer: Trimmed rows of the table being buffered.
        tag_attribute_base_depth: Depth of the tag head that opened a template attribute.
        tag_head_open: Whether a tag head was started on an earlier line and has
            not reached its closing `>` yet.
    """

    tag_depth: int = 0
    mode: FormatterMode = FormatterMode.NORMAL
    code_language: str = ""
    code_fence: str = ""
    code_block_buffer: list[str] = field(default_factory=list)
    code_block_source: list[str] = field(default_factory=list)
    table_buffer: list[str] = field(default_factory=list)
    tag_attribute_base_depth: int = 0
    tag_head_open: bool = False

    def push_tag(self) -> None:
        self.tag_depth += 1

    def pop_tag(self) -> None:
        self.tag_depth = max(0, self.tag_depth - 1)

    def enter_frontmatter(self) -> None:
        self.mode = FormatterMode.FRONTMATTER

    def exit_frontmatter(self) -> None:
        self.mode = FormatterMode.NORMAL

    def open_code_block(self, fence: str, language: str, source_line: str) -> None:
        self.mode = FormatterMode.CODE_BLOCK
        self.code_fence = fence
        self.code_language = language
        self.code_block_buffer = []
        self.code_block_source = [source_line]

    def close_code_block(self) -> CodeBlock:
        """Leave code mode and hand back the buffered block."""
        block = CodeBlock(
            language=self.code_language,
            fence=self.code_fence,
            lines=self.code_block_buffer,
        )
        self.mode = FormatterMode.NORMAL
        self.code_fence = ""
        self.code_language = ""
        self.code_block_buffer = []
        self.code_block_source = []
        return block

    def start_table(self) -> None:
        self.mode = FormatterMode.TABLE
        self.table_buffer = []

    def end_table(self) -> list[str]:
        """Leave table mode and hand back the buffered rows."""
        rows = self.table_buffer
        self.mode = FormatterMode.NORMAL
        self.table_buffer = []
        return rows

    def enter_tag_attribute(self) -> None:
        self.mode = FormatterMode.TAG_ATTRIBUTE
        self.tag_attribute_base_depth = self.tag_depth
        self.tag_head_open = False

    def exit_tag_attribute(self) -> None:
        self.mode = FormatterMode.NORMAL
        self.tag_attribute_base_depth = 0

    def open_tag_head(self) -> None:
        self.tag_head_open = True

    def close_tag_head(self) -> None:
        self.tag_head_open = False


@dataclass
class CodeBlock:
    """A fenced code block collected by the dispatcher.

    Attributes:
        language: Declared language (the fence info string), possibly empty.
        fence: Fence run that opened and closed the block.
        lines: Buffered content lines.
    """

    language: str
    fence: str
    lines: list[str]


@dataclass
class ParsedTable:
    """A pipe table split into cells.

    Attributes:
        headers: Header cells.
        separator: Alignment markers, one per header.
        rows: Data rows, each padded with empty cells up to ``len(headers)``.
    """

    headers: list[str]
    separator: list[str]
    rows: list[list[str]]


@dataclass
class FormatResult:
    """Outcome of a guarded formatting pass.

    Attributes:
        text: Formatted text, or the original text when nothing was done.
        changed: Whether `text` differs from the input.
        error: Description of the failure when the pass was abandoned.
    """

    text: str
    changed: bool = False
    error: str | None = None


@dataclass(frozen=True)
class TextEdit:
    """Replacement of the character range ``[start, end)`` with `new_text`."""

    start: int
    end: int
    new_text: str


class BlockType(Enum):
    """Kinds of top-level regions found by `split_blocks`."""

    FRONTMATTER = "frontmatter"
    MARKDOWN = "markdown"
    JSX = "jsx"
    IMPORT = "import"
    EXPORT = "export"


@dataclass
class DocumentBlock:
    """A run of consecutive lines sharing one `BlockType`.

    Attributes:
        type: Block kind.
        content: Lines of the block joined with ``\\n``.
        start_line: Zero-based index of the first line.
        end_line: Zero-based index of the last line (inclusive).
    """

    type: BlockType
    content: str
    start_line: int
    end_line: int
