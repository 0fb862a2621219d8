"""Constants used across the mdx-format package."""

from __future__ import annotations

import re

FRONTMATTER_MARKER = "---"
CODE_FENCE_PATTERN = re.compile(r"^(?P<fence>`{3,}|~{3,})(?P<info>.*)$")

# Tables
MIN_COLUMN_WIDTH = 3
TABLE_SEPARATOR_PATTERN = re.compile(r"^[\s|:\-]+$")
ALIGNMENT_MARKER_PATTERN = re.compile(r"^:?-+:?$")

# Tags
TAG_NAME_PATTERN = re.compile(r"^<([A-Za-z][\w.:-]*)")
TEMPLATE_ATTRIBUTE_PATTERN = re.compile(r"=\s*\{\s*`")
TEMPLATE_ATTRIBUTE_END_PATTERN = re.compile(r"\}\s*/?\s*>$")
SPLIT_ELEMENTS = frozenset({"Step"})
VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)

# Statements passed through without indentation
MODULE_STATEMENT_PREFIXES = ("import ", "export ")

DATA_LANGUAGES = ("json",)
MARKDOWN_EXTENSIONS = (".mdx", ".md", ".markdown")
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
