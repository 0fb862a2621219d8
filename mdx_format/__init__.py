"""
mdx-format: canonical re-indentation for MDX documents.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    mdx-format docs/index.mdx --in-place

Library Usage:
    from pathlib import Path
    from mdx_format import FormatOptions, format_text

    content = Path("index.mdx").read_text()
    result = format_text(content, FormatOptions(indent_width=2))
    if result.changed:
        Path("index.mdx").write_text(result.text)
"""

from .blocks import split_blocks
from .config import ConfigError, FormatterConfig, build_config, load_config
from .exceptions import FormatError, FormatFailedError, InvalidOptionsError
from .formatter import format_document, format_text
from .host import FormattingProvider, apply_edits
from .models import BlockType, DocumentBlock, FormatOptions, FormatResult, TextEdit
from .tables import format_table

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "format_document",
    "format_text",
    "format_table",
    "split_blocks",
    # Editor integration
    "FormattingProvider",
    "apply_edits",
    # Data models
    "BlockType",
    "DocumentBlock",
    "FormatOptions",
    "FormatResult",
    "TextEdit",
    # Configuration
    "FormatterConfig",
    "build_config",
    "load_config",
    # Exceptions
    "ConfigError",
    "FormatError",
    "FormatFailedError",
    "InvalidOptionsError",
    # Version
    "__version__",
]
