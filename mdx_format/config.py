"""Formatter settings read from TOML files."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path

from .constants import DATA_LANGUAGES, DEFAULT_MAX_FILE_SIZE
from .models import FormatOptions

# File name and candidate tables, in lookup order within one directory
CONFIG_SOURCES: tuple[tuple[str, tuple[tuple[str, ...], ...]], ...] = (
    ("pyproject.toml", (("tool", "mdx-format"),)),
    (".mdx-format.toml", (("mdx-format",), ("tool", "mdx-format"))),
)


@dataclass
class FormatterConfig:
    """Settings for a formatting run.

    Attributes:
        enable: When False, documents are returned unchanged.
        indent_width: Spaces per nesting level.
        use_spaces: Indent with spaces, or with one tab per level.
        data_languages: Fence languages whose content is pretty-printed as JSON.
        max_file_size: Largest file, in bytes, the CLI will read.

    Examples:
        FormatterConfig(indent_width=2, data_languages=("json", "jsonc"))
    """

    enable: bool = True

    indent_width: int = 4
    use_spaces: bool = True

    data_languages: tuple[str, ...] = DATA_LANGUAGES

    max_file_size: int = DEFAULT_MAX_FILE_SIZE


class ConfigError(ValueError):
    """Raised for configuration tables or values the formatter cannot use."""


def load_config(search_path: Path) -> FormatterConfig:
    """Return the configuration that applies to files under `search_path`.

    Each directory from `search_path` up to the filesystem root is checked
    for `pyproject.toml` (``[tool.mdx-format]``), then `.mdx-format.toml`
    (``[mdx-format]`` or ``[tool.mdx-format]``). The first table found wins.
    Unreadable or malformed TOML files are ignored.

    Args:
        search_path: Directory where the lookup starts.

    Returns:
        FormatterConfig: The configuration found, or the defaults.

    Raises:
        ConfigError: If the matching table is not a table or has keys that
            are not settings.

    Examples:
        load_config(Path("docs/guides"))
    """
    for directory in (search_path.resolve(), *search_path.resolve().parents):
        for filename, table_paths in CONFIG_SOURCES:
            config_file = directory / filename
            document = _read_toml(config_file)
            if document is None:
                continue
            for table_path in table_paths:
                found, table = _lookup(document, table_path)
                if found:
                    return normalize_config(_config_from_table(table, config_file, table_path))

    return FormatterConfig()


def _read_toml(config_file: Path) -> dict | None:
    if not config_file.is_file():
        return None
    try:
        return tomllib.loads(config_file.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError):
        return None


def _lookup(document: dict, table_path: tuple[str, ...]) -> tuple[bool, object]:
    node: object = document
    for key in table_path:
        if not isinstance(node, dict) or key not in node:
            return False, None
        node = node[key]
    return True, node


def _config_from_table(
    table: object, config_file: Path, table_path: tuple[str, ...]
) -> FormatterConfig:
    location = f"`[{'.'.join(table_path)}]` in {config_file}"

    if not isinstance(table, dict):
        raise ConfigError(f"Expected a table for {location}")

    known = {field.name for field in fields(FormatterConfig)}
    unknown = sorted(set(table) - known)
    if unknown:
        raise ConfigError(f"Unknown setting(s) {', '.join(unknown)} for {location}")

    return FormatterConfig(**table)


def normalize_config(config: FormatterConfig) -> FormatterConfig:
    """Lowercase data languages and store them as a tuple."""
    languages = config.data_languages
    if isinstance(languages, str):
        languages = [languages]
    if isinstance(languages, (list, tuple)):
        languages = tuple(
            language.strip().lower() if isinstance(language, str) else language
            for language in languages
        )
    return replace(config, data_languages=languages)


def validate_config(config: FormatterConfig) -> None:
    """Check every setting of `config`.

    Raises:
        ConfigError: If a flag is not a boolean, `indent_width` or
            `max_file_size` is not a positive integer, or `data_languages`
            holds anything but non-empty strings.
    """
    config = normalize_config(config)

    for name in ("enable", "use_spaces"):
        if not isinstance(getattr(config, name), bool):
            raise ConfigError(f"`{name}` must be a boolean")

    for name in ("indent_width", "max_file_size"):
        value = getattr(config, name)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{name}` must be an integer")
        if value <= 0:
            raise ConfigError(f"`{name}` must be a positive integer")

    languages = config.data_languages
    if not isinstance(languages, tuple) or not all(
        isinstance(language, str) and language for language in languages
    ):
        raise ConfigError("`data_languages` must be a list of non-empty strings")


def apply_overrides(config: FormatterConfig, **overrides: object) -> FormatterConfig:
    """Return `config` with the given settings replaced.

    Overrides set to None are skipped; `config` itself is returned when
    nothing is left to apply.

    Examples:
        apply_overrides(config, indent_width=2, use_spaces=None)
    """
    changes = {name: value for name, value in overrides.items() if value is not None}
    return replace(config, **changes) if changes else config


def build_config(search_path: Path, **overrides: object) -> FormatterConfig:
    """Load the configuration for `search_path`, apply overrides and validate it.

    Raises:
        ConfigError: If the configuration file or the final values are invalid.
    """
    config = apply_overrides(load_config(search_path), **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def to_options(config: FormatterConfig) -> FormatOptions:
    return FormatOptions(indent_width=config.indent_width, use_spaces=config.use_spaces)
