"""
Formats an MDX document.
Prints the formatted document to stdout, rewrites it in place, or checks
whether it is already formatted.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from .config import ConfigError, build_config, to_options
from .exceptions import FormatFailedError
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    ensure_file_unchanged,
    get_max_file_size,
    normalize_filepath,
    read_document,
    write_document,
)
from .formatter import format_text

__all__ = ["cli"]

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@click.command()
@click.version_option(package_name="mdx-format")
@click.option("--indent-width", type=int, help="Spaces per nesting level")
@click.option(
    "--use-tabs/--use-spaces",
    "use_tabs",
    default=None,
    help="Indent with tabs instead of spaces",
)
@click.option("--check", is_flag=True, help="Exit with status 1 if the file would change")
@click.option("--in-place", "-i", is_flag=True, help="Rewrite the file instead of printing it")
@click.option("--verbose", "-v", is_flag=True, help="Log debug details to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    indent_width: int | None = None,
    use_tabs: bool | None = None,
    check: bool = False,
    in_place: bool = False,
    verbose: bool = False,
):
    """
    Entry point for formatting an MDX document.

    Args:
        filepath: Path to the MDX or Markdown file to format.
        indent_width: Override for the number of spaces per nesting level.
        use_tabs: Override for indenting with tabs (True) or spaces (False).
        check: Only report whether the file is already formatted.
        in_place: Write the formatted document back to `filepath`.
        verbose: Enable debug logging.

    Returns:
        None.

    Raises:
        click.BadParameter: If the path or configuration overrides are invalid.
        click.ClickException: If filesystem safety checks fail, the formatting
            pass fails, or `--check` finds a file that would change.

    Examples:
        mdx-format docs/index.mdx --indent-width 2 --in-place
    """
    _setup_logging(verbose)

    base_dir = Path.cwd().resolve()
    try:
        filepath = normalize_filepath(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = build_config(
            filepath.parent,
            indent_width=indent_width,
            use_spaces=None if use_tabs is None else not use_tabs,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        initial_stat = collect_file_stat(filepath)
        enforce_file_size(initial_stat, max_file_size, filepath)
        content = read_document(filepath)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    if not config.enable:
        logger.info("Formatting is disabled by configuration")

    result = format_text(
        content,
        to_options(config),
        enabled=config.enable,
        data_languages=config.data_languages,
    )
    if result.error is not None:
        raise click.ClickException(str(FormatFailedError(result.error)))

    if check:
        if result.changed:
            raise click.ClickException(f"{filepath} would be reformatted.")
        return

    if in_place:
        if not result.changed:
            logger.debug("%s is already formatted", filepath)
            return
        try:
            post_read_stat = collect_file_stat(filepath)
            ensure_file_unchanged(initial_stat, post_read_stat, filepath)
            write_document(
                filepath,
                result.text,
                post_read_stat,
                initial_stat,
                warn=lambda message: click.echo(message, err=True),
            )
        except IOError as error:
            raise click.ClickException(str(error)) from error
        return

    click.echo(result.text, nl=False)


if __name__ == "__main__":
    cli()
