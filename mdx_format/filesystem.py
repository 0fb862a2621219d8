"""Safe reading and rewriting of documents on disk."""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Callable
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE, MARKDOWN_EXTENSIONS

MAX_FILE_SIZE_ENV_VAR = "MDX_FORMAT_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Return the size limit in bytes, honouring `MDX_FORMAT_MAX_FILE_SIZE`.

    Raises:
        ValueError: If the environment variable is set to anything but a
            positive integer.

    Examples:
        get_max_file_size(default=1024 * 1024)
    """
    raw_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if raw_value is None:
        return default

    try:
        limit = int(raw_value)
    except ValueError:
        limit = 0
    if limit <= 0:
        raise ValueError(
            f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {raw_value!r}."
        )
    return limit


def contains_symlink(path: Path) -> bool:
    """Check `path` and each of its parents for a symbolic link."""
    for candidate in (path, *path.parents):
        try:
            if candidate.is_symlink():
                return True
        except OSError:
            continue
    return False


def normalize_filepath(raw_path: str, base_dir: Path) -> Path:
    """Resolve a user-supplied document path and check that it may be formatted.

    The path must exist, must not go through a symlink, must be a regular
    file inside `base_dir`, and must use one of `MARKDOWN_EXTENSIONS`.

    Args:
        raw_path: Absolute or relative path given on the command line.
        base_dir: Resolved working directory.

    Returns:
        Path: The resolved path.

    Raises:
        ValueError: Describing the first check that failed.
    """
    path = Path(raw_path).expanduser()
    if contains_symlink(path):
        raise ValueError(f"Symlinks are not supported for security reasons: {path}")

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        raise ValueError(f"{path} does not exist.") from error
    except OSError as error:
        raise ValueError(f"Error resolving {path}: {error}") from error

    if not resolved.is_file():
        raise ValueError(f"{resolved} is not a regular file.")

    if not resolved.is_relative_to(base_dir):
        raise ValueError(f"{resolved} is outside of the working directory {base_dir}.")

    if resolved.suffix.lower() not in MARKDOWN_EXTENSIONS:
        raise ValueError(
            f"{resolved} is not an MDX or Markdown file.\n"
            f"Supported extensions are: {', '.join(MARKDOWN_EXTENSIONS)}"
        )

    return resolved


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Stat `filepath` without following symlinks.

    Raises:
        IOError: If the path cannot be accessed or is not a regular file.
    """
    try:
        stat_result = os.lstat(filepath)
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error

    if stat.S_ISLNK(stat_result.st_mode):
        raise IOError(f"Symlinks are not supported: {filepath}.")
    if not stat.S_ISREG(stat_result.st_mode):
        raise IOError(f"{filepath} is not a regular file.")
    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    if stat_result.st_size > max_size:
        raise IOError(f"{filepath} exceeds the maximum allowed size of {max_size} bytes.")


def _fingerprint(stat_result: os.stat_result) -> tuple:
    return (
        stat_result.st_ino,
        stat_result.st_dev,
        stat_result.st_size,
        stat_result.st_mtime_ns,
    )


def ensure_file_unchanged(
    expected_stat: os.stat_result, current_stat: os.stat_result, filepath: Path
):
    """Raise IOError if the file was replaced or modified between two stats."""
    if _fingerprint(expected_stat) != _fingerprint(current_stat):
        raise IOError(f"{filepath} changed during processing; refusing to overwrite.")


def read_document(filepath: Path) -> str:
    """Read a UTF-8 document, keeping its line endings as they are.

    Raises:
        IOError: If the file cannot be opened or is not valid UTF-8.
    """
    try:
        return filepath.read_bytes().decode("utf-8")
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error
    except UnicodeDecodeError as error:
        raise IOError(f"Invalid UTF-8 sequence in {filepath}: {error}") from error


def _copy_ownership(
    source: os.stat_result, target: str, filepath: Path, warn: Callable[[str], None] | None
):
    if not hasattr(os, "chown"):
        return
    try:
        os.chown(target, source.st_uid, source.st_gid)
    except PermissionError:
        if warn is not None:
            warn(
                f"Warning: Could not preserve file ownership for {filepath.name} "
                "(requires elevated privileges)"
            )


def write_document(
    filepath: Path,
    content: str,
    expected_stat: os.stat_result,
    initial_stat: os.stat_result,
    warn: Callable[[str], None] | None = None,
):
    """Replace `filepath` with `content` in one atomic rename.

    The new file keeps the permissions, ownership (when allowed) and access
    time of the old one. Nothing is written if the file no longer matches
    `expected_stat`.

    Args:
        filepath: Document to replace.
        content: Text to write, encoded as UTF-8 with its line endings as given.
        expected_stat: Stat taken after the document was read.
        initial_stat: Stat taken before the document was read.
        warn: Receives non-fatal warnings.

    Raises:
        IOError: If the file changed since `expected_stat` or the rename fails.

    Examples:
        write_document(Path("index.mdx"), formatted, after_read, before_read)
    """
    ensure_file_unchanged(expected_stat, collect_file_stat(filepath), filepath)

    descriptor, temp_name = tempfile.mkstemp(
        dir=filepath.parent, prefix=f".{filepath.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(descriptor, "wb") as stream:
            stream.write(content.encode("utf-8"))
            stream.flush()
            os.fsync(stream.fileno())
        os.chmod(temp_name, stat.S_IMODE(expected_stat.st_mode))
        _copy_ownership(expected_stat, temp_name, filepath, warn)
        os.replace(temp_name, filepath)
    except OSError as error:
        Path(temp_name).unlink(missing_ok=True)
        raise IOError(f"Could not update {filepath}: {error}") from error

    # mtime reflects the rewrite; only the access time is carried over
    os.utime(filepath, ns=(initial_stat.st_atime_ns, filepath.stat().st_mtime_ns))
