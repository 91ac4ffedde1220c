"""Filesystem helpers for the tagdown command line."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import TextIO

from .constants import DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_LINE_LENGTH, DOCUMENT_EXTENSIONS

logger = logging.getLogger(__name__)

MAX_FILE_SIZE_ENV_VAR = "TAGDOWN_MAX_FILE_SIZE"
MAX_LINE_LENGTH_ENV_VAR = "TAGDOWN_MAX_LINE_LENGTH"


def _positive_int_from_env(name: str, default: int) -> int:
    env_value = os.environ.get(name)
    if env_value is None:
        return default

    try:
        value = int(env_value)
    except ValueError as error:
        error_message = f"Invalid value for {name}: {env_value} (expected positive integer)"
        raise ValueError(error_message) from error

    if value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value}.")

    return value


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["TAGDOWN_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    return _positive_int_from_env(MAX_FILE_SIZE_ENV_VAR, default)


def get_max_line_length(default: int = DEFAULT_MAX_LINE_LENGTH) -> int:
    """Resolve the maximum allowed line length.

    Args:
        default: Fallback value in characters when the environment variable is
            unset.

    Returns:
        int: Maximum allowed line length in characters.

    Raises:
        ValueError: If the environment value is not a positive integer.
    """
    return _positive_int_from_env(MAX_LINE_LENGTH_ENV_VAR, default)


def contains_symlink(path: Path) -> bool:
    """Check whether a path or any parent directory is a symlink."""
    for candidate in (path, *path.parents):
        try:
            if candidate.is_symlink():
                return True
        except OSError:
            continue
    return False


def normalize_filepath(raw_path: str, base_dir: Path) -> Path:
    """Resolve and validate a document path under a base directory.

    Args:
        raw_path: User-supplied path to a document (absolute or relative).
        base_dir: Working directory that constrains allowed paths.

    Returns:
        Path: Absolute path to the document.

    Raises:
        ValueError: If the path does not exist, is outside `base_dir`, uses an
            unsupported extension, or traverses a symlink.

    Examples:
        normalize_filepath("docs/CLAUDE.md", Path.cwd())
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

    try:
        resolved.relative_to(base_dir)
    except ValueError as error:
        error_message = f"{resolved} is outside of the working directory {base_dir}."
        raise ValueError(error_message) from error

    if resolved.suffix.lower() not in DOCUMENT_EXTENSIONS:
        error_message = f"{resolved} is not a supported document.\n"
        error_message += f"Supported extensions are: {', '.join(DOCUMENT_EXTENSIONS)}"
        raise ValueError(error_message)

    return resolved


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for a file while disallowing symlinks.

    Raises:
        IOError: If the path is inaccessible, a symlink, or not a regular file.
    """
    try:
        stat_result = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error

    if stat.S_ISLNK(stat_result.st_mode):
        raise IOError(f"Symlinks are not supported: {filepath}.")

    if not stat.S_ISREG(stat_result.st_mode):
        raise IOError(f"{filepath} is not a regular file.")

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Guard against files that exceed the configured maximum size.

    Raises:
        IOError: If `stat_result.st_size` exceeds `max_size`.
    """
    if stat_result.st_size > max_size:
        raise IOError(f"{filepath} exceeds the maximum allowed size of {max_size} bytes.")


def _fingerprint(stat_result: os.stat_result) -> tuple[int | None, int | None, int, int]:
    return (
        getattr(stat_result, "st_ino", None),
        getattr(stat_result, "st_dev", None),
        stat_result.st_size,
        stat_result.st_mtime_ns,
    )


def ensure_file_unchanged(
    expected_stat: os.stat_result, current_stat: os.stat_result, filepath: Path
):
    """Detect changes between two filesystem snapshots.

    Raises:
        IOError: If inode, device, size, or modification time differ.
    """
    if _fingerprint(expected_stat) != _fingerprint(current_stat):
        raise IOError(f"{filepath} changed during processing; refusing to overwrite.")


def safe_read(filepath: Path) -> TextIO:
    """Open a document for reading as UTF-8 with line endings left untouched.

    Line splitting is left to `split_lines`, so a lone ``\\r`` stays part of
    its line.

    Raises:
        IOError: If the path is missing, inaccessible, or not a file.

    Examples:
        with safe_read(Path("CLAUDE.md")) as handle:
            text = handle.read()
    """
    try:
        return open(filepath, "r", encoding="UTF-8", newline="")
    except (FileNotFoundError, PermissionError, IsADirectoryError, NotADirectoryError) as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error


def _copy_ownership(
    source_stat: os.stat_result,
    target: str,
    filepath: Path,
    warn: Callable[[str], None] | None,
):
    uid = getattr(source_stat, "st_uid", None)
    gid = getattr(source_stat, "st_gid", None)
    if uid is None or gid is None or not hasattr(os, "chown"):
        return

    try:
        os.chown(target, uid, gid)
    except PermissionError:
        logger.debug("Ownership of %s not preserved", filepath)
        if warn is not None:
            warn(
                f"Warning: Could not preserve file ownership for {filepath.name} "
                "(requires elevated privileges)"
            )


def write_atomically(
    filepath: Path,
    text: str,
    expected_stat: os.stat_result,
    initial_stat: os.stat_result,
    warn: Callable[[str], None] | None = None,
):
    """Replace a document's contents through a sibling temporary file.

    The new file takes over the original's permissions and, where allowed, its
    ownership. The access time from before the document was read is restored;
    the modification time is left to reflect the rewrite.

    Args:
        filepath: Document to rewrite.
        text: New contents.
        expected_stat: Stat captured after reading, used to detect races.
        initial_stat: Stat captured before reading, used to restore access time.
        warn: Optional callback for non-fatal warnings.

    Raises:
        IOError: If the document changed since it was read or cannot be replaced.

    Examples:
        write_atomically(Path("CLAUDE.md"), formatted, post_stat, pre_stat)
    """
    ensure_file_unchanged(expected_stat, collect_file_stat(filepath), filepath)

    temp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="UTF-8",
            delete=False,
            dir=filepath.parent,
            prefix=f".{filepath.name}.",
        ) as tmp_file:
            temp_name = tmp_file.name
            tmp_file.write(text)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())

        os.chmod(temp_name, stat.S_IMODE(expected_stat.st_mode))
        _copy_ownership(expected_stat, temp_name, filepath, warn)
        os.replace(temp_name, filepath)
        temp_name = None

        os.utime(filepath, ns=(initial_stat.st_atime_ns, filepath.stat().st_mtime_ns))
        logger.debug("Rewrote %s", filepath)
    finally:
        if temp_name is not None:
            Path(temp_name).unlink(missing_ok=True)


def write_output(filepath: Path, text: str):
    """Write generated text to a new or existing output file.

    Raises:
        IOError: If the target is a symlink or cannot be written.
    """
    if filepath.is_symlink():
        raise IOError(f"Symlinks are not supported: {filepath}.")

    try:
        filepath.write_text(text, encoding="UTF-8")
    except OSError as error:
        raise IOError(f"Error writing {filepath}: {error}") from error
    logger.debug("Wrote %d characters to %s", len(text), filepath)
