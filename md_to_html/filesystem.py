"""Filesystem helpers for md-to-html."""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TextIO

from .constants import (
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_MAX_LINE_LENGTH,
    DEFAULT_OUTPUT_SUFFIX,
    MARKDOWN_EXTENSIONS,
)

MAX_FILE_SIZE_ENV_VAR = "MD_TO_HTML_MAX_FILE_SIZE"
MAX_LINE_LENGTH_ENV_VAR = "MD_TO_HTML_MAX_LINE_LENGTH"


def _positive_int_from_env(env_var: str, default: int) -> int:
    env_value = os.environ.get(env_var)
    if env_value is None:
        return default

    try:
        value = int(env_value)
    except ValueError as error:
        error_message = f"Invalid value for {env_var}: {env_value} (expected positive integer)"
        raise ValueError(error_message) from error

    if value <= 0:
        error_message = f"{env_var} must be a positive integer, got {value}."
        raise ValueError(error_message)

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
        os.environ["MD_TO_HTML_MAX_FILE_SIZE"] = "204800"
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


def normalize_filepath(raw_path: str) -> Path:
    """Resolve and validate a Markdown input path.

    Args:
        raw_path: User-supplied path to a Markdown file (absolute or relative).

    Returns:
        Path: Absolute path to the Markdown file.

    Raises:
        ValueError: If the path does not exist, is not a regular file, or uses
            an unsupported extension.

    Examples:
        normalize_filepath("docs/README.md")
        normalize_filepath("~/notes.md")
    """
    path = Path(raw_path).expanduser()

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        error_message = f"{path} does not exist."
        raise ValueError(error_message) from error
    except OSError as error:
        error_message = f"Error resolving {path}: {error}"
        raise ValueError(error_message) from error

    if not resolved.is_file():
        error_message = f"{resolved} is not a regular file."
        raise ValueError(error_message)

    if resolved.suffix.lower() not in MARKDOWN_EXTENSIONS:
        error_message = f"{resolved} is not a Markdown file.\n"
        error_message += f"Supported extensions are: {', '.join(MARKDOWN_EXTENSIONS)}"
        raise ValueError(error_message)

    return resolved


def derive_output_path(
    input_path: Path, output_dir: Path | None = None, suffix: str = DEFAULT_OUTPUT_SUFFIX
) -> Path:
    """Build the HTML path for a Markdown input.

    Args:
        input_path: Markdown file being converted.
        output_dir: Directory for the output; defaults to the input's directory.
        suffix: Extension for the output file, including the leading dot.

    Returns:
        Path: ``<output_dir>/<stem><suffix>``.

    Examples:
        derive_output_path(Path("docs/guide.md"))  # Path("docs/guide.html")
    """
    directory = input_path.parent if output_dir is None else output_dir
    return directory / f"{input_path.stem}{suffix}"


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for a regular file.

    Args:
        filepath: Path to the file.

    Returns:
        os.stat_result: File metadata.

    Raises:
        IOError: If the path is inaccessible or not a regular file.
    """
    try:
        stat_result = os.stat(filepath)
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error

    if not stat.S_ISREG(stat_result.st_mode):
        error_message = f"{filepath} is not a regular file."
        raise IOError(error_message)

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Guard against files that exceed the configured maximum size.

    Raises:
        IOError: If `stat_result.st_size` exceeds `max_size`.
    """
    if stat_result.st_size > max_size:
        error_message = f"{filepath} exceeds the maximum allowed size of {max_size} bytes."
        raise IOError(error_message)


def safe_read(filepath: Path) -> TextIO:
    """Open a file for reading with consistent error handling.

    Args:
        filepath: Path to the file.

    Returns:
        TextIO: File handle opened for reading in UTF-8.

    Raises:
        IOError: If the path is missing, inaccessible, or not a file.

    Examples:
        with safe_read(Path("README.md")) as handle:
            first_line = handle.readline()
    """
    try:
        return open(filepath, "r", encoding="UTF-8")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error


def iter_markdown_lines(lines: Iterable[str]) -> Iterator[tuple[int, str]]:
    """Yield numbered, non-blank lines with their line endings removed.

    Args:
        lines: Raw lines, such as an open text file or an `io.StringIO`
            opened with universal newlines.

    Yields:
        tuple[int, str]: One-based source line number and the line text.
            Zero-length lines are skipped; whitespace-only lines are kept.

    Examples:
        list(iter_markdown_lines(["# A\\n", "\\n", "b\\r\\n"]))
        # [(1, "# A"), (3, "b")]
    """
    for line_number, line in enumerate(lines, start=1):
        if line.endswith("\n"):
            line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
        if not line:
            continue
        yield line_number, line


def write_html(output_path: Path, html_lines: Iterable[str]) -> None:
    """Write HTML lines to `output_path` atomically.

    Lines are written in order to a temporary file in the destination
    directory, which then replaces `output_path`. The temporary file is
    removed on every exit path.

    Args:
        output_path: Destination file.
        html_lines: Lines to write, each already ending with a newline.

    Raises:
        OSError: If the temporary file cannot be written or moved into place.

    Examples:
        write_html(Path("README.html"), ["<h1>Title</h1>\\n"])
    """
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=output_path.parent, suffix=".tmp"
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.writelines(html_lines)

            tmp_file.flush()
            os.fsync(tmp_file.fileno())

        # NamedTemporaryFile creates files with 0600
        os.chmod(temp_path, 0o644)
        os.replace(temp_path, output_path)
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass
