"""Markdown to HTML conversion."""

from __future__ import annotations

import io
import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from .config import ConfigError, ConverterConfig, validate_config
from .constants import (
    ANCHOR_TEMPLATE,
    HEADER_CLOSE_TAG,
    HEADER_MARKER,
    HEADER_OPEN_TAG,
    HREF_CLOSE,
    HREF_OPEN,
    LINE_TERMINATOR,
    LINK_TEXT_CLOSE,
    LINK_TEXT_OPEN,
    PARAGRAPH_CLOSE_TAG,
    PARAGRAPH_OPEN_TAG,
    SPACE,
)
from .exceptions import ConversionError, LineTooLongError, MalformedLinkError
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    iter_markdown_lines,
    safe_read,
    write_html,
)
from .models import BlockState, ConversionResult, LinkState, ScanState, SkippedLine

logger = logging.getLogger(__name__)


def _handle_header_marker(state: ScanState, character: str) -> None:
    """Count a ``#`` toward the header level, or keep it as text.

    Markers are literal once a block is open; inside a link construct they
    belong to the buffer being captured.

    Args:
        state: Scan state to update.
        character: The marker character.
    """
    if state.link is not LinkState.IDLE or state.in_block:
        _handle_text(state, character)
        return

    state.header_level += 1
    state.block = BlockState.HEADER_SIZE_PENDING


def _handle_link_text_open(
    state: ScanState, character: str, column: int, strict_links: bool
) -> None:
    """Start capturing link text.

    Args:
        state: Scan state to update.
        character: The ``[`` character.
        column: One-based column of `character`.
        strict_links: Whether a ``[`` inside a link target is an error.

    Raises:
        MalformedLinkError: If `strict_links` is set and a link target is
            already being captured.
    """
    if state.link is LinkState.CAPTURING_HREF:
        if strict_links:
            raise MalformedLinkError(character, column)
        state.href += character
        return

    if state.link is LinkState.CAPTURING_TEXT:
        return

    state.link = LinkState.CAPTURING_TEXT
    state.link_text = ""
    state.href = ""


def _handle_link_text_close(state: ScanState) -> None:
    # A "]" is always consumed, even when no link text is open
    if state.link is LinkState.CAPTURING_TEXT:
        state.link = LinkState.IDLE


def _handle_href_open(state: ScanState, character: str, column: int, strict_links: bool) -> None:
    """Start capturing a link target.

    Args:
        state: Scan state to update.
        character: The ``(`` character.
        column: One-based column of `character`.
        strict_links: Whether a ``(`` inside unclosed link text is an error.

    Raises:
        MalformedLinkError: If `strict_links` is set and link text is still open.
    """
    if state.link is LinkState.CAPTURING_TEXT:
        if strict_links:
            raise MalformedLinkError(character, column)
        state.link_text += character
        return

    if state.link is LinkState.CAPTURING_HREF:
        return

    state.link = LinkState.CAPTURING_HREF
    state.href = ""


def _handle_href_close(state: ScanState, character: str) -> None:
    """Emit the buffered anchor, or keep a stray ``)`` as text."""
    if state.link is not LinkState.CAPTURING_HREF:
        _handle_text(state, character)
        return

    state.output.append(ANCHOR_TEMPLATE.format(href=state.href, text=state.link_text))
    state.link = LinkState.IDLE
    state.link_text = ""
    state.href = ""


def _handle_text(state: ScanState, character: str) -> None:
    # Link buffers take precedence over block handling
    if state.link is LinkState.CAPTURING_TEXT:
        state.link_text += character
        return
    if state.link is LinkState.CAPTURING_HREF:
        state.href += character
        return

    if state.block is BlockState.HEADER_SIZE_PENDING and character == SPACE:
        state.output.append(HEADER_OPEN_TAG.format(level=state.header_level))
        state.block = BlockState.HEADER_OPEN
        return

    if not state.in_block:
        # Markers not followed by a space do not make a header
        state.header_level = 0
        state.output.append(PARAGRAPH_OPEN_TAG)
        state.block = BlockState.PARAGRAPH_OPEN

    state.output.append(character)


def _close_block(state: ScanState) -> None:
    if state.block is BlockState.HEADER_OPEN:
        state.output.append(HEADER_CLOSE_TAG.format(level=state.header_level))
    elif state.block is BlockState.PARAGRAPH_OPEN:
        state.output.append(PARAGRAPH_CLOSE_TAG)


def convert_line(line: str, strict_links: bool = True) -> str:
    """Convert a single line of Markdown to a line of HTML.

    Scans the line once, left to right. Leading ``#`` markers followed by a
    space open an ``<hN>`` header (N is not clamped); any other first
    character opens a ``<p>`` paragraph. ``[text](href)`` becomes an anchor,
    emitted only once the closing ``)`` is seen, so unterminated links drop
    their buffered text. Nothing is HTML-escaped.

    Args:
        line: Markdown line without its line ending. Must not be empty.
        strict_links: When True, out-of-order link markers raise
            `MalformedLinkError`; when False they are kept as text in the link
            buffer being captured.

    Returns:
        str: The HTML line, ending with a newline.

    Raises:
        MalformedLinkError: If `strict_links` is set and ``(`` appears inside
            unclosed link text, or ``[`` appears inside a link target.

    Examples:
        convert_line("# Title")  # "<h1>Title</h1>\\n"
        convert_line("See [docs](http://example.com)")
        # '<p>See <a href="http://example.com">docs</a></p>\\n'
    """
    state = ScanState()

    for column, character in enumerate(line, start=1):
        if character == HEADER_MARKER:
            _handle_header_marker(state, character)
        elif character == LINK_TEXT_OPEN:
            _handle_link_text_open(state, character, column, strict_links)
        elif character == LINK_TEXT_CLOSE:
            _handle_link_text_close(state)
        elif character == HREF_OPEN:
            _handle_href_open(state, character, column, strict_links)
        elif character == HREF_CLOSE:
            _handle_href_close(state, character)
        else:
            _handle_text(state, character)

    _close_block(state)
    state.output.append(LINE_TERMINATOR)
    return "".join(state.output)


def convert_lines(
    lines: Iterable[tuple[int, str]],
    *,
    strict_links: bool = True,
    skip_malformed: bool = True,
    max_line_length: int | None = None,
    warn: Callable[[str], None] | None = None,
) -> ConversionResult:
    """Convert numbered Markdown lines in order.

    Args:
        lines: Pairs of one-based line number and line text, with line endings
            stripped and blank lines already removed.
        strict_links: Link policy passed to `convert_line`.
        skip_malformed: When True, lines raising `MalformedLinkError` are
            recorded in the result and skipped; otherwise the error propagates.
        max_line_length: Optional maximum line length in characters.
        warn: Optional callback receiving a message for every skipped line.

    Returns:
        ConversionResult: HTML lines in source order and the skipped lines.

    Raises:
        LineTooLongError: If a line exceeds `max_line_length`.
        MalformedLinkError: If a line is malformed and `skip_malformed` is False.
    """
    result = ConversionResult()

    for line_number, line in lines:
        if max_line_length is not None and len(line) > max_line_length:
            raise LineTooLongError(line_number, max_line_length)

        try:
            html_line = convert_line(line, strict_links=strict_links)
        except MalformedLinkError as error:
            located = error.with_line_number(line_number)
            if not skip_malformed:
                raise located from error
            logger.info("Skipping line %d: %s", line_number, located)
            result.skipped.append(SkippedLine(line_number, line, str(located)))
            if warn is not None:
                warn(str(located))
            continue

        result.html_lines.append(html_line)

    logger.debug(
        "Converted %d line(s), skipped %d", len(result.html_lines), len(result.skipped)
    )
    return result


def convert_markdown(
    content: str,
    config: ConverterConfig | None = None,
    warn: Callable[[str], None] | None = None,
) -> ConversionResult:
    """Convert Markdown text to HTML lines.

    Blank lines are dropped; the remaining lines are converted one by one.

    Args:
        content: The markdown content to convert.
        config: Configuration controlling link policy and limits. Defaults to a
            new `ConverterConfig` when omitted.
        warn: Optional callback receiving a message for every skipped line.

    Returns:
        ConversionResult: Converted lines and any skipped lines.

    Raises:
        ConfigError: If the configuration fails validation.
        LineTooLongError: If a line exceeds the configured maximum length.
        MalformedLinkError: If a line is malformed and skipping is disabled.

    Examples:
        convert_markdown("# Title\\n\\nBody\\n").html
        # "<h1>Title</h1>\\n<p>Body</p>\\n"
    """
    config = config or ConverterConfig()
    validate_config(config)

    return convert_lines(
        iter_markdown_lines(io.StringIO(content, newline=None)),
        strict_links=config.strict_links,
        skip_malformed=config.skip_malformed,
        max_line_length=config.max_line_length,
        warn=warn,
    )


class ConvertFileError(Exception):
    """Raised when converting a Markdown file fails."""


def convert_file(
    filepath: Path,
    output_path: Path | None = None,
    config: ConverterConfig | None = None,
    warn: Callable[[str], None] | None = None,
) -> ConversionResult:
    """Convert a Markdown file and optionally write the HTML next to it.

    The input is streamed line by line. The output file is only replaced once
    every line has been converted, so a failed run leaves no partial output.

    Args:
        filepath: Path to the markdown file to convert.
        output_path: Destination for the HTML; nothing is written when None.
        config: Configuration controlling conversion; defaults to a new
            `ConverterConfig` when omitted.
        warn: Optional callback receiving a message for every skipped line.

    Returns:
        ConversionResult: Converted lines and any skipped lines.

    Raises:
        ConvertFileError: If configuration is invalid, the file exceeds
            `max_file_size`, conversion fails because of limits or malformed
            content, or a file cannot be read, decoded, or written.

    Examples:
        convert_file(Path("README.md"), Path("README.html"))
    """
    config = config or ConverterConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise ConvertFileError(str(error)) from error

    try:
        enforce_file_size(collect_file_stat(filepath), config.max_file_size, filepath)
        with safe_read(filepath) as stream:
            result = convert_lines(
                iter_markdown_lines(stream),
                strict_links=config.strict_links,
                skip_malformed=config.skip_malformed,
                max_line_length=config.max_line_length,
                warn=warn,
            )
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise ConvertFileError(error_message) from error
    except IOError as error:
        raise ConvertFileError(str(error)) from error
    except LineTooLongError as error:
        error_message = (
            f"{filepath} contains a line at line {error.line_number} "
            f"exceeding the maximum allowed length of {error.max_line_length} characters."
        )
        raise ConvertFileError(error_message) from error
    except ConversionError as error:
        raise ConvertFileError(f"{filepath}: {error}") from error

    if output_path is not None:
        try:
            write_html(output_path, result.html_lines)
        except OSError as error:
            error_message = f"Error writing {output_path}: {error}"
            raise ConvertFileError(error_message) from error
        logger.info("Wrote %s", output_path)

    return result
