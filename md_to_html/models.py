"""Data models for md-to-html."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class BlockState(Enum):
    """Block element currently wrapping the line being scanned.

    Attributes:
        NONE: No block opened yet.
        HEADER_SIZE_PENDING: Reading leading ``#`` markers.
        HEADER_OPEN: Inside a header element.
        PARAGRAPH_OPEN: Inside a paragraph element.
    """

    NONE = auto()
    HEADER_SIZE_PENDING = auto()
    HEADER_OPEN = auto()
    PARAGRAPH_OPEN = auto()


class LinkState(Enum):
    """Progress through an inline ``[text](href)`` construct.

    Attributes:
        IDLE: Not inside a link construct.
        CAPTURING_TEXT: Between ``[`` and ``]``.
        CAPTURING_HREF: Between ``(`` and ``)``.
    """

    IDLE = auto()
    CAPTURING_TEXT = auto()
    CAPTURING_HREF = auto()


@dataclass
class ScanState:
    """Per-line scratch state for the line converter.

    Attributes:
        block: Current block element.
        link: Current link sub-state.
        header_level: Number of ``#`` markers read so far.
        link_text: Buffered link text.
        href: Buffered link target.
        output: HTML fragments emitted so far.
    """

    block: BlockState = BlockState.NONE
    link: LinkState = LinkState.IDLE
    header_level: int = 0
    link_text: str = ""
    href: str = ""
    output: list[str] = field(default_factory=list)

    @property
    def in_block(self) -> bool:
        return self.block in (BlockState.HEADER_OPEN, BlockState.PARAGRAPH_OPEN)


@dataclass(frozen=True)
class SkippedLine:
    """A source line left out of the output because it could not be converted.

    Attributes:
        line_number: One-based index of the line in the source.
        line: Original line text without its line ending.
        reason: Human-readable description of the failure.
    """

    line_number: int
    line: str
    reason: str


@dataclass
class ConversionResult:
    """Structured result of converting a Markdown document.

    Attributes:
        html_lines: Converted lines in source order, each ending with a newline.
        skipped: Lines that were reported and skipped.
    """

    html_lines: list[str] = field(default_factory=list)
    skipped: list[SkippedLine] = field(default_factory=list)

    @property
    def html(self) -> str:
        return "".join(self.html_lines)
