"""Package-specific exception types."""

from __future__ import annotations


class ConversionError(ValueError):
    """Base class for conversion-related errors.

    Represents errors encountered while converting markdown content.
    """


class MalformedLinkError(ConversionError):
    """Raised when link markers appear out of order.

    Args:
        character: The marker that broke the ``[text](href)`` sequence.
        column: One-based column of the marker within the line.
        line_number: One-based index of the offending line, when known.
    """

    def __init__(self, character: str, column: int, line_number: int | None = None):
        self.character = character
        self.column = column
        self.line_number = line_number
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        if self.character == "(":
            detail = "'(' found before link text was closed with ']'"
        else:
            detail = "'[' found after '(' opened a link target"
        location = f"column {self.column}"
        if self.line_number is not None:
            location = f"line {self.line_number}, {location}"
        return f"Malformed link at {location}: {detail}"

    def with_line_number(self, line_number: int) -> MalformedLinkError:
        return MalformedLinkError(self.character, self.column, line_number)


class LineTooLongError(ConversionError):
    """Raised when a line exceeds the configured maximum length.

    Args:
        line_number: One-based index of the offending line.
        max_line_length: Maximum allowed line length in characters.
    """

    def __init__(self, line_number: int, max_line_length: int):
        self.line_number = line_number
        self.max_line_length = max_line_length
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"Line {self.line_number} exceeds maximum allowed length "
            f"of {self.max_line_length} characters"
        )
