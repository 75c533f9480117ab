"""
md-to-html: Convert a small subset of Markdown to HTML, line by line.

Headers (``# Title``), paragraphs and inline links (``[text](href)``) are
supported. This package can be used both as a CLI tool and as a library.

CLI Usage:
    md-to-html README.md

Library Usage:
    from md_to_html import convert_line, convert_markdown

    convert_line("# Title")  # "<h1>Title</h1>\\n"
    result = convert_markdown(Path("README.md").read_text())
    html = result.html
"""

from .config import ConverterConfig
from .converter import convert_file, convert_line, convert_lines, convert_markdown
from .exceptions import ConversionError, LineTooLongError, MalformedLinkError
from .models import ConversionResult, SkippedLine

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "convert_line",
    "convert_lines",
    "convert_markdown",
    "convert_file",
    # Data models
    "ConversionResult",
    "SkippedLine",
    # Configuration
    "ConverterConfig",
    # Exceptions
    "ConversionError",
    "LineTooLongError",
    "MalformedLinkError",
    # Version
    "__version__",
]
