"""Constants used across the md-to-html package."""

from __future__ import annotations

# Markdown markers
HEADER_MARKER = "#"
LINK_TEXT_OPEN = "["
LINK_TEXT_CLOSE = "]"
HREF_OPEN = "("
HREF_CLOSE = ")"
SPACE = " "

# HTML fragments
HEADER_OPEN_TAG = "<h{level}>"
HEADER_CLOSE_TAG = "</h{level}>"
PARAGRAPH_OPEN_TAG = "<p>"
PARAGRAPH_CLOSE_TAG = "</p>"
ANCHOR_TEMPLATE = '<a href="{href}">{text}</a>'
LINE_TERMINATOR = "\n"

# Files
MARKDOWN_EXTENSIONS = (".md", ".markdown", ".mdown", ".mkd")
DEFAULT_OUTPUT_SUFFIX = ".html"

# Limits
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
DEFAULT_MAX_LINE_LENGTH = 10_000
