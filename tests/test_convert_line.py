from __future__ import annotations

import pytest

from md_to_html.converter import convert_line
from md_to_html.exceptions import ConversionError, MalformedLinkError


def test_header_line():
    assert convert_line("# Title") == "<h1>Title</h1>\n"


def test_plain_text_becomes_paragraph():
    assert convert_line("Just text.") == "<p>Just text.</p>\n"


def test_inline_link_inside_paragraph():
    assert (
        convert_line("See [docs](http://example.com) here")
        == '<p>See <a href="http://example.com">docs</a> here</p>\n'
    )


def test_link_alone_has_no_block():
    assert convert_line("[text](href)") == '<a href="href">text</a>\n'


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("## Section", "<h2>Section</h2>\n"),
        ("###### Six", "<h6>Six</h6>\n"),
        ("####### Deep", "<h7>Deep</h7>\n"),
        ("########## Ten", "<h10>Ten</h10>\n"),
    ],
)
def test_header_level_is_not_clamped(line: str, expected: str):
    assert convert_line(line) == expected


def test_marker_and_space_only_yields_empty_header():
    assert convert_line("# ") == "<h1></h1>\n"
    assert convert_line("### ") == "<h3></h3>\n"


def test_markers_without_space_yield_nothing_to_wrap():
    assert convert_line("#") == "\n"
    assert convert_line("###") == "\n"


def test_markers_followed_by_text_open_a_paragraph():
    assert convert_line("#hashtag") == "<p>hashtag</p>\n"


def test_marker_inside_header_is_literal():
    assert convert_line("## Hello # world") == "<h2>Hello # world</h2>\n"
    assert convert_line("# #tag") == "<h1>#tag</h1>\n"


def test_marker_inside_paragraph_is_literal():
    assert convert_line("Issue #12") == "<p>Issue #12</p>\n"


def test_marker_inside_href_is_kept():
    assert convert_line("[top](#intro)") == '<a href="#intro">top</a>\n'


def test_link_inside_header():
    assert convert_line("# See [docs](u)") == '<h1>See <a href="u">docs</a></h1>\n'


def test_multiple_links_on_one_line():
    assert (
        convert_line("x [a](b) y [c](d)")
        == '<p>x <a href="b">a</a> y <a href="d">c</a></p>\n'
    )


def test_unterminated_link_text_is_dropped():
    assert convert_line("See [docs") == "<p>See </p>\n"


def test_link_text_without_href_is_dropped():
    assert convert_line("Text [docs] more") == "<p>Text  more</p>\n"


def test_unterminated_href_is_dropped():
    assert convert_line("See [docs](http://") == "<p>See </p>\n"


def test_stray_close_parenthesis_is_literal():
    assert convert_line("a)b") == "<p>a)b</p>\n"


def test_stray_close_bracket_is_consumed():
    assert convert_line("a]b") == "<p>ab</p>\n"
    assert convert_line("]") == "\n"
    assert convert_line("[a](x]y)") == '<a href="xy">a</a>\n'


def test_leading_space_opens_paragraph():
    assert convert_line(" text") == "<p> text</p>\n"
    assert convert_line("   ") == "<p>   </p>\n"


def test_space_after_header_text_is_kept():
    assert convert_line("#  padded") == "<h1> padded</h1>\n"


def test_reserved_characters_are_not_escaped():
    assert convert_line("a < b & c > d") == "<p>a < b & c > d</p>\n"
    assert convert_line('[say "hi"](x?a=1&b=2)') == '<a href="x?a=1&b=2">say "hi"</a>\n'


def test_href_open_before_link_text_raises():
    with pytest.raises(MalformedLinkError) as excinfo:
        convert_line("A (oops [late] bracket)")

    assert excinfo.value.character == "["
    assert excinfo.value.column == 9
    assert excinfo.value.line_number is None
    assert "column 9" in str(excinfo.value)


def test_href_open_inside_link_text_raises():
    with pytest.raises(MalformedLinkError) as excinfo:
        convert_line("[text(x)")

    assert excinfo.value.character == "("
    assert excinfo.value.column == 6


def test_malformed_link_error_is_a_conversion_error():
    with pytest.raises(ConversionError):
        convert_line("[a(b)")
    with pytest.raises(ValueError):
        convert_line("[a(b)")


def test_lenient_mode_keeps_stray_bracket_in_href():
    assert (
        convert_line("A (oops [late] bracket)", strict_links=False)
        == '<p>A <a href="oops [late bracket"></a></p>\n'
    )


def test_lenient_mode_keeps_stray_parenthesis_in_link_text():
    assert convert_line("[text(x)](y)", strict_links=False) == '<a href="y">text(x)</a>\n'


def test_new_link_resets_buffers():
    assert convert_line("[a] [b](c)") == '<p> <a href="c">b</a></p>\n'
