import pytest

from md2png.utils.text import escape_html, format_number


def test_escape_html_all_five_characters():
    assert escape_html("& < > \" '") == "&amp; &lt; &gt; &quot; &#39;"


def test_escape_html_ampersand_first():
    """An existing entity is escaped once, not left alone and not mangled twice."""
    assert escape_html("&lt;") == "&amp;lt;"
    assert escape_html("<") == "&lt;"


def test_escape_html_is_not_idempotent():
    once = escape_html("A & B")
    assert once == "A &amp; B"
    assert escape_html(once) == "A &amp;amp; B"


def test_escape_html_leaves_other_text_alone():
    assert escape_html("机密 CONFIDENTIAL\n") == "机密 CONFIDENTIAL\n"
    assert escape_html() == ""


@pytest.mark.parametrize(
    "value, expected",
    [(180.0, "180"), (-30, "-30"), (0.25, "0.25"), (90.5, "90.5"), (0, "0")],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_format_number_rejects_nan():
    with pytest.raises(ValueError):
        format_number(float("nan"))
