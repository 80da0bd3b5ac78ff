from bs4 import BeautifulSoup

from md2png.services.markup_service import MarkupService

markup = MarkupService()


def _soup(text):
    return BeautifulSoup(markup.to_html(text), "html.parser")


def test_headings_and_paragraphs():
    soup = _soup("# Title\n\n## Sub\n\nHello world")
    assert soup.find("h1").get_text() == "Title"
    assert soup.find("h2").get_text() == "Sub"
    assert soup.find("p").get_text() == "Hello world"


def test_lists_and_emphasis():
    soup = _soup("- one\n- two\n\n1. first\n2. second\n\n*em* and **strong**")
    assert len(soup.find("ul").find_all("li")) == 2
    assert len(soup.find("ol").find_all("li")) == 2
    assert soup.find("em").get_text() == "em"
    assert soup.find("strong").get_text() == "strong"


def test_links_and_fenced_code():
    soup = _soup("[docs](https://example.com/docs)\n\n```python\nprint('hi')\n```\n")
    assert soup.find("a")["href"] == "https://example.com/docs"
    code = soup.find("pre").find("code")
    assert "print(" in code.get_text()


def test_tables():
    soup = _soup("| a | b |\n|---|---|\n| 1 | 2 |\n")
    assert soup.find("table") is not None
    assert [td.get_text() for td in soup.find_all("td")] == ["1", "2"]


def test_bare_urls_are_linkified():
    soup = _soup("Visit https://example.com/path, or www.example.org.")
    anchors = soup.find_all("a")
    assert [a["href"] for a in anchors] == ["https://example.com/path", "http://www.example.org"]
    assert anchors[0].get_text() == "https://example.com/path"
    assert soup.find("p").get_text() == "Visit https://example.com/path, or www.example.org."


def test_urls_inside_code_and_links_are_untouched():
    soup = _soup("`https://example.com` and [site](https://example.com)")
    anchors = soup.find_all("a")
    assert len(anchors) == 1
    assert anchors[0].get_text() == "site"
    assert soup.find("code").get_text() == "https://example.com"


def test_raw_html_passes_through():
    soup = _soup('<div class="note">kept</div>')
    assert soup.find("div", class_="note").get_text() == "kept"


def test_linkify_can_be_disabled():
    html = MarkupService(linkify=False).to_html("see https://example.com")
    assert "<a" not in html
