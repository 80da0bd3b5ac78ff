import re

from bs4 import BeautifulSoup, NavigableString
from markdown import markdown

URL_PATTERN = re.compile(r"(?<![\w/@.])((?:https?://|www\.)[^\s<>\"']+[^\s<>\"'.,;:!?)\]])")
SKIP_TAGS = {"a", "code", "pre", "script", "style"}


class MarkupService:
    """Markdown to HTML conversion (headings, lists, emphasis, links, code blocks, tables)."""

    def __init__(self, linkify: bool = True) -> None:
        self.linkify = linkify
        self.extensions = ["extra", "sane_lists", "smarty"]

    def to_html(self, markdown_text: str) -> str:
        html = markdown(markdown_text or "", extensions=self.extensions, output_format="html")
        if not self.linkify:
            return html
        return self._linkify(html)

    # ------------------------------------------------------------
    def _linkify(self, html: str) -> str:
        """Wrap bare URLs found in text nodes with anchors."""
        if not URL_PATTERN.search(html):
            return html

        soup = BeautifulSoup(html, "html.parser")
        for node in list(soup.find_all(string=URL_PATTERN)):
            if type(node) is not NavigableString:
                continue
            if any(parent.name in SKIP_TAGS for parent in node.parents):
                continue
            self._replace_urls(soup, node)
        return str(soup)

    @staticmethod
    def _replace_urls(soup: BeautifulSoup, node: NavigableString) -> None:
        text = str(node)
        pieces = []
        last = 0
        for match in URL_PATTERN.finditer(text):
            if match.start() > last:
                pieces.append(NavigableString(text[last:match.start()]))
            url = match.group(1)
            anchor = soup.new_tag("a", href=url if "://" in url else f"http://{url}")
            anchor.string = url
            pieces.append(anchor)
            last = match.end()
        if last < len(text):
            pieces.append(NavigableString(text[last:]))

        for piece in pieces:
            node.insert_before(piece)
        node.extract()
