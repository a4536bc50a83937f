from __future__ import annotations

from bs4 import BeautifulSoup


class HtmlSanitizer:
    """Implements application.ports.sanitizer.TextSanitizer.

    Tags are dropped and their text content kept, so ``<b>hi</b>`` becomes
    ``hi``. Entities are decoded.
    """

    def clean(self, value: str) -> str:
        if "<" not in value and "&" not in value:
            return value.strip()
        soup = BeautifulSoup(value, "html.parser")
        for node in soup(["script", "style"]):
            node.decompose()
        return soup.get_text().strip()
