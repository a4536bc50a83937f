from __future__ import annotations

import pytest

from chat_relay.infrastructure.text.html_sanitizer import HtmlSanitizer


@pytest.mark.parametrize(
    ("raw", "clean"),
    [
        ("  plain  ", "plain"),
        ("<b>bold</b> move", "bold move"),
        ("<script>alert(1)</script>hi", "hi"),
        ("fish &amp; chips", "fish & chips"),
        ("<p>   </p>", ""),
    ],
)
def test_clean(raw, clean):
    assert HtmlSanitizer().clean(raw) == clean
