from __future__ import annotations

from typing import Protocol


class TextSanitizer(Protocol):
    def clean(self, value: str) -> str:
        """Return *value* with markup removed and surrounding whitespace trimmed."""
        ...
