from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Message:
    id: UUID
    sender: str
    to: str
    text: str
    kind: str
    created_at: datetime

    def is_visible_to(self, viewer: str, broadcast: str) -> bool:
        return self.to == viewer or self.sender == viewer or self.to == broadcast
