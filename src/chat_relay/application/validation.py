"""Input validation returning tagged results.

Validators never raise: they return either ``Valid(value)`` or
``Invalid(code, detail)``. Services decide what an ``Invalid`` means for
the caller.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

from chat_relay.application.dto.commands import JoinCommand
from chat_relay.application.dto.message import MessageDraft
from chat_relay.application.ports.sanitizer import TextSanitizer
from chat_relay.domain.value_objects.enums import CLIENT_KINDS, MessageKind

T = TypeVar("T")


class ValidationCode(StrEnum):
    NAME_REQUIRED = "name_required"
    RECIPIENT_REQUIRED = "recipient_required"
    TEXT_REQUIRED = "text_required"
    INVALID_KIND = "invalid_kind"
    INVALID_LIMIT = "invalid_limit"


@dataclass(frozen=True, slots=True)
class Valid(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Invalid:
    code: ValidationCode
    detail: str


ValidationResult = Valid[T] | Invalid


def _clean(value: object, sanitizer: TextSanitizer) -> str:
    if not isinstance(value, str):
        return ""
    return sanitizer.clean(value)


def validate_join(cmd: JoinCommand, sanitizer: TextSanitizer) -> ValidationResult[str]:
    name = _clean(cmd.name, sanitizer)
    if not name:
        return Invalid(ValidationCode.NAME_REQUIRED, "name is required")
    return Valid(name)


def validate_message(
    to: object,
    text: object,
    kind: object,
    sanitizer: TextSanitizer,
) -> ValidationResult[MessageDraft]:
    clean_to = _clean(to, sanitizer)
    if not clean_to:
        return Invalid(ValidationCode.RECIPIENT_REQUIRED, "to is required")

    clean_text = _clean(text, sanitizer)
    if not clean_text:
        return Invalid(ValidationCode.TEXT_REQUIRED, "text is required")

    if not isinstance(kind, str) or kind not in {k.value for k in CLIENT_KINDS}:
        allowed = ", ".join(sorted(CLIENT_KINDS))
        return Invalid(ValidationCode.INVALID_KIND, f"type must be one of: {allowed}")

    return Valid(MessageDraft(to=clean_to, text=clean_text, kind=MessageKind(kind)))


def validate_limit(raw: object) -> ValidationResult[int | None]:
    """Accept None (no limit) or a positive integer, given as int or decimal string."""
    if raw is None:
        return Valid(None)
    if isinstance(raw, bool):
        return Invalid(ValidationCode.INVALID_LIMIT, "limit must be a positive integer")
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and raw.strip().isdecimal():
        value = int(raw.strip())
    else:
        return Invalid(ValidationCode.INVALID_LIMIT, "limit must be a positive integer")
    if value <= 0:
        return Invalid(ValidationCode.INVALID_LIMIT, "limit must be a positive integer")
    return Valid(value)
