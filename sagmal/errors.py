"""Errors raised by sagmal itself.

Failures coming from the DeepL API are reported through
:class:`sagmal.deepl.DeepLError` instead, so callers can tell the two apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List


class SagmalError(RuntimeError):
    """Base class for every error the tool raises on its own."""


class TextTooLongError(SagmalError):
    def __init__(self, length: int, limit: int) -> None:
        super().__init__(f"Text too long: {length} characters (maximum: {limit}).")
        self.length = length
        self.limit = limit


@dataclass(frozen=True)
class LanguageConflict:
    axis: str
    first: str
    last: str

    def describe(self) -> str:
        return f"Conflicting {self.axis} languages: '{self.first}' and '{self.last}'"


class ConflictingLanguageError(SagmalError):
    """Raised when the leading and trailing language tokens disagree."""

    def __init__(self, conflicts: Iterable[LanguageConflict]) -> None:
        self.conflicts: List[LanguageConflict] = list(conflicts)
        super().__init__("; ".join(conflict.describe() for conflict in self.conflicts))


class ReservedConfigFieldError(SagmalError):
    def __init__(self, scope: str, field: str = "__path") -> None:
        super().__init__(
            f"Invalid {scope} config: '{field}' is an internal-only field and cannot be used in configuration"
        )
        self.scope = scope
        self.field = field


class InvalidConfigError(SagmalError):
    def __init__(self, path: object, reason: str) -> None:
        super().__init__(f"Invalid config file: {path}\n  {reason}")
        self.path = path
        self.reason = reason


class MissingCredentialError(SagmalError):
    pass


__all__ = [
    "ConflictingLanguageError",
    "InvalidConfigError",
    "LanguageConflict",
    "MissingCredentialError",
    "ReservedConfigFieldError",
    "SagmalError",
    "TextTooLongError",
]
