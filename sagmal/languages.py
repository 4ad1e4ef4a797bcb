"""Language hints embedded in the positional command line arguments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .errors import TextTooLongError

MAX_TEXT_LENGTH = 1024


@dataclass(frozen=True)
class LanguageOption:
    """Source/target pair parsed from a ``src:tgt`` token."""

    source_lang: Optional[str] = None
    target_lang: Optional[str] = None


@dataclass(frozen=True)
class PositionalLanguageOptions:
    """Language tokens found at the first and last positions.

    ``None`` means no language token was present at that position, which is
    different from a token such as ``":"`` that names no language at all.
    """

    first: Optional[LanguageOption] = None
    last: Optional[LanguageOption] = None


@dataclass(frozen=True)
class SplitResult:
    language_options: PositionalLanguageOptions
    text: str


def parse_language_option(token: str) -> Optional[LanguageOption]:
    """Parse ``token`` as a language option.

    Supported forms are ``"ja:vi"``, ``":en"``, ``"de:"`` and ``":"``. Tokens
    without a colon, or with more than one, are ordinary text and yield
    ``None``.
    """

    parts = token.split(":")
    if len(parts) != 2:
        return None
    source, target = parts
    return LanguageOption(source_lang=source or None, target_lang=target or None)


def text_length(text: str) -> int:
    """Length of ``text`` in UTF-16 code units."""

    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def split_positionals(args: Sequence[str], *, max_length: int = MAX_TEXT_LENGTH) -> SplitResult:
    """Separate leading/trailing language tokens from the text to translate."""

    if not args:
        return SplitResult(PositionalLanguageOptions(), "")

    first = parse_language_option(args[0])
    # A single token is only ever a first-position candidate.
    last = parse_language_option(args[-1]) if len(args) > 1 else None

    parts = list(args)
    if first is not None:
        parts = parts[1:]
    if last is not None and parts:
        parts = parts[:-1]

    text = " ".join(parts)
    length = text_length(text)
    if length > max_length:
        raise TextTooLongError(length, max_length)

    return SplitResult(PositionalLanguageOptions(first=first, last=last), text)


def likely_same_language(lang1: str, lang2: str) -> bool:
    """Return ``True`` when two language tags probably name the same language.

    A missing regional subtag is treated as generic, so ``"pt"`` matches
    ``"pt-BR"`` while ``"en-US"`` and ``"en-GB"`` do not match.
    """

    parts1 = lang1.split("-")
    parts2 = lang2.split("-")
    for index in range(max(len(parts1), len(parts2))):
        part1 = parts1[index] if index < len(parts1) else ""
        part2 = parts2[index] if index < len(parts2) else ""
        # empty subtags count as missing
        if not part1 or not part2:
            break
        if part1.lower() != part2.lower():
            return False
    return True


def normalize_target_language(code: str) -> str:
    if code.lower() == "en":
        return "en-US"
    return code


__all__ = [
    "LanguageOption",
    "MAX_TEXT_LENGTH",
    "PositionalLanguageOptions",
    "SplitResult",
    "likely_same_language",
    "normalize_target_language",
    "parse_language_option",
    "split_positionals",
    "text_length",
]
