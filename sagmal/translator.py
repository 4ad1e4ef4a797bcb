from __future__ import annotations

import sys
from typing import Any, Mapping, Optional, Protocol

from .deepl import TextResult
from .languages import likely_same_language
from .resolver import ResolvedParameters


class TextTranslator(Protocol):
    async def translate_text(
        self,
        text: str,
        source_lang: Optional[str],
        target_lang: str,
        options: Optional[Mapping[str, Any]] = None,
    ) -> TextResult: ...


def should_use_secondary_target(text: str, result: TextResult, params: ResolvedParameters) -> bool:
    """Decide whether a translation came back as a same-language no-op."""

    if not params.secondary_target_language or params.target_from_cli:
        return False
    if not result.detected_source_lang:
        return False
    if not likely_same_language(result.detected_source_lang, params.target_language):
        return False
    return result.text.strip() == text.strip()


async def translate(
    client: TextTranslator,
    text: str,
    params: ResolvedParameters,
    *,
    debug: bool = False,
) -> TextResult:
    """Translate ``text``, retrying once with the secondary target if needed.

    When the input already is in the target language, DeepL echoes it back.
    If ``targetLang2`` is configured and the target did not come from the
    command line, the text is translated into the secondary target instead.
    """

    result = await client.translate_text(
        text,
        params.source_language,
        params.target_language,
        params.translation_options,
    )
    if not should_use_secondary_target(text, result, params):
        return result

    if debug:
        print(
            f"[debug] detected {result.detected_source_lang}, retrying with"
            f" secondary target {params.secondary_target_language}",
            file=sys.stderr,
        )
    return await client.translate_text(
        text,
        params.source_language,
        params.secondary_target_language,
        params.translation_options,
    )


__all__ = ["TextTranslator", "should_use_secondary_target", "translate"]
