"""Cascading resolution of translation parameters.

Values come from four layers, merged in ascending priority:

1. built-in defaults (auto-detect source, ``en-US`` target)
2. ``~/.sagmalrc.json``
3. ``./.sagmalrc.json``
4. language tokens and flags given on the command line

Each layer is a plain dictionary that only contains the keys its source
actually mentions. A missing key never overrides a lower layer, while an
explicit ``None`` or ``False`` does.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .errors import ConflictingLanguageError, LanguageConflict, ReservedConfigFieldError
from .languages import LanguageOption, PositionalLanguageOptions, normalize_target_language

ParameterLayer = Dict[str, Any]

RESERVED_OPTION_FIELDS = ("__path",)

DEFAULT_LAYER: Mapping[str, Any] = {
    "source_language": None,
    "target_language": "en-US",
    "secondary_target_language": None,
    "translation_options": {},
    "should_copy_to_clipboard": False,
}


@dataclass(frozen=True)
class ResolvedParameters:
    source_language: Optional[str]
    target_language: str
    translation_options: Dict[str, Any] = field(default_factory=dict)
    should_copy_to_clipboard: bool = False
    secondary_target_language: Optional[str] = None
    target_from_cli: bool = False


def merge_cli_language_options(options: PositionalLanguageOptions) -> LanguageOption:
    """Combine the first and last language tokens, rejecting disagreements."""

    first = options.first or LanguageOption()
    last = options.last or LanguageOption()

    conflicts: List[LanguageConflict] = []
    for axis, first_value, last_value in (
        ("source", first.source_lang, last.source_lang),
        ("target", first.target_lang, last.target_lang),
    ):
        if first_value and last_value and first_value != last_value:
            conflicts.append(LanguageConflict(axis, first_value, last_value))
    if conflicts:
        raise ConflictingLanguageError(conflicts)

    return LanguageOption(
        source_lang=last.source_lang or first.source_lang,
        target_lang=last.target_lang or first.target_lang,
    )


def config_layer(config: Mapping[str, Any], scope: str) -> ParameterLayer:
    layer: ParameterLayer = {}
    deepl_section = config.get("deepL")
    if isinstance(deepl_section, Mapping):
        if "sourceLang" in deepl_section:
            layer["source_language"] = deepl_section["sourceLang"]
        if "targetLang" in deepl_section:
            layer["target_language"] = deepl_section["targetLang"]
        if "targetLang2" in deepl_section:
            layer["secondary_target_language"] = deepl_section["targetLang2"]
        options = deepl_section.get("options")
        if isinstance(options, Mapping):
            for reserved in RESERVED_OPTION_FIELDS:
                if reserved in options:
                    raise ReservedConfigFieldError(scope, reserved)
            layer["translation_options"] = dict(options)
    if "copyToClipboard" in config:
        layer["should_copy_to_clipboard"] = config["copyToClipboard"]
    return layer


def cli_layer(options: PositionalLanguageOptions, copy_to_clipboard: bool = False) -> ParameterLayer:
    merged = merge_cli_language_options(options)
    layer: ParameterLayer = {}
    if merged.source_lang is not None:
        layer["source_language"] = merged.source_lang
    if merged.target_lang is not None:
        layer["target_language"] = merged.target_lang
    # an unset flag leaves the config value alone
    if copy_to_clipboard:
        layer["should_copy_to_clipboard"] = True
    return layer


def merge_layers(layers: Iterable[Mapping[str, Any]]) -> ParameterLayer:
    """Fold ``layers`` left to right; later explicit values win."""

    result: ParameterLayer = {}
    for layer in layers:
        for key, value in layer.items():
            if key == "translation_options":
                merged_options = dict(result.get(key) or {})
                merged_options.update(value or {})
                result[key] = merged_options
            else:
                result[key] = value
    return result


def resolve_parameters(
    cli_options: PositionalLanguageOptions,
    home_config: Mapping[str, Any],
    local_config: Mapping[str, Any],
    copy_to_clipboard: bool = False,
) -> ResolvedParameters:
    cli = cli_layer(cli_options, copy_to_clipboard)
    layers = [
        DEFAULT_LAYER,
        config_layer(home_config, "home"),
        config_layer(local_config, "local"),
        cli,
    ]
    merged = merge_layers(layers)

    target = merged.get("target_language") or DEFAULT_LAYER["target_language"]
    secondary = merged.get("secondary_target_language")

    return ResolvedParameters(
        source_language=merged.get("source_language") or None,
        target_language=normalize_target_language(str(target)),
        translation_options=dict(merged.get("translation_options") or {}),
        should_copy_to_clipboard=bool(merged.get("should_copy_to_clipboard")),
        secondary_target_language=normalize_target_language(str(secondary)) if secondary else None,
        target_from_cli="target_language" in cli,
    )


__all__ = [
    "DEFAULT_LAYER",
    "ParameterLayer",
    "ResolvedParameters",
    "cli_layer",
    "config_layer",
    "merge_cli_language_options",
    "merge_layers",
    "resolve_parameters",
]
