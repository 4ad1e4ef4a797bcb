"""Async client for the DeepL ``/v2/translate`` endpoint."""

from __future__ import annotations

import re
import sys
import textwrap
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import httpx

from . import __version__

FREE_SERVER_URL = "https://api-free.deepl.com"
PRO_SERVER_URL = "https://api.deepl.com"
_TRANSLATE_PATH = "/v2/translate"
_QUOTA_EXCEEDED_STATUS = 456

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class DeepLError(RuntimeError):
    """Raised when the DeepL API cannot be reached or returns an error."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class TextResult:
    text: str
    detected_source_lang: str


def default_server_url(api_key: str) -> str:
    return FREE_SERVER_URL if api_key.endswith(":fx") else PRO_SERVER_URL


def api_option_name(name: str) -> str:
    """Map a config option name such as ``modelType`` to ``model_type``."""

    return _CAMEL_BOUNDARY.sub("_", name).lower()


_SPLIT_SENTENCES_VALUES = {"on": "1", "default": "1", "off": "0", "nonewlines": "nonewlines"}


def _split_sentences_value(value: Any) -> Any:
    if isinstance(value, str):
        return _SPLIT_SENTENCES_VALUES.get(value.lower(), value)
    return value


def _glossary_id(value: Any) -> Any:
    if isinstance(value, Mapping):
        return value.get("glossaryId", value.get("glossary_id"))
    return value


def _tag_list(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return value


# option name -> (request parameter, value converter)
_OPTION_TABLE: Dict[str, Tuple[str, Callable[[Any], Any]]] = {
    "splitSentences": ("split_sentences", _split_sentences_value),
    "glossary": ("glossary_id", _glossary_id),
    "nonSplittingTags": ("non_splitting_tags", _tag_list),
    "splittingTags": ("splitting_tags", _tag_list),
    "ignoreTags": ("ignore_tags", _tag_list),
}


def build_payload(
    text: str,
    source_lang: Optional[str],
    target_lang: str,
    options: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {}
    extra: Mapping[str, Any] = {}
    for name, value in (options or {}).items():
        if name == "extraRequestParameters":
            extra = value if isinstance(value, Mapping) else {}
            continue
        if name in _OPTION_TABLE:
            param, convert = _OPTION_TABLE[name]
            payload[param] = convert(value)
        else:
            payload[api_option_name(name)] = value
    # extra parameters are sent verbatim and win over mapped options
    payload.update(extra)
    payload["text"] = [text]
    payload["target_lang"] = target_lang.upper()
    if source_lang:
        payload["source_lang"] = source_lang.upper()
    return payload


class DeepLClient:
    """Thin wrapper around an :class:`httpx.AsyncClient`."""

    def __init__(
        self,
        api_key: str,
        *,
        server_url: Optional[str] = None,
        timeout: Optional[float] = None,
        debug: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self.server_url = (server_url or default_server_url(api_key)).rstrip("/")
        self.debug = debug
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def __aenter__(self) -> "DeepLClient":
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def translate_text(
        self,
        text: str,
        source_lang: Optional[str],
        target_lang: str,
        options: Optional[Mapping[str, Any]] = None,
    ) -> TextResult:
        payload = build_payload(text, source_lang, target_lang, options)
        headers = {
            "Authorization": f"DeepL-Auth-Key {self._api_key}",
            "User-Agent": f"sagmal/{__version__}",
            "Accept": "application/json",
        }
        url = self.server_url + _TRANSLATE_PATH

        if self.debug:
            preview = textwrap.shorten(text.replace("\n", " "), width=120, placeholder="...")
            print(
                f"[debug] DeepL request source={source_lang or 'auto'} target={target_lang}"
                f" chars={len(text)} preview='{preview}'",
                file=sys.stderr,
            )

        try:
            response = await self._client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            raise DeepLError(f"Failed to connect to DeepL API: {exc}") from exc

        if self.debug:
            print(f"[debug] DeepL response status={response.status_code}", file=sys.stderr)

        if response.status_code == _QUOTA_EXCEEDED_STATUS:
            raise DeepLError("Quota exceeded", status_code=response.status_code)
        if response.status_code != 200:
            raise DeepLError(
                f"DeepL API returned status {response.status_code}: {_error_detail(response)}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
            first = data["translations"][0]
            translated = first["text"]
            detected = first.get("detected_source_language", "")
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise DeepLError("Unexpected response format from DeepL API") from exc

        return TextResult(text=str(translated), detected_source_lang=str(detected))


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return response.text


__all__ = [
    "DeepLClient",
    "DeepLError",
    "TextResult",
    "api_option_name",
    "build_payload",
    "default_server_url",
]
