"""Credentials and ``.sagmalrc.json`` loading."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .errors import InvalidConfigError, MissingCredentialError

API_KEY_ENV = "SAGMAL_DEEPL_API_KEY"
SERVER_URL_ENV = "SAGMAL_DEEPL_SERVER_URL"
RC_FILENAME = ".sagmalrc.json"
ENV_FILENAME = ".env"


def load_env_file(path: Path | str) -> None:
    """Load environment variables from a ``.env`` file without overriding existing values."""

    env_path = Path(path)
    if not env_path.is_file():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        key, _, value = line.partition("=")
        key = key.strip()
        if key.startswith("export "):
            key = key[len("export "):].strip()
        if not key:
            continue

        if key in os.environ:
            continue

        normalized = value.strip()
        if (
            len(normalized) >= 2
            and normalized[0] in {'"', "'"}
            and normalized[-1] == normalized[0]
        ):
            normalized = normalized[1:-1]

        os.environ[key] = normalized


def load_environment(*, home: Optional[Path] = None, cwd: Optional[Path] = None) -> None:
    """Load ``.env`` from the working directory, then from the home directory.

    Variables that are already set are never replaced, so the process
    environment wins over the working directory file, which in turn wins over
    the home directory file.
    """

    load_env_file((cwd or Path.cwd()) / ENV_FILENAME)
    load_env_file((home or Path.home()) / ENV_FILENAME)


def get_api_key(environ: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if environ is None else environ
    key = env.get(API_KEY_ENV)
    if not key:
        raise MissingCredentialError(
            f"DeepL API key not found. Please set {API_KEY_ENV} as an environment variable or in a .env file."
        )
    return key


def load_rc(path: Path) -> Dict[str, Any]:
    """Read one ``.sagmalrc.json`` file.

    A missing file yields an empty mapping. The root must be a JSON object;
    its contents are not validated any further.
    """

    if not path.exists():
        return {}

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidConfigError(path, f"cannot read file: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidConfigError(path, f"invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        kind = "array" if isinstance(data, list) else type(data).__name__
        raise InvalidConfigError(path, f"must be an object, not {kind}")

    return data


@dataclass(frozen=True)
class ConfigInputs:
    """Raw home and local configuration, not merged."""

    home: Dict[str, Any] = field(default_factory=dict)
    local: Dict[str, Any] = field(default_factory=dict)


def load_config_inputs(*, home: Optional[Path] = None, cwd: Optional[Path] = None) -> ConfigInputs:
    home_dir = home or Path.home()
    local_dir = cwd or Path.cwd()
    return ConfigInputs(
        home=load_rc(home_dir / RC_FILENAME),
        local=load_rc(local_dir / RC_FILENAME),
    )


__all__ = [
    "API_KEY_ENV",
    "ConfigInputs",
    "SERVER_URL_ENV",
    "get_api_key",
    "load_config_inputs",
    "load_env_file",
    "load_environment",
    "load_rc",
]
