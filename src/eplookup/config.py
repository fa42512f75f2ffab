"""Configuration loading for the ``ep`` lookup command."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping

import tomllib

from .custom_characters import DEFAULT_CUSTOM_CHARACTERS, CustomCharacterMap
from .formats import OutputFormat, parse_output_format

BOOK_PATH_ENV = "EP_BOOK_PATH"
BACKEND_ENV = "EP_BACKEND"
CONFIG_PATH_ENV = "EP_CONFIG"

VALID_CODE_RANGE = range(0, 0x10000)


class ConfigError(ValueError):
    """Raised when lookup configuration is missing or fails validation."""


@dataclass(frozen=True)
class LookupConfig:
    """Settings read from a TOML configuration file."""

    book_path: Path | None = None
    backend: str | None = None
    expand_unknown_characters: bool = False
    output_format: OutputFormat = OutputFormat.TERMINAL
    custom_characters: Mapping[int, str] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:  # pragma: no cover - dataclass internals
        object.__setattr__(
            self, "custom_characters", MappingProxyType(dict(self.custom_characters))
        )

    def character_map(
        self, base: CustomCharacterMap = DEFAULT_CUSTOM_CHARACTERS
    ) -> CustomCharacterMap:
        """Return ``base`` extended with the configured replacements."""

        if not self.custom_characters:
            return base
        return base.merged(self.custom_characters)


def load_config(config_path: Path) -> LookupConfig:
    """Parse and validate the configuration file at ``config_path``."""

    try:
        with config_path.open("rb") as stream:
            raw_data = tomllib.load(stream)
    except FileNotFoundError as exc:
        raise ConfigError(f"configuration file not found: {config_path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid configuration file {config_path}: {exc}") from exc

    return LookupConfig(
        book_path=_parse_book_path(raw_data.get("book_path"), base=config_path.parent),
        backend=_parse_optional_string(raw_data.get("backend"), key="backend"),
        expand_unknown_characters=_parse_bool(
            raw_data.get("expand_unknown_characters", False),
            key="expand_unknown_characters",
        ),
        output_format=_parse_format(raw_data.get("format")),
        custom_characters=_parse_custom_characters(raw_data.get("custom_characters")),
    )


def resolve_config_path(
    explicit: Path | None, environ: Mapping[str, str] | None = None
) -> Path | None:
    """Return ``explicit`` or the path named by ``$EP_CONFIG``."""

    if explicit is not None:
        return explicit
    env = os.environ if environ is None else environ
    value = env.get(CONFIG_PATH_ENV)
    return Path(value).expanduser() if value else None


def resolve_book_path(
    explicit: Path | None,
    config: LookupConfig,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Pick the book path from the CLI, then ``$EP_BOOK_PATH``, then ``config``."""

    if explicit is not None:
        return explicit.expanduser()
    env = os.environ if environ is None else environ
    value = env.get(BOOK_PATH_ENV)
    if value:
        return Path(value).expanduser()
    if config.book_path is not None:
        return config.book_path
    raise ConfigError(
        f"no book path given; pass -b <book path> or set ${BOOK_PATH_ENV}"
    )


def resolve_backend(
    explicit: str | None,
    config: LookupConfig,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Pick the backend import path from the CLI, then ``$EP_BACKEND``, then ``config``."""

    if explicit:
        return explicit
    env = os.environ if environ is None else environ
    value = env.get(BACKEND_ENV)
    if value:
        return value
    if config.backend:
        return config.backend
    raise ConfigError(
        f"no dictionary backend configured; pass --backend or set ${BACKEND_ENV}"
    )


def _parse_book_path(raw_path: Any, *, base: Path) -> Path | None:
    if raw_path is None:
        return None
    if not isinstance(raw_path, str) or not raw_path.strip():
        raise ConfigError("book_path must be a non-empty string")
    path = Path(raw_path).expanduser()
    if not path.is_absolute():
        path = (base / path).resolve()
    return path


def _parse_optional_string(raw_value: Any, *, key: str) -> str | None:
    if raw_value is None:
        return None
    if not isinstance(raw_value, str) or not raw_value.strip():
        raise ConfigError(f"{key} must be a non-empty string")
    return raw_value.strip()


def _parse_bool(raw_value: Any, *, key: str) -> bool:
    if not isinstance(raw_value, bool):
        raise ConfigError(f"{key} must be true or false")
    return raw_value


def _parse_format(raw_format: Any) -> OutputFormat:
    if raw_format is None:
        return OutputFormat.TERMINAL
    if not isinstance(raw_format, str):
        raise ConfigError("format must be a string")
    try:
        return parse_output_format(raw_format)
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


def _parse_custom_characters(entries: Any) -> Dict[int, str]:
    if entries is None:
        return {}
    if not isinstance(entries, Mapping):
        raise ConfigError("[custom_characters] must be a table")

    resolved: Dict[int, str] = {}
    for raw_code, replacement in entries.items():
        code = _coerce_character_code(raw_code)
        if not isinstance(replacement, str):
            raise ConfigError(
                f"replacement for custom character {raw_code!r} must be a string"
            )
        if code in resolved:
            raise ConfigError(f"custom character 0x{code:04x} defined multiple times")
        resolved[code] = replacement
    return resolved


def _coerce_character_code(raw_code: Any) -> int:
    text = str(raw_code).strip()
    try:
        if text.lower().startswith("0x"):
            code = int(text, base=16)
        else:
            code = int(text, base=10)
    except ValueError as exc:
        raise ConfigError(f"invalid custom character code: {raw_code!r}") from exc

    if code not in VALID_CODE_RANGE:
        raise ConfigError(
            f"custom character code {raw_code!r} outside supported range 0x0000-0xffff"
        )
    return code


__all__ = [
    "BACKEND_ENV",
    "BOOK_PATH_ENV",
    "CONFIG_PATH_ENV",
    "ConfigError",
    "LookupConfig",
    "load_config",
    "resolve_backend",
    "resolve_book_path",
    "resolve_config_path",
]
