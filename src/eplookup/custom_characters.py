"""Replacement table for vendor-defined (gaiji) dictionary character codes."""
from __future__ import annotations

from types import MappingProxyType
from typing import Final, Iterator, Mapping

_DEFAULT_REPLACEMENTS: Final[Mapping[int, str]] = MappingProxyType(
    {
        0xB667: "[ローマ字]",
        0xB65E: "▶ ",
        0xB66B: "◧",
        0xA239: "ū",
    }
)


class CustomCharacterMap:
    """Read-only lookup from 16-bit custom character codes to replacement text."""

    __slots__ = ("_replacements",)

    def __init__(self, replacements: Mapping[int, str] | None = None) -> None:
        table = {int(code): str(text) for code, text in (replacements or {}).items()}
        self._replacements: Mapping[int, str] = MappingProxyType(table)

    def lookup(self, code: int) -> str | None:
        """Return the replacement for ``code`` or ``None`` when it is unknown."""

        return self._replacements.get(int(code))

    def merged(self, overrides: Mapping[int, str]) -> "CustomCharacterMap":
        """Return a new map where ``overrides`` take precedence over this one."""

        combined = dict(self._replacements)
        combined.update(
            (int(code), str(text)) for code, text in overrides.items()
        )
        return CustomCharacterMap(combined)

    @property
    def replacements(self) -> Mapping[int, str]:
        return self._replacements

    def __contains__(self, code: object) -> bool:
        if not isinstance(code, int):
            return False
        return code in self._replacements

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._replacements))

    def __len__(self) -> int:
        return len(self._replacements)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self)} entries)"


DEFAULT_CUSTOM_CHARACTERS: Final[CustomCharacterMap] = CustomCharacterMap(
    _DEFAULT_REPLACEMENTS
)


def lookup_custom_character(code: int) -> str | None:
    """Look ``code`` up in the process-wide default table."""

    return DEFAULT_CUSTOM_CHARACTERS.lookup(code)


def format_unknown_character(code: int) -> str:
    """Return the diagnostic token shown for an unmapped ``code``."""

    return f"<?0x{int(code):04x}>"


__all__ = [
    "CustomCharacterMap",
    "DEFAULT_CUSTOM_CHARACTERS",
    "format_unknown_character",
    "lookup_custom_character",
]
