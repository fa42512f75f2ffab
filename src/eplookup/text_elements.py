"""Structured text elements yielded by dictionary backends for one entry."""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Union


class DecorationKind(IntEnum):
    """Decoration codes carried by ``BeginDecoration`` markers."""

    ITALIC = 0x01
    BOLD = 0x03


@dataclass(frozen=True)
class UnicodeString:
    """Literal text already in Unicode form."""

    text: str


@dataclass(frozen=True)
class CustomCharacter:
    """Vendor-defined 16-bit character that needs a replacement."""

    code: int


@dataclass(frozen=True)
class Newline:
    """Explicit line break."""


@dataclass(frozen=True)
class Indent:
    """Request for ``width`` spaces at the current position."""

    width: int


@dataclass(frozen=True)
class NoNewline:
    """Hint suppressing an implied break; not acted on when rendering."""

    enabled: bool


@dataclass(frozen=True)
class BeginDecoration:
    """Start of an emphasized span."""

    kind: DecorationKind | int


@dataclass(frozen=True)
class EndDecoration:
    """End of an emphasized span."""


@dataclass(frozen=True)
class Unsupported:
    """Markup the backend recognised but could not translate."""

    tag: int


TextElement = Union[
    UnicodeString,
    CustomCharacter,
    Newline,
    Indent,
    NoNewline,
    BeginDecoration,
    EndDecoration,
    Unsupported,
]

# Forward-only; consumed once per render call.
EntryText = Iterable[TextElement]


__all__ = [
    "BeginDecoration",
    "CustomCharacter",
    "DecorationKind",
    "EndDecoration",
    "EntryText",
    "Indent",
    "Newline",
    "NoNewline",
    "TextElement",
    "UnicodeString",
    "Unsupported",
]
