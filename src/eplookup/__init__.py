"""Public eplookup API: entry text rendering and result presentation."""
from __future__ import annotations

from .book import Book, BookError, IndexKind, Subbook, load_book_opener
from .custom_characters import (
    DEFAULT_CUSTOM_CHARACTERS,
    CustomCharacterMap,
    lookup_custom_character,
)
from .formats import OutputFormat
from .presenter import present_results
from .renderer import render_text, render_to_string
from .terminal import TerminalAttribute, TerminalWriter
from .text_elements import (
    BeginDecoration,
    CustomCharacter,
    DecorationKind,
    EndDecoration,
    Indent,
    Newline,
    NoNewline,
    TextElement,
    UnicodeString,
    Unsupported,
)

__all__ = [
    "BeginDecoration",
    "Book",
    "BookError",
    "CustomCharacter",
    "CustomCharacterMap",
    "DEFAULT_CUSTOM_CHARACTERS",
    "DecorationKind",
    "EndDecoration",
    "Indent",
    "IndexKind",
    "Newline",
    "NoNewline",
    "OutputFormat",
    "Subbook",
    "TerminalAttribute",
    "TerminalWriter",
    "TextElement",
    "UnicodeString",
    "Unsupported",
    "load_book_opener",
    "lookup_custom_character",
    "present_results",
    "render_text",
    "render_to_string",
]
