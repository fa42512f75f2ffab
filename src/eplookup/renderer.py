"""Render structured dictionary entry text for a terminal or as HTML."""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Iterable

from .custom_characters import (
    DEFAULT_CUSTOM_CHARACTERS,
    CustomCharacterMap,
    format_unknown_character,
)
from .formats import FormatMarkup, OutputFormat
from .terminal import PLAIN_CAPABILITIES, TerminalAttribute, TerminalWriter
from .text_elements import (
    BeginDecoration,
    CustomCharacter,
    EndDecoration,
    Indent,
    Newline,
    NoNewline,
    UnicodeString,
    Unsupported,
)

LOGGER = logging.getLogger(__name__)


@dataclass
class RenderContext:
    """State carried across the elements of a single entry."""

    output_format: OutputFormat
    expand_unknown: bool
    characters: CustomCharacterMap
    sink: TerminalWriter
    decoration_open: bool = False

    @property
    def markup(self) -> FormatMarkup:
        return self.output_format.markup

    def write_custom_character(self, code: int) -> None:
        replacement = self.characters.lookup(code)
        if replacement is not None:
            self.sink.write(replacement)
            return
        LOGGER.debug("no replacement for custom character 0x%04x", code)
        if self.expand_unknown:
            self.sink.write(format_unknown_character(code))

    def begin_decoration(self) -> None:
        # Nested begins collapse into the span that is already open.
        if self.decoration_open:
            return
        self.decoration_open = True
        if self.markup.uses_terminal_attributes:
            self.sink.attr(TerminalAttribute.STANDOUT)
        else:
            self.sink.write(self.markup.emphasis_open)

    def end_decoration(self) -> None:
        self.decoration_open = False
        if self.markup.uses_terminal_attributes:
            self.sink.reset()
        else:
            self.sink.write(self.markup.emphasis_close)


def render_text(
    elements: Iterable[object],
    output_format: OutputFormat,
    expand_unknown: bool,
    sink: TerminalWriter,
    *,
    characters: CustomCharacterMap = DEFAULT_CUSTOM_CHARACTERS,
) -> None:
    """Write ``elements`` to ``sink`` in ``output_format``.

    The elements are consumed once, in order. Nothing in the element stream
    raises: unmapped custom characters are dropped (or shown as
    ``<?0xNNNN>`` when ``expand_unknown`` is set), and unmatched decoration
    markers, ``NoNewline`` and ``Unsupported`` elements are tolerated. An
    emphasis span still open when the elements run out is closed so it cannot
    leak into whatever is written next.
    """

    context = RenderContext(
        output_format=output_format,
        expand_unknown=expand_unknown,
        characters=characters,
        sink=sink,
    )
    for element in elements:
        if isinstance(element, UnicodeString):
            sink.write(element.text)
        elif isinstance(element, CustomCharacter):
            context.write_custom_character(element.code)
        elif isinstance(element, Newline):
            sink.write(context.markup.line_break)
        elif isinstance(element, Indent):
            sink.write(" " * max(element.width, 0))
        elif isinstance(element, BeginDecoration):
            context.begin_decoration()
        elif isinstance(element, EndDecoration):
            context.end_decoration()
        elif isinstance(element, (NoNewline, Unsupported)):
            continue
        else:
            LOGGER.debug("ignoring unrecognised text element %r", element)
    if context.decoration_open:
        context.end_decoration()


def render_to_string(
    elements: Iterable[object],
    output_format: OutputFormat,
    expand_unknown: bool = False,
    *,
    characters: CustomCharacterMap = DEFAULT_CUSTOM_CHARACTERS,
) -> str:
    """Render ``elements`` without terminal attributes and return the text."""

    buffer = io.StringIO()
    render_text(
        elements,
        output_format,
        expand_unknown,
        TerminalWriter(buffer, PLAIN_CAPABILITIES),
        characters=characters,
    )
    return buffer.getvalue()


__all__ = ["RenderContext", "render_text", "render_to_string"]
