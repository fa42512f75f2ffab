"""Frame search results and render each entry body."""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Callable, Final, Mapping, Sequence

from .book import Location, Subbook
from .custom_characters import DEFAULT_CUSTOM_CHARACTERS, CustomCharacterMap
from .formats import OutputFormat
from .renderer import render_text
from .terminal import TerminalAttribute, TerminalWriter

LOGGER = logging.getLogger(__name__)

HeaderWriter = Callable[[TerminalWriter, int, int], None]


def _write_terminal_header(sink: TerminalWriter, position: int, total: int) -> None:
    sink.attr(TerminalAttribute.BOLD)
    sink.writeln(f"-- {position} of {total} --")
    sink.reset()


def _write_html_header(sink: TerminalWriter, position: int, total: int) -> None:
    if position > 1:
        sink.writeln("<hr>")
    sink.writeln(f"<p><b>Entry {position} of {total}</b></p>")


HEADER_WRITERS: Final[Mapping[OutputFormat, HeaderWriter]] = MappingProxyType(
    {
        OutputFormat.TERMINAL: _write_terminal_header,
        OutputFormat.HTML: _write_html_header,
    }
)


def present_results(
    subbook: Subbook,
    locations: Sequence[Location],
    output_format: OutputFormat,
    expand_unknown: bool,
    sink: TerminalWriter,
    *,
    characters: CustomCharacterMap = DEFAULT_CUSTOM_CHARACTERS,
) -> int:
    """Write every entry in ``locations`` with per-entry headers.

    Returns the number of entries rendered. A ``BookError`` from
    ``subbook.read_text`` stops the listing and propagates; the trailing blank
    line and attribute reset are written either way.
    """

    total = len(locations)
    write_header = HEADER_WRITERS[output_format]
    rendered = 0
    try:
        if total == 0:
            sink.write(output_format.markup.no_results)
        for position, location in enumerate(locations, start=1):
            write_header(sink, position, total)
            text = subbook.read_text(location)
            render_text(
                text,
                output_format,
                expand_unknown,
                sink,
                characters=characters,
            )
            rendered += 1
    finally:
        sink.writeln()
        sink.reset()
    LOGGER.debug("rendered %d of %d entries", rendered, total)
    return rendered


__all__ = ["HEADER_WRITERS", "HeaderWriter", "present_results"]
