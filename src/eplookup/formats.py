"""Output formats and the markup each one substitutes while rendering."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Final, Mapping


class OutputFormat(Enum):
    """Presentation targets understood by the renderer and presenter."""

    TERMINAL = "terminal"
    HTML = "html"

    @property
    def markup(self) -> "FormatMarkup":
        return FORMAT_MARKUP[self]


@dataclass(frozen=True)
class FormatMarkup:
    """Literal tokens a format emits for structural text events."""

    line_break: str
    no_results: str
    emphasis_open: str = ""
    emphasis_close: str = ""
    uses_terminal_attributes: bool = False


FORMAT_MARKUP: Final[Mapping[OutputFormat, FormatMarkup]] = MappingProxyType(
    {
        OutputFormat.TERMINAL: FormatMarkup(
            line_break="\n",
            no_results="No results.\n",
            uses_terminal_attributes=True,
        ),
        OutputFormat.HTML: FormatMarkup(
            line_break="<br>",
            no_results="<p>No results.</p>\n",
            emphasis_open="<b>",
            emphasis_close="</b>",
        ),
    }
)


def parse_output_format(value: str) -> OutputFormat:
    """Return the :class:`OutputFormat` named by ``value`` (case-insensitive)."""

    try:
        return OutputFormat(value.strip().lower())
    except ValueError as exc:
        choices = ", ".join(fmt.value for fmt in OutputFormat)
        raise ValueError(f"unknown output format {value!r} (expected one of: {choices})") from exc


__all__ = ["FORMAT_MARKUP", "FormatMarkup", "OutputFormat", "parse_output_format"]
