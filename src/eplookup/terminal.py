"""Text output stream with terminfo-driven display attributes."""
from __future__ import annotations

import curses
import logging
import re
import sys
from dataclasses import dataclass
from enum import Enum
from typing import IO, Final

LOGGER = logging.getLogger(__name__)

# tputs delay markers such as $<2> or $<5*/>; never sent to the terminal.
_PADDING = re.compile(rb"\$<[0-9.*/]*>")


class TerminalAttribute(Enum):
    """Display attributes the renderer and presenter toggle."""

    STANDOUT = "smso"
    BOLD = "bold"


@dataclass(frozen=True)
class TerminalCapabilities:
    """Escape sequences used to switch attributes on and back off."""

    standout: str = ""
    bold: str = ""
    reset: str = ""

    def sequence_for(self, attribute: TerminalAttribute) -> str:
        if attribute is TerminalAttribute.STANDOUT:
            return self.standout
        return self.bold

    @classmethod
    def from_terminfo(cls, stream: IO[str]) -> "TerminalCapabilities":
        """Query terminfo for ``stream``; plain output when it is not a terminal."""

        isatty = getattr(stream, "isatty", None)
        if not callable(isatty) or not isatty():
            return PLAIN_CAPABILITIES
        try:
            curses.setupterm(fd=stream.fileno())
        except (curses.error, OSError, ValueError) as exc:
            LOGGER.debug("terminfo unavailable, disabling attributes: %s", exc)
            return PLAIN_CAPABILITIES

        def capability(name: str) -> str:
            value = curses.tigetstr(name)
            if not value:
                return ""
            return _PADDING.sub(b"", value).decode("latin-1")

        return cls(
            standout=capability(TerminalAttribute.STANDOUT.value),
            bold=capability(TerminalAttribute.BOLD.value),
            reset=capability("sgr0"),
        )


PLAIN_CAPABILITIES: Final[TerminalCapabilities] = TerminalCapabilities()

ANSI_CAPABILITIES: Final[TerminalCapabilities] = TerminalCapabilities(
    standout="\x1b[7m",
    bold="\x1b[1m",
    reset="\x1b[0m",
)


class TerminalWriter:
    """Write text to ``stream`` and toggle display attributes in-band."""

    def __init__(
        self,
        stream: IO[str] | None = None,
        capabilities: TerminalCapabilities | None = None,
    ) -> None:
        self.stream = sys.stdout if stream is None else stream
        if capabilities is None:
            capabilities = TerminalCapabilities.from_terminfo(self.stream)
        self.capabilities = capabilities
        self._attributes: set[TerminalAttribute] = set()

    @property
    def active_attributes(self) -> frozenset[TerminalAttribute]:
        return frozenset(self._attributes)

    def write(self, text: str) -> None:
        if text:
            self.stream.write(text)

    def writeln(self, text: str = "") -> None:
        self.stream.write(f"{text}\n")

    def attr(self, attribute: TerminalAttribute) -> None:
        """Switch ``attribute`` on until the next :meth:`reset`."""

        self._attributes.add(attribute)
        self.write(self.capabilities.sequence_for(attribute))

    def reset(self) -> None:
        """Return the stream to default attributes."""

        self._attributes.clear()
        self.write(self.capabilities.reset)

    def flush(self) -> None:
        self.stream.flush()


__all__ = [
    "ANSI_CAPABILITIES",
    "PLAIN_CAPABILITIES",
    "TerminalAttribute",
    "TerminalCapabilities",
    "TerminalWriter",
]
