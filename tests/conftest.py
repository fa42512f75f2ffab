"""Pytest configuration and in-memory dictionary backends for eplookup tests."""
from __future__ import annotations

import io
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping, Sequence

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
_root_str = str(_REPO_ROOT)
if _root_str not in sys.path:
    sys.path.insert(0, _root_str)

import sitecustomize  # noqa: F401,E402  # Ensure src/ is on sys.path via sitecustomize hook.

from eplookup.book import BookError, IndexKind  # noqa: E402
from eplookup.terminal import ANSI_CAPABILITIES, TerminalWriter  # noqa: E402


@dataclass
class FakeSubbook:
    """Subbook serving canned entries keyed by query and location."""

    results: Mapping[str, Sequence[int]] = field(default_factory=dict)
    entries: Mapping[int, Sequence[object]] = field(default_factory=dict)
    search_error: str | None = None
    read_error_at: int | None = None
    searches: list[tuple[IndexKind, str]] = field(default_factory=list)
    reads: list[int] = field(default_factory=list)

    def search(self, index: IndexKind, query: str) -> Sequence[int]:
        self.searches.append((index, query))
        if self.search_error is not None:
            raise BookError(self.search_error)
        return list(self.results.get(query, ()))

    def read_text(self, location: int):
        self.reads.append(location)
        if location == self.read_error_at:
            raise BookError(f"bad entry at {location}")
        # Generators mirror the forward-only text sequences real backends yield.
        return (element for element in self.entries[location])


@dataclass
class FakeBook:
    subbook: FakeSubbook
    descriptors: Sequence[str] = ("main",)
    subbook_error: str | None = None
    opened: list[str] = field(default_factory=list)

    def subbooks(self) -> Sequence[str]:
        return list(self.descriptors)

    def open_subbook(self, descriptor: str) -> FakeSubbook:
        self.opened.append(descriptor)
        if self.subbook_error is not None:
            raise BookError(self.subbook_error)
        return self.subbook


def make_opener(book: FakeBook) -> Callable[[Path], FakeBook]:
    def opener(path: Path) -> FakeBook:
        return book

    return opener


@pytest.fixture()
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture()
def ansi_sink(output: io.StringIO) -> TerminalWriter:
    return TerminalWriter(output, ANSI_CAPABILITIES)
