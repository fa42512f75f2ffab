"""Interface to the external dictionary-access library.

Book parsing, index traversal and text decoding are provided by a backend
module chosen at run time. The backend exposes a callable that opens a book
archive; the objects it returns must satisfy :class:`Book` and
:class:`Subbook`.
"""
from __future__ import annotations

from enum import Enum, auto
from importlib import import_module
from pathlib import Path
from typing import Callable, Hashable, Protocol, Sequence

from .text_elements import EntryText


class BookError(RuntimeError):
    """Raised by backends when a book, subbook, search or entry read fails."""


class IndexKind(Enum):
    """Search indexes the command surface can address."""

    WORD_AS_IS = auto()


Location = Hashable


class SubbookDescriptor(Protocol):
    """Opaque handle naming one subbook within a book."""


class Subbook(Protocol):
    def search(self, index: IndexKind, query: str) -> Sequence[Location]:
        """Return the ordered entry locations matching ``query``."""

    def read_text(self, location: Location) -> EntryText:
        """Return the text elements of the entry at ``location``."""


class Book(Protocol):
    def subbooks(self) -> Sequence[SubbookDescriptor]:
        """Return the subbooks in catalogue order."""

    def open_subbook(self, descriptor: SubbookDescriptor) -> Subbook:
        """Open the subbook named by ``descriptor``."""


BookOpener = Callable[[Path], Book]


class BackendImportError(ValueError):
    """Raised when a backend import path cannot be resolved."""


def _split_import_path(import_path: str) -> tuple[str, str]:
    module_name, separator, attribute_path = import_path.strip().partition(":")
    if not separator or not module_name or not attribute_path:
        raise BackendImportError(
            f"backend import path must look like 'package.module:callable', got {import_path!r}"
        )
    return module_name, attribute_path


def load_book_opener(import_path: str) -> BookOpener:
    """Resolve ``import_path`` (``module:attr.attr``) to a book-opening callable."""

    module_name, attribute_path = _split_import_path(import_path)
    try:
        module = import_module(module_name)
    except ImportError as exc:
        raise BackendImportError(f"cannot import backend module {module_name!r}: {exc}") from exc

    opener: object = module
    for attribute in attribute_path.split("."):
        try:
            opener = getattr(opener, attribute)
        except AttributeError as exc:
            raise BackendImportError(
                f"backend {module_name!r} has no attribute {attribute_path!r}"
            ) from exc
    if not callable(opener):
        raise BackendImportError(f"backend {import_path!r} is not callable")
    return opener  # type: ignore[return-value]


__all__ = [
    "BackendImportError",
    "Book",
    "BookError",
    "BookOpener",
    "IndexKind",
    "Location",
    "Subbook",
    "SubbookDescriptor",
    "load_book_opener",
]
