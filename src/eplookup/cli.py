"""Look up a word in an EPWING dictionary book and print the matching entries."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import IO, Mapping, Sequence

from .book import BackendImportError, BookError, BookOpener, IndexKind, load_book_opener
from .config import (
    BACKEND_ENV,
    BOOK_PATH_ENV,
    CONFIG_PATH_ENV,
    ConfigError,
    LookupConfig,
    load_config,
    resolve_backend,
    resolve_book_path,
    resolve_config_path,
)
from .custom_characters import DEFAULT_CUSTOM_CHARACTERS, CustomCharacterMap
from .formats import OutputFormat
from .presenter import present_results
from .terminal import PLAIN_CAPABILITIES, TerminalWriter

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ep",
        description=__doc__,
        epilog=(
            f"Environment: ${BOOK_PATH_ENV} (book path), ${BACKEND_ENV} "
            f"(backend import path), ${CONFIG_PATH_ENV} (configuration file)."
        ),
    )
    parser.add_argument(
        "query",
        nargs="?",
        default=None,
        help="Word to look up",
    )
    parser.add_argument(
        "-b",
        "--book",
        dest="book_path",
        type=Path,
        default=None,
        help=f"Path to the EPWING book (default: ${BOOK_PATH_ENV})",
    )
    parser.add_argument(
        "--expand-unknown-characters",
        action="store_true",
        help="Show character codes for characters without a Unicode replacement",
    )
    format_group = parser.add_mutually_exclusive_group()
    format_group.add_argument(
        "--html",
        dest="output_format",
        action="store_const",
        const=OutputFormat.HTML,
        help="Emit HTML markup instead of terminal text",
    )
    format_group.add_argument(
        "--terminal",
        dest="output_format",
        action="store_const",
        const=OutputFormat.TERMINAL,
        help="Emit terminal text (overrides a configured format)",
    )
    parser.set_defaults(output_format=None)
    parser.add_argument(
        "--backend",
        default=None,
        help="Import path of the book opener, e.g. 'package.module:open_book'",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Path to a TOML configuration file (default: ${CONFIG_PATH_ENV})",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (written to stderr)",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed command-line arguments for ``ep``."""

    return build_parser().parse_args(argv)


def run_search(
    opener: BookOpener,
    book_path: Path,
    query: str,
    *,
    output_format: OutputFormat,
    expand_unknown: bool,
    sink: TerminalWriter,
    characters: CustomCharacterMap = DEFAULT_CUSTOM_CHARACTERS,
) -> int:
    """Open ``book_path``, search its first subbook and present the hits.

    Library failures are reported on ``sink`` and end the command with status 0.
    """

    LOGGER.info("opening book %s", book_path)
    try:
        book = opener(book_path)
    except (BookError, OSError) as exc:
        LOGGER.info("open failed for %s: %s", book_path, exc)
        sink.writeln(f"Failed to open book: {exc}")
        return 0

    try:
        descriptors = book.subbooks()
    except BookError as exc:
        LOGGER.info("subbook listing failed: %s", exc)
        sink.writeln(f"Failed to list subbooks: {exc}")
        return 0
    if not descriptors:
        sink.writeln("Book has no subbooks.")
        return 0

    try:
        subbook = book.open_subbook(descriptors[0])
    except BookError as exc:
        LOGGER.info("subbook open failed: %s", exc)
        sink.writeln(f"Failed to open subbook: {exc}")
        return 0

    try:
        locations = subbook.search(IndexKind.WORD_AS_IS, query)
    except BookError as exc:
        LOGGER.info("search failed for %r: %s", query, exc)
        sink.writeln(f"Failed to search: {exc}")
        return 0
    LOGGER.info("%d result(s) for %r", len(locations), query)

    try:
        present_results(
            subbook,
            locations,
            output_format,
            expand_unknown,
            sink,
            characters=characters,
        )
    except BookError as exc:
        LOGGER.info("reading entry failed: %s", exc)
        sink.writeln(f"Failed to read entry: {exc}")
    return 0


def _load_lookup_config(
    explicit: Path | None, environ: Mapping[str, str]
) -> LookupConfig:
    config_path = resolve_config_path(explicit, environ)
    if config_path is None:
        return LookupConfig()
    LOGGER.debug("loading configuration from %s", config_path)
    return load_config(config_path)


def main(
    argv: Sequence[str] | None = None,
    *,
    stdout: IO[str] | None = None,
    environ: Mapping[str, str] | None = None,
    opener: BookOpener | None = None,
) -> int:
    """Entry point for the ``ep`` command."""

    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    stream = sys.stdout if stdout is None else stdout
    env = os.environ if environ is None else environ

    if args.query is None:
        parser.print_help(stream)
        return 0

    try:
        config = _load_lookup_config(args.config, env)
        book_path = resolve_book_path(args.book_path, config, env)
        if opener is None:
            backend = resolve_backend(args.backend, config, env)
            LOGGER.debug("using backend %s", backend)
            opener = load_book_opener(backend)
    except (ConfigError, BackendImportError) as exc:
        raise SystemExit(str(exc)) from exc

    output_format = args.output_format or config.output_format
    expand_unknown = args.expand_unknown_characters or config.expand_unknown_characters
    if output_format is OutputFormat.TERMINAL:
        sink = TerminalWriter(stream)
    else:
        sink = TerminalWriter(stream, PLAIN_CAPABILITIES)

    try:
        return run_search(
            opener,
            book_path,
            args.query,
            output_format=output_format,
            expand_unknown=expand_unknown,
            sink=sink,
            characters=config.character_map(),
        )
    finally:
        sink.flush()


if __name__ == "__main__":  # pragma: no cover - exercised via python -m
    raise SystemExit(main())
