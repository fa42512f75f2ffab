from __future__ import annotations

import io

import pytest

from conftest import FakeSubbook
from eplookup.book import BookError
from eplookup.formats import OutputFormat
from eplookup.presenter import present_results
from eplookup.terminal import ANSI_CAPABILITIES, PLAIN_CAPABILITIES, TerminalWriter
from eplookup.text_elements import (
    BeginDecoration,
    CustomCharacter,
    EndDecoration,
    Newline,
    UnicodeString,
)

BOLD = ANSI_CAPABILITIES.bold
STANDOUT = ANSI_CAPABILITIES.standout
RESET = ANSI_CAPABILITIES.reset


def three_entry_subbook() -> FakeSubbook:
    return FakeSubbook(
        entries={
            10: [UnicodeString("first"), Newline()],
            20: [UnicodeString("second"), Newline()],
            30: [UnicodeString("third"), Newline()],
        }
    )


def test_zero_results_terminal_prints_only_no_results(
    output: io.StringIO, ansi_sink: TerminalWriter
) -> None:
    rendered = present_results(FakeSubbook(), [], OutputFormat.TERMINAL, False, ansi_sink)

    assert rendered == 0
    assert output.getvalue() == f"No results.\n\n{RESET}"
    assert "--" not in output.getvalue()


def test_zero_results_html_has_no_entry_framing(output: io.StringIO) -> None:
    sink = TerminalWriter(output, PLAIN_CAPABILITIES)

    present_results(FakeSubbook(), [], OutputFormat.HTML, False, sink)

    assert output.getvalue() == "<p>No results.</p>\n\n"
    assert "Entry" not in output.getvalue()
    assert "<hr>" not in output.getvalue()


def test_terminal_headers_are_bold_counters(
    output: io.StringIO, ansi_sink: TerminalWriter
) -> None:
    subbook = three_entry_subbook()

    rendered = present_results(subbook, [10, 20, 30], OutputFormat.TERMINAL, False, ansi_sink)

    assert rendered == 3
    assert subbook.reads == [10, 20, 30]
    assert output.getvalue() == (
        f"{BOLD}-- 1 of 3 --\n{RESET}first\n"
        f"{BOLD}-- 2 of 3 --\n{RESET}second\n"
        f"{BOLD}-- 3 of 3 --\n{RESET}third\n"
        f"\n{RESET}"
    )


def test_html_headers_use_rules_between_entries(output: io.StringIO) -> None:
    sink = TerminalWriter(output, PLAIN_CAPABILITIES)

    present_results(three_entry_subbook(), [10, 20, 30], OutputFormat.HTML, False, sink)

    assert output.getvalue() == (
        "<p><b>Entry 1 of 3</b></p>\nfirst<br>"
        "<hr>\n<p><b>Entry 2 of 3</b></p>\nsecond<br>"
        "<hr>\n<p><b>Entry 3 of 3</b></p>\nthird<br>"
        "\n"
    )
    assert output.getvalue().count("<hr>") == 2


def test_expand_flag_reaches_renderer(output: io.StringIO) -> None:
    subbook = FakeSubbook(entries={1: [CustomCharacter(0x1234), CustomCharacter(0xB66B)]})
    sink = TerminalWriter(output, PLAIN_CAPABILITIES)

    present_results(subbook, [1], OutputFormat.TERMINAL, True, sink)

    assert "<?0x1234>◧" in output.getvalue()


def test_read_failure_propagates_after_cleanup(
    output: io.StringIO, ansi_sink: TerminalWriter
) -> None:
    subbook = three_entry_subbook()
    subbook.read_error_at = 20

    with pytest.raises(BookError, match="bad entry at 20"):
        present_results(subbook, [10, 20, 30], OutputFormat.TERMINAL, False, ansi_sink)

    transcript = output.getvalue()
    assert "-- 2 of 3 --" in transcript
    assert "-- 3 of 3 --" not in transcript
    assert transcript.endswith(f"\n{RESET}")
    assert not ansi_sink.active_attributes


def test_dangling_emphasis_does_not_leak_into_next_entry(
    output: io.StringIO, ansi_sink: TerminalWriter
) -> None:
    subbook = FakeSubbook(
        entries={
            1: [BeginDecoration(1), UnicodeString("open")],
            2: [UnicodeString("plain"), EndDecoration()],
        }
    )

    present_results(subbook, [1, 2], OutputFormat.TERMINAL, False, ansi_sink)

    assert output.getvalue().startswith(
        f"{BOLD}-- 1 of 2 --\n{RESET}{STANDOUT}open{RESET}{BOLD}-- 2 of 2 --\n{RESET}plain{RESET}"
    )
