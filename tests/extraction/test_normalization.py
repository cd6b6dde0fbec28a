from __future__ import annotations

from wobridge.extraction.normalization import normalize_text, normalize_whitespace, split_lines


def test_split_lines_trims_and_keeps_blank_lines() -> None:
    assert split_lines("  Work Order: 1  \n\n\tLocation: A \n") == ("Work Order: 1", "", "Location: A", "")


def test_split_lines_handles_windows_and_old_mac_breaks() -> None:
    assert split_lines("a\r\nb\rc") == ("a", "b", "c")


def test_split_lines_empty_input() -> None:
    assert split_lines("") == ()


def test_normalize_whitespace_collapses_runs() -> None:
    assert normalize_whitespace("  Net \t 30\n days ") == "Net 30 days"


def test_normalize_text_is_case_and_width_insensitive() -> None:
    assert normalize_text("WORK  Ｏrder") == normalize_text("work order")
