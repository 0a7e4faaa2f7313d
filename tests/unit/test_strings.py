"""Tests for binsight/analyzers/strings.py - string, pattern and byte scans."""

from __future__ import annotations

import types

from binsight.analyzers.strings import (
    byte_frequency,
    extract_strings,
    find_email_candidates,
    find_null_runs,
    find_pattern,
    is_likely_email_at,
    is_likely_text,
)


# ---------------------------------------------------------------------------
# extract_strings
# ---------------------------------------------------------------------------

def test_extract_strings_drops_short_runs():
    data = bytes.fromhex("48656C6C6F00486900")
    assert list(extract_strings(data, 4)) == ["Hello"]


def test_extract_strings_flushes_trailing_run():
    assert list(extract_strings(b"\x00\x01abcdef")) == ["abcdef"]


def test_extract_strings_is_lazy():
    result = extract_strings(b"abcdef")
    assert isinstance(result, types.GeneratorType)
    assert next(result) == "abcdef"


def test_extract_strings_boundaries():
    data = b"ABCD\x7fEFGH\x1fIJKL\tMNOP"
    assert list(extract_strings(data, 4)) == ["ABCD", "EFGH", "IJKL", "MNOP"]


def test_extract_strings_exact_min_length():
    assert list(extract_strings(b"abc\x00abcd", 4)) == ["abcd"]


def test_extract_strings_min_length_clamped():
    assert list(extract_strings(b"a\x00b", 0)) == ["a", "b"]


def test_extract_strings_empty():
    assert list(extract_strings(b"")) == []


def test_extract_strings_high_bytes_terminate():
    assert list(extract_strings("café latte".encode("utf-8"), 3)) == ["caf", " latte"]


# ---------------------------------------------------------------------------
# find_pattern
# ---------------------------------------------------------------------------

def test_find_pattern_multiple_hits():
    data = bytes.fromhex("0001020102030102")
    assert find_pattern(data, b"\x01\x02") == [1, 3, 6]


def test_find_pattern_overlapping():
    assert find_pattern(b"AAAA", b"AA") == [0, 1, 2]


def test_find_pattern_edge_cases():
    assert find_pattern(b"abc", b"") == []
    assert find_pattern(b"", b"a") == []
    assert find_pattern(b"ab", b"abc") == []
    assert find_pattern(b"abc", b"abc") == [0]


def test_find_pattern_accepts_bytearray():
    assert find_pattern(bytearray(b"xxhttp://"), b"http://") == [2]


# ---------------------------------------------------------------------------
# find_null_runs
# ---------------------------------------------------------------------------

def test_find_null_runs():
    data = b"\x01" + b"\x00" * 5 + b"\x01\x00\x00" + b"\x00" * 4
    assert list(find_null_runs(data, 4)) == [(1, 5), (7, 6)]


def test_find_null_runs_respects_minimum():
    data = b"\x00" * 15 + b"\x01" + b"\x00" * 16
    assert list(find_null_runs(data, 16)) == [(16, 16)]


def test_find_null_runs_whole_buffer():
    assert list(find_null_runs(bytes(32), 16)) == [(0, 32)]


# ---------------------------------------------------------------------------
# Email heuristic
# ---------------------------------------------------------------------------

def test_email_positive():
    data = b"contact: bob@example.com"
    assert is_likely_email_at(data, data.index(b"@"))


def test_email_too_close_to_edges():
    assert not is_likely_email_at(b"ab@cdefgh", 2)
    assert not is_likely_email_at(b"abcdef@gh", 6)


def test_email_requires_alnum_on_both_sides():
    data = b"--------@example"
    assert not is_likely_email_at(data, data.index(b"@"))
    data = b"user@---------x"
    assert not is_likely_email_at(data, data.index(b"@"))


def test_email_window_after_is_nine_bytes():
    # Alphanumeric byte at position + 10 is outside the window.
    data = b"user@" + b"-" * 9 + b"z"
    assert not is_likely_email_at(data, 4)
    data = b"user@" + b"-" * 8 + b"z-"
    assert is_likely_email_at(data, 4)


def test_email_candidates_limit_counts_examined_positions():
    data = b"xyz@abc " * 15
    candidates = find_email_candidates(data, limit=10)
    assert len(candidates) == 10
    assert candidates == [3 + 8 * i for i in range(10)]


def test_email_candidates_skip_rejected_within_limit():
    data = b"@" * 12 + b"  user@example.com"
    assert find_email_candidates(data, limit=10) == []


# ---------------------------------------------------------------------------
# Byte statistics
# ---------------------------------------------------------------------------

def test_byte_frequency_is_sparse():
    freq = byte_frequency(b"aab\x00")
    assert freq == {0x00: 1, 0x61: 2, 0x62: 1}
    assert list(freq) == sorted(freq)
    assert all(isinstance(k, int) and isinstance(v, int) for k, v in freq.items())


def test_byte_frequency_sums_to_length():
    data = bytes(range(256)) * 3 + b"\xff"
    freq = byte_frequency(data)
    assert sum(freq.values()) == len(data)
    assert freq[0xFF] == 4


def test_byte_frequency_empty():
    assert byte_frequency(b"") == {}


def test_is_likely_text_threshold_inclusive():
    assert is_likely_text(b"a" * 7 + b"\x00" * 3)
    assert not is_likely_text(b"a" * 6 + b"\x00" * 4)


def test_is_likely_text_counts_whitespace():
    assert is_likely_text(b"\t\r\n" * 10)


def test_is_likely_text_empty():
    assert not is_likely_text(b"")


def test_is_likely_text_custom_threshold():
    assert is_likely_text(b"ab\x00\x00", threshold=0.5)
    assert not is_likely_text(b"ab\x00\x00", threshold=0.6)
