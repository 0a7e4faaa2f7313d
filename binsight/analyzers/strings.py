"""
Byte Pattern & String Extractor
================================

Linear scans over a raw buffer that surface analyst-relevant content:

    - printable ASCII strings (the classic ``strings(1)`` algorithm),
    - every occurrence of a literal byte pattern, overlaps included,
    - runs of zero bytes (padding / alignment),
    - ``@`` positions that look like part of an email address,

plus the byte-level statistics the metadata record carries (sparse
histogram and printable-text ratio).

All functions are pure; none of them mutates the buffer.

References:
    - Strings(1) Unix utility algorithm.
"""

from __future__ import annotations

import re
from typing import Iterator

import numpy as np

from shared.math_utils import frequency_distribution

# Printable ASCII range used for string runs
_PRINTABLE_LOW: int = 0x20
_PRINTABLE_HIGH: int = 0x7E

# Text likelihood also accepts tab, LF and CR
_TEXT_BYTES: np.ndarray = np.zeros(256, dtype=bool)
_TEXT_BYTES[_PRINTABLE_LOW:_PRINTABLE_HIGH + 1] = True
_TEXT_BYTES[[0x09, 0x0A, 0x0D]] = True

EMAIL_WINDOW: int = 10


def _printable_run_pattern(min_length: int) -> re.Pattern[bytes]:
    return re.compile(rb"[\x20-\x7e]{%d,}" % min_length)


def _null_run_pattern(min_length: int) -> re.Pattern[bytes]:
    return re.compile(rb"\x00{%d,}" % min_length)


# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------

def extract_strings(data: bytes, min_length: int = 4) -> Iterator[str]:
    """Yield printable ASCII runs of at least *min_length* characters.

    A run is a maximal sequence of bytes in ``0x20..0x7E``; any other byte
    (or the end of the buffer) terminates it.  Shorter runs are dropped.

    Args:
        data: Raw bytes to scan.
        min_length: Minimum run length; values below 1 are treated as 1.

    Yields:
        Each qualifying run decoded as ASCII, in buffer order.
    """
    if not data:
        return
    pattern = _printable_run_pattern(max(1, min_length))
    for match in pattern.finditer(data):
        yield match.group().decode("ascii")


# ---------------------------------------------------------------------------
# Literal patterns
# ---------------------------------------------------------------------------

def find_pattern(data: bytes, pattern: bytes) -> list[int]:
    """Return every offset at which *pattern* starts, including overlaps.

    Each search resumes one byte after the previous hit, so ``01 02`` in
    ``00 01 02 01 02 03 01 02`` yields ``[1, 3, 6]`` and ``AA`` in
    ``AAAA`` yields ``[0, 1, 2]``.  An empty pattern matches nowhere.
    """
    if not pattern or not data:
        return []

    buf = bytes(data)
    needle = bytes(pattern)
    positions: list[int] = []
    pos = buf.find(needle)
    while pos != -1:
        positions.append(pos)
        pos = buf.find(needle, pos + 1)
    return positions


def find_null_runs(data: bytes, min_length: int = 4) -> Iterator[tuple[int, int]]:
    """Yield ``(start, length)`` for each maximal run of zero bytes.

    Runs shorter than *min_length* (minimum 1) are skipped; a run that
    reaches the end of the buffer is still reported.
    """
    if not data:
        return
    for match in _null_run_pattern(max(1, min_length)).finditer(data):
        yield match.start(), match.end() - match.start()


# ---------------------------------------------------------------------------
# Email heuristic
# ---------------------------------------------------------------------------

def _is_alnum(byte: int) -> bool:
    return (
        0x30 <= byte <= 0x39
        or 0x41 <= byte <= 0x5A
        or 0x61 <= byte <= 0x7A
    )


def is_likely_email_at(data: bytes, position: int) -> bool:
    """Guess whether the ``@`` at *position* belongs to an email address.

    The ``@`` must be at least 3 bytes from either end of the buffer, and
    an ASCII letter or digit must occur within the 10 bytes before it and
    within the 9 bytes after it.  This accepts plenty of false positives;
    it is not address validation.
    """
    length = len(data)
    if position < 3 or position >= length - 3:
        return False

    before = data[max(0, position - EMAIL_WINDOW):position]
    after = data[position + 1:min(length, position + EMAIL_WINDOW)]
    return any(_is_alnum(b) for b in before) and any(_is_alnum(b) for b in after)


def find_email_candidates(data: bytes, limit: int = 10) -> list[int]:
    """Return offsets of plausible email ``@`` signs.

    Only the first *limit* ``@`` occurrences are examined.
    """
    return [
        pos for pos in find_pattern(data, b"@")[:limit]
        if is_likely_email_at(data, pos)
    ]


# ---------------------------------------------------------------------------
# Byte statistics
# ---------------------------------------------------------------------------

def byte_frequency(data: bytes) -> dict[int, int]:
    """Sparse byte histogram: ``{byte_value: count}`` for bytes that occur.

    Keys are in ascending byte order.  Absent keys mean a count of zero.
    """
    hist = frequency_distribution(data)
    return {int(value): int(hist[value]) for value in np.flatnonzero(hist)}


def is_likely_text(data: bytes, threshold: float = 0.7) -> bool:
    """Return ``True`` if at least *threshold* of the bytes look like text.

    Text bytes are printable ASCII (``0x20..0x7E``) plus tab, LF and CR.
    Empty input is never text.
    """
    if not data:
        return False
    arr = np.frombuffer(bytes(data), dtype=np.uint8)
    ratio = np.count_nonzero(_TEXT_BYTES[arr]) / arr.size
    return bool(ratio >= threshold)
