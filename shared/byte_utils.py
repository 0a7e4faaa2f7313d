"""
Binsight Byte Utilities
========================

Conversions between raw bytes and their textual renderings (hex, ASCII,
UTF-8, Base64, binary digit strings), fixed-length digests, and a
``hexdump -C`` style dump.
"""

from __future__ import annotations

import base64
import hashlib

_PRINTABLE_LOW: int = 0x20
_PRINTABLE_HIGH: int = 0x7E


def md5_hex(data: bytes) -> str:
    """Return the lowercase MD5 digest of *data* (32 hex characters)."""
    return hashlib.md5(data).hexdigest()


def sha256_hex(data: bytes) -> str:
    """Return the lowercase SHA-256 digest of *data* (64 hex characters)."""
    return hashlib.sha256(data).hexdigest()


def to_hex(data: bytes) -> str:
    """Uppercase hex without separators, e.g. ``b"Hi" -> "4869"``."""
    return bytes(data).hex().upper()


def to_ascii(data: bytes) -> str:
    """Decode as 7-bit ASCII; bytes above 0x7F become ``?``."""
    return "".join(chr(b) if b < 0x80 else "?" for b in data)


def to_utf8(data: bytes) -> str:
    return bytes(data).decode("utf-8", errors="replace")


def to_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def from_binary_string(text: str) -> bytes:
    """Parse a string of ``0``/``1`` digits into bytes.

    Spaces are ignored, so ``"01001000 01101001"`` and ``"0100100001101001"``
    both decode to ``b"Hi"``.

    Raises:
        ValueError: If *text* is empty or blank, its digit count is not a
            multiple of 8, or it contains anything other than ``0``/``1``.
    """
    if text is None or not text.strip():
        raise ValueError("Input cannot be null or empty.")

    digits = text.replace(" ", "")
    if len(digits) % 8 != 0:
        raise ValueError("Binary string length must be a multiple of 8.")
    invalid = set(digits) - {"0", "1"}
    if invalid:
        raise ValueError(
            f"Binary string contains invalid characters: {''.join(sorted(invalid))!r}"
        )

    return bytes(int(digits[i:i + 8], 2) for i in range(0, len(digits), 8))


def to_hex_dump(data: bytes, bytes_per_line: int = 16) -> str:
    """Format *data* like ``hexdump -C``.

    Each row is ``OFFSET  HEX... |ASCII|``: an 8-digit uppercase offset,
    two spaces, one ``XX `` cell per byte (with an extra space after the
    eighth), blank cells padding a short final row, then the printable
    rendering with non-printable bytes shown as ``.``.

    Args:
        data: Bytes to dump.
        bytes_per_line: Bytes per row (default 16).

    Returns:
        The dump with a trailing newline per row, or ``""`` for empty input.

    Raises:
        ValueError: If *bytes_per_line* is less than 1.
    """
    if bytes_per_line < 1:
        raise ValueError(f"bytes_per_line must be positive, got {bytes_per_line}")

    lines: list[str] = []
    for start in range(0, len(data), bytes_per_line):
        chunk = data[start:start + bytes_per_line]
        parts = [f"{start:08X}  "]
        for j in range(bytes_per_line):
            parts.append(f"{chunk[j]:02X} " if j < len(chunk) else "   ")
            if j == 7:
                parts.append(" ")
        parts.append(" |")
        parts.append(
            "".join(
                chr(b) if _PRINTABLE_LOW <= b <= _PRINTABLE_HIGH else "."
                for b in chunk
            )
        )
        parts.append("|\n")
        lines.append("".join(parts))
    return "".join(lines)
