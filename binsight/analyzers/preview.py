"""
Raw Code Preview
=================

Binsight performs no instruction decoding.  Where a disassembly listing
would go, this module shows the leading bytes of the code in hex so the
analyst can eyeball the entry bytes before handing the sample to a real
disassembler.
"""

from __future__ import annotations

from typing import Iterator

PREVIEW_BYTES: int = 16
RAW_MARKER: str = "(Raw bytes - no instruction decoding)"


def raw_preview(
    code: bytes,
    is_64bit: bool = True,
    max_bytes: int = PREVIEW_BYTES,
) -> Iterator[str]:
    """Yield a single hex preview line for *code*, or nothing if it is empty.

    Args:
        code: Bytes to preview.
        is_64bit: Accepted for call-site symmetry with a decoder; the raw
            preview is identical for 32- and 64-bit code.
        max_bytes: Number of leading bytes shown (default 16).

    Yields:
        ``"0x0000: 48 89 E5 C3 (Raw bytes - no instruction decoding)"``
    """
    if not code:
        return
    head = bytes(code[:max(1, max_bytes)])
    yield f"0x0000: {head.hex(' ').upper()} {RAW_MARKER}"
