"""Pytest configuration for shared fixtures."""

from __future__ import annotations

import struct
from typing import Callable, Sequence

import pytest

PE_OFFSET = 128
OPTIONAL_HEADER_SIZE = 0xF0


def build_pe(
    *,
    size: int = 1024,
    pe_offset: int = PE_OFFSET,
    machine: int = 0x8664,
    timestamp: int = 0,
    characteristics: int = 0x0022,
    optional_size: int = OPTIONAL_HEADER_SIZE,
    subsystem: int = 2,
    sections: Sequence[bytes] = (b".text", b".data"),
    section_count: int | None = None,
) -> bytes:
    """Assemble a minimal PE image whose headers fit in *size* bytes."""
    buf = bytearray(size)
    buf[0:2] = b"MZ"
    struct.pack_into("<I", buf, 60, pe_offset)
    buf[pe_offset:pe_offset + 4] = b"PE\x00\x00"

    count = len(sections) if section_count is None else section_count
    struct.pack_into("<H", buf, pe_offset + 4, machine)
    struct.pack_into("<H", buf, pe_offset + 6, count)
    struct.pack_into("<I", buf, pe_offset + 8, timestamp)
    struct.pack_into("<H", buf, pe_offset + 20, optional_size)
    struct.pack_into("<H", buf, pe_offset + 22, characteristics)
    if optional_size:
        struct.pack_into("<H", buf, pe_offset + 24 + 68, subsystem)

    table = pe_offset + 24 + optional_size
    for index, name in enumerate(sections):
        entry = table + index * 40
        buf[entry:entry + 8] = name[:8].ljust(8, b"\x00")
    return bytes(buf)


@pytest.fixture
def make_pe() -> Callable[..., bytes]:
    """Factory for synthetic PE images."""
    return build_pe


@pytest.fixture
def pe_image() -> bytes:
    """A 2 KiB x64 GUI executable with two sections."""
    return build_pe(size=2048, timestamp=1_672_531_200)


@pytest.fixture
def text_sample() -> bytes:
    return b"Hello World! This is a test file with some printable content.\n"
