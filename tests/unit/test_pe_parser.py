"""Tests for binsight/parsers/pe_parser.py - PE header decoding."""

from __future__ import annotations

import struct
from datetime import datetime, timezone

import pytest

from binsight.parsers.pe_parser import (
    LittleEndianReader,
    OutOfBoundsRead,
    PEAnalyzer,
    analyze_pe,
    machine_name,
    subsystem_name,
)


# ---------------------------------------------------------------------------
# LittleEndianReader
# ---------------------------------------------------------------------------

def test_reader_decodes_little_endian():
    reader = LittleEndianReader(b"\x4c\x01\x78\x56\x34\x12")
    assert reader.u16(0) == 0x014C
    assert reader.u32(2) == 0x12345678
    assert reader.raw(0, 2) == b"\x4c\x01"
    assert len(reader) == 6


def test_reader_bounds():
    reader = LittleEndianReader(b"\x00" * 4)
    assert reader.fits(0, 4)
    assert not reader.fits(1, 4)
    assert not reader.fits(-1, 1)
    with pytest.raises(OutOfBoundsRead):
        reader.u32(1)
    with pytest.raises(ValueError):
        reader.u16(3)


def test_out_of_bounds_read_details():
    with pytest.raises(OutOfBoundsRead) as excinfo:
        LittleEndianReader(b"abc").raw(2, 4)
    assert excinfo.value.offset == 2
    assert excinfo.value.size == 4
    assert excinfo.value.length == 3


# ---------------------------------------------------------------------------
# Validation gates
# ---------------------------------------------------------------------------

def test_too_small_buffer():
    data = b"MZ" + b"\x00" * 30
    info = analyze_pe(data)
    assert info.is_pe is False
    assert info.architecture == "Unknown"
    assert info.sections == []


def test_missing_mz(make_pe):
    data = b"ZM" + make_pe()[2:]
    assert analyze_pe(data).is_pe is False


def test_pe_offset_out_of_range(make_pe):
    data = bytearray(make_pe())
    struct.pack_into("<I", data, 60, len(data) - 4)
    assert analyze_pe(bytes(data)).is_pe is False
    struct.pack_into("<I", data, 60, 0xFFFFFFFF)
    assert analyze_pe(bytes(data)).is_pe is False


def test_bad_pe_signature(make_pe):
    data = bytearray(make_pe())
    data[128:132] = b"\x00\x00\x00\x00"
    assert analyze_pe(bytes(data)).is_pe is False


def test_mz_only_buffer():
    info = analyze_pe(b"MZ" + b"\x00" * 1023)
    assert info.is_pe is False


# ---------------------------------------------------------------------------
# Field decoding
# ---------------------------------------------------------------------------

def test_valid_x64_image(pe_image):
    info = PEAnalyzer(pe_image).analyze()
    assert info.is_pe is True
    assert info.architecture == "x64"
    assert info.subsystem == "Windows GUI"
    assert info.is_dll is False
    assert info.sections == [".text", ".data"]
    assert info.imports == []
    assert info.compile_time == datetime(2023, 1, 1, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("machine", "label"),
    [
        (0x014C, "x86"),
        (0x8664, "x64"),
        (0x01C0, "ARM"),
        (0xAA64, "ARM64"),
        (0x1234, "Unknown (0x1234)"),
    ],
)
def test_machine_labels(make_pe, machine, label):
    assert analyze_pe(make_pe(machine=machine)).architecture == label
    assert machine_name(machine) == label


@pytest.mark.parametrize(
    ("subsystem", "label"),
    [
        (1, "Native"),
        (2, "Windows GUI"),
        (3, "Windows Console"),
        (9, "Windows CE"),
        (7, "Unknown (7)"),
    ],
)
def test_subsystem_labels(make_pe, subsystem, label):
    assert analyze_pe(make_pe(subsystem=subsystem)).subsystem == label
    assert subsystem_name(subsystem) == label


def test_dll_flag(make_pe):
    assert analyze_pe(make_pe(characteristics=0x2102)).is_dll is True
    assert analyze_pe(make_pe(characteristics=0x0102)).is_dll is False


def test_zero_timestamp_means_no_compile_time(make_pe):
    assert analyze_pe(make_pe(timestamp=0)).compile_time is None


def test_compile_time_is_utc(make_pe):
    info = analyze_pe(make_pe(timestamp=86_400))
    assert info.compile_time == datetime(1970, 1, 2, tzinfo=timezone.utc)
    assert info.compile_time.tzinfo is not None


def test_no_optional_header(make_pe):
    info = analyze_pe(make_pe(optional_size=0, sections=(b"CODE",)))
    assert info.is_pe is True
    assert info.subsystem == "Unknown"
    assert info.sections == ["CODE"]


def test_full_width_section_name(make_pe):
    info = analyze_pe(make_pe(sections=(b"UPX0abcd", b".rsrc")))
    assert info.sections == ["UPX0abcd", ".rsrc"]


def test_section_name_high_bytes_become_question_marks(make_pe):
    info = analyze_pe(make_pe(sections=(b"\xe9xt",)))
    assert info.sections == ["?xt"]


def test_section_table_truncated_by_buffer(make_pe):
    # Table starts at 128 + 24 + 240 = 392; 15 entries fit in 1024 bytes.
    info = analyze_pe(make_pe(sections=(), section_count=50))
    assert info.is_pe is True
    assert len(info.sections) == 15
    assert all(name == "" for name in info.sections)


def test_section_entry_ending_at_buffer_end(make_pe):
    # 392 + 40 == 432: a single entry that fills the buffer exactly is kept.
    info = analyze_pe(make_pe(size=432, sections=(b".text",)))
    assert info.sections == [".text"]


def test_truncated_file_header_returns_partial_result():
    data = bytearray(69)
    data[0:2] = b"MZ"
    struct.pack_into("<I", data, 60, 64)
    data[64:68] = b"PE\x00\x00"
    info = analyze_pe(bytes(data))
    assert info.is_pe is True
    assert info.architecture == "Unknown"
    assert info.sections == []


def test_truncated_after_timestamp_keeps_decoded_fields():
    data = bytearray(80)
    data[0:2] = b"MZ"
    struct.pack_into("<I", data, 60, 64)
    data[64:68] = b"PE\x00\x00"
    struct.pack_into("<H", data, 68, 0x014C)
    struct.pack_into("<I", data, 72, 1_000_000)
    info = analyze_pe(bytes(data))
    assert info.is_pe is True
    assert info.architecture == "x86"
    assert info.compile_time == datetime.fromtimestamp(1_000_000, tz=timezone.utc)
    assert info.is_dll is False
    assert info.sections == []


def test_subsystem_outside_buffer_is_skipped(make_pe):
    # Subsystem lives at 128 + 24 + 68 = 220; cut the buffer just before it.
    data = make_pe(sections=())[:221]
    info = analyze_pe(data)
    assert info.is_pe is True
    assert info.subsystem == "Unknown"
    assert info.architecture == "x64"
