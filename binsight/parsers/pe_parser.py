"""
PE/COFF Structural Parser
==========================

Struct-based decoder for the headers of a Portable Executable (PE) image:
DOS stub, PE signature, COFF file header, the subsystem field of the
optional header, and the section table.

Parsing is a chain of validation gates.  Until the ``PE\\0\\0`` signature
has been confirmed any failed check returns an empty :class:`PEInfo`
(``is_pe=False``).  After that point decoding is best-effort: a read that
would leave the buffer stops decoding and the fields gathered so far are
returned, so a truncated header still yields a partial summary.

Layout (offsets relative to ``e_lfanew``)::

    +0   "PE\\0\\0"
    +4   Machine                 u16
    +6   NumberOfSections        u16
    +8   TimeDateStamp           u32
    +20  SizeOfOptionalHeader    u16
    +22  Characteristics         u16
    +24  Optional header         (Subsystem at +68 within it)
    +24+SizeOfOptionalHeader     Section table, 40 bytes per entry

References:
    - Microsoft. (2024). PE Format. Microsoft Learn.
      https://learn.microsoft.com/en-us/windows/win32/debug/pe-format
    - Pietrek, M. (1994). Peering Inside the PE: A Tour of the Win32
      Portable Executable File Format. Microsoft Systems Journal.
"""

from __future__ import annotations

import logging
import struct
from datetime import datetime, timedelta, timezone
from typing import Any

from shared.byte_utils import to_ascii

from binsight.core.models import PEInfo

logger = logging.getLogger("binsight.parsers.pe")


# ---------------------------------------------------------------------------
# PE Constants
# ---------------------------------------------------------------------------

MZ_MAGIC: bytes = b"MZ"
PE_MAGIC: bytes = b"PE\x00\x00"

DOS_HEADER_SIZE: int = 64
E_LFANEW_OFFSET: int = 60

COFF_MACHINE: int = 4
COFF_NUMBER_OF_SECTIONS: int = 6
COFF_TIME_DATE_STAMP: int = 8
COFF_SIZE_OF_OPTIONAL_HEADER: int = 20
COFF_CHARACTERISTICS: int = 22
OPTIONAL_HEADER: int = 24
OPTIONAL_SUBSYSTEM: int = 68

SECTION_HEADER_SIZE: int = 40
SECTION_NAME_SIZE: int = 8

IMAGE_FILE_MACHINE_I386: int = 0x14C
IMAGE_FILE_MACHINE_ARM: int = 0x1C0
IMAGE_FILE_MACHINE_AMD64: int = 0x8664
IMAGE_FILE_MACHINE_ARM64: int = 0xAA64

_MACHINE_NAMES: dict[int, str] = {
    IMAGE_FILE_MACHINE_I386: "x86",
    IMAGE_FILE_MACHINE_AMD64: "x64",
    IMAGE_FILE_MACHINE_ARM: "ARM",
    IMAGE_FILE_MACHINE_ARM64: "ARM64",
}

IMAGE_FILE_DLL: int = 0x2000

IMAGE_SUBSYSTEM_NATIVE: int = 1
IMAGE_SUBSYSTEM_WINDOWS_GUI: int = 2
IMAGE_SUBSYSTEM_WINDOWS_CUI: int = 3
IMAGE_SUBSYSTEM_WINDOWS_CE_GUI: int = 9

_SUBSYSTEM_NAMES: dict[int, str] = {
    IMAGE_SUBSYSTEM_NATIVE: "Native",
    IMAGE_SUBSYSTEM_WINDOWS_GUI: "Windows GUI",
    IMAGE_SUBSYSTEM_WINDOWS_CUI: "Windows Console",
    IMAGE_SUBSYSTEM_WINDOWS_CE_GUI: "Windows CE",
}

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def machine_name(machine: int) -> str:
    return _MACHINE_NAMES.get(machine, f"Unknown (0x{machine:04X})")


def subsystem_name(subsystem: int) -> str:
    return _SUBSYSTEM_NAMES.get(subsystem, f"Unknown ({subsystem})")


# ---------------------------------------------------------------------------
# Bounds-checked little-endian reader
# ---------------------------------------------------------------------------

class OutOfBoundsRead(ValueError):
    """Raised when a read would extend past the end of the buffer."""

    def __init__(self, offset: int, size: int, length: int) -> None:
        super().__init__(
            f"read of {size} bytes at offset {offset} exceeds buffer of {length} bytes"
        )
        self.offset = offset
        self.size = size
        self.length = length


class LittleEndianReader:
    """Little-endian field reader that checks bounds before every read.

    Usage::

        reader = LittleEndianReader(data)
        machine = reader.u16(pe_offset + 4)
    """

    __slots__ = ("_data", "_length")

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._length = len(data)

    def __len__(self) -> int:
        return self._length

    def fits(self, offset: int, size: int) -> bool:
        """Return ``True`` if ``[offset, offset + size)`` lies within the buffer."""
        return offset >= 0 and size >= 0 and offset + size <= self._length

    def _check(self, offset: int, size: int) -> None:
        if not self.fits(offset, size):
            raise OutOfBoundsRead(offset, size, self._length)

    def u16(self, offset: int) -> int:
        self._check(offset, 2)
        return struct.unpack_from("<H", self._data, offset)[0]

    def u32(self, offset: int) -> int:
        self._check(offset, 4)
        return struct.unpack_from("<I", self._data, offset)[0]

    def raw(self, offset: int, size: int) -> bytes:
        self._check(offset, size)
        return bytes(self._data[offset:offset + size])


# ---------------------------------------------------------------------------
# PE Parser
# ---------------------------------------------------------------------------

class PEAnalyzer:
    """Header-level PE decoder producing a :class:`PEInfo`.

    Usage::

        info = PEAnalyzer(raw_bytes).analyze()
        if info.is_pe:
            print(info.architecture, info.sections)
    """

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._reader = LittleEndianReader(data)

    def analyze(self) -> PEInfo:
        """Run the validation gates, then decode fields best-effort.

        Returns:
            A :class:`PEInfo`; ``is_pe`` is ``False`` when any gate fails.
        """
        pe_offset = self._locate_pe_header()
        if pe_offset is None:
            return PEInfo()

        fields: dict[str, Any] = {"is_pe": True}
        sections: list[str] = []
        try:
            self._decode_file_header(pe_offset, fields)
            self._decode_sections(pe_offset, sections)
        except (struct.error, ValueError, OverflowError) as exc:
            logger.debug("PE header truncated at 0x%X: %s", pe_offset, exc)

        return PEInfo(sections=sections, **fields)

    # ------------------------------------------------------------------ #
    #  Validation gates
    # ------------------------------------------------------------------ #

    def _locate_pe_header(self) -> int | None:
        """Return ``e_lfanew`` if the DOS stub and PE signature are valid."""
        length = len(self._reader)
        if length < DOS_HEADER_SIZE:
            return None
        if self._reader.raw(0, 2) != MZ_MAGIC:
            return None

        pe_offset = self._reader.u32(E_LFANEW_OFFSET)
        if pe_offset >= length - 4:
            logger.debug("e_lfanew 0x%X outside %d-byte buffer", pe_offset, length)
            return None

        if self._reader.raw(pe_offset, 4) != PE_MAGIC:
            return None
        return pe_offset

    # ------------------------------------------------------------------ #
    #  Field decoding
    # ------------------------------------------------------------------ #

    def _decode_file_header(self, pe_offset: int, fields: dict[str, Any]) -> None:
        reader = self._reader

        fields["architecture"] = machine_name(reader.u16(pe_offset + COFF_MACHINE))

        timestamp = reader.u32(pe_offset + COFF_TIME_DATE_STAMP)
        if timestamp:
            fields["compile_time"] = _UNIX_EPOCH + timedelta(seconds=timestamp)

        characteristics = reader.u16(pe_offset + COFF_CHARACTERISTICS)
        fields["is_dll"] = bool(characteristics & IMAGE_FILE_DLL)

        optional_size = reader.u16(pe_offset + COFF_SIZE_OF_OPTIONAL_HEADER)
        subsystem_offset = pe_offset + OPTIONAL_HEADER + OPTIONAL_SUBSYSTEM
        if optional_size > 0 and reader.fits(subsystem_offset, 2):
            fields["subsystem"] = subsystem_name(reader.u16(subsystem_offset))

    def _decode_sections(self, pe_offset: int, sections: list[str]) -> None:
        """Append section names; a partial table is kept as-is."""
        reader = self._reader
        count = reader.u16(pe_offset + COFF_NUMBER_OF_SECTIONS)
        optional_size = reader.u16(pe_offset + COFF_SIZE_OF_OPTIONAL_HEADER)
        offset = pe_offset + OPTIONAL_HEADER + optional_size

        for _ in range(count):
            if not reader.fits(offset, SECTION_HEADER_SIZE):
                break
            raw_name = reader.raw(offset, SECTION_NAME_SIZE)
            sections.append(to_ascii(raw_name.rstrip(b"\x00")))
            offset += SECTION_HEADER_SIZE


def analyze_pe(data: bytes) -> PEInfo:
    """Module-level shortcut for :meth:`PEAnalyzer.analyze`."""
    return PEAnalyzer(data).analyze()
