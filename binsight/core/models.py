"""
Binsight Data Models
=====================

Pydantic-based data models for the triage results produced by Binsight:
the PE structural summary and the aggregate per-file metadata record.

References:
    - Evans, E. (2003). Domain-Driven Design. Addison-Wesley.
    - Microsoft. (2024). PE Format. Microsoft Learn.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# PE structural summary
# ---------------------------------------------------------------------------

class PEInfo(BaseModel):
    """Structural summary of a Portable Executable image.

    ``is_pe=False`` marks a parse that stopped at one of the validation
    gates (size, ``MZ``, PE offset, ``PE\\0\\0``).  The remaining fields
    then hold defaults and carry no information about the file.

    Attributes:
        is_pe: ``True`` once the ``PE\\0\\0`` signature has been verified.
        architecture: Machine label (``x86``, ``x64``, ``ARM``, ``ARM64``
            or ``Unknown (0xNNNN)``).
        compile_time: COFF timestamp as a UTC datetime; ``None`` when the
            stored value is zero.
        subsystem: Optional-header subsystem label.
        is_dll: ``True`` when the COFF ``IMAGE_FILE_DLL`` flag is set.
        sections: Section names in table order (at most 8 characters each).
        imports: Reserved; import tables are not resolved.
    """
    model_config = ConfigDict(frozen=True)

    is_pe: bool = False
    architecture: str = "Unknown"
    compile_time: Optional[datetime] = None
    subsystem: str = "Unknown"
    is_dll: bool = False
    sections: list[str] = Field(default_factory=list)
    imports: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Heuristic hits
# ---------------------------------------------------------------------------

class InterestingOffset(BaseModel):
    """A buffer position flagged by one of the heuristic scans.

    Attributes:
        offset: Byte offset of the hit.
        description: What was found there, e.g. ``"GZIP header"``.
    """
    model_config = ConfigDict(frozen=True)

    offset: int = Field(default=0, ge=0)
    description: str = ""


# ---------------------------------------------------------------------------
# Aggregate record
# ---------------------------------------------------------------------------

class FileMetadata(BaseModel):
    """Structural and heuristic metadata for one analysed buffer.

    ``byte_frequency`` is sparse: byte values that never occur are absent
    and read as zero.  ``pe_info`` is set exactly when
    ``is_likely_executable`` is true.

    Attributes:
        size: Buffer length in bytes.
        entropy: Shannon entropy in bits per byte.
        md5: Lowercase hex MD5 digest.
        sha256: Lowercase hex SHA-256 digest.
        file_type: Label from the magic-number table.
        is_likely_text: At least 70% printable or whitespace bytes.
        is_likely_executable: Larger than 1024 bytes and starts with ``MZ``.
        is_likely_compressed: Entropy above 7.5.
        extracted_strings: Printable strings in first-seen order.
        byte_frequency: Occurrence count per byte value.
        interesting_offsets: Heuristic hits sorted by offset.
        pe_info: PE summary, present only for likely executables.
    """
    model_config = ConfigDict(validate_assignment=True)

    size: int = 0
    entropy: float = 0.0
    md5: str = ""
    sha256: str = ""
    file_type: str = ""
    is_likely_text: bool = False
    is_likely_executable: bool = False
    is_likely_compressed: bool = False
    extracted_strings: list[str] = Field(default_factory=list)
    byte_frequency: dict[int, int] = Field(default_factory=dict)
    interesting_offsets: list[InterestingOffset] = Field(default_factory=list)
    pe_info: Optional[PEInfo] = None
