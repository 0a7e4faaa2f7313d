"""
Binsight Report Generator
==========================

Renders a :class:`FileMetadata` record as a sectioned plain-text report
(suitable for terminals, tickets and log attachments) or as JSON for
downstream pipelines.

Text layout::

    === BINARY ANALYSIS REPORT ===     size, type, entropy, digests
    === HEURISTICS ===                 YES/NO flags
    === PE ANALYSIS ===                only when the PE signature was verified
    === EXTRACTED STRINGS (first 10) ===
    === INTERESTING OFFSETS ===        first 20, 8-digit hex offsets
    === BYTE FREQUENCY (Top 10) ===
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from shared.config import ReportConfig

from binsight.core.models import FileMetadata, PEInfo

REPORT_HEADER: str = "=== BINARY ANALYSIS REPORT ==="


def _yes_no(flag: bool) -> str:
    return "YES" if flag else "NO"


class ReportGenerator:
    """Render metadata records as text or JSON.

    Usage::

        generator = ReportGenerator()
        print(generator.render_text(metadata))
        generator.write(metadata, "report.json")
    """

    def __init__(self, config: ReportConfig | None = None) -> None:
        self._config: ReportConfig = config or ReportConfig()

    # ------------------------------------------------------------------ #
    #  Text report
    # ------------------------------------------------------------------ #

    def render_text(self, metadata: FileMetadata) -> str:
        lines: list[str] = []
        lines.extend(self._header_block(metadata))
        lines.extend(self._heuristics_block(metadata))
        if metadata.pe_info is not None and metadata.pe_info.is_pe:
            lines.extend(self._pe_block(metadata.pe_info))
        lines.extend(self._strings_block(metadata))
        lines.extend(self._offsets_block(metadata))
        lines.extend(self._frequency_block(metadata))
        return "\n".join(lines) + "\n"

    @staticmethod
    def _header_block(metadata: FileMetadata) -> list[str]:
        return [
            REPORT_HEADER,
            f"Size: {metadata.size:,} bytes",
            f"Type: {metadata.file_type}",
            f"Entropy: {metadata.entropy:.4f}",
            f"MD5: {metadata.md5}",
            f"SHA256: {metadata.sha256}",
            "",
        ]

    @staticmethod
    def _heuristics_block(metadata: FileMetadata) -> list[str]:
        return [
            "=== HEURISTICS ===",
            f"Likely text: {_yes_no(metadata.is_likely_text)}",
            f"Likely executable: {_yes_no(metadata.is_likely_executable)}",
            f"Likely compressed: {_yes_no(metadata.is_likely_compressed)}",
            "",
        ]

    @staticmethod
    def _pe_block(pe: PEInfo) -> list[str]:
        lines = [
            "=== PE ANALYSIS ===",
            f"Architecture: {pe.architecture}",
            f"Type: {'DLL' if pe.is_dll else 'EXE'}",
            f"Subsystem: {pe.subsystem}",
        ]
        if pe.compile_time is not None:
            lines.append(f"Compiled on: {pe.compile_time:%Y-%m-%d %H:%M:%S}")
        lines.append(f"Sections: {', '.join(pe.sections)}")
        lines.append("")
        return lines

    def _strings_block(self, metadata: FileMetadata) -> list[str]:
        if not metadata.extracted_strings:
            return []
        limit = self._config.max_strings
        lines = [f"=== EXTRACTED STRINGS (first {limit}) ==="]
        lines.extend(f'  "{s}"' for s in metadata.extracted_strings[:limit])
        lines.append("")
        return lines

    def _offsets_block(self, metadata: FileMetadata) -> list[str]:
        if not metadata.interesting_offsets:
            return []
        lines = ["=== INTERESTING OFFSETS ==="]
        lines.extend(
            f"  0x{hit.offset:08X}: {hit.description}"
            for hit in metadata.interesting_offsets[:self._config.max_offsets]
        )
        lines.append("")
        return lines

    def _frequency_block(self, metadata: FileMetadata) -> list[str]:
        limit = self._config.top_bytes
        lines = [f"=== BYTE FREQUENCY (Top {limit}) ==="]
        for value, count in self.top_bytes(metadata, limit):
            percentage = count / metadata.size * 100 if metadata.size else 0.0
            label = f"'{chr(value)}'" if 32 <= value <= 126 else "non-printable"
            lines.append(f"  0x{value:02X} ({label}): {count:,} ({percentage:.1f}%)")
        return lines

    @staticmethod
    def top_bytes(metadata: FileMetadata, limit: int = 10) -> list[tuple[int, int]]:
        """Most frequent byte values, count descending then value ascending."""
        ranked = sorted(
            metadata.byte_frequency.items(), key=lambda item: (-item[1], item[0])
        )
        return ranked[:limit]

    # ------------------------------------------------------------------ #
    #  JSON report
    # ------------------------------------------------------------------ #

    @staticmethod
    def to_dict(metadata: FileMetadata) -> dict[str, Any]:
        return metadata.model_dump(mode="json")

    def render_json(self, metadata: FileMetadata, indent: int = 2) -> str:
        return json.dumps(self.to_dict(metadata), indent=indent, ensure_ascii=False)

    def write(self, metadata: FileMetadata, output_path: str | Path) -> Path:
        """Write a report whose format follows the file suffix.

        ``.json`` produces JSON; any other suffix produces the text report.

        Returns:
            The resolved output path.
        """
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.suffix.lower() == ".json":
            content = self.render_json(metadata)
        else:
            content = self.render_text(metadata)
        path.write_text(content, encoding="utf-8")
        return path.resolve()


def generate_report(metadata: FileMetadata) -> str:
    """Render *metadata* as the default plain-text report."""
    return ReportGenerator().render_text(metadata)
