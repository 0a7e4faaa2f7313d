"""
Binsight Metadata Engine
=========================

Orchestrates the triage pipeline for one in-memory buffer and assembles a
single :class:`FileMetadata` record.

Analysis Pipeline:
    1. Digests (MD5, SHA-256), size and byte histogram
    2. File type from magic bytes
    3. Shannon entropy and text likelihood
    4. Executable heuristic (``MZ`` prefix on a buffer over 1 KiB)
    5. PE header decoding, only for likely executables
    6. Printable string extraction
    7. Interesting offsets: URL prefixes, email-like ``@``, compression
       magics and long null runs, merged and sorted by offset

The stages share no state; each is a pure function of the buffer.

References:
    - Sikorski, M., & Honig, A. (2012). Practical Malware Analysis.
      No Starch Press.
"""

from __future__ import annotations

import logging
from itertools import islice
from pathlib import Path

from shared.byte_utils import md5_hex, sha256_hex
from shared.config import AnalysisConfig, BinsightConfig

from binsight.analyzers import entropy
from binsight.analyzers.strings import (
    byte_frequency,
    extract_strings,
    find_email_candidates,
    find_null_runs,
    find_pattern,
    is_likely_text,
)
from binsight.core.models import FileMetadata, InterestingOffset
from binsight.parsers.magic import SignatureDetector
from binsight.parsers.pe_parser import MZ_MAGIC, analyze_pe

logger = logging.getLogger("binsight.engine")


# ---------------------------------------------------------------------------
# Pattern tables
# ---------------------------------------------------------------------------

URL_PREFIXES: tuple[str, ...] = ("http://", "https://", "ftp://")

COMPRESSION_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\x1f\x8b", "GZIP header"),
    (b"\x42\x5a\x68", "BZIP2 header"),
    (b"\xfd\x37\x7a\x58\x5a", "XZ header"),
)


# ---------------------------------------------------------------------------
# MetadataAnalyzer
# ---------------------------------------------------------------------------

class MetadataAnalyzer:
    """Build a :class:`FileMetadata` record from raw bytes.

    Usage::

        analyzer = MetadataAnalyzer()
        metadata = analyzer.analyze_file(data)
        print(metadata.file_type, metadata.entropy)
    """

    def __init__(self, config: BinsightConfig | None = None) -> None:
        """Initialise the analyzer.

        Args:
            config: Binsight configuration.  Defaults are used if not provided.
        """
        self._config: BinsightConfig = config or BinsightConfig()
        self._detector = SignatureDetector()

    @property
    def settings(self) -> AnalysisConfig:
        return self._config.analysis

    # ------------------------------------------------------------------ #
    #  Entry points
    # ------------------------------------------------------------------ #

    def analyze_file(self, data: bytes) -> FileMetadata:
        """Run every triage stage over *data*.

        Args:
            data: Complete file contents.

        Returns:
            The aggregate record.  ``pe_info`` is set exactly when the
            executable heuristic fires, even if the PE parse then fails.
        """
        cfg = self.settings
        logger.debug("Analysing %d-byte buffer", len(data))

        metadata = FileMetadata(
            size=len(data),
            entropy=entropy.calculate(data),
            md5=md5_hex(data),
            sha256=sha256_hex(data),
            file_type=self._detector.detect(data),
            is_likely_text=is_likely_text(data, cfg.text_threshold),
            byte_frequency=byte_frequency(data),
        )

        metadata.is_likely_compressed = (
            metadata.entropy > cfg.compressed_entropy_threshold
        )
        metadata.is_likely_executable = self.is_likely_executable(data)

        metadata.extracted_strings = list(
            islice(extract_strings(data, cfg.min_string_length), cfg.max_strings)
        )

        if metadata.is_likely_executable:
            metadata.pe_info = analyze_pe(data)
            logger.debug(
                "PE parse: is_pe=%s arch=%s sections=%d",
                metadata.pe_info.is_pe,
                metadata.pe_info.architecture,
                len(metadata.pe_info.sections),
            )

        metadata.interesting_offsets = self.find_interesting_offsets(data)
        return metadata

    def read_input(self, path: str | Path) -> bytes:
        """Load the complete contents of *path*.

        Raises:
            FileNotFoundError: If *path* is not an existing file.
            ValueError: If the file exceeds ``analysis.max_file_size``.
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise FileNotFoundError(f"File not found: {file_path}")

        file_size = file_path.stat().st_size
        max_size = self.settings.max_file_size
        if file_size > max_size:
            raise ValueError(
                f"File too large: {file_size:,} bytes (max: {max_size:,} bytes)"
            )

        logger.debug("Reading %s (%d bytes)", file_path, file_size)
        return file_path.read_bytes()

    def analyze_path(self, path: str | Path) -> FileMetadata:
        """Read *path* and analyse its contents."""
        return self.analyze_file(self.read_input(path))

    # ------------------------------------------------------------------ #
    #  Heuristics
    # ------------------------------------------------------------------ #

    def is_likely_executable(self, data: bytes) -> bool:
        """``MZ`` prefix on a buffer larger than ``executable_min_size``.

        The file-type label is not consulted; a ``"PE"`` substring test
        would also match ``"JPEG"``.
        """
        return (
            len(data) > self.settings.executable_min_size
            and data[:2] == MZ_MAGIC
        )

    def find_interesting_offsets(self, data: bytes) -> list[InterestingOffset]:
        """Collect every heuristic hit and return them sorted by offset.

        Ties keep collection order: URLs, emails, compression magics, then
        null runs.
        """
        cfg = self.settings
        hits: list[InterestingOffset] = []

        for prefix in URL_PREFIXES:
            for pos in find_pattern(data, prefix.encode("ascii")):
                hits.append(InterestingOffset(offset=pos, description=f"URL pattern: {prefix}"))

        for pos in find_email_candidates(data, cfg.max_email_candidates):
            hits.append(InterestingOffset(offset=pos, description="Possible email address"))

        for magic, label in COMPRESSION_SIGNATURES:
            for pos in find_pattern(data, magic):
                hits.append(InterestingOffset(offset=pos, description=label))

        null_runs = find_null_runs(data, cfg.null_run_min_length)
        for start, length in islice(null_runs, cfg.max_null_runs):
            hits.append(
                InterestingOffset(offset=start, description=f"Null padding ({length} bytes)")
            )

        return sorted(hits, key=lambda hit: hit.offset)


def analyze_file(data: bytes, config: BinsightConfig | None = None) -> FileMetadata:
    """Module-level shortcut for :meth:`MetadataAnalyzer.analyze_file`."""
    return MetadataAnalyzer(config).analyze_file(data)
