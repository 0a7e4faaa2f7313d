"""
Binsight -- Static Binary Triage
=================================

Binsight performs a fast first pass over an arbitrary binary blob before
deeper disassembly or sandboxing.

Capabilities:
    - Magic-number file type identification
    - Whole-buffer Shannon entropy
    - Printable string extraction and literal byte-pattern search
    - URL, email, compression-magic and null-padding offset heuristics
    - PE/COFF header decoding (architecture, timestamp, subsystem, sections)
    - Plain-text and JSON reports, hex dumps

References:
    - Sikorski, M., & Honig, A. (2012). Practical Malware Analysis.
    - Shannon, C. E. (1948). A Mathematical Theory of Communication.
    - Microsoft. (2024). PE Format.
"""

__version__ = "1.0.0"
__all__ = [
    "MetadataAnalyzer",
    "FileMetadata",
    "PEInfo",
    "analyze_file",
    "generate_report",
]

from binsight.core.engine import MetadataAnalyzer, analyze_file
from binsight.core.models import FileMetadata, PEInfo
from binsight.output.report import generate_report
