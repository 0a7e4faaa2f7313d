"""
Binsight Parsers
=================

Magic-number identification and PE/COFF header decoding.
"""

from binsight.parsers.magic import SignatureDetector, detect_file_type
from binsight.parsers.pe_parser import PEAnalyzer, analyze_pe

__all__ = ["PEAnalyzer", "SignatureDetector", "analyze_pe", "detect_file_type"]
