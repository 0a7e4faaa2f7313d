"""
Binsight Core Module
=====================

Contains the metadata engine and the pydantic data models.
"""

from binsight.core.engine import MetadataAnalyzer, analyze_file
from binsight.core.models import FileMetadata, InterestingOffset, PEInfo

__all__ = [
    "FileMetadata",
    "InterestingOffset",
    "MetadataAnalyzer",
    "PEInfo",
    "analyze_file",
]
