"""
Binsight Shared Module
======================

Common utilities, configuration management, logging and console helpers
used across the Binsight triage toolkit.
"""

from shared.config import BinsightConfig

__all__ = ["BinsightConfig"]
