"""
Binsight Output
================

Plain-text / JSON reports and Rich console summaries.
"""

from binsight.output.report import ReportGenerator, generate_report

__all__ = ["ReportGenerator", "generate_report"]
