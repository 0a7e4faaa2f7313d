"""
Binsight Analyzers
===================

Entropy, string/pattern scans and the raw code preview.
"""
