"""
Binsight Mathematical Utilities
================================

Byte-level statistics shared by the Binsight analysers: Shannon entropy
and the 256-bin byte-value histogram.

References:
    [1] Shannon, C. E. (1948). A Mathematical Theory of Communication.
        Bell System Technical Journal, 27(3), 379-423.
"""

from __future__ import annotations

import math
from collections import Counter

import numpy as np
from numpy.typing import NDArray

FloatArray = NDArray[np.floating]


def shannon_entropy(data: bytes) -> float:
    """Compute the Shannon entropy of a byte sequence.

    .. math::

        H = -\\sum_{i=0}^{255} p_i \\, \\log_2(p_i)

    where :math:`p_i` is the relative frequency of byte value *i*.
    Buckets that never occur are skipped, so :math:`0 \\log 0` is never
    evaluated.  The result is in **bits per byte** and ranges from 0.0
    (constant stream) to 8.0 (uniform distribution over 256 symbols).

    Args:
        data: Raw byte sequence to analyse.

    Returns:
        Shannon entropy in bits per byte. Returns 0.0 for empty input.
    """
    if not data:
        return 0.0

    length = len(data)
    entropy = 0.0
    for count in Counter(data).values():
        p = count / length
        entropy -= p * math.log2(p)
    # A single symbol yields -0.0
    return abs(entropy)


def frequency_distribution(data: bytes) -> FloatArray:
    """Compute a 256-bin byte-value frequency histogram.

    Args:
        data: Raw byte sequence.

    Returns:
        1-D float64 array of length 256 containing occurrence counts.
    """
    hist = np.zeros(256, dtype=np.float64)
    if not data:
        return hist

    byte_arr = np.frombuffer(bytes(data), dtype=np.uint8)
    hist[:] = np.bincount(byte_arr, minlength=256).astype(np.float64)
    return hist
