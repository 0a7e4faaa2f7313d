"""
Entropy Analyzer
=================

Shannon entropy over the byte-value histogram of a whole buffer.

    H(X) = -sum_{i=0}^{255} p(x_i) * log2(p(x_i))

A uniform distribution over all 256 byte values gives H = 8.0 bits per
byte.  Values above 7.5 usually indicate compressed or encrypted content,
while code and structured data sit between roughly 4.0 and 6.5.

References:
    - Shannon, C. E. (1948). A Mathematical Theory of Communication.
      Bell System Technical Journal, 27(3), 379-423.
    - Lyda, R., & Hamrock, J. (2007). Using Entropy Analysis to Find
      Encrypted and Packed Malware. IEEE Security & Privacy, 5(2), 40-45.
"""

from __future__ import annotations

from typing import Optional

from shared.math_utils import shannon_entropy

MAX_ENTROPY: float = 8.0

ENTROPY_NULL: float = 1.0
ENTROPY_CODE_HIGH: float = 4.5
ENTROPY_STRUCTURED_HIGH: float = 6.5
ENTROPY_COMPRESSED_HIGH: float = 7.0
ENTROPY_PACKED_HIGH: float = 7.5


def calculate(data: Optional[bytes]) -> float:
    """Return the Shannon entropy of *data* in bits per byte.

    Empty or ``None`` input is defined as 0.0.  The result is clamped to
    ``[0.0, 8.0]`` to absorb floating-point drift on uniform input.
    """
    if not data:
        return 0.0
    return min(shannon_entropy(data), MAX_ENTROPY)


class EntropyAnalyzer:
    """Qualitative classification of an entropy value.

    Usage::

        EntropyAnalyzer.classify(calculate(data))
        # => "structured data"
    """

    @staticmethod
    def classify(entropy: float) -> str:
        """Map an entropy value onto a human-readable band."""
        if entropy < ENTROPY_NULL:
            return "null/empty"
        elif entropy < ENTROPY_CODE_HIGH:
            return "code/data"
        elif entropy < ENTROPY_STRUCTURED_HIGH:
            return "structured data"
        elif entropy < ENTROPY_COMPRESSED_HIGH:
            return "compressed or high-entropy code"
        elif entropy < ENTROPY_PACKED_HIGH:
            return "likely packed"
        else:
            return "encrypted/compressed"
