"""
Magic Number File Type Identification
=======================================

Identifies file types by comparing the leading bytes of a buffer against a
small, fixed table of magic numbers.  Matching is prefix-only: every magic
byte must match position-for-position starting at offset 0, and the buffer
must be at least as long as the magic.

References:
    - Gary Kessler's File Signatures Table.
      https://www.garykessler.net/library/file_sigs.html
"""

from __future__ import annotations

from dataclasses import dataclass

UNKNOWN_TYPE: str = "Unknown"


@dataclass(frozen=True, slots=True)
class _Signature:
    """A single file-type magic signature entry.

    Attributes:
        label: File-type label returned on a match.
        magic: Byte pattern expected at offset 0.
    """
    label: str
    magic: bytes

    def matches(self, data: bytes) -> bool:
        return len(data) >= len(self.magic) and data[:len(self.magic)] == self.magic


# No two entries share a prefix, so table order does not affect results.
SIGNATURES: tuple[_Signature, ...] = (
    _Signature("PNG", b"\x89\x50\x4e\x47"),
    _Signature("JPEG", b"\xff\xd8\xff"),
    _Signature("GIF", b"\x47\x49\x46\x38"),
    _Signature("PDF", b"\x25\x50\x44\x46"),
    _Signature("ZIP", b"\x50\x4b\x03\x04"),
)


class SignatureDetector:
    """Identify file types by magic byte signatures.

    Usage::

        detector = SignatureDetector()
        detector.detect(b"\\x89PNG\\r\\n\\x1a\\n")
        # => "PNG"
    """

    def __init__(self, signatures: tuple[_Signature, ...] = SIGNATURES) -> None:
        self._signatures = signatures

    def detect(self, data: bytes) -> str:
        """Return the label of the first matching signature.

        Args:
            data: Raw bytes; only the first few are inspected.

        Returns:
            A label such as ``"PNG"``, or ``"Unknown"`` when nothing
            matches (including empty input).
        """
        if not data:
            return UNKNOWN_TYPE
        for sig in self._signatures:
            if sig.matches(data):
                return sig.label
        return UNKNOWN_TYPE


_DEFAULT_DETECTOR = SignatureDetector()


def detect_file_type(data: bytes) -> str:
    """Module-level shortcut for :meth:`SignatureDetector.detect`."""
    return _DEFAULT_DETECTOR.detect(data)
