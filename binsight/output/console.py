"""
Binsight Console Output
========================

Rich-powered terminal display for triage results: a quick one-screen
summary of a raw buffer with an entropy colour scale and a code preview.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from itertools import islice

from rich.text import Text

from shared.byte_utils import md5_hex, to_hex
from shared.console import BinsightConsole

from binsight.analyzers.entropy import EntropyAnalyzer, calculate
from binsight.analyzers.preview import raw_preview
from binsight.analyzers.strings import extract_strings, is_likely_text
from binsight.parsers.magic import detect_file_type

_ENTROPY_COLOUR_THRESHOLDS: list[tuple[float, str]] = [
    (1.0, "bright_green"),
    (4.5, "green"),
    (6.5, "yellow"),
    (7.0, "bright_yellow"),
    (7.5, "red"),
    (8.1, "bright_red"),
]

QUICK_HEX_BYTES: int = 32
QUICK_STRINGS: int = 5


def _entropy_colour(entropy: float) -> str:
    for threshold, colour in _ENTROPY_COLOUR_THRESHOLDS:
        if entropy < threshold:
            return colour
    return "bright_red"


class QuickSummaryOutput:
    """Render triage results to the terminal.

    Usage::

        output = QuickSummaryOutput()
        output.display_quick("sample.exe", data)
    """

    def __init__(self, console: BinsightConsole | None = None) -> None:
        self._console = console or BinsightConsole()

    def display_quick(self, name: str, data: bytes, min_string_length: int = 4) -> None:
        """One-screen summary computed directly from the raw bytes."""
        con = self._console
        entropy = calculate(data)
        con.print(Text.assemble(("File: ", "bold"), f"{name} ({len(data):,} bytes)"))
        con.print(Text.assemble(("Type: ", "bold"), detect_file_type(data)))
        con.print(
            Text.assemble(
                ("Entropy: ", "bold"),
                (f"{entropy:.4f}", _entropy_colour(entropy)),
                f"  ({EntropyAnalyzer.classify(entropy)})",
            )
        )
        con.print(Text.assemble(("MD5: ", "bold"), md5_hex(data)))

        if is_likely_text(data):
            con.print(Text.assemble(("Content: ", "bold"), "Likely text"))
        else:
            head = to_hex(data[:QUICK_HEX_BYTES])
            con.print(Text.assemble((f"Hex (first {QUICK_HEX_BYTES} bytes): ", "bold"), f"{head}..."), soft_wrap=True)

        strings = list(islice(extract_strings(data, min_string_length), QUICK_STRINGS))
        if strings:
            quoted = ", ".join(f'"{s}"' for s in strings)
            con.print(Text.assemble(("Strings found: ", "bold"), quoted), soft_wrap=True)

        con.blank()
        con.section("Code preview")
        for line in raw_preview(data):
            con.print(Text(f"   {line}"), soft_wrap=True)
        con.blank()
        con.info("Use --detailed for the complete report or --hexdump for a hex view")
