"""
Binsight CLI -- Static Binary Triage
=====================================

Click-based command-line interface for Binsight.

Usage::

    # Quick summary
    binsight sample.bin

    # Complete plain-text report
    binsight malware.exe --detailed

    # Hexadecimal display
    binsight data.bin --hexdump

    # Machine-readable record
    binsight malware.exe --json

    # Save a report file (.json or text)
    binsight malware.exe --output report.txt

References:
    - Click documentation: https://click.palletsprojects.com/
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from shared.byte_utils import to_hex_dump
from shared.config import BinsightConfig
from shared.console import BinsightConsole
from shared.logger import BinsightLogger

from binsight import __version__
from binsight.core.engine import MetadataAnalyzer
from binsight.output.console import QuickSummaryOutput
from binsight.output.report import ReportGenerator


@click.command("binsight")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--detailed", "-d",
    is_flag=True,
    default=False,
    help="Print the complete plain-text report.",
)
@click.option(
    "--hexdump", "-x",
    is_flag=True,
    default=False,
    help="Print a hexdump -C style listing.",
)
@click.option(
    "--json", "json_output",
    is_flag=True,
    default=False,
    help="Print the metadata record as JSON.",
)
@click.option(
    "--output", "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write a report file (.json for JSON, anything else for text).",
)
@click.option(
    "--min-string-length",
    type=click.IntRange(min=1),
    default=None,
    help="Minimum printable string length (default: 4).",
)
@click.option(
    "--config", "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="TOML configuration file.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging.",
)
@click.version_option(__version__, prog_name="binsight")
def binsight_cli(
    path: str,
    detailed: bool,
    hexdump: bool,
    json_output: bool,
    output_path: str | None,
    min_string_length: int | None,
    config_path: str | None,
    verbose: bool,
) -> None:
    """Binsight -- static triage of an arbitrary binary file.

    PATH is the file to analyse.  Without a mode flag a quick summary is
    shown.

    Examples:

    \b
        binsight document.pdf
        binsight malware.exe --detailed
        binsight data.bin --hexdump
    """
    console = BinsightConsole()

    if sum((detailed, hexdump, json_output)) > 1:
        console.error("Use only one of --detailed, --hexdump and --json.")
        sys.exit(1)

    if hexdump and output_path:
        console.error("--output cannot be combined with --hexdump.")
        sys.exit(1)

    try:
        config = BinsightConfig.load(config_path)
    except FileNotFoundError as exc:
        console.error(str(exc))
        sys.exit(1)
    except ValueError as exc:
        console.error(f"Invalid configuration: {exc}")
        sys.exit(1)

    if min_string_length is not None:
        config.analysis.min_string_length = min_string_length

    settings = config.global_settings
    logger = BinsightLogger(
        log_level="DEBUG" if verbose or settings.debug else settings.log_level,
        log_file=settings.log_file or None,
        json_logs=settings.log_json,
    )
    logger.debug("Effective configuration: %s", config.to_dict())

    analyzer = MetadataAnalyzer(config)
    name = Path(path).name

    try:
        with logger.operation("triage"), logger.timed(f"triage of {name}"):
            data = analyzer.read_input(path)

            if hexdump:
                click.echo(f"=== HEX DUMP of {name} ===")
                click.echo(to_hex_dump(data, config.report.hexdump_width), nl=False)
                return

            needs_record = detailed or json_output or output_path is not None
            metadata = analyzer.analyze_file(data) if needs_record else None
    except KeyboardInterrupt:
        console.warning("Analysis interrupted by user.")
        sys.exit(130)
    except (OSError, ValueError) as exc:
        logger.debug("Triage of %s failed", path, exc_info=True)
        console.error(f"Analysis failed: {exc}")
        sys.exit(1)

    generator = ReportGenerator(config.report)

    if json_output:
        click.echo(generator.render_json(metadata))
    elif detailed:
        click.echo(generator.render_text(metadata), nl=False)
    else:
        QuickSummaryOutput(console).display_quick(
            name, data, min_string_length=config.analysis.min_string_length
        )

    if output_path and metadata is not None:
        report_path = generator.write(metadata, output_path)
        if not json_output:
            console.success(f"Report saved: {report_path}")


def main() -> None:
    """Entry point for the ``binsight`` console script."""
    binsight_cli()


if __name__ == "__main__":
    main()
