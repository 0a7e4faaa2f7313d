"""Tests for binsight/cli.py - the click command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from binsight import __version__
from binsight.cli import binsight_cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def sample(tmp_path, pe_image):
    path = tmp_path / "sample.exe"
    path.write_bytes(pe_image)
    return path


def test_quick_summary(runner, sample):
    result = runner.invoke(binsight_cli, [str(sample)])
    assert result.exit_code == 0
    assert "File: sample.exe" in result.output
    assert "Raw bytes - no instruction decoding" in result.output


def test_detailed_report(runner, sample):
    result = runner.invoke(binsight_cli, [str(sample), "--detailed"])
    assert result.exit_code == 0
    assert result.output.startswith("=== BINARY ANALYSIS REPORT ===")
    assert "=== PE ANALYSIS ===" in result.output
    assert "Architecture: x64" in result.output


def test_hexdump(runner, tmp_path):
    path = tmp_path / "tiny.bin"
    path.write_bytes(b"ABC")
    result = runner.invoke(binsight_cli, [str(path), "-x"])
    assert result.exit_code == 0
    assert result.output.splitlines()[0] == "=== HEX DUMP of tiny.bin ==="
    assert result.output.splitlines()[1].startswith("00000000  41 42 43")


def test_json_output(runner, sample):
    result = runner.invoke(binsight_cli, [str(sample), "--json"])
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["is_likely_executable"] is True
    assert payload["pe_info"]["sections"] == [".text", ".data"]


def test_min_string_length_option(runner, tmp_path):
    path = tmp_path / "strings.bin"
    path.write_bytes(b"ab\x00abcdef\x00")
    result = runner.invoke(binsight_cli, [str(path), "--json", "--min-string-length", "2"])
    assert result.exit_code == 0
    assert json.loads(result.output)["extracted_strings"] == ["ab", "abcdef"]


def test_min_string_length_applies_to_quick_summary(runner, tmp_path):
    path = tmp_path / "short.bin"
    path.write_bytes(b"ab\x00cd\x00\xff\xfe")
    result = runner.invoke(binsight_cli, [str(path), "--min-string-length", "2"])
    assert result.exit_code == 0
    assert 'Strings found: "ab", "cd"' in result.output


def test_hexdump_rejects_output_file(runner, sample, tmp_path):
    report = tmp_path / "r.txt"
    result = runner.invoke(binsight_cli, [str(sample), "--hexdump", "--output", str(report)])
    assert result.exit_code == 1
    assert "cannot be combined with --hexdump" in result.output
    assert not report.exists()


def test_output_file(runner, sample, tmp_path):
    report = tmp_path / "report.txt"
    result = runner.invoke(binsight_cli, [str(sample), "--output", str(report)])
    assert result.exit_code == 0
    assert "Report saved" in result.output
    assert report.read_text(encoding="utf-8").startswith("=== BINARY ANALYSIS REPORT ===")


def test_conflicting_modes(runner, sample):
    result = runner.invoke(binsight_cli, [str(sample), "--detailed", "--json"])
    assert result.exit_code == 1
    assert "only one of" in result.output


def test_missing_input_file(runner, tmp_path):
    result = runner.invoke(binsight_cli, [str(tmp_path / "absent.bin")])
    assert result.exit_code == 2


def test_missing_config_file(runner, sample, tmp_path):
    result = runner.invoke(binsight_cli, [str(sample), "-c", str(tmp_path / "none.toml")])
    assert result.exit_code == 1
    assert "Configuration file not found" in result.output


def test_file_too_large(runner, sample, tmp_path):
    config = tmp_path / "small.toml"
    config.write_text("[analysis]\nmax_file_size = 100\n", encoding="utf-8")
    result = runner.invoke(binsight_cli, [str(sample), "-c", str(config)])
    assert result.exit_code == 1
    assert "File too large" in result.output


def test_version(runner):
    result = runner.invoke(binsight_cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
