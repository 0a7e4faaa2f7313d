"""
Binsight Configuration Management
==================================

Centralized configuration for the Binsight triage toolkit using Python
dataclasses and TOML-based persistence.

Every threshold the metadata pipeline applies (string caps, null-run
lengths, entropy cut-offs) lives here so that a TOML file can tune a
deployment without touching code.

References:
    - Wiggins, A. (2011). The Twelve-Factor App. https://12factor.net/
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


# ---------------------------------------------------------------------------
# Default configuration file path relative to the project root
# ---------------------------------------------------------------------------
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "binsight.toml"


# ========================== Analysis Settings ==============================


@dataclass(frozen=False, slots=True)
class AnalysisConfig:
    """Thresholds used by the metadata aggregation pipeline.

    Reference:
        Lyda, R., & Hamrock, J. (2007). Using Entropy Analysis to Find
        Encrypted and Packed Malware. IEEE Security & Privacy, 5(2), 40-45.
    """

    min_string_length: int = 4
    max_strings: int = 50
    text_threshold: float = 0.7
    compressed_entropy_threshold: float = 7.5
    executable_min_size: int = 1024
    null_run_min_length: int = 16
    max_null_runs: int = 10
    max_email_candidates: int = 10
    max_file_size: int = 52_428_800  # 50 MiB


@dataclass(frozen=False, slots=True)
class ReportConfig:
    """Limits applied when rendering the plain-text report."""

    max_strings: int = 10
    max_offsets: int = 20
    top_bytes: int = 10
    hexdump_width: int = 16


# =========================== Global Settings ===============================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Global settings: logging verbosity and log destinations."""

    log_level: str = "INFO"
    log_file: str = ""
    log_json: bool = False
    debug: bool = False
    version: str = "1.0.0"


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class BinsightConfig:
    """Master configuration aggregating global, analysis and report settings.

    Usage:
        >>> config = BinsightConfig.load()                  # from default path
        >>> config = BinsightConfig.load("custom.toml")     # from custom path
        >>> config.analysis.max_strings
        50
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    report: ReportConfig = field(default_factory=ReportConfig)

    # ------------------------------------------------------------------ #
    #  TOML Loading
    # ------------------------------------------------------------------ #

    @classmethod
    def load(cls, path: str | Path | None = None) -> BinsightConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``binsight.toml`` in the
        project root.  Missing keys fall back to dataclass defaults.

        Args:
            path: Filesystem path to a TOML configuration file.

        Returns:
            A fully-populated :class:`BinsightConfig` instance.

        Raises:
            FileNotFoundError: If the specified path does not exist
                *and* was explicitly provided by the caller.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            analysis=cls._build_section(AnalysisConfig, raw.get("analysis", {})),
            report=cls._build_section(ReportConfig, raw.get("report", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise the entire configuration tree to a plain dictionary."""
        return asdict(self)

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate a dataclass *cls* using only the keys it declares.

        Unknown keys in the TOML source are ignored.
        """
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)

