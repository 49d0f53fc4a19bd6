"""Unit tests for ScanConfig and related functions.

Tests for the configuration module that provides the Pydantic model
and TOML I/O for persistent scan defaults.
"""

import os
import tomllib
from pathlib import Path
from unittest.mock import patch

import pytest
from conflictscan.core.config import (
    ScanConfig,
    ScanConfigError,
    ScanConfigNotFoundError,
    ScanConfigParseError,
    config_to_dict,
    load_scan_config,
    save_scan_config,
)
from pydantic import ValidationError


class TestScanConfig:
    """Tests for ScanConfig Pydantic model."""

    def test_default_values(self) -> None:
        """ScanConfig defaults exclude nothing and match at line start."""
        config = ScanConfig()

        assert config.exclude == []
        assert config.skip_hidden is False
        assert config.skip_vcs is False
        assert config.match_anywhere is False

    def test_custom_values(self) -> None:
        """ScanConfig accepts custom values."""
        config = ScanConfig(exclude=["node_modules"], skip_vcs=True, match_anywhere=True)

        assert config.exclude == ["node_modules"]
        assert config.skip_vcs is True
        assert config.match_anywhere is True

    def test_extra_fields_forbidden(self) -> None:
        """ScanConfig rejects unknown fields."""
        with pytest.raises(ValidationError):
            ScanConfig(unknown=True)  # type: ignore[call-arg]


class TestLoadScanConfig:
    """Tests for load_scan_config."""

    def test_missing_default_file_returns_defaults(self, tmp_path: Path) -> None:
        """No file at the default location means default settings."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            config = load_scan_config()

        assert config == ScanConfig()

    def test_missing_explicit_file_raises(self, tmp_path: Path) -> None:
        """An explicitly requested file must exist."""
        with pytest.raises(ScanConfigNotFoundError):
            load_scan_config(tmp_path / "missing.toml")

    def test_loads_valid_file(self, tmp_path: Path) -> None:
        """Values are read from TOML."""
        path = tmp_path / "config.toml"
        path.write_text('exclude = ["vendor", "*.min.js"]\nskip_hidden = true\n')

        config = load_scan_config(path)

        assert config.exclude == ["vendor", "*.min.js"]
        assert config.skip_hidden is True
        assert config.skip_vcs is False

    def test_reads_default_location(self, tmp_path: Path) -> None:
        """The default path honours XDG_CONFIG_HOME."""
        config_dir = tmp_path / "conflictscan"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text("skip_vcs = true\n")

        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            config = load_scan_config()

        assert config.skip_vcs is True

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Malformed TOML raises a parse error."""
        path = tmp_path / "config.toml"
        path.write_text("not valid [ toml")

        with pytest.raises(ScanConfigParseError, match="Invalid TOML syntax"):
            load_scan_config(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Schema violations raise ScanConfigError."""
        path = tmp_path / "config.toml"
        path.write_text('skip_hidden = "sometimes"\nunknown = 1\n')

        with pytest.raises(ScanConfigError, match="Invalid config content"):
            load_scan_config(path)


class TestSaveScanConfig:
    """Tests for save_scan_config."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """A saved config loads back unchanged."""
        path = tmp_path / "nested" / "config.toml"
        config = ScanConfig(exclude=["build"], skip_hidden=True)

        saved = save_scan_config(config, path)

        assert saved == path
        assert load_scan_config(path) == config

    def test_writes_all_keys(self, tmp_path: Path) -> None:
        """The written file lists every setting."""
        path = tmp_path / "config.toml"
        save_scan_config(ScanConfig(), path)

        with open(path, "rb") as f:
            data = tomllib.load(f)

        assert data == config_to_dict(ScanConfig())

    def test_no_temp_file_left_behind(self, tmp_path: Path) -> None:
        """Atomic write leaves only the target file."""
        path = tmp_path / "config.toml"
        save_scan_config(ScanConfig(), path)

        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]

    def test_write_failure_raises(self, tmp_path: Path) -> None:
        """OS errors during write are wrapped in ScanConfigError."""
        path = tmp_path / "config.toml"

        with (
            patch("conflictscan.core.config.os.replace", side_effect=OSError("disk full")),
            pytest.raises(ScanConfigError, match="Failed to write config"),
        ):
            save_scan_config(ScanConfig(), path)

        assert list(tmp_path.iterdir()) == []
