"""
Tests for the CLI.

CRITICAL TESTS:
1. test_bad_file_exit_code - Codec errors exit with 1
2. test_export_writes_json - Export produces a Chrome trace
"""

import json

import pytest
from typer.testing import CliRunner

from nvtrc import __version__
from nvtrc.cli.main import app
from nvtrc.formats import read_file


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user or working-directory configs out of CLI runs."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv('HOME', str(tmp_path))


class TestVersion:
    """Test version command."""

    def test_version(self, runner):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestInfo:
    """Test info command."""

    def test_lists_devices(self, runner, capture_file):
        """Devices and record totals are shown."""
        result = runner.invoke(app, ["info", str(capture_file)])

        assert result.exit_code == 0
        assert "2080" in result.output
        assert "Devices: 1  Records: 2" in result.output

    def test_bad_file_exit_code(self, runner, tmp_path):
        """Non-captures exit with 1 and name the error code."""
        path = tmp_path / "bad.nvtrc"
        path.write_bytes(b'\x00' * 32)

        result = runner.invoke(app, ["info", str(path)])

        assert result.exit_code == 1
        assert "E1001" in result.output

    def test_truncated_file(self, runner, capture_file):
        """Truncated captures exit with 1."""
        capture_file.write_bytes(capture_file.read_bytes()[:-1])

        result = runner.invoke(app, ["info", str(capture_file)])

        assert result.exit_code == 1
        assert "E1003" in result.output


class TestDump:
    """Test dump command."""

    def test_default_shows_devices_only(self, runner, capture_file):
        """Defaults come from config: devices on, records off."""
        result = runner.invoke(app, ["dump", str(capture_file)])

        assert result.exit_code == 0
        assert "Device 0:" in result.output
        assert "Device 0 records:" not in result.output

    def test_records_flag(self, runner, capture_file):
        """--records adds the record listing."""
        result = runner.invoke(app, ["dump", str(capture_file), "--records", "--no-devices"])

        assert result.exit_code == 0
        assert "Device 0 records:" in result.output
        assert "Context Start" in result.output
        assert "Context Stop" in result.output
        assert "Device 0:" not in result.output


class TestExport:
    """Test export command."""

    def test_export_writes_json(self, runner, capture_file, tmp_path):
        """Events are written on the CPU timeline relative to the origin."""
        output = tmp_path / "trace.json"

        result = runner.invoke(app, ["export", str(capture_file), "-o", str(output)])

        assert result.exit_code == 0
        document = json.loads(output.read_text())
        assert [e["ts"] for e in document["traceEvents"]] == [0.0, 10.0]

    def test_export_raw_gpu(self, runner, capture_file, tmp_path):
        """--raw-gpu keeps GPU timestamps."""
        output = tmp_path / "trace.json"

        result = runner.invoke(app, ["export", str(capture_file), "-o", str(output), "--raw-gpu"])

        assert result.exit_code == 0
        document = json.loads(output.read_text())
        assert [e["ts"] for e in document["traceEvents"]] == [0.0, 1000.0]

    def test_export_config_file(self, runner, capture_file, tmp_path):
        """Export settings are read from the config file."""
        config = tmp_path / "custom.yml"
        config.write_text("export:\n  time_divisor: 2.0\n")
        output = tmp_path / "trace.json"

        result = runner.invoke(app, ["export", str(capture_file), "-o", str(output), "-c", str(config)])

        assert result.exit_code == 0
        document = json.loads(output.read_text())
        assert [e["ts"] for e in document["traceEvents"]] == [0.0, 5.0]

    def test_export_invalid_divisor(self, runner, capture_file, tmp_path):
        """Invalid settings fail before anything is written."""
        output = tmp_path / "trace.json"

        result = runner.invoke(app, ["export", str(capture_file), "-o", str(output),
                                     "--time-divisor", "0"])

        assert result.exit_code == 1
        assert not output.exists()


class TestDemo:
    """Test demo command."""

    def test_demo_creates_file(self, runner, tmp_path):
        """demo writes a capture with the requested shape."""
        path = tmp_path / "demo.nvtrc"

        result = runner.invoke(app, ["demo", str(path), "--devices", "2", "--records", "8"])

        assert result.exit_code == 0
        data = read_file(path)
        assert data.device_count == 2
        assert data.record_count == 16


class TestConfigCommand:
    """Test config command."""

    def test_init(self, runner):
        result = runner.invoke(app, ["config", "init"])
        assert result.exit_code == 0
        assert "raw_gpu" in result.output

    def test_validate_ok(self, runner, tmp_path):
        path = tmp_path / "nvtrc.yml"
        path.write_text("timestamps:\n  raw_gpu: true\n")

        result = runner.invoke(app, ["config", "validate", str(path)])
        assert result.exit_code == 0

    def test_validate_bad(self, runner, tmp_path):
        path = tmp_path / "nvtrc.yml"
        path.write_text("export:\n  time_divisor: -1\n")

        result = runner.invoke(app, ["config", "validate", str(path)])
        assert result.exit_code == 1
        assert "time_divisor" in result.output

    def test_unknown_action(self, runner):
        result = runner.invoke(app, ["config", "frobnicate"])
        assert result.exit_code == 1
