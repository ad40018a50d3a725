"""Tests for CLI module - formatting helpers and command behavior."""

import json

import pytest
from typer.testing import CliRunner

from pyssc_dip import JumperMode, OperationMode, Parity, SwitchBank
from pyssc_dip.cli import app, build_config, format_bank, format_switch
from pyssc_dip.errors import InvalidSettingError

runner = CliRunner()


# ============================================================================
# Helper Tests
# ============================================================================


class TestFormatting:
    """Test switch and bank formatting."""

    def test_format_switch(self) -> None:
        assert format_switch(True) == "ON"
        assert format_switch(False) == "OFF"

    def test_format_bank(self) -> None:
        bank = SwitchBank("SW1", (False, False, False, True, True, True, True))
        assert format_bank(bank) == "SW1: 1=OFF 2=OFF 3=OFF 4=ON 5=ON 6=ON 7=ON"


class TestBuildConfig:
    """Test option strings -> SerialCardConfig."""

    def _build(self, **overrides):
        args = {
            "mode": "modem",
            "jumper": None,
            "baud": "9600",
            "data_bits": "8",
            "parity": "none",
            "stop_bits": "1",
            "frame": None,
            "width": "80",
            "return_delay": False,
            "auto_line_feed": False,
            "interrupts": True,
        }
        args.update(overrides)
        return build_config(**args)

    def test_defaults(self) -> None:
        config = self._build()
        assert config.operation_mode is OperationMode.MODEM
        assert config.jumper_mode is JumperMode.MODEM
        assert config.baud_rate == "9600"
        assert (config.data_bits, config.parity, config.stop_bits) == (8, Parity.NONE, 1)

    def test_jumper_follows_mode_when_omitted(self) -> None:
        assert self._build(mode="printer").jumper_mode is JumperMode.PRINTER
        assert self._build(mode="printer", jumper="up").jumper_mode is JumperMode.MODEM

    def test_frame_overrides_individual_options(self) -> None:
        config = self._build(frame="7E2", data_bits="8", parity="none", stop_bits="1")
        assert (config.data_bits, config.parity, config.stop_bits) == (7, Parity.EVEN, 2)

    def test_invalid_value_raises(self) -> None:
        with pytest.raises(InvalidSettingError):
            self._build(baud="115200")


# ============================================================================
# Command Tests
# ============================================================================


def test_resolve_default_modem() -> None:
    result = runner.invoke(app, ["resolve"])

    assert result.exit_code == 0
    assert "SW1: 1=OFF 2=OFF 3=OFF 4=ON 5=ON 6=ON 7=ON" in result.stdout
    assert "SW2: 1=ON 2=ON 3=OFF 4=ON 5=OFF 6=ON 7=OFF" in result.stdout
    assert "Recommended Slot: Slot 2" in result.stdout
    assert "Jumper Block: Arrow UP (Modem)" in result.stdout


def test_resolve_printer_40_columns() -> None:
    result = runner.invoke(app, ["resolve", "--mode", "printer", "--width", "40", "--return-delay"])

    assert result.exit_code == 0
    assert "SW1: 1=OFF 2=OFF 3=OFF 4=ON 5=OFF 6=ON 7=ON" in result.stdout
    assert "SW2: 1=ON 2=ON 3=ON 4=ON 5=OFF 6=ON 7=ON" in result.stdout
    assert "Line Width: 40 columns" in result.stdout
    assert "Recommended Slot: Slot 1" in result.stdout


def test_resolve_json_output() -> None:
    result = runner.invoke(
        app,
        ["resolve", "--baud", "1200", "--format", "7O2", "--auto-line-feed", "--no-interrupts", "--json"],
    )

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["sw1"] == [False, True, True, True, True, True, True]
    assert data["sw2"] == [False, False, True, False, True, False, False]
    assert data["slot"] == "Slot 2"
    assert data["frame"] == "7O2"
    assert "Baud Rate: 1200" in data["summary"]


def test_resolve_json_printer_has_no_frame() -> None:
    result = runner.invoke(app, ["resolve", "--mode", "printer", "--json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout)["frame"] is None


def test_resolve_reads_env_vars() -> None:
    result = runner.invoke(app, ["resolve", "--json"], env={"PYSSC_MODE": "printer", "PYSSC_WIDTH": "132"})

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["sw2"][2:4] == [False, False]
    assert data["slot"] == "Slot 1"


def test_resolve_reads_format_and_toggle_env_vars() -> None:
    env = {
        "PYSSC_FORMAT": "7E2",
        "PYSSC_AUTO_LINE_FEED": "true",
        "PYSSC_INTERRUPTS": "false",
        "PYSSC_RETURN_DELAY": "1",
    }
    result = runner.invoke(app, ["resolve", "--json"], env=env)

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["frame"] == "7E2"
    assert data["sw2"] == [False, False, False, False, True, False, False]


def test_resolve_printer_return_delay_env_var() -> None:
    result = runner.invoke(app, ["resolve", "--json"], env={"PYSSC_MODE": "printer", "PYSSC_RETURN_DELAY": "1"})

    assert result.exit_code == 0
    assert json.loads(result.stdout)["sw2"][1] is True


def test_resolve_invalid_baud_exits_2() -> None:
    result = runner.invoke(app, ["resolve", "--baud", "115200"])

    assert result.exit_code == 2
    assert "Invalid setting" in result.output


def test_resolve_invalid_mode_exits_2() -> None:
    result = runner.invoke(app, ["resolve", "--mode", "terminal"])

    assert result.exit_code == 2


def test_baud_rates_text() -> None:
    result = runner.invoke(app, ["baud-rates"])

    assert result.exit_code == 0
    lines = result.stdout.strip().splitlines()
    assert len(lines) == 15
    assert lines[0].split() == ["50", "ON", "ON", "ON", "OFF"]
    assert "(fallback)" in next(line for line in lines if line.split()[0] == "9600")


def test_baud_rates_json() -> None:
    result = runner.invoke(app, ["baud-rates", "--json"])

    assert result.exit_code == 0
    rows = json.loads(result.stdout)
    assert rows[-1] == {"baud": "19200", "sw1": [False, False, False, False]}


def test_fields_command() -> None:
    result = runner.invoke(app, ["fields", "printer"])

    assert result.exit_code == 0
    assert result.stdout.split() == ["baud_rate", "line_width", "return_delay", "auto_line_feed", "enable_interrupts"]


def test_fields_command_json() -> None:
    result = runner.invoke(app, ["fields", "MODEM", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["mode"] == "modem"
    assert "parity" in data["fields"]


def test_fields_command_invalid_mode() -> None:
    result = runner.invoke(app, ["fields", "fax"])

    assert result.exit_code == 2


def test_info_command() -> None:
    result = runner.invoke(app, ["info"])

    assert result.exit_code == 0
    assert "version:" in result.stdout.lower()
    assert "Apple II Super Serial Card" in result.stdout


def test_version_option() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert "pyssc-dip" in result.stdout
