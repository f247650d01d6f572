"""
Unit tests for the command-line entry point.
The live bus is replaced by the in-memory fake daemon.
"""

import logging
from unittest.mock import patch

import pytest

from conftest import ADAPTER_PATH, DEVICE_PATH, KNOWN_PATH
from iwdspider import cli
from iwdspider.logging import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_root_logger():
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def run(channel, tmp_path, monkeypatch):
    """Run the CLI against the fake daemon with an isolated config path."""
    monkeypatch.setenv("IWDSPIDER_CONFIG", str(tmp_path / "config.yaml"))

    def _run(*argv):
        with patch.object(cli, "open_channel", return_value=channel):
            return cli.main(list(argv))
    return _run


class TestParser:

    def test_command_required(self):
        with pytest.raises(SystemExit) as exc_info:
            cli.build_parser().parse_args([])
        assert exc_info.value.code == 2

    def test_on_off_only(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["adapter-power", "phy0", "maybe"])


class TestCommands:

    def test_objects(self, run, capsys):
        assert run("objects") == 0
        out = capsys.readouterr().out
        assert "Adapter(path='/net/connman/iwd/0'" in out
        assert "KnownNetwork(" in out
        assert "AgentManager(" in out

    def test_scan(self, run, capsys):
        assert run("scan", "--wait", "0") == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split()[:2] == ["1.", "Home"]
        assert "connected known" in lines[0]
        assert "-40.0 dBm" in lines[0]
        assert lines[1].split()[:2] == ["2.", "Guest"]

    def test_scan_uses_config_wait(self, run, tmp_path):
        (tmp_path / "config.yaml").write_text("scan_wait_seconds: 7\n")
        with patch.object(cli, "scan_for_networks", return_value=[]) as scan:
            assert run("scan") == 0
        assert scan.call_args[0][1] == 7

    def test_adapter_power(self, run, channel):
        assert run("adapter-power", "phy0", "off") == 0
        assert channel.objects[ADAPTER_PATH]["net.connman.iwd.Adapter"]["Powered"] is False

    def test_device_power(self, run, channel):
        assert run("device-power", "wlan0", "off") == 0
        assert channel.objects[DEVICE_PATH]["net.connman.iwd.Device"]["Powered"] is False

    def test_device_mode(self, run, channel):
        assert run("device-mode", "wlan0", "ap") == 0
        assert channel.objects[DEVICE_PATH]["net.connman.iwd.Device"]["Mode"] == "ap"

    def test_device_mode_invalid(self, run, channel):
        assert run("device-mode", "wlan0", "bogus") == 1
        assert channel.remote_calls("set") == []

    def test_known(self, run, capsys):
        assert run("known") == 0
        out = capsys.readouterr().out
        assert "Home" in out
        assert "2024-05-01T10:20:30Z" in out

    def test_forget(self, run, channel):
        assert run("forget", "Home") == 0
        assert KNOWN_PATH not in channel.objects

    def test_autoconnect(self, run, channel):
        assert run("autoconnect", "Home", "off") == 0
        assert channel.objects[KNOWN_PATH]["net.connman.iwd.KnownNetwork"]["AutoConnect"] is False


class TestExitCodes:

    def test_unknown_name(self, run):
        assert run("device-power", "wlan9", "on") == 1

    def test_transport_error(self, run, channel):
        channel.fail("org.freedesktop.DBus.ObjectManager.GetManagedObjects")
        assert run("objects") == 1

    def test_no_stations(self, run, channel):
        channel.remove_object(DEVICE_PATH)
        assert run("scan", "--wait", "0") == 1

    def test_keyboard_interrupt(self, run):
        with patch.object(cli, "run_command", side_effect=KeyboardInterrupt):
            assert run("objects") == 130

    def test_bad_config(self, run, tmp_path):
        (tmp_path / "config.yaml").write_text("- not a mapping\n")
        assert run("objects") == 1

    def test_bad_log_format_in_config(self, run, tmp_path, capsys):
        (tmp_path / "config.yaml").write_text("logging:\n  format: xml\n")
        assert run("objects") == 1
        assert "xml" in capsys.readouterr().err

    def test_missing_gio_binding(self, tmp_path, monkeypatch):
        monkeypatch.setenv("IWDSPIDER_CONFIG", str(tmp_path / "config.yaml"))
        with patch.object(cli, "open_channel", side_effect=ImportError("No module named 'gi'")):
            assert cli.main(["objects"]) == 1
