import asyncio
import os

import pytest

from mobile_helper.android import subcommand as subcommand_module
from mobile_helper.android.options import VerifiedOptions
from mobile_helper.android.subcommand import AndroidSubcommand


@pytest.fixture
def recorded_flows(monkeypatch):
    calls = []

    def make_flow(name):
        async def flow(options, sdk_root, platform):
            calls.append((name, options, sdk_root, platform))
            return True

        return flow

    for name in list(subcommand_module.SUBCOMMAND_FLOWS):
        monkeypatch.setitem(subcommand_module.SUBCOMMAND_FLOWS, name, make_flow(name))
    return calls


def test_unknown_subcommand(recorded_flows, tmp_path, capsys):
    result = asyncio.run(AndroidSubcommand("reboot", {}, root_dir=str(tmp_path)).run())

    assert result is False
    output = capsys.readouterr().out
    assert "Unknown subcommand passed" in output
    assert "disconnect" in output
    assert recorded_flows == []


@pytest.mark.parametrize("flag", ["help", "h"])
def test_help(recorded_flows, tmp_path, capsys, flag):
    result = asyncio.run(AndroidSubcommand("install", {flag: True, "avd": True}, root_dir=str(tmp_path)).run())

    assert result is True
    output = capsys.readouterr().out
    assert "mobile-helper android install" in output
    assert "--system-image" in output
    assert "--path, -p" in output
    assert recorded_flows == []


def test_invalid_options_fail_before_sdk_lookup(recorded_flows, no_android_home, tmp_path, capsys):
    result = asyncio.run(
        AndroidSubcommand("connect", {"wireless": True, "avd": True}, root_dir=str(tmp_path)).run()
    )

    assert result is False
    output = capsys.readouterr().out
    assert "Too many options passed" in output
    assert "ANDROID_HOME" not in output


def test_missing_android_home(recorded_flows, no_android_home, tmp_path, capsys):
    result = asyncio.run(AndroidSubcommand("connect", {"list": True}, root_dir=str(tmp_path)).run())

    assert result is False
    assert "ANDROID_HOME environment variable is NOT set!" in capsys.readouterr().out
    assert recorded_flows == []


def test_android_home_pointing_nowhere(recorded_flows, monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("ANDROID_HOME", str(tmp_path / "missing"))

    result = asyncio.run(AndroidSubcommand("connect", {"list": True}, root_dir=str(tmp_path)).run())

    assert result is False
    assert "does not exist" in capsys.readouterr().out


def test_dispatch_with_verified_options(recorded_flows, monkeypatch, tmp_path):
    monkeypatch.setenv("ANDROID_HOME", str(tmp_path))

    command = AndroidSubcommand("install", {"app": True, "p": "app.apk"}, root_dir=str(tmp_path))

    assert asyncio.run(command.run()) is True
    name, options, sdk_root, platform = recorded_flows[0]
    assert name == "install"
    assert options == VerifiedOptions(main_option="app", flags={"path": "app.apk"})
    assert sdk_root == str(tmp_path)
    assert platform == command.platform


def test_android_home_from_dotenv(recorded_flows, no_android_home, tmp_path):
    (tmp_path / "android-sdk").mkdir()
    (tmp_path / ".env").write_text("ANDROID_HOME=android-sdk\n")

    command = AndroidSubcommand("disconnect", {}, root_dir=str(tmp_path))

    assert asyncio.run(command.run()) is True
    assert command.android_home_in_global_env is False
    assert recorded_flows[0][2] == os.path.join(str(tmp_path), "android-sdk")


def test_global_android_home_wins_over_dotenv(recorded_flows, monkeypatch, tmp_path):
    (tmp_path / "global-sdk").mkdir()
    (tmp_path / ".env").write_text("ANDROID_HOME=dotenv-sdk\n")
    monkeypatch.setenv("ANDROID_HOME", str(tmp_path / "global-sdk"))

    command = AndroidSubcommand("disconnect", {}, root_dir=str(tmp_path))

    assert asyncio.run(command.run()) is True
    assert command.android_home_in_global_env is True
    assert recorded_flows[0][2] == str(tmp_path / "global-sdk")
