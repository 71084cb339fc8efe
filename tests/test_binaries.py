import os

import pytest

from mobile_helper.sdk import binaries
from mobile_helper.sdk.binaries import (
    get_binary_location,
    get_binary_name_for_os,
    get_platform_name,
)


def _touch(path):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w") as f:
        f.write("")


def test_binary_names_per_os():
    assert get_binary_name_for_os("linux", "sdkmanager") == "sdkmanager"
    assert get_binary_name_for_os("mac", "adb") == "adb"
    assert get_binary_name_for_os("windows", "sdkmanager") == "sdkmanager.bat"
    assert get_binary_name_for_os("windows", "avdmanager") == "avdmanager.bat"
    assert get_binary_name_for_os("windows", "adb") == "adb.exe"
    assert get_binary_name_for_os("windows", "emulator") == "emulator.exe"


def test_binary_inside_sdk_root_wins(tmp_path, monkeypatch):
    sdk_root = str(tmp_path)
    expected = os.path.join(sdk_root, "cmdline-tools", "latest", "bin", "avdmanager")
    _touch(expected)
    monkeypatch.setattr(binaries.shutil, "which", lambda name: "/usr/bin/" + name)

    assert get_binary_location(sdk_root, "linux", "avdmanager") == expected


def test_binary_locations_in_sdk(tmp_path):
    sdk_root = str(tmp_path)
    adb = os.path.join(sdk_root, "platform-tools", "adb.exe")
    emulator = os.path.join(sdk_root, "emulator", "emulator.exe")
    _touch(adb)
    _touch(emulator)

    assert get_binary_location(sdk_root, "windows", "adb") == adb
    assert get_binary_location(sdk_root, "windows", "emulator") == emulator


def test_falls_back_to_path(tmp_path, monkeypatch):
    monkeypatch.setattr(binaries.shutil, "which", lambda name: "/opt/android/bin/" + name)

    assert get_binary_location(str(tmp_path), "linux", "adb") == "/opt/android/bin/adb"


def test_missing_binary(tmp_path, monkeypatch):
    monkeypatch.setattr(binaries.shutil, "which", lambda name: None)

    assert get_binary_location(str(tmp_path), "linux", "emulator") is None


def test_unknown_binary(tmp_path):
    with pytest.raises(ValueError):
        get_binary_location(str(tmp_path), "linux", "fastboot")


@pytest.mark.parametrize(
    "system,expected",
    [("Windows", "windows"), ("Darwin", "mac"), ("Linux", "linux")],
)
def test_platform_name(monkeypatch, system, expected):
    monkeypatch.setattr(binaries._platform, "system", lambda: system)

    assert get_platform_name() == expected
