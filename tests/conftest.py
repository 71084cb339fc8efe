import os
import sys
from typing import Dict, List, Optional

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from mobile_helper.android import prompts


class FakeDevice:
    def __init__(self, serial: str, state: str = "device", packages: Optional[List[str]] = None):
        self.serial = serial
        self.state = state
        self.packages = packages or []
        self.installed: List[str] = []
        self.uninstalled: List[str] = []
        self.install_output = "Performing Streamed Install\nSuccess"
        self.uninstall_output = "Success"

    @property
    def is_emulator(self) -> bool:
        return "emulator" in self.serial

    async def install_app(self, apk_path: str) -> str:
        self.installed.append(apk_path)
        return self.install_output

    async def uninstall_app(self, package: str) -> str:
        self.uninstalled.append(package)
        return self.uninstall_output

    async def list_packages(self, name_filter: str = "") -> List[str]:
        return [p for p in self.packages if name_filter in p]


class FakeDeviceManager:
    """Stands in for DeviceManager; every instance shares the class-level state."""

    devices: List[FakeDevice] = []
    pair_result = True
    connect_result: Optional[str] = None
    disconnect_result = True
    calls: List[tuple] = []

    def __init__(self, adb_path: Optional[str] = None):
        self.adb_path = adb_path

    async def list_devices(self) -> List[FakeDevice]:
        return list(self.devices)

    async def pair(self, host: str, port: str, code: str) -> bool:
        self.calls.append(("pair", host, port, code))
        return self.pair_result

    async def connect(self, host: str, port: str) -> Optional[str]:
        self.calls.append(("connect", host, port))
        return self.connect_result

    async def disconnect(self, serial: str) -> bool:
        self.calls.append(("disconnect", serial))
        return self.disconnect_result


@pytest.fixture
def device_manager(monkeypatch):
    """Replace DeviceManager in every flow module with a fresh FakeDeviceManager."""
    manager = type(
        "FakeDeviceManager",
        (FakeDeviceManager,),
        {"devices": [], "calls": [], "pair_result": True, "connect_result": None, "disconnect_result": True},
    )
    for module in (
        "mobile_helper.android.connect",
        "mobile_helper.android.disconnect",
        "mobile_helper.android.install",
        "mobile_helper.android.uninstall",
    ):
        monkeypatch.setattr(f"{module}.DeviceManager", manager)
    return manager


class ScriptedPrompts:
    """Answers prompts from queues and records what was asked."""

    def __init__(self):
        self.selections: List[str] = []
        self.answers: List[str] = []
        self.confirmations: List[bool] = []
        self.asked: List[str] = []
        self.offered: Dict[str, List[str]] = {}

    def select(self, message: str, choices: List[str]) -> str:
        self.asked.append(message)
        self.offered[message] = list(choices)
        answer = self.selections.pop(0)
        assert answer in choices, f"{answer!r} not offered for {message!r}: {choices}"
        return answer

    def ask(self, message: str) -> str:
        self.asked.append(message)
        return self.answers.pop(0)

    def confirm(self, message: str, default: bool = False) -> bool:
        self.asked.append(message)
        return self.confirmations.pop(0)


@pytest.fixture
def scripted_prompts(monkeypatch):
    scripted = ScriptedPrompts()
    monkeypatch.setattr(prompts, "select", scripted.select)
    monkeypatch.setattr(prompts, "ask", scripted.ask)
    monkeypatch.setattr(prompts, "confirm", scripted.confirm)
    return scripted


@pytest.fixture
def binaries(monkeypatch, tmp_path):
    """Pretend every SDK binary lives under a temporary SDK root."""

    def fake_locate(sdk_root: str, platform: str, binary: str) -> str:
        return os.path.join(sdk_root, binary)

    for module in (
        "mobile_helper.android.connect",
        "mobile_helper.android.disconnect",
        "mobile_helper.android.install",
        "mobile_helper.android.uninstall",
    ):
        monkeypatch.setattr(f"{module}.locate_binary", fake_locate)
    return str(tmp_path)


@pytest.fixture
def no_android_home(monkeypatch):
    # setenv first so the original value is restored after the test
    monkeypatch.setenv("ANDROID_HOME", "")
    monkeypatch.delenv("ANDROID_HOME")
