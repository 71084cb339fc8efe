"""
Static descriptions of the `android` subcommands and their options.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class Flag(BaseModel):
    """A valued flag modifying a main option, e.g. `--path <apk>`."""

    model_config = ConfigDict(frozen=True)

    name: str
    alias: List[str] = Field(default_factory=list)
    description: str


class MainOption(BaseModel):
    """One of the mutually exclusive actions of a subcommand."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    flags: List[Flag] = Field(default_factory=list)


class Subcommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str
    options: List[MainOption] = Field(default_factory=list)
    # Flags accepted when no main option is selected
    flags: List[Flag] = Field(default_factory=list)

    @property
    def option_names(self) -> List[str]:
        return [option.name for option in self.options]

    def get_option(self, name: str) -> MainOption | None:
        return next((option for option in self.options if option.name == name), None)


DEVICE_ID_FLAG = Flag(
    name="deviceId",
    alias=["s"],
    description="Id of the device to use if multiple devices are connected",
)

AVAILABLE_SUBCOMMANDS: Dict[str, Subcommand] = {
    "connect": Subcommand(
        description="Connect to a device",
        options=[
            MainOption(name="wireless", description="Connect a real device wirelessly"),
            MainOption(name="avd", description="Connect to an Android Virtual Device"),
            MainOption(name="list", description="List connected devices"),
        ],
    ),
    "disconnect": Subcommand(
        description="Disconnect an AVD or a real device",
        flags=[
            DEVICE_ID_FLAG.model_copy(update={"description": "Id of the device to disconnect"}),
        ],
    ),
    "install": Subcommand(
        description="Install APKs, system images or Android Virtual Devices",
        options=[
            MainOption(
                name="system-image",
                description="Install a system image for Android Virtual Devices",
            ),
            MainOption(name="avd", description="Create an Android Virtual Device"),
            MainOption(
                name="app",
                description="Install an APK on the device",
                flags=[
                    Flag(name="path", alias=["p"], description="Path to the APK file"),
                    DEVICE_ID_FLAG,
                ],
            ),
        ],
    ),
    "uninstall": Subcommand(
        description="Uninstall system images, AVDs or APKs from a device",
        options=[
            MainOption(
                name="system-image",
                description="Uninstall a currently installed system image",
            ),
            MainOption(name="avd", description="Delete an Android Virtual Device"),
            MainOption(
                name="app",
                description="Uninstall an APK from a device",
                flags=[DEVICE_ID_FLAG],
            ),
        ],
    ),
}

HELP_FLAG = Flag(name="help", alias=["h"], description="Show help for the subcommand")

# Keywords used to filter `avdmanager list devices -c` per device type
DEVICE_TYPE_KEYWORDS: Dict[str, List[str]] = {
    "Nexus": ["nexus"],
    "Pixel": ["pixel"],
    "Wear OS": ["wear"],
    "Android TV": ["tv"],
    "Desktop": ["desktop"],
    "Others": [],
}
