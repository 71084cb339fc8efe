from mobile_helper.sdk import system_images
from mobile_helper.sdk.system_images import (
    SystemImageType,
    api_level_label,
    get_available_system_images,
    get_installed_system_images,
    parse_installed_system_images,
    parse_system_image_catalogue,
    system_image_name,
)

SDKMANAGER_LIST = """\
[=======================================] 100% Computing updates...
Installed packages:
  Path                                        | Version | Description                     | Location
  -------                                     | ------- | -------                         | -------
  emulator                                    | 34.1.19 | Android Emulator                | emulator
  platform-tools                              | 35.0.1  | Android SDK Platform-Tools      | platform-tools
  system-images;android-30;google_apis;x86_64 | 10      | Google APIs Intel x86_64 Atom   | system-images/android-30/google_apis/x86_64

Available Packages:
  Path                                             | Version | Description
  -------                                          | ------- | -------
  system-images;android-30;google_apis;x86         | 12      | Google APIs Intel x86 Atom
  system-images;android-30;google_apis;x86_64      | 10      | Google APIs Intel x86_64 Atom
  system-images;android-30;default;x86_64          | 1       | Intel x86_64 Atom
  system-images;android-9;default;armeabi-v7a      | 5       | ARM EABI v7a
  system-images;android-34;google_apis;arm64-v8a   | 14      | Google APIs ARM 64 v8a
  system-images;android-34;google_apis;arm64-v8a   | 14      | Google APIs ARM 64 v8a
  system-images;broken                             | 1       | Broken entry
"""


def test_catalogue_groups_architectures_by_api_level_and_type():
    catalogue = parse_system_image_catalogue(SDKMANAGER_LIST)

    google_apis = next(t for t in catalogue["android-30"] if t.type == "google_apis")
    assert sorted(google_apis.archs) == ["x86", "x86_64"]
    assert SystemImageType(type="default", archs=["x86_64"]) in catalogue["android-30"]


def test_catalogue_has_no_duplicate_architectures():
    catalogue = parse_system_image_catalogue(SDKMANAGER_LIST)

    assert catalogue["android-34"] == [SystemImageType(type="google_apis", archs=["arm64-v8a"])]


def test_catalogue_orders_api_levels_numerically():
    catalogue = parse_system_image_catalogue(SDKMANAGER_LIST)

    assert list(catalogue) == ["android-9", "android-30", "android-34"]


def test_catalogue_skips_malformed_entries():
    catalogue = parse_system_image_catalogue(SDKMANAGER_LIST)

    assert "broken" not in catalogue


def test_catalogue_of_empty_output():
    assert parse_system_image_catalogue("") == {}


def test_installed_images_stop_at_available_packages():
    assert parse_installed_system_images(SDKMANAGER_LIST) == [
        "system-images;android-30;google_apis;x86_64"
    ]


def test_installed_images_without_available_section():
    stdout = "Installed packages:\n  system-images;android-33;default;x86_64 | 1 | Intel\n"

    assert parse_installed_system_images(stdout) == ["system-images;android-33;default;x86_64"]


def test_api_level_label():
    assert api_level_label("android-30") == "android-30 - Android 11 (v11)"
    assert api_level_label("android-19") == "android-19 - KitKat (v4.4-4.4.4)"
    assert api_level_label("android-Baklava") == "android-Baklava"


def test_system_image_name():
    assert system_image_name("android-34", "google_apis", "arm64-v8a") == (
        "system-images;android-34;google_apis;arm64-v8a"
    )


def test_sdkmanager_failure(monkeypatch, capsys):
    monkeypatch.setattr(system_images, "exec_binary_sync", lambda *args, **kwargs: None)

    assert get_installed_system_images("/sdk/sdkmanager") is None
    assert get_available_system_images("/sdk/sdkmanager") is None
    assert "Failed to fetch system images!" in capsys.readouterr().out


def test_sdkmanager_list_is_requested(monkeypatch):
    calls = []

    def fake_exec(binary_location, args, **kwargs):
        calls.append((binary_location, args))
        return SDKMANAGER_LIST

    monkeypatch.setattr(system_images, "exec_binary_sync", fake_exec)

    assert get_installed_system_images("/sdk/sdkmanager") == [
        "system-images;android-30;google_apis;x86_64"
    ]
    assert calls == [("/sdk/sdkmanager", ["--list"])]
