import json
import logging
import os
from pathlib import Path
from typing import Optional

from .config import MINECRAFT_DIRECTORY, SETTINGS_FILE, VERSION_SETTING_FILENAME
from .java import JavaDiscovery
from .launch import LaunchOptions
from .properties import ObservableProperty
from .proxy import ProxySettings, proxy_settings
from .setting import GameDirectoryType, VersionSetting


def _read_json(path: Path):
    """The decoded file, or None if it is missing or unreadable."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as e:
        logging.warning(f"Could not read {path}: {e}")
        return None


def _write_json(path: Path, data: dict) -> None:
    os.makedirs(path.parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=4)


class SettingsStore:
    """
    Owns the global settings and the settings of every version, and decides
    which of them applies to a version. Records are saved whenever one of
    their fields changes.
    """

    def __init__(
        self,
        minecraft_directory: Optional[str | os.PathLike] = None,
        settings_file: str | os.PathLike = SETTINGS_FILE,
        proxy: Optional[ProxySettings] = None,
    ) -> None:
        # An explicit directory wins over the one saved in the settings file
        self._explicit_directory = minecraft_directory is not None
        self.minecraft_directory = Path(
            minecraft_directory if minecraft_directory is not None else MINECRAFT_DIRECTORY
        )
        self._settings_file = Path(settings_file)
        self.proxy = proxy if proxy is not None else proxy_settings
        self._version_settings: dict[str, VersionSetting] = {}
        self._listeners: dict[str, object] = {}
        self.global_setting = VersionSetting()
        self._set_global(self.global_setting)

    # launcher file

    def load(self) -> None:
        data = _read_json(self._settings_file)
        if not isinstance(data, dict):
            logging.info(f"No launcher settings at {self._settings_file}, creating defaults")
            self.save()
            return

        launcher_data = data.get("launcher", {})
        if not isinstance(launcher_data, dict):
            launcher_data = {}
        self.proxy.update(ProxySettings.from_dict(launcher_data.get("proxy", {})))
        if launcher_data.get("directory") and not self._explicit_directory:
            self.minecraft_directory = Path(launcher_data["directory"])

        setting = VersionSetting.from_json(data.get("global"))
        if setting is None:
            logging.info("Global settings missing, using defaults")
            setting = VersionSetting()
        self._set_global(setting)

    def save(self) -> None:
        data = _read_json(self._settings_file)
        if not isinstance(data, dict):
            data = {}
        launcher_data = data.get("launcher")
        if not isinstance(launcher_data, dict):
            launcher_data = {}
        launcher_data.update({
            "directory": str(self.minecraft_directory),
            "proxy": self.proxy.to_dict(),
        })
        data["launcher"] = launcher_data
        data["global"] = self.global_setting.to_json()
        _write_json(self._settings_file, data)

    def _set_global(self, setting: VersionSetting) -> None:
        self.global_setting.remove_property_changed_listener(self._on_global_changed)
        setting.normalize()
        setting.is_global = True
        setting.add_property_changed_listener(self._on_global_changed)
        self.global_setting = setting

    def _on_global_changed(self, prop: ObservableProperty) -> None:
        self.save()

    # versions

    def version_directory(self, version: str) -> Path:
        return self.minecraft_directory / "versions" / version

    def version_setting_file(self, version: str) -> Path:
        return self.version_directory(version) / VERSION_SETTING_FILENAME

    def list_versions(self) -> list[str]:
        versions_dir = self.minecraft_directory / "versions"
        try:
            entries = os.listdir(versions_dir)
        except FileNotFoundError:
            return []
        return sorted(
            entry for entry in entries
            if os.path.isfile(versions_dir / entry / f"{entry}.json")
        )

    def get_version_setting(self, version: str) -> Optional[VersionSetting]:
        """The record of the version itself, None if it has never been customized."""
        if version not in self._version_settings:
            self._load_version_setting(version)
        return self._version_settings.get(version)

    def _load_version_setting(self, version: str) -> None:
        path = self.version_setting_file(version)
        if not path.exists():
            return
        setting = VersionSetting.from_json(_read_json(path))
        if setting is None:
            logging.warning(f"Settings of {version} are not an object, ignoring {path}")
            return
        self._manage(version, setting)

    def _manage(self, version: str, setting: VersionSetting) -> None:
        setting.normalize()

        def listener(prop: ObservableProperty) -> None:
            self.save_version_setting(version)

        setting.add_property_changed_listener(listener)
        self._version_settings[version] = setting
        self._listeners[version] = listener

    def save_version_setting(self, version: str) -> None:
        setting = self._version_settings.get(version)
        if setting is None:
            return
        _write_json(self.version_setting_file(version), setting.to_json())

    def create_version_setting(self, version: str) -> VersionSetting:
        setting = self.get_version_setting(version)
        if setting is not None:
            return setting
        setting = VersionSetting()
        self._manage(version, setting)
        self.save_version_setting(version)
        logging.info(f"Created settings for {version}")
        return setting

    def specialize_version_setting(self, version: str) -> VersionSetting:
        """Makes the version use its own settings."""
        setting = self.get_version_setting(version) or self.create_version_setting(version)
        setting.uses_global = False
        return setting

    def globalize_version_setting(self, version: str) -> None:
        """Makes the version use the global settings. Its own record is kept."""
        setting = self.get_version_setting(version)
        if setting is not None:
            setting.uses_global = True

    def remove_version_setting(self, version: str) -> None:
        setting = self._version_settings.pop(version, None)
        listener = self._listeners.pop(version, None)
        if setting is not None and listener is not None:
            setting.remove_property_changed_listener(listener)
        try:
            os.remove(self.version_setting_file(version))
        except FileNotFoundError:
            pass
        logging.info(f"Removed settings for {version}")

    # resolution

    def resolve(self, version: str) -> VersionSetting:
        """The record that applies to the version."""
        setting = self.get_version_setting(version)
        if setting is None or setting.uses_global:
            return self.global_setting
        return setting

    def game_directory(self, version: str) -> Path:
        if self.resolve(version).game_dir_type == GameDirectoryType.VERSION_FOLDER:
            return self.version_directory(version)
        return self.minecraft_directory

    def to_launch_options(self, version: str, discovery: JavaDiscovery) -> LaunchOptions:
        """
        :raises OSError: If probing the Java installation fails.
        """
        setting = self.resolve(version)
        return setting.to_launch_options(self.game_directory(version), discovery, self.proxy)
