from .exceptions import JavaNotFound, SettingsError, UnknownSetting
from .java import JavaDiscovery, JavaRuntime
from .launch import LaunchOptions
from .properties import Field, ObservableProperty
from .proxy import ProxySettings, proxy_settings
from .setting import (
    GameDirectoryType,
    LauncherVisibility,
    VersionSetting,
    parse_json_int,
)
from .store import SettingsStore

__all__ = [
    "JavaNotFound",
    "SettingsError",
    "UnknownSetting",
    "JavaDiscovery",
    "JavaRuntime",
    "LaunchOptions",
    "Field",
    "ObservableProperty",
    "ProxySettings",
    "proxy_settings",
    "GameDirectoryType",
    "LauncherVisibility",
    "VersionSetting",
    "parse_json_int",
    "SettingsStore",
]
