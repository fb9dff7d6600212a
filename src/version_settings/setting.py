"""
Launch settings of a single game version.

Settings are split in two parts:

1. Global settings, shared by every version that asks for them.
2. Version settings, used only by the version they belong to.

A version whose settings say ``uses_global`` keeps its own record on disk
but the record is inert: the store hands out the global record instead.
``uses_global`` defaults to False so that a version only gets a settings
file of its own once somebody customizes it.
"""

import logging
import math
import os
import re
from enum import Enum
from typing import Any, Optional

from . import config
from .exceptions import JavaNotFound, UnknownSetting
from .java import JavaDiscovery, JavaRuntime
from .launch import LaunchOptions
from .properties import Field, Listener, ObservableProperty, fields_of
from .proxy import ProxySettings, proxy_settings

JAVA_DEFAULT = "Default"
JAVA_CUSTOM = "Custom"


class GameDirectoryType(Enum):
    ROOT_FOLDER = "root_folder"  # .minecraft
    VERSION_FOLDER = "version_folder"  # .minecraft/versions/<version>


class LauncherVisibility(Enum):
    CLOSE = "close"  # close the launcher when the game starts
    HIDE = "hide"  # hide it, show it again when the game exits
    KEEP = "keep"  # leave it open


# Persisted codes. Never renumber these: settings files written by older
# launchers store the integers.
GAME_DIRECTORY_CODES = {
    GameDirectoryType.ROOT_FOLDER: 0,
    GameDirectoryType.VERSION_FOLDER: 1,
}
LAUNCHER_VISIBILITY_CODES = {
    LauncherVisibility.CLOSE: 0,
    LauncherVisibility.HIDE: 1,
    LauncherVisibility.KEEP: 2,
}

# Plain decimal only: no whitespace, underscores or non-ASCII digits
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def _suggested_memory() -> int:
    return config.SUGGESTED_MEMORY


def normalize_max_memory(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return config.SUGGESTED_MEMORY
    return value


def parse_json_int(value: Any, default: Optional[int] = 0) -> Optional[int]:
    """
    Reads an int that may have been written as a JSON number or as a string.

    Old settings files stored maxMemory, width and height as strings, so a
    string is parsed and anything unusable gives ``default``.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        try:
            return int(value)
        except (ValueError, OverflowError):
            return default
    if isinstance(value, str):
        number = _parse_int_string(value)
        return default if number is None else number
    return default


def _parse_int_string(value: str) -> Optional[int]:
    if not _INT_PATTERN.fullmatch(value):
        return None
    return int(value)


def _parse_optional_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return int(value)


def _parse_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _parse_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def _parse_max_memory(value: Any) -> int:
    return normalize_max_memory(parse_json_int(value, config.SUGGESTED_MEMORY))


def _enum_parser(codes: dict, default: Enum, key: str):
    members = {code: member for member, code in codes.items()}

    def parse(value: Any) -> Enum:
        if value is None:
            return default
        code = parse_json_int(value, None)
        member = members.get(code)
        if member is None:
            logging.warning(f"Invalid {key} value {value!r}, using {default.name}")
            return default
        return member

    return parse


class VersionSetting:
    uses_global = Field(False, key="usesGlobal")

    # java

    # Named runtime, "Default", "Custom" (see java_dir) or blank until normalize()
    java = Field("", key="java")
    java_dir = Field("", key="javaDir")
    # Command the java invocation is wrapped in, e.g. optirun
    wrapper = Field("", key="wrapper")
    # Metaspace (PermGen before Java 8) size in MB, kept as typed by the user
    perm_size = Field("", key="permSize")
    max_memory = Field(_suggested_memory, key="maxMemory", coerce=normalize_max_memory)
    min_memory = Field(None, key="minMemory")
    # Run before the game starts, OS specific
    precalled_command = Field("", key="precalledCommand")

    # options

    java_args = Field("", key="javaArgs")
    minecraft_args = Field("", key="minecraftArgs")
    no_jvm_args = Field(False, key="noJVMArgs")
    not_check_game = Field(False, key="notCheckGame")
    # do not look up libraries in the shared directory
    no_common = Field(False, key="noCommon")
    show_logs = Field(False, key="showLogs")

    # game

    # Joined as soon as the game has loaded. host or host:port
    server_ip = Field("", key="serverIp")
    fullscreen = Field(False, key="fullscreen")
    width = Field(config.DEFAULT_WIDTH, key="width")
    height = Field(config.DEFAULT_HEIGHT, key="height")
    game_dir_type = Field(GameDirectoryType.ROOT_FOLDER, key="gameDirType")

    # launcher

    launcher_visibility = Field(LauncherVisibility.HIDE, key="launcherVisibility")

    def __init__(self, **values: Any) -> None:
        self.is_global = False
        for field in fields_of(type(self)):
            field.property_of(self)
        for name, value in values.items():
            setattr(self, self.field(name).name, value)

    @classmethod
    def fields(cls) -> list[Field]:
        return fields_of(cls)

    @classmethod
    def field(cls, name: str) -> Field:
        """Looks a field up by attribute name or by JSON key."""
        for field in fields_of(cls):
            if name in (field.name, field.key):
                return field
        raise UnknownSetting(name)

    def property(self, name: str) -> ObservableProperty:
        return self.field(name).property_of(self)

    def add_property_changed_listener(self, listener: Listener) -> None:
        for field in fields_of(type(self)):
            field.property_of(self).add_listener(listener)

    def remove_property_changed_listener(self, listener: Listener) -> None:
        for field in fields_of(type(self)):
            field.property_of(self).remove_listener(listener)

    # java

    def normalize(self) -> None:
        """Fills in a blank java selector. Call once after loading."""
        if not self.java.strip():
            self.java = JAVA_DEFAULT if not self.java_dir.strip() else JAVA_CUSTOM

    def resolve_java_runtime(self, discovery: JavaDiscovery) -> Optional[JavaRuntime]:
        """
        Returns the runtime this version should run with, or None when the
        selected runtime does not exist.

        This may spawn java and probe the filesystem, do not call it from
        the UI thread.
        """
        self.normalize()

        if self.java == JAVA_DEFAULT:
            return discovery.current_environment()

        if self.java == JAVA_CUSTOM:
            try:
                return discovery.from_executable_dir(self.java_dir)
            except JavaNotFound as e:
                # the directory may not exist yet
                logging.info(f"Custom Java not found: {e}")
                return None

        if not self.java.strip():
            raise AssertionError("java selector is blank after normalize()")
        runtime = discovery.installed_runtimes().get(self.java)
        if runtime is None:
            logging.warning(
                f"Java runtime {self.java!r} is no longer installed, resetting to {JAVA_DEFAULT}"
            )
            self.java = JAVA_DEFAULT
            return discovery.current_environment()
        return runtime

    def metaspace(self) -> Optional[int]:
        if not isinstance(self.perm_size, str):
            return None
        return _parse_int_string(self.perm_size)

    def to_launch_options(
        self,
        game_dir: str | os.PathLike,
        discovery: JavaDiscovery,
        proxy: Optional[ProxySettings] = None,
        version_name: str = config.LAUNCHER_NAME,
        profile_name: str = config.LAUNCHER_NAME,
    ) -> LaunchOptions:
        """
        :raises OSError: If probing the Java installation fails.
        """
        proxy = proxy if proxy is not None else proxy_settings
        java = self.resolve_java_runtime(discovery) or discovery.current_environment()
        return LaunchOptions(
            game_dir=os.fspath(game_dir),
            java=java,
            version_name=version_name,
            profile_name=profile_name,
            minecraft_args=self.minecraft_args,
            java_args=self.java_args,
            max_memory=self.max_memory,
            min_memory=self.min_memory,
            metaspace=self.metaspace(),
            width=self.width,
            height=self.height,
            fullscreen=self.fullscreen,
            server_ip=self.server_ip,
            wrapper=self.wrapper,
            proxy_host=proxy.host,
            proxy_port=proxy.port,
            proxy_user=proxy.user,
            proxy_pass=proxy.password,
            precalled_command=self.precalled_command,
            no_generated_jvm_args=self.no_jvm_args,
        )

    # json

    def to_json(self) -> dict:
        return {
            "usesGlobal": self.uses_global,
            "javaArgs": self.java_args,
            "minecraftArgs": self.minecraft_args,
            "maxMemory": normalize_max_memory(self.max_memory),
            "minMemory": self.min_memory,
            "permSize": self.perm_size,
            "width": self.width,
            "height": self.height,
            "javaDir": self.java_dir,
            "precalledCommand": self.precalled_command,
            "serverIp": self.server_ip,
            "java": self.java,
            "wrapper": self.wrapper,
            "fullscreen": self.fullscreen,
            "noJVMArgs": self.no_jvm_args,
            "notCheckGame": self.not_check_game,
            "noCommon": self.no_common,
            "showLogs": self.show_logs,
            "launcherVisibility": LAUNCHER_VISIBILITY_CODES[self.launcher_visibility],
            "gameDirType": GAME_DIRECTORY_CODES[self.game_dir_type],
        }

    def update_from_json(self, data: dict) -> None:
        """Applies only the keys present in ``data``, with the same coercion as from_json."""
        for key, value in data.items():
            field = self.field(key)
            setattr(self, field.name, _PARSERS[field.key](value))

    @classmethod
    def from_json(cls, data: Any) -> Optional["VersionSetting"]:
        """
        Builds a record from a decoded JSON value. Returns None unless ``data``
        is an object; missing or malformed fields get their defaults.
        """
        if not isinstance(data, dict):
            return None
        setting = cls()
        for key, parse in _PARSERS.items():
            setattr(setting, cls.field(key).name, parse(data.get(key)))
        return setting

    def copy(self) -> "VersionSetting":
        """A detached copy, listeners are not carried over."""
        other = type(self).from_json(self.to_json())
        other.is_global = self.is_global
        return other

    def _values(self) -> tuple:
        return tuple(getattr(self, field.name) for field in fields_of(type(self)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionSetting):
            return NotImplemented
        return self._values() == other._values()

    __hash__ = None

    def __repr__(self) -> str:
        changed = ", ".join(
            f"{field.name}={getattr(self, field.name)!r}"
            for field in fields_of(type(self))
            if getattr(self, field.name) != field.default()
        )
        return f"VersionSetting({changed})"


_PARSERS = {
    "usesGlobal": _parse_boolean,
    "javaArgs": _parse_string,
    "minecraftArgs": _parse_string,
    "maxMemory": _parse_max_memory,
    "minMemory": _parse_optional_int,
    "permSize": _parse_string,
    "width": parse_json_int,
    "height": parse_json_int,
    "javaDir": _parse_string,
    "precalledCommand": _parse_string,
    "serverIp": _parse_string,
    "java": _parse_string,
    "wrapper": _parse_string,
    "fullscreen": _parse_boolean,
    "noJVMArgs": _parse_boolean,
    "notCheckGame": _parse_boolean,
    "noCommon": _parse_boolean,
    "showLogs": _parse_boolean,
    "launcherVisibility": _enum_parser(
        LAUNCHER_VISIBILITY_CODES, LauncherVisibility.HIDE, "launcherVisibility"
    ),
    "gameDirType": _enum_parser(
        GAME_DIRECTORY_CODES, GameDirectoryType.ROOT_FOLDER, "gameDirType"
    ),
}
