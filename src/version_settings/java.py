"""Java runtime discovery on top of minecraft_launcher_lib."""

import logging
import os
import shutil
from dataclasses import dataclass
from typing import Optional

import minecraft_launcher_lib as mcl

from .exceptions import JavaNotFound

JAVA_EXECUTABLES = ("java", "java.exe", "javaw.exe")


@dataclass(frozen=True)
class JavaRuntime:
    name: str
    version: str
    home: str
    java_path: str
    is_64bit: bool = True

    @property
    def major_version(self) -> int:
        # "1.8.0_292" -> 8, "17.0.2" -> 17
        parts = self.version.replace("_", ".").split(".")
        try:
            if parts[0] == "1" and len(parts) > 1:
                return int(parts[1])
            return int(parts[0])
        except ValueError:
            return 0

    @classmethod
    def from_information(cls, info: dict) -> "JavaRuntime":
        home = str(info["path"])
        java_path = info.get("javaPath") or os.path.join(home, "bin", "java")
        return cls(
            name=info.get("name") or os.path.basename(home),
            version=info.get("version", ""),
            home=home,
            java_path=java_path,
            is_64bit=bool(info.get("is64Bit", True)),
        )


def _java_home(path: str | os.PathLike) -> str:
    """Accepts either an installation directory or the java executable in it."""
    path = os.path.abspath(os.fspath(path))
    if os.path.basename(path).lower() in JAVA_EXECUTABLES and not os.path.isdir(path):
        return os.path.dirname(os.path.dirname(path))
    return path


class JavaDiscovery:
    def __init__(
        self,
        minecraft_directory: Optional[str | os.PathLike] = None,
        additional_directories: Optional[list[str | os.PathLike]] = None,
    ) -> None:
        self.minecraft_directory = minecraft_directory
        self.additional_directories = additional_directories or []
        self._installed: Optional[dict[str, JavaRuntime]] = None

    def from_executable_dir(self, path: str | os.PathLike) -> JavaRuntime:
        """
        Returns the runtime installed at the given path.

        :raises JavaNotFound: If there is no java executable at the path.
        """
        if not path:
            raise JavaNotFound(path, "empty path")
        home = _java_home(path)
        try:
            info = mcl.java_utils.get_java_information(home)
        except ValueError as e:
            raise JavaNotFound(home, str(e)) from e
        return JavaRuntime.from_information(info)

    def current_environment(self) -> Optional[JavaRuntime]:
        """The runtime from JAVA_HOME, else the java on PATH. None if there is neither."""
        java_home = os.getenv("JAVA_HOME")
        if java_home:
            try:
                return self.from_executable_dir(java_home)
            except JavaNotFound as e:
                logging.warning(f"Ignoring JAVA_HOME: {e}")

        java_exec = shutil.which("java")
        if java_exec:
            try:
                return self.from_executable_dir(os.path.realpath(java_exec))
            except JavaNotFound as e:
                logging.warning(f"Java on PATH is unusable: {e}")

        logging.info("No Java runtime found in the current environment")
        return None

    def installed_runtimes(self) -> dict[str, JavaRuntime]:
        """All known runtimes by name. The result is cached until refresh()."""
        if self._installed is None:
            self._installed = self._scan()
        return self._installed

    def refresh(self) -> None:
        self._installed = None

    def _scan(self) -> dict[str, JavaRuntime]:
        runtimes: dict[str, JavaRuntime] = {}

        for path in mcl.java_utils.find_system_java_versions(self.additional_directories):
            try:
                runtime = self.from_executable_dir(path)
            except JavaNotFound as e:
                logging.info(f"Skipping Java installation: {e}")
                continue
            runtimes.setdefault(runtime.name, runtime)

        if self.minecraft_directory is not None:
            for name in mcl.runtime.get_installed_jvm_runtimes(self.minecraft_directory):
                executable = mcl.runtime.get_executable_path(name, self.minecraft_directory)
                if executable is None:
                    continue
                try:
                    runtime = self.from_executable_dir(executable)
                except JavaNotFound as e:
                    logging.info(f"Skipping bundled runtime {name}: {e}")
                    continue
                # bundled runtimes are addressed by their Mojang component name
                runtimes.setdefault(name, runtime)

        logging.info(f"Found {len(runtimes)} Java runtimes")
        return runtimes
