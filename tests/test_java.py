"""Unit tests for Java discovery."""

import os

import minecraft_launcher_lib as mcl
import pytest

from version_settings.exceptions import JavaNotFound
from version_settings.java import JavaDiscovery, JavaRuntime


def fake_information(path):
    path = str(path)
    if not os.path.isfile(os.path.join(path, "bin", "java")):
        raise ValueError(f"{path} was not found")
    return {
        "path": path,
        "name": os.path.basename(path),
        "version": "17.0.2",
        "javaPath": os.path.join(path, "bin", "java"),
        "javawPath": None,
        "is64Bit": True,
        "openjdk": True,
    }


def make_java_home(root, name):
    home = root / name
    (home / "bin").mkdir(parents=True)
    (home / "bin" / "java").write_text("")
    return home


@pytest.fixture(autouse=True)
def patch_java_utils(monkeypatch):
    monkeypatch.setattr(mcl.java_utils, "get_java_information", fake_information)


class TestJavaRuntime:
    """Tests for JavaRuntime."""

    @pytest.mark.parametrize("version, major", [
        ("1.8.0_392", 8),
        ("1.7.0_80", 7),
        ("17.0.2", 17),
        ("21", 21),
        ("weird", 0),
    ])
    def test_major_version(self, version, major):
        runtime = JavaRuntime("x", version, "/java", "/java/bin/java")
        assert runtime.major_version == major

    def test_from_information(self):
        runtime = JavaRuntime.from_information({
            "path": "/usr/lib/jvm/jdk-17",
            "name": "jdk-17",
            "version": "17.0.2",
            "javaPath": "/usr/lib/jvm/jdk-17/bin/java",
            "is64Bit": False,
        })
        assert runtime.home == "/usr/lib/jvm/jdk-17"
        assert runtime.java_path == "/usr/lib/jvm/jdk-17/bin/java"
        assert runtime.is_64bit is False


class TestFromExecutableDir:
    """Tests for JavaDiscovery.from_executable_dir."""

    def test_install_directory(self, tmp_path):
        home = make_java_home(tmp_path, "jdk-17")
        runtime = JavaDiscovery().from_executable_dir(home)
        assert runtime.home == str(home)
        assert runtime.name == "jdk-17"

    def test_executable_path(self, tmp_path):
        home = make_java_home(tmp_path, "jdk-17")
        runtime = JavaDiscovery().from_executable_dir(home / "bin" / "java")
        assert runtime.home == str(home)

    def test_missing(self, tmp_path):
        with pytest.raises(JavaNotFound) as exc_info:
            JavaDiscovery().from_executable_dir(tmp_path / "nothing")
        assert exc_info.value.path == str(tmp_path / "nothing")

    def test_empty_path(self):
        with pytest.raises(JavaNotFound):
            JavaDiscovery().from_executable_dir("")


class TestCurrentEnvironment:
    """Tests for JavaDiscovery.current_environment."""

    def test_java_home(self, tmp_path, monkeypatch):
        home = make_java_home(tmp_path, "jdk-21")
        monkeypatch.setenv("JAVA_HOME", str(home))
        assert JavaDiscovery().current_environment().home == str(home)

    def test_path_lookup(self, tmp_path, monkeypatch):
        home = make_java_home(tmp_path, "jdk-21")
        monkeypatch.delenv("JAVA_HOME", raising=False)
        monkeypatch.setattr("shutil.which", lambda name: str(home / "bin" / "java"))
        assert JavaDiscovery().current_environment().home == os.path.realpath(home)

    def test_nothing_found(self, tmp_path, monkeypatch):
        monkeypatch.setenv("JAVA_HOME", str(tmp_path / "gone"))
        monkeypatch.setattr("shutil.which", lambda name: None)
        assert JavaDiscovery().current_environment() is None


class TestInstalledRuntimes:
    """Tests for JavaDiscovery.installed_runtimes."""

    def test_system_and_bundled(self, tmp_path, monkeypatch):
        system = make_java_home(tmp_path / "jvm", "temurin-17")
        broken = tmp_path / "jvm" / "broken"
        broken.mkdir()
        bundled = make_java_home(tmp_path / ".minecraft" / "runtime", "java-runtime-gamma")

        monkeypatch.setattr(
            mcl.java_utils, "find_system_java_versions", lambda dirs=None: [str(system), str(broken)]
        )
        monkeypatch.setattr(
            mcl.runtime, "get_installed_jvm_runtimes", lambda directory: ["java-runtime-gamma", "jre-legacy"]
        )
        monkeypatch.setattr(
            mcl.runtime,
            "get_executable_path",
            lambda name, directory: str(bundled / "bin" / "java") if name == "java-runtime-gamma" else None,
        )

        discovery = JavaDiscovery(tmp_path / ".minecraft")
        runtimes = discovery.installed_runtimes()

        assert set(runtimes) == {"temurin-17", "java-runtime-gamma"}
        assert runtimes["java-runtime-gamma"].home == str(bundled)

    def test_cached_until_refresh(self, monkeypatch):
        calls = []

        def find(dirs=None):
            calls.append(dirs)
            return []

        monkeypatch.setattr(mcl.java_utils, "find_system_java_versions", find)
        discovery = JavaDiscovery()
        discovery.installed_runtimes()
        discovery.installed_runtimes()
        assert len(calls) == 1

        discovery.refresh()
        discovery.installed_runtimes()
        assert len(calls) == 2
