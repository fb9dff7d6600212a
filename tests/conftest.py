"""Shared fixtures for version_settings tests."""

import pytest

from version_settings.exceptions import JavaNotFound
from version_settings.java import JavaRuntime
from version_settings.proxy import ProxySettings
from version_settings.store import SettingsStore


def make_runtime(name="jdk-17", version="17.0.2", home="/opt/java/jdk-17"):
    return JavaRuntime(
        name=name,
        version=version,
        home=home,
        java_path=f"{home}/bin/java",
        is_64bit=True,
    )


class FakeDiscovery:
    """Stands in for JavaDiscovery without touching the filesystem."""

    def __init__(self, current=None, installed=None, custom=None):
        self.current = current
        self.installed = installed or {}
        self.custom = custom or {}
        self.calls = []

    def current_environment(self):
        self.calls.append(("current",))
        return self.current

    def from_executable_dir(self, path):
        self.calls.append(("custom", path))
        if path in self.custom:
            return self.custom[path]
        raise JavaNotFound(path, "missing")

    def installed_runtimes(self):
        self.calls.append(("installed",))
        return self.installed


@pytest.fixture
def current_runtime():
    return make_runtime("system", "21.0.1", "/usr/lib/jvm/system")


@pytest.fixture
def discovery(current_runtime):
    return FakeDiscovery(
        current=current_runtime,
        installed={"jre-8": make_runtime("jre-8", "1.8.0_392", "/usr/lib/jvm/jre-8")},
        custom={"/opt/custom-java": make_runtime("custom", "17.0.9", "/opt/custom-java")},
    )


@pytest.fixture
def minecraft_dir(tmp_path):
    directory = tmp_path / ".minecraft"
    for version in ("1.20.4", "1.12.2"):
        (directory / "versions" / version).mkdir(parents=True)
        (directory / "versions" / version / f"{version}.json").write_text("{}")
    return directory


@pytest.fixture
def store(tmp_path, minecraft_dir):
    """SettingsStore writing into a temporary directory with its own proxy."""
    return SettingsStore(minecraft_dir, tmp_path / "settings.json", proxy=ProxySettings())
