import logging
import os
import platform
from pathlib import Path

import psutil

from ._version import version as LAUNCHER_VERSION

LAUNCHER_NAME = "Version Settings"

SYSTEM_OS = platform.system()

if SYSTEM_OS == "Windows":
    APPDATA_FOLDER = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
elif SYSTEM_OS == "Darwin":
    APPDATA_FOLDER = Path.home() / "Library" / "Application Support"
else:
    APPDATA_FOLDER = Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))

APPDATA_FOLDER /= "version-settings"
if os.getenv("VERSION_SETTINGS_HOME"):
    APPDATA_FOLDER = Path(os.environ["VERSION_SETTINGS_HOME"])

SETTINGS_FILE = APPDATA_FOLDER / "settings.json"
LOG_FILE = APPDATA_FOLDER / "launcher.log"
MINECRAFT_DIRECTORY = APPDATA_FOLDER / ".minecraft"

# stored in versions/<version>/ next to the version json
VERSION_SETTING_FILENAME = "launcher_version.json"

JVM_ARGS = [
    "-XX:+UseG1GC",
    "-XX:-UseAdaptiveSizePolicy",
    "-XX:-OmitStackTraceInFastThrow",
    "-Dfml.ignoreInvalidMinecraftCertificates=true",
    "-Dfml.ignorePatchDiscrepancies=true",
]

DEFAULT_WIDTH = 854
DEFAULT_HEIGHT = 480

# IN MB
RAM_SIZE = psutil.virtual_memory().total // 1024 // 1024
RAM_STEP = 128


def suggested_memory(total: int = RAM_SIZE) -> int:
    """A quarter of the physical memory, rounded to RAM_STEP."""
    memory = round(total / 4 / RAM_STEP) * RAM_STEP
    return max(memory, RAM_STEP)


SUGGESTED_MEMORY = suggested_memory()


def setup_logging(log_file: str | os.PathLike | None = None, level: int = logging.INFO) -> None:
    if log_file is not None:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        logging.basicConfig(
            filename=log_file,
            level=level,
            # make it more readable for the user
            format="%(asctime)s [%(levelname)s] %(module)s:%(funcName)s %(message)s",
            datefmt="%H:%M:%S",
        )
    else:
        logging.basicConfig(
            level=level,
            # make it more readable for the user
            format="%(asctime)s [%(levelname)s] %(module)s:%(funcName)s %(message)s",
            datefmt="%H:%M:%S",
        )
    logging.getLogger("httpx").setLevel(logging.ERROR)

    logging.info(f"Launcher version: {LAUNCHER_VERSION}")
    logging.info(f"Settings folder: {APPDATA_FOLDER}")
