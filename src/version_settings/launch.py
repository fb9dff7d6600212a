import copy
import logging
import os
import shlex
from dataclasses import dataclass
from typing import Optional

import minecraft_launcher_lib as mcl
from minecraft_launcher_lib.types import MinecraftOptions

from .config import JVM_ARGS, LAUNCHER_NAME, LAUNCHER_VERSION
from .java import JavaRuntime


def split_server_address(server_ip: str) -> tuple[str, Optional[str]]:
    """Splits ``host[:port]``. IPv6 literals must be bracketed to carry a port."""
    server_ip = server_ip.strip()
    if server_ip.startswith("["):
        host, _, rest = server_ip[1:].partition("]")
        port = rest[1:] if rest.startswith(":") else None
        return host, port or None
    if server_ip.count(":") == 1:
        host, port = server_ip.split(":")
        return host, port or None
    return server_ip, None


@dataclass
class LaunchOptions:
    """Everything the launch builder needs to start one game version."""

    game_dir: str
    java: Optional[JavaRuntime]
    version_name: str = LAUNCHER_NAME
    profile_name: str = LAUNCHER_NAME
    minecraft_args: str = ""
    java_args: str = ""
    max_memory: int = 0
    min_memory: Optional[int] = None
    metaspace: Optional[int] = None
    width: int = 0
    height: int = 0
    fullscreen: bool = False
    server_ip: str = ""
    wrapper: str = ""
    proxy_host: str = ""
    proxy_port: Optional[int] = None
    proxy_user: str = ""
    proxy_pass: str = ""
    precalled_command: str = ""
    no_generated_jvm_args: bool = False

    def jvm_arguments(self) -> list[str]:
        args: list[str] = []
        if self.max_memory > 0:
            args.append(f"-Xmx{self.max_memory}M")
        if self.min_memory is not None and self.min_memory > 0:
            args.append(f"-Xms{self.min_memory}M")

        if self.metaspace is not None and self.metaspace > 0:
            if self.java is not None and 0 < self.java.major_version < 8:
                args.append(f"-XX:PermSize={self.metaspace}M")
            else:
                args.append(f"-XX:MaxMetaspaceSize={self.metaspace}M")

        if not self.no_generated_jvm_args:
            if self.proxy_host:
                args.append(f"-Dhttp.proxyHost={self.proxy_host}")
                args.append(f"-Dhttps.proxyHost={self.proxy_host}")
                if self.proxy_port:
                    args.append(f"-Dhttp.proxyPort={self.proxy_port}")
                    args.append(f"-Dhttps.proxyPort={self.proxy_port}")
                if self.proxy_user:
                    args.append(f"-Dhttp.proxyUser={self.proxy_user}")
                    args.append(f"-Dhttp.proxyPassword={self.proxy_pass}")
            args += JVM_ARGS

        if self.java_args.strip():
            args += shlex.split(self.java_args)
        return args

    def to_minecraft_options(
        self, username: str = "Player", uuid: str = "", token: str = ""
    ) -> MinecraftOptions:
        options: MinecraftOptions = {
            "username": username,
            "uuid": uuid,
            "token": token,
            "launcherName": self.profile_name,
            "launcherVersion": LAUNCHER_VERSION,
            "gameDirectory": self.game_dir,
            "jvmArguments": self.jvm_arguments(),
        }
        if self.java is not None:
            options["executablePath"] = self.java.java_path
        if not self.fullscreen and self.width > 0 and self.height > 0:
            options["customResolution"] = True
            options["resolutionWidth"] = str(self.width)
            options["resolutionHeight"] = str(self.height)
        if self.server_ip.strip():
            host, port = split_server_address(self.server_ip)
            options["server"] = host
            if port:
                options["port"] = port
        return options

    def get_minecraft_command(
        self,
        version: str,
        minecraft_directory: str | os.PathLike,
        username: str = "Player",
        uuid: str = "",
        token: str = "",
    ) -> list[str]:
        """
        Returns the full command line for the given version, wrapper included.
        Running the command and the precalled command is up to the caller.
        """
        options = self.to_minecraft_options(username, uuid, token)
        command = mcl.command.get_minecraft_command(
            version, minecraft_directory, copy.deepcopy(options)
        )
        if self.fullscreen:
            command.append("--fullscreen")
        if self.minecraft_args.strip():
            command += shlex.split(self.minecraft_args)
        if self.wrapper.strip():
            command = shlex.split(self.wrapper) + command
        logging.info(f"Minecraft command for {version}: {len(command)} arguments")
        return command
