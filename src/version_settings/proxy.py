"""
Launcher-wide proxy configuration.

The store loads it into the ``proxy_settings`` singleton and launch options
turn it into JVM system properties. ``ProxySettings.client()`` is public API
for launcher code that downloads files, so its httpx client goes through the
same proxy as the game.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

import httpx


@dataclass
class ProxySettings:
    """Launcher-wide HTTP proxy, passed on to every launched game."""

    host: str = ""
    port: Optional[int] = None
    user: str = ""
    password: str = ""

    @property
    def enabled(self) -> bool:
        return bool(self.host.strip())

    @property
    def url(self) -> Optional[str]:
        if not self.enabled:
            return None
        auth = ""
        if self.user:
            auth = f"{quote(self.user, safe='')}:{quote(self.password, safe='')}@"
        port = f":{self.port}" if self.port else ""
        return f"http://{auth}{self.host.strip()}{port}"

    def client(self, **kwargs) -> httpx.Client:
        """An httpx client that goes through this proxy when one is set."""
        if self.enabled:
            kwargs.setdefault("proxy", self.url)
        return httpx.Client(**kwargs)

    def to_dict(self) -> dict:
        return {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProxySettings":
        if not isinstance(data, dict):
            return cls()
        port = data.get("port")
        try:
            port = int(port) if port not in (None, "") else None
        except (TypeError, ValueError):
            port = None
        return cls(
            host=str(data.get("host") or ""),
            port=port,
            user=str(data.get("user") or ""),
            password=str(data.get("password") or ""),
        )

    def update(self, other: "ProxySettings") -> None:
        self.host = other.host
        self.port = other.port
        self.user = other.user
        self.password = other.password


proxy_settings = ProxySettings()
