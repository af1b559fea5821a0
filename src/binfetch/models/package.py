"""Package descriptor data model."""

import re
from dataclasses import dataclass, field

from binfetch.core.errors import ConfigParseError


@dataclass(frozen=True)
class DownloadURL:
    """Per-OS download URL templates.

    Templates may contain ``%v`` (version with a ``v`` prefix) and
    ``%n`` (version without it).
    """

    mac: str = ""
    linux: str = ""


@dataclass(frozen=True)
class VersionSpec:
    """How to detect the installed version of a package."""

    command: tuple[str, ...]
    format: str
    fixed: str | None = None
    pattern: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            compiled = re.compile(self.format)
        except re.error as e:
            raise ConfigParseError(f"invalid version format {self.format!r}: {e}") from e
        # frozen dataclass: companion value is set once here and never again
        object.__setattr__(self, "pattern", compiled)


@dataclass(frozen=True)
class Package:
    """Represents one installable tool from the packages file."""

    name: str
    url: str  # source repository base URL
    download_url: DownloadURL
    version: VersionSpec

    @property
    def releases_latest_url(self) -> str:
        return f"{self.url.rstrip('/')}/releases/latest"

    def template_for(self, os_name: str) -> str:
        """Get the download URL template for an OS (``linux`` or ``darwin``)."""
        template = self.download_url.linux if os_name == "linux" else self.download_url.mac
        if not template:
            key = "linux" if os_name == "linux" else "mac"
            raise ConfigParseError(f"{self.name}: download_url.{key} is not set")
        return template

    @classmethod
    def from_dict(cls, data: dict) -> "Package":
        """Create Package from one entry of the packages list."""
        if not isinstance(data, dict):
            raise ConfigParseError(f"package entry must be a mapping, got {type(data).__name__}")

        name = _require_str(data, "name", "package")
        url = _require_str(data, "url", name)

        urls = data.get("download_url") or {}
        if not isinstance(urls, dict):
            raise ConfigParseError(f"{name}: download_url must be a mapping")
        download_url = DownloadURL(
            mac=_optional_str(urls, "mac", name) or "",
            linux=_optional_str(urls, "linux", name) or "",
        )

        version = data.get("version")
        if not isinstance(version, dict):
            raise ConfigParseError(f"{name}: version must be a mapping")
        command = version.get("command")
        if isinstance(command, str):
            command = command.split()
        if not isinstance(command, list) or not command:
            raise ConfigParseError(f"{name}: version.command must be a non-empty list")
        fmt = _require_str(version, "format", name)
        fixed = _optional_str(version, "fixed", name)

        try:
            spec = VersionSpec(
                command=tuple(str(part) for part in command),
                format=fmt,
                fixed=fixed or None,
            )
        except ConfigParseError as e:
            raise ConfigParseError(f"{name}: {e}") from e

        return cls(name=name, url=url, download_url=download_url, version=spec)


def _require_str(data: dict, key: str, owner: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise ConfigParseError(f"{owner}: '{key}' is required and must be a string")
    return value


def _optional_str(data: dict, key: str, owner: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    # YAML reads unquoted versions like 1.10 as floats
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        raise ConfigParseError(f"{owner}: '{key}' must be a string")
    return value
