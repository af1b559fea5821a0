"""Installed and latest version detection."""

import re
import shutil
import subprocess

import httpx

from binfetch.core.errors import (
    NotInstalledError,
    UnexpectedResponseError,
    VersionFormatError,
)
from binfetch.core.platform import strip_v
from binfetch.models.package import Package, VersionSpec


def same_version(a: str, b: str) -> bool:
    """Compare two versions, ignoring a leading 'v' on either side."""
    return strip_v(a) == strip_v(b)


def is_latest(current: str | None, latest: str, fixed: str | None = None) -> bool:
    """Check whether the installed version is the wanted one.

    A ``fixed`` version replaces ``latest`` as the target.
    """
    if current is None:
        return False
    return same_version(current, fixed or latest)


def extract_version(pattern: re.Pattern, output: str) -> str | None:
    """Get the first capture group of the first match in ``output``."""
    match = pattern.search(output)
    if match is None:
        return None
    if pattern.groups:
        return match.group(1)
    return match.group(0)


def current_version(spec: VersionSpec) -> str:
    """Run the version command and parse its output.

    Raises NotInstalledError if the command is not on PATH.
    """
    executable = shutil.which(spec.command[0])
    if executable is None:
        raise NotInstalledError(f"{spec.command[0]} not found in PATH")

    result = subprocess.run(
        [executable, *spec.command[1:]],
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        text=True,
        errors="replace",
    )

    version = extract_version(spec.pattern, result.stdout)
    if version is None:
        if result.returncode != 0:
            raise VersionFormatError(
                f"{' '.join(spec.command)} exited with status {result.returncode}"
            )
        raise VersionFormatError("cannot determine current version, check version format")
    return version


def parse_location(location: str) -> str:
    """Get the version tag from a release redirect Location header."""
    tag = location.split("/")[-1]
    if not tag:
        raise UnexpectedResponseError(f"cannot find a version in Location: {location}")
    return tag


class VersionResolver:
    """Resolves latest release versions via the releases/latest redirect."""

    def __init__(self, client: httpx.Client):
        # client must not follow redirects
        self.client = client

    def latest_version(self, package: Package) -> str:
        url = package.releases_latest_url
        try:
            response = self.client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise UnexpectedResponseError(f"{url}: {e}") from e

        if response.status_code // 100 != 3:
            raise UnexpectedResponseError(
                f"expect 3XX response, but {response.status_code} {response.reason_phrase}, {url}"
            )

        location = response.headers.get("location")
        if not location:
            raise UnexpectedResponseError(f"response does not contain Location header, {url}")
        return parse_location(location)
