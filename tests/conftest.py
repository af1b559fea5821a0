from __future__ import annotations
import io
import tarfile
import threading
import time
import zipfile
from pathlib import Path

import httpx
import pytest
from rich.console import Console

from binfetch.core.config import AppConfig
from binfetch.models.package import DownloadURL, Package, VersionSpec

MISSING_COMMAND = "binfetch-test-missing-tool"


def make_package(
    name: str = "tool",
    command: list[str] | None = None,
    fmt: str = r"version (v?[\d.]+)",
    fixed: str | None = None,
    asset: str = "%n/tool-%n.tar.gz",
) -> Package:
    return Package(
        name=name,
        url=f"https://src.test/{name}",
        download_url=DownloadURL(
            mac=f"https://dl.test/{name}/mac/{asset}",
            linux=f"https://dl.test/{name}/linux/{asset}",
        ),
        version=VersionSpec(
            command=tuple(command or [MISSING_COMMAND]),
            format=fmt,
            fixed=fixed,
        ),
    )


def echo_command(output: str) -> list[str]:
    return ["sh", "-c", f"echo '{output}'"]


def tar_gz_bytes(files: dict[str, bytes]) -> bytes:
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:
        for name, data in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = 0o644
            tar.addfile(info, io.BytesIO(data))
    return buf.getvalue()


def zip_bytes(files: dict[str, bytes]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, data in files.items():
            zf.writestr(name, data)
    return buf.getvalue()


class FakeReleases:
    """In-memory release host: latest redirects plus downloadable assets."""

    def __init__(self, delay: float = 0.0):
        self.latest: dict[str, str] = {}
        self.assets: dict[str, bytes] = {}
        self.requests: list[str] = []
        self.delay = delay
        self._lock = threading.Lock()

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        with self._lock:
            self.requests.append(url)
        if self.delay:
            time.sleep(self.delay)

        if url.endswith("/releases/latest"):
            name = request.url.path.split("/")[1]
            if name not in self.latest:
                return httpx.Response(404)
            location = f"https://src.test/{name}/releases/tag/{self.latest[name]}"
            return httpx.Response(302, headers={"Location": location})

        if url in self.assets:
            return httpx.Response(200, content=self.assets[url])
        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def config(tmp_path: Path) -> AppConfig:
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    work_dir = tmp_path / "work"
    work_dir.mkdir()
    return AppConfig(bin_dir=bin_dir, work_dir=work_dir, os_name="linux")


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=200)


@pytest.fixture
def releases() -> FakeReleases:
    return FakeReleases()


def encrypted_zip_bytes(files: dict[str, bytes]) -> bytes:
    """Zip whose entries carry the encryption flag without a usable password."""
    data = bytearray(zip_bytes(files))
    for signature, offset in ((b"PK\x03\x04", 6), (b"PK\x01\x02", 8)):
        start = data.find(signature)
        while start != -1:
            data[start + offset] |= 0x01
            start = data.find(signature, start + 4)
    return bytes(data)


def truncated_tar_gz_bytes(files: dict[str, bytes]) -> bytes:
    data = tar_gz_bytes(files)
    return data[: len(data) // 2]
