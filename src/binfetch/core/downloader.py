"""Download functionality with progress reporting."""

from pathlib import Path
from urllib.parse import urlsplit

import httpx
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TimeRemainingColumn,
    TransferSpeedColumn,
)

from binfetch.core.errors import DownloadError, UnexpectedResponseError


def make_progress(console) -> Progress:
    """Progress display shared by concurrent downloads."""
    return Progress(
        "[progress.description]{task.description}",
        BarColumn(),
        DownloadColumn(),
        TransferSpeedColumn(),
        TimeRemainingColumn(),
        console=console,
        transient=True,
    )


def filename_from_url(url: str) -> str:
    """Get the last path segment of a URL."""
    name = urlsplit(url).path.rstrip("/").split("/")[-1]
    if not name:
        raise DownloadError(f"cannot derive a file name from {url}")
    return name


class Downloader:
    """Streams release assets into the run workspace."""

    def __init__(self, client: httpx.Client, progress: Progress | None = None):
        self.client = client
        self.progress = progress

    def download(self, url: str, dest: Path) -> Path:
        """Download a file from URL into ``dest``.

        Args:
            url: URL to download from
            dest: Destination directory, created if missing

        Returns:
            Path to downloaded file
        """
        dest.mkdir(parents=True, exist_ok=True)
        file_path = dest / filename_from_url(url)

        try:
            with self.client.stream("GET", url) as response:
                if not response.is_success:
                    raise UnexpectedResponseError(
                        f"Failed to download {url}: HTTP {response.status_code}"
                    )
                self._write(response, file_path)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            file_path.unlink(missing_ok=True)
            raise DownloadError(f"Failed to download {url}: {e}") from e
        except Exception:
            file_path.unlink(missing_ok=True)
            raise

        return file_path

    def _write(self, response: httpx.Response, file_path: Path) -> None:
        total = int(response.headers.get("content-length", 0))

        task = None
        if self.progress is not None and total > 0:
            task = self.progress.add_task(f"Downloading {file_path.name}", total=total)

        try:
            with open(file_path, "wb") as f:
                for chunk in response.iter_bytes(chunk_size=8192):
                    f.write(chunk)
                    if task is not None:
                        self.progress.update(task, advance=len(chunk))
        finally:
            if task is not None:
                self.progress.remove_task(task)
