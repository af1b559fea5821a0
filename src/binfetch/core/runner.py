"""Concurrent install pipeline."""

from concurrent.futures import ThreadPoolExecutor, as_completed

import httpx
from rich.console import Console

from binfetch.core.config import AppConfig
from binfetch.core.console import PackageLog
from binfetch.core.downloader import Downloader, make_progress
from binfetch.core.errors import NotInstalledError
from binfetch.core.extractor import binary_candidate
from binfetch.core.installer import install_binary
from binfetch.core.platform import download_url_for
from binfetch.core.version import VersionResolver, current_version, is_latest
from binfetch.models.package import Package
from binfetch.models.result import InstallState, PackageRun, RunReport


class Runner:
    """Runs packages through check, download, extract and install."""

    def __init__(
        self,
        config: AppConfig,
        console: Console,
        verbose: bool = False,
        transport: httpx.BaseTransport | None = None,
    ):
        self.config = config
        self.console = console
        self.verbose = verbose
        self.probe_client = httpx.Client(
            timeout=config.probe_timeout,
            follow_redirects=False,
            transport=transport,
        )
        self.download_client = httpx.Client(
            timeout=config.download_timeout,
            follow_redirects=True,
            transport=transport,
        )
        self.resolver = VersionResolver(self.probe_client)
        self.progress = make_progress(console) if console.is_terminal else None
        self.downloader = Downloader(self.download_client, self.progress)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self) -> None:
        self.probe_client.close()
        self.download_client.close()

    def run(self, packages: list[Package]) -> RunReport:
        """Install all packages, at most ``config.jobs`` at a time."""
        report = RunReport()
        if not packages:
            return report

        if self.progress is not None:
            self.progress.start()
        try:
            with ThreadPoolExecutor(max_workers=self.config.jobs) as executor:
                futures = [executor.submit(self.run_package, p) for p in packages]
                # Only this thread touches the report. run_package never raises,
                # so result() only re-raises bugs outside the package boundary.
                for future in as_completed(futures):
                    report.record(future.result())
        finally:
            if self.progress is not None:
                self.progress.stop()

        return report

    def run_package(self, package: Package) -> PackageRun:
        """Run one package through the pipeline, recording any failure."""
        run = PackageRun(name=package.name)
        log = PackageLog(self.console, package.name, verbose=self.verbose)
        try:
            self._install(package, run, log)
        except Exception as e:
            log.error(f"failed, {e}")
            run.fail(e)
        return run

    def _install(self, package: Package, run: PackageRun, log: PackageLog) -> None:
        log.debug(f"running {' '.join(package.version.command)}")
        try:
            run.current = current_version(package.version)
            log.info(f"current version is {run.current}")
        except NotInstalledError:
            log.info("not installed")

        log.debug(f"checking {package.releases_latest_url}")
        run.set_latest(self.resolver.latest_version(package))
        log.info(f"latest version is {run.latest}")
        run.advance(InstallState.VERSION_RESOLVED)

        fixed = package.version.fixed
        if fixed:
            log.info(f"fixed version is {fixed}")
        if is_latest(run.current, run.latest, fixed):
            log.info("already have the latest version")
            run.advance(InstallState.ALREADY_LATEST)
            return

        url = download_url_for(package, self.config.os_name, fixed or run.latest)
        log.info(f"downloading {url}", style="bold green")
        run.download_file = self.downloader.download(url, self.config.package_dir(package.name))
        run.advance(InstallState.DOWNLOADED)

        run.binary_file = binary_candidate(run.download_file)
        if run.binary_file != run.download_file:
            log.debug(f"selected {run.binary_file} ({run.binary_file.stat().st_size} bytes)")
        run.advance(InstallState.EXTRACTED)

        run.installed_path = install_binary(run.binary_file, self.config.bin_dir, package.name)
        run.advance(InstallState.INSTALLED)
        log.info(f"installed {run.installed_path} {fixed or run.latest}", style="bold green")
