"""CLI entry point for binfetch."""

from pathlib import Path

import click

from binfetch import __version__
from binfetch.core.config import DEFAULT_JOBS, AppConfig
from binfetch.core.console import make_console
from binfetch.core.errors import ConfigError
from binfetch.core.packages import load_packages
from binfetch.core.runner import Runner

console = make_console()


def print_usage(ctx: click.Context) -> None:
    click.echo(ctx.get_help())


@click.command(context_settings={"help_option_names": []})
@click.argument("packages_file", required=False, type=click.Path(dir_okay=False, path_type=Path))
@click.option("--bin-dir", type=click.Path(file_okay=False, path_type=Path), help="Install directory (default: $HOME/bin)")
@click.option("--jobs", "-j", type=click.IntRange(min=1), default=DEFAULT_JOBS, show_default=True, help="Packages to process in parallel")
@click.option("--verbose", is_flag=True, help="Show debug output")
@click.option("--help", "-h", "show_help", is_flag=True, help="Show this message and exit.")
@click.version_option(version=__version__, prog_name="binfetch")
@click.pass_context
def main(ctx: click.Context, packages_file: Path | None, bin_dir: Path | None, jobs: int, verbose: bool, show_help: bool):
    """Install or update release binaries listed in PACKAGES_FILE.

    Each package is checked against its releases/latest redirect and,
    when a newer version exists, downloaded into the bin directory.

    Example packages file:

    \b
        packages:
          - name: peco
            url: https://github.com/peco/peco
            download_url:
              linux: https://github.com/peco/peco/releases/download/%v/peco_linux_amd64.tar.gz
              mac: https://github.com/peco/peco/releases/download/%v/peco_darwin_amd64.zip
            version:
              command: [peco, --version]
              format: 'peco version (v[\\d.]+)'
    """
    if show_help or packages_file is None:
        print_usage(ctx)
        ctx.exit(1)

    try:
        config = AppConfig.from_env(bin_dir=bin_dir, jobs=jobs)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    try:
        try:
            packages = load_packages(packages_file)
        except ConfigError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise SystemExit(1)

        with Runner(config, console, verbose=verbose) as runner:
            report = runner.run(packages)
    finally:
        config.cleanup()

    if not report.ok:
        console.print(f"[red]failed to install {', '.join(report.failed)}[/red]")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
