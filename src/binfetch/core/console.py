"""Console output shared by all workers."""

from rich.console import Console
from rich.markup import escape


def make_console() -> Console:
    """Console writing to stderr, as all progress output does."""
    return Console(stderr=True, highlight=False)


class PackageLog:
    """Prints messages prefixed with a package name."""

    def __init__(self, console: Console, name: str, verbose: bool = False):
        self.console = console
        self.name = name
        self.verbose = verbose

    def info(self, message: str, style: str | None = None) -> None:
        text = escape(message)
        if style:
            text = f"[{style}]{text}[/{style}]"
        self.console.print(f"[bold]{escape(self.name)}[/bold]: {text}")

    def debug(self, message: str) -> None:
        if self.verbose:
            self.console.print(f"[dim]{escape(self.name)}: {escape(message)}[/dim]")

    def error(self, message: str) -> None:
        self.info(message, style="red")
