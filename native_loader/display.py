"""Rich display of binding resolution errors.

Host applications can show a failed resolution the same way every time:
the tried paths for BindingNotFoundError, the origin for NoProjectRootError,
and a one-line message for everything else.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .errors import BindingError
from .errors import BindingLoadError
from .errors import BindingNotFoundError
from .errors import NoProjectRootError
from .errors import UnsupportedFileURIError


def describe_error(error: BaseException) -> str:
    """One line for any exception, naming the type when the text doesn't.

    A BindingLoadError also names the failure it wraps.
    """
    text = str(error) or "(no additional details)"
    if not isinstance(error, BindingError):
        return f"{type(error).__name__}: {text}"

    line = f"{text} ({error.code})"
    if isinstance(error, BindingLoadError) and error.__cause__ is not None:
        line += f"\n  caused by {type(error.__cause__).__name__}: {error.__cause__}"
    return line


def _title(label: str, error: BindingError) -> str:
    return f"[bold red]{label}[/bold red] [dim]({error.code})[/dim]"


def _tries_table(error: BindingNotFoundError) -> Table:
    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Candidate", style="yellow")
    for index, path in enumerate(error.tries, start=1):
        table.add_row(str(index), escape(str(path)))
    return table


def render_error(error: BaseException, console: Console | None = None) -> None:
    """Print a resolution error to the console.

    Args:
        error: Exception raised by BindingResolver.load()
        console: Target console (default: a new stderr console)
    """
    console = console or Console(stderr=True)

    if isinstance(error, BindingNotFoundError):
        console.print(
            Panel(
                _tries_table(error),
                title=_title("Binding not found", error),
                subtitle=f"{len(error.tries)} locations tried",
                border_style="red",
            )
        )
        return

    if isinstance(error, NoProjectRootError):
        markers = ", ".join(error.markers)
        body = (
            f"[bold]Origin:[/bold] {escape(error.path)}\n"
            f"[bold]Looked for:[/bold] {escape(markers)}\n\n"
            "[dim]Run from inside a project, or add one of the markers to its root.[/dim]"
        )
        console.print(Panel(body, title=_title("No project root", error), border_style="red"))
        return

    if isinstance(error, UnsupportedFileURIError):
        body = f"{escape(error.message)}\n[bold]URL:[/bold] {escape(error.url)}"
        console.print(Panel(body, title=_title("Unsupported file URL", error), border_style="red"))
        return

    console.print(f"[red]Error:[/red] {escape(describe_error(error))}")
