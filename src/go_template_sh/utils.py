"""Console helpers shared by the command line front end.

All output goes through a single Rich ``Console`` so colours and widths are
consistent and tests can swap it out.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.tree import Tree

console = Console()


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Option", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_file_tree(root_label: str, files: list[str], directories: list[str] | None = None) -> None:
    """Print project-relative POSIX paths as a tree rooted at *root_label*.

    Entries of *directories* are shown even when no file lives in them.
    """
    tree = Tree(f"[bold]{root_label}/[/bold]")
    nodes: dict[str, Tree] = {}

    def _add(path: str, is_dir: bool) -> None:
        parent = tree
        parts = path.split("/")
        for depth, part in enumerate(parts):
            key = "/".join(parts[: depth + 1])
            if key not in nodes:
                leaf = depth == len(parts) - 1 and not is_dir
                nodes[key] = parent.add(part if leaf else f"[blue]{part}/[/blue]")
            parent = nodes[key]

    for path in sorted(directories or []):
        _add(path, is_dir=True)
    for path in sorted(files):
        _add(path, is_dir=False)

    console.print(tree)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
