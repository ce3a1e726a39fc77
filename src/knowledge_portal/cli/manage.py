"""Record store management subcommands (status, users, add-user)."""

from collections import Counter
from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from knowledge_portal.config import TOPICS, USERS_FILENAME
from knowledge_portal.core import StorageError, ValidationError
from knowledge_portal.store import RecordStore

console = Console()

manage_app = typer.Typer(no_args_is_help=True)


def _open_store() -> RecordStore:
    """Open the configured store or exit with a readable error."""
    try:
        return RecordStore()
    except StorageError as e:
        console.print(f"[red]Could not open record store:[/red] {e.message}")
        if e.details:
            console.print(f"  [dim]{e.details}[/dim]")
        raise typer.Exit(code=1) from None


@manage_app.command("status")
def status() -> None:
    """Show record counts and the per-topic breakdown."""
    store = _open_store()
    users = store.list_users()
    queries = store.list_queries()

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="bold")
    table.add_column("Value")

    table.add_row("Data dir", Text(str(store.data_dir), style="dim"))
    table.add_row("Users", Text(str(len(users)), style="green" if users else "dim"))
    table.add_row("Queries", Text(str(len(queries)), style="green" if queries else "dim"))

    if queries:
        topic_counts = Counter(q.topic.value for q in queries)
        breakdown = "  |  ".join(
            f"{topic}: {topic_counts[topic]}" for topic in TOPICS if topic_counts[topic]
        )
        table.add_row("Topics", Text(breakdown))
        table.add_row(
            "Authors",
            Text(", ".join(store.list_employee_ids()), style="cyan"),
        )
    else:
        table.add_row("Topics", Text("—", style="dim"))
        table.add_row("Authors", Text("—", style="dim"))

    console.print(Panel(table, title="[bold]Knowledge Base Status[/bold]", expand=False))


@manage_app.command("users")
def list_users() -> None:
    """List registered employee accounts (passwords are not shown)."""
    store = _open_store()
    users = store.list_users()

    if not users:
        console.print("[yellow]No users registered.[/yellow]")
        return

    authored = Counter(q.employee_id for q in store.list_queries())

    table = Table(
        title="[bold]Registered Users[/bold]",
        border_style="dim",
        header_style="bold",
    )
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Employee ID", style="cyan")
    table.add_column("Queries", justify="right", style="bold")

    for user in users:
        table.add_row(str(user.id), user.employee_id, str(authored[user.employee_id]))

    console.print(table)


@manage_app.command("add-user")
def add_user(
    employee_id: Annotated[
        str,
        typer.Argument(help="Employee ID for the new account (e.g. E2402)."),
    ],
    password: Annotated[
        str,
        typer.Option(
            "--password",
            "-p",
            prompt=True,
            hide_input=True,
            confirmation_prompt=True,
            help="Password for the new account.",
        ),
    ],
) -> None:
    """Register a new employee account."""
    store = _open_store()

    try:
        user = store.create_user(employee_id, password)
    except ValidationError as e:
        console.print(f"[red]Cannot add user:[/red] {e.message}")
        raise typer.Exit(code=1) from None
    except StorageError as e:
        console.print(f"[red]Failed to save user:[/red] {e.message}")
        if e.details:
            console.print(f"  [dim]{e.details}[/dim]")
        raise typer.Exit(code=1) from None

    console.print(
        f"[green]Added user[/green] [bold]{user.employee_id}[/bold] (id {user.id})"
    )
    console.print(
        "  [dim italic]Note: passwords are stored in plaintext in "
        f"{store.data_dir / USERS_FILENAME}.[/dim italic]"
    )
