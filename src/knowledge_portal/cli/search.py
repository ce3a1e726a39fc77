"""Search command for querying the knowledge base from a terminal."""

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from knowledge_portal.core import StorageError
from knowledge_portal.search import parse_date_filter, search_queries
from knowledge_portal.store import RecordStore

console = Console()

# Maximum characters to display per answer in the table.
_ANSWER_PREVIEW_LIMIT = 300


def search(
    term: Annotated[
        Optional[str],
        typer.Argument(help="Text to look for in title, details, or answer."),
    ] = None,
    topic: Annotated[
        Optional[str],
        typer.Option("--topic", "-t", help="Filter by topic (e.g. hardware, hr)."),
    ] = None,
    employee: Annotated[
        Optional[str],
        typer.Option("--employee", "-e", help="Filter by author employee ID."),
    ] = None,
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="today, week, month, or year."),
    ] = None,
) -> None:
    """
    Search stored queries, newest first.

    Examples:

        kb-portal search laptop

        kb-portal search --topic hr --date month

        kb-portal search "500" -e E2301
    """
    if date and parse_date_filter(date) is None:
        console.print(
            f"[yellow]Ignoring unknown date filter:[/yellow] {date} "
            "[dim](use today, week, month, or year)[/dim]"
        )

    try:
        store = RecordStore()
    except StorageError as e:
        console.print(f"[red]Could not open record store:[/red] {e.message}")
        if e.details:
            console.print(f"  [dim]{e.details}[/dim]")
        raise typer.Exit(code=1) from None

    results = search_queries(
        store.list_queries(),
        search_term=term,
        topic=topic.lower() if topic else None,
        employee_id=employee,
        date_filter=date,
    )

    if not results:
        console.print("[yellow]No queries found.[/yellow]")
        console.print(
            "[dim italic]Hint: Try a shorter search term or fewer filters.[/dim italic]"
        )
        return

    console.print(f"\n[bold]Found {len(results)} query(ies)[/bold]\n")

    table = Table(show_lines=True, expand=True, border_style="dim")
    table.add_column("#", style="bold", width=4, justify="right")
    table.add_column("Date", width=10, no_wrap=True)
    table.add_column("Topic", style="green", width=10)
    table.add_column("Author", style="cyan", width=8)
    table.add_column("Title", style="bold", max_width=40)
    table.add_column("Answer")

    for query in results:
        answer = query.answer
        if len(answer) > _ANSWER_PREVIEW_LIMIT:
            answer = answer[:_ANSWER_PREVIEW_LIMIT] + "..."

        table.add_row(
            str(query.id),
            query.date.strftime("%Y-%m-%d"),
            query.topic.value,
            query.employee_id,
            query.title,
            answer,
        )

    console.print(table)
