"""Command line interface for running and poking at the library API locally."""

import json

import typer
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from src.library_api.api.lambdas.handlers import HANDLERS
from src.library_api.runtime.context import get_config

console = Console()

app = typer.Typer(
    name="library-api",
    help="Library API - run the local server or invoke handlers in-process",
    rich_markup_mode="rich",
)


def build_event(book_id: str | None = None, body: str | None = None) -> dict:
    """Build a minimal API Gateway proxy event."""
    event: dict = {}
    if book_id:
        event["pathParameters"] = {"book_id": book_id}
    if body is not None:
        event["body"] = body
    return event


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Bind host (defaults to config)"),
    port: int | None = typer.Option(None, help="Bind port (defaults to config)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the FastAPI development server."""
    import uvicorn

    config = get_config().app
    host = host or config.host
    port = port or config.port
    console.print(
        Panel.fit(
            f"[bold green]Library API[/bold green] on http://{host}:{port}\n"
            f"storage backend: [cyan]{get_config().storage.backend}[/cyan]",
            border_style="green",
        )
    )
    uvicorn.run("src.library_api.api.http.app:app", host=host, port=port, reload=reload)


@app.command()
def invoke(
    operation: str = typer.Argument(..., help=f"One of: {', '.join(HANDLERS)}"),
    book_id: str | None = typer.Option(None, "--book-id", "-i", help="Book ID path parameter"),
    body: str | None = typer.Option(None, "--body", "-b", help="Raw JSON request body"),
) -> None:
    """Invoke a Lambda handler in-process and print its response."""
    handler = HANDLERS.get(operation)
    if handler is None:
        console.print(f"[red]Unknown operation '{operation}'[/red]")
        raise typer.Exit(code=2)

    response = handler(build_event(book_id, body), None)

    style = "green" if response["statusCode"] < 400 else "red"
    console.print(f"[bold {style}]{response['statusCode']}[/bold {style}]")
    if response["body"]:
        pretty = json.dumps(json.loads(response["body"]), indent=2)
        console.print(Syntax(pretty, "json", theme="ansi_dark"))

    if response["statusCode"] >= 400:
        raise typer.Exit(code=1)


@app.command()
def books() -> None:
    """List the books in the configured storage backend."""
    response = HANDLERS["get_books"]({}, None)
    if response["statusCode"] != 200:
        console.print(f"[red]{json.loads(response['body'])['error']}[/red]")
        raise typer.Exit(code=1)

    table = Table(title="Books")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("ISBN")
    table.add_column("Status")

    for book in sorted(json.loads(response["body"]), key=lambda b: b["title"]):
        table.add_row(book["id"], book["title"], book["author"], book["isbn"], book["book_status"] or "-")

    console.print(table)


if __name__ == "__main__":
    app()
