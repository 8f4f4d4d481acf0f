import logging
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from library_catalog import store
from library_catalog.config import settings
from library_catalog.library import Catalog
from library_catalog.results import Failure, Result
from library_catalog.ui_helpers import (
    books_table,
    print_book_detail,
    print_list_result,
    print_search_result,
    print_stats_result,
    set_output_mode,
)
from library_catalog.validators import IdValidator, TextValidator

FAILURE_MESSAGES = {
    Failure.NOT_FOUND: "Invalid Book ID.",
    Failure.ALREADY_ISSUED: "This book is already issued.",
    Failure.NOT_ISSUED: "This book was not issued.",
}

console = Console()


def _failure_message(result: Result, action: str = "") -> str:
    if action == "remove" and result.failure is Failure.NOT_FOUND:
        return "Book ID not found."
    return FAILURE_MESSAGES.get(result.failure, result.detail)


def _load(data_file: str) -> Result:
    result = store.load(data_file)
    if not result:
        print(f"Error loading data. Starting fresh. Details: {result.detail}")
    return result


def _save(catalog: Catalog, data_file: str) -> Result:
    result = store.save(catalog, data_file)
    if result:
        print(f"💾 Saved to {result.value}")
    else:
        print(f"Error saving file: {result.detail}")
    return result


def _parse_id(raw: str) -> Optional[int]:
    parsed = IdValidator.parse_id(raw)
    if not parsed:
        print(f"Error: {parsed.detail}")
        return None
    return parsed.value


# --- Typer CLI Application ---
app = typer.Typer(help="Library catalog CLI", invoke_without_command=True)


@app.callback()
def _global_options(
    ctx: typer.Context,
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
    data_file: Optional[str] = typer.Option(
        None,
        "--data-file",
        "-d",
        help="Path of the catalog data file",
    ),
):
    """Track a small catalog of books. Runs the interactive menu when no command is given."""
    if output and not set_output_mode(output):
        print(f"Ignoring unknown output mode: {output}")
    ctx.obj = {"data_file": data_file or settings.data_file}
    if ctx.invoked_subcommand is None:
        run_menu(ctx.obj["data_file"])


def _run_mutation(ctx: typer.Context, operation) -> None:
    """Load, apply one change and save straight away.

    A file that failed to load is left alone so the one-shot commands never
    overwrite it with an empty catalog.
    """
    data_file = ctx.obj["data_file"]
    loaded = _load(data_file)
    if not loaded:
        print("Nothing was changed.")
        return
    catalog = loaded.value
    if operation(catalog):
        _save(catalog, data_file)


@app.command("list")
def cli_list(ctx: typer.Context):
    """List all books."""
    catalog = _load(ctx.obj["data_file"]).value
    print_list_result(catalog.list_books())


@app.command("add")
def cli_add(ctx: typer.Context, title: str, author: str):
    """Add a book by title and author."""
    if not TextValidator.validate_title(title) or not TextValidator.validate_author(author):
        print("Error: title and author cannot be empty.")
        return

    def operation(catalog: Catalog) -> bool:
        book_id = catalog.add(title.strip(), author.strip())
        print(f"✅ Book added with ID: {book_id}")
        return True

    _run_mutation(ctx, operation)


@app.command("find")
def cli_find(ctx: typer.Context, book_id: str = typer.Argument(..., metavar="ID")):
    """Find a book by ID and show its details."""
    parsed = _parse_id(book_id)
    if parsed is None:
        return
    catalog = _load(ctx.obj["data_file"]).value
    book = catalog.find(parsed)
    if book:
        print_book_detail(book)
    else:
        print(f"Book with ID {parsed} not found.")


@app.command("search")
def cli_search(ctx: typer.Context, query: str = typer.Argument("", help="Text to look for in titles and authors")):
    """Search books by title or author (case-insensitive)."""
    catalog = _load(ctx.obj["data_file"]).value
    print_search_result(query, catalog.search(query.strip()))


def _transition(ctx: typer.Context, book_id: str, action: str) -> None:
    parsed = _parse_id(book_id)
    if parsed is None:
        return

    def operation(catalog: Catalog) -> bool:
        result = getattr(catalog, action)(parsed)
        if not result:
            print(_failure_message(result, action))
            return False
        verb = {"issue": "Issued", "return_book": "Returned", "remove": "Removed"}[action]
        print(f"✅ {verb}: {result.value}")
        return True

    _run_mutation(ctx, operation)


@app.command("issue")
def cli_issue(ctx: typer.Context, book_id: str = typer.Argument(..., metavar="ID")):
    """Issue a book to a patron."""
    _transition(ctx, book_id, "issue")


@app.command("return")
def cli_return(ctx: typer.Context, book_id: str = typer.Argument(..., metavar="ID")):
    """Return an issued book to the shelf."""
    _transition(ctx, book_id, "return_book")


@app.command("remove")
def cli_remove(ctx: typer.Context, book_id: str = typer.Argument(..., metavar="ID")):
    """Remove a book from the catalog."""
    _transition(ctx, book_id, "remove")


@app.command("stats")
def cli_stats(ctx: typer.Context):
    """Show catalog statistics."""
    catalog = _load(ctx.obj["data_file"]).value
    print_stats_result(catalog.get_statistics())


@app.command("export")
def cli_export(
    ctx: typer.Context,
    format: str = typer.Option("csv", "--format", "-f", help="csv, json or txt"),
    output: str = typer.Option("library_export", "--output-file", help="Output file name without extension"),
):
    """Export the catalog to a file (csv, json or txt)."""
    catalog = _load(ctx.obj["data_file"]).value
    if not len(catalog):
        print("No books to export.")
        return
    try:
        path = store.export(catalog, output, format)
    except ValueError as e:
        print(str(e))
        return
    except OSError as e:
        print(f"Error exporting file: {e}")
        return
    print(f"{len(catalog)} book(s) exported to {path}")


# --- Interactive menu ---
def _read_text(prompt: str) -> str:
    value = Prompt.ask(prompt, console=console)
    while not TextValidator.validate_text(value):
        value = Prompt.ask("[yellow]Input cannot be empty. Try again[/]", console=console)
    return value.strip()


def _read_id(prompt: str) -> int:
    while True:
        parsed = IdValidator.parse_id(Prompt.ask(prompt, console=console))
        if parsed:
            return parsed.value
        console.print("[yellow]Not a number. Try again.[/]")


def _report(result: Result, success: str, action: str = "") -> None:
    if result:
        console.print(f"[green]{success}[/] [bold]{escape(result.value)}[/]")
    else:
        console.print(f"[yellow]⚠️  {escape(_failure_message(result, action))}[/]")


def _render_menu() -> None:
    menu_items = [
        ("1", "Add Book", "➕"),
        ("2", "View All Books", "📚"),
        ("3", "Search Book (title/author)", "🔎"),
        ("4", "Issue Book", "📕"),
        ("5", "Return Book", "📗"),
        ("6", "Remove Book", "🗑️"),
        ("7", "Save & Exit", "💾"),
    ]

    table = Table.grid(padding=(0, 2))
    table.add_column(justify="right", style="bold cyan", width=4)
    table.add_column(justify="left", style="white")
    for key, label, icon in menu_items:
        table.add_row(f"[reverse]{key}[/]", f"{icon} {label}")

    console.print(Panel(
        table,
        title=f"📚 {settings.app_name}",
        border_style="cyan",
        box=box.HEAVY,
        padding=(1, 2),
    ))


def _save_and_exit(catalog: Catalog, data_file: str) -> bool:
    """Save the catalog. Returns True when the menu should stop."""
    result = store.save(catalog, data_file)
    if result:
        console.print(f"💾 Saved to {escape(result.value)}")
        return True
    console.print(f"[bold red]Error saving file:[/] {escape(result.detail)}")
    return Confirm.ask("Exit without saving?", default=False, console=console)


def run_menu(data_file: str) -> None:
    """Interactive numbered menu. Loads once now and saves once on exit."""
    loaded = store.load(data_file)
    catalog: Catalog = loaded.value
    if loaded:
        console.print(f"[dim]📂 Loaded {len(catalog)} book(s) from file.[/]")
    else:
        console.print(f"[bold red]Error loading data. Starting fresh. Details:[/] {escape(loaded.detail)}")

    while True:
        _render_menu()
        choice = Prompt.ask("🔸 Enter your choice (1-7)", console=console).strip()

        if choice == "1":
            title = _read_text("   Title")
            author = _read_text("   Author")
            book_id = catalog.add(title, author)
            console.print(f"[green]✅ Book added with ID:[/] [bold]{book_id}[/]")
        elif choice == "2":
            books = catalog.list_books()
            if books is None:
                console.print("[yellow]No books in library yet.[/]")
            else:
                console.print(books_table(books, "📚 All Books in Library"))
                console.print(f"[dim]📊 Showing {len(books)} book(s)[/]")
        elif choice == "3":
            query = Prompt.ask("🔹 Enter search text", default="", show_default=False, console=console)
            results = catalog.search(query.strip())
            if not results:
                console.print("[yellow]No matching books found.[/]")
            else:
                console.print(books_table(results, f"🔎 Search results for '{escape(query.strip())}'"))
                console.print(f"[dim]📊 {len(results)} result(s) found[/]")
        elif choice == "4":
            _report(catalog.issue(_read_id("🔹 Enter Book ID to issue")), "✅ Issued:")
        elif choice == "5":
            _report(catalog.return_book(_read_id("🔹 Enter Book ID to return")), "✅ Returned:")
        elif choice == "6":
            _report(catalog.remove(_read_id("🔹 Enter Book ID to remove")), "🗑️ Removed:", "remove")
        elif choice == "7":
            if _save_and_exit(catalog, data_file):
                console.print(f"[green]👋 Exiting... Thank you for using the {escape(settings.app_name)}![/]")
                break
        else:
            console.print("[yellow]⚠️  Please choose a valid option between 1 and 7.[/]")
        console.print()


def cli() -> None:
    logging.basicConfig(level=settings.logging_level())
    app()


if __name__ == "__main__":
    cli()
