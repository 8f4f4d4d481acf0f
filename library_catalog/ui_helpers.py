import json
import os
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.markup import escape

from library_catalog.book import Book
from library_catalog.config import settings

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"
OUTPUT_MODES = {"plain", "json", "rich"}

LIST_HEADER = "ID   | Title                          | Author               | Status"
LIST_RULE = "-----+--------------------------------+----------------------+--------"

_console = Console()


def set_output_mode(mode: str) -> bool:
    mode = (mode or "").lower().strip()
    if mode in OUTPUT_MODES:
        os.environ[OUTPUT_MODE_ENV] = mode
        return True
    return False


def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, settings.output_mode).lower()


def books_table(books: List[Book], title: str) -> Table:
    table = Table(title=title, show_lines=True, header_style="bold cyan")
    table.add_column("ID", style="magenta", no_wrap=True, justify="right")
    table.add_column("Title", style="white")
    table.add_column("Author", style="white")
    table.add_column("Status")
    for b in books:
        status = "[green]Available[/]" if b.available else "[yellow]Issued[/]"
        table.add_row(str(b.id), escape(b.title), escape(b.author), status)
    return table


def _print_books(books: List[Book], title: str) -> None:
    mode = get_output_mode()
    if mode == "json":
        print(json.dumps([b.to_dict() for b in books], ensure_ascii=False))
    elif mode == "rich":
        _console.print(books_table(books, title))
    else:
        print(LIST_HEADER)
        print(LIST_RULE)
        for b in books:
            print(b)


def print_list_result(books: Optional[List[Book]]) -> None:
    """Print the catalog listing in the current output mode.
    - plain: fixed-width 'ID | Title | Author | Status' rows
    - json: JSON array of book objects
    - rich: Rich table
    An empty catalog prints 'No books in library yet.' in every mode.
    """
    if not books:
        print("No books in library yet.")
        return
    _print_books(books, "📚 Books")


def print_search_result(query: str, books: List[Book]) -> None:
    if not books:
        print("No matching books found.")
        return
    if get_output_mode() == "plain":
        print(f"Search results ({len(books)}):")
    _print_books(books, f"🔎 Search results for '{query}'")


def print_book_detail(book: Book) -> None:
    mode = get_output_mode()
    if mode == "json":
        print(json.dumps(book.to_dict(), ensure_ascii=False))
    elif mode == "rich":
        _console.print(Panel.fit(
            f"[bold]ID:[/] {book.id}\n"
            f"[bold]Title:[/] {escape(book.title)}\n"
            f"[bold]Author:[/] {escape(book.author)}\n"
            f"[bold]Status:[/] {book.status}",
            title="🔍 Book Found",
            border_style="green",
        ))
    else:
        print("Book Found")
        print(f"ID: {book.id}")
        print(f"Title: {book.title}")
        print(f"Author: {book.author}")
        print(f"Status: {book.status}")


def print_stats_result(stats: Dict[str, Any]) -> None:
    """Print statistics in the current output mode."""
    mode = get_output_mode()

    if not stats:
        print("No statistics available.")
        return

    if mode == "json":
        print(json.dumps(stats, ensure_ascii=False))
    elif mode == "rich":
        content = (
            f"[bold]Total Books:[/] {stats['total_books']}\n"
            f"[bold]Available:[/] {stats['available_books']}\n"
            f"[bold]Issued:[/] {stats['issued_books']}\n"
            f"[bold]Unique Authors:[/] {stats['unique_authors']}"
        )
        _console.print(Panel.fit(content, title="📊 Stats", border_style="blue"))
    else:
        print(f"Total Books: {stats['total_books']}")
        print(f"Available: {stats['available_books']}")
        print(f"Issued: {stats['issued_books']}")
        print(f"Unique Authors: {stats['unique_authors']}")
