import logging
from typing import Any, Dict, Iterator, List, Optional

from library_catalog.book import Book
from library_catalog.results import Failure, Result

logger = logging.getLogger(__name__)


class Catalog:
    """Manages the in-memory collection of books.

    Books are kept in insertion order. Every lookup is a linear scan, which is
    fine for the few thousand records a catalog is expected to hold.
    """

    def __init__(self, books: Optional[List[Book]] = None) -> None:
        self.books: List[Book] = []
        for book in books or []:
            if not self.restore(book):
                raise ValueError(f"Book with ID {book.id} already exists.")

    def __len__(self) -> int:
        return len(self.books)

    def __iter__(self) -> Iterator[Book]:
        return iter(list(self.books))

    # ------------------------- Core operations ------------------------- #
    def add(self, title: str, author: str) -> int:
        """Add a new available book and return the id assigned to it."""
        next_id = self._next_id()
        self.books.append(Book(next_id, title, author, True))
        logger.info(f"Book added: id={next_id}, title={title!r}")
        return next_id

    def restore(self, book: Book) -> bool:
        """Put back a previously persisted book, keeping its id.

        Returns False without touching the catalog if the id is taken.
        """
        if self.find(book.id) is not None:
            return False
        self.books.append(book)
        return True

    def find(self, book_id: int) -> Optional[Book]:
        for book in self.books:
            if book.id == book_id:
                return book
        return None

    def list_books(self) -> Optional[List[Book]]:
        """All books in insertion order, or None when the catalog is empty."""
        if not self.books:
            return None
        return list(self.books)

    def search(self, query: str) -> List[Book]:
        """Search for books by title or author (case-insensitive substring)."""
        q = query.lower()
        return [b for b in self.books if q in b.title.lower() or q in b.author.lower()]

    def issue(self, book_id: int) -> Result:
        book = self.find(book_id)
        if book is None:
            return Result.fail(Failure.NOT_FOUND, f"Book with ID {book_id} not found.")
        if not book.available:
            return Result.fail(Failure.ALREADY_ISSUED, f"{book.title} is already issued.")
        book.available = False
        logger.info(f"Book issued: id={book_id}")
        return Result.success(book.title)

    def return_book(self, book_id: int) -> Result:
        book = self.find(book_id)
        if book is None:
            return Result.fail(Failure.NOT_FOUND, f"Book with ID {book_id} not found.")
        if book.available:
            return Result.fail(Failure.NOT_ISSUED, f"{book.title} was not issued.")
        book.available = True
        logger.info(f"Book returned: id={book_id}")
        return Result.success(book.title)

    def remove(self, book_id: int) -> Result:
        book = self.find(book_id)
        if book is None:
            return Result.fail(Failure.NOT_FOUND, f"Book with ID {book_id} not found.")
        self.books = [b for b in self.books if b.id != book_id]
        logger.info(f"Book removed: id={book_id}")
        return Result.success(book.title)

    def get_statistics(self) -> Dict[str, Any]:
        """Get catalog statistics."""
        issued = sum(1 for b in self.books if not b.available)
        return {
            "total_books": len(self.books),
            "available_books": len(self.books) - issued,
            "issued_books": issued,
            "unique_authors": len({b.author for b in self.books}),
        }

    # ------------------------- Utilities ------------------------- #
    def _next_id(self) -> int:
        # max + 1, so removing the highest id frees it for the next add;
        # never below 1 even if a loaded file held zero or negative ids
        return max(max((b.id for b in self.books), default=0), 0) + 1
