"""Flat file persistence for the catalog.

The data file is plain comma-delimited text: a header line followed by one
``id,title,author,available`` line per book. It is read once at startup and
overwritten in full on save.
"""

import csv
import json
import logging
from pathlib import Path
from typing import List, Union

from library_catalog.book import Book
from library_catalog.library import Catalog
from library_catalog.results import Failure, Result

logger = logging.getLogger(__name__)

DELIMITER = ","
HEADER = "id,title,author,available"
EXPORT_FORMATS = ("csv", "json", "txt")

PathLike = Union[str, Path]


def load(path: PathLike) -> Result:
    """Load a catalog from ``path``.

    The result always carries a Catalog in ``value``. A missing file is the
    first-run case and yields an empty catalog. A line with a bad id aborts the
    whole load: the result is a PERSISTENCE_FAILURE holding an empty catalog.
    """
    path = Path(path)
    if not path.exists():
        logger.info(f"No data file at {path}, starting with an empty catalog")
        return Result.success(Catalog())

    catalog = Catalog()
    try:
        with open(path, "r", encoding="utf-8") as f:
            f.readline()  # header
            for lineno, line in enumerate(f, 2):
                book = _parse_line(line.rstrip("\r\n"))
                if book is None:
                    logger.debug(f"Skipping malformed line {lineno} in {path}")
                    continue
                if not catalog.restore(book):
                    logger.warning(f"Skipping duplicate book ID {book.id} on line {lineno} in {path}")
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load {path}: {e}")
        return Result.fail(Failure.PERSISTENCE_FAILURE, str(e), value=Catalog())

    logger.info(f"Loaded {len(catalog)} book(s) from {path}")
    return Result.success(catalog)


def save(catalog: Catalog, path: PathLike) -> Result:
    """Overwrite ``path`` with the catalog contents.

    Commas and line breaks inside titles and authors are replaced with spaces so
    each book stays on one line with exactly four fields. Returns the absolute
    path on success.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(HEADER + "\n")
            for book in catalog:
                f.write(_format_line(book) + "\n")
    except OSError as e:
        logger.error(f"Failed to save {path}: {e}")
        return Result.fail(Failure.PERSISTENCE_FAILURE, str(e))

    logger.info(f"Saved {len(catalog)} book(s) to {path}")
    return Result.success(str(path.resolve()))


def export(catalog: Catalog, path: PathLike, fmt: str = "csv") -> Path:
    """Write a copy of the catalog as csv, json or txt.

    Unlike the data file, the csv export quotes fields instead of stripping
    commas.
    """
    fmt = fmt.lower()
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported format: {fmt}. Use csv, json or txt.")

    path = Path(path)
    if path.suffix.lower() != f".{fmt}":
        path = path.with_name(f"{path.name}.{fmt}")
    path.parent.mkdir(parents=True, exist_ok=True)
    books: List[Book] = list(catalog)

    if fmt == "csv":
        with open(path, "w", newline="", encoding="utf-8") as csvfile:
            writer = csv.writer(csvfile)
            writer.writerow(["id", "title", "author", "available"])
            for book in books:
                writer.writerow([book.id, book.title, book.author, _format_bool(book.available)])
    elif fmt == "json":
        with open(path, "w", encoding="utf-8") as jsonfile:
            json.dump([b.to_dict() for b in books], jsonfile, indent=2, ensure_ascii=False)
    else:
        with open(path, "w", encoding="utf-8") as txtfile:
            for book in books:
                txtfile.write(f"{book}\n")

    logger.info(f"Exported {len(books)} book(s) to {path}")
    return path


# ------------------------- Line codec ------------------------- #
def _parse_line(line: str):
    """Parse one data line. Returns None when the field count is wrong.

    Raises ValueError if the id is not an integer.
    """
    parts = line.split(DELIMITER)
    if len(parts) != 4:
        return None
    raw_id, title, author, available = (p.strip() for p in parts)
    return Book(int(raw_id), title, author, available.lower() == "true")


def _format_line(book: Book) -> str:
    return DELIMITER.join([
        str(book.id),
        sanitize(book.title),
        sanitize(book.author),
        _format_bool(book.available),
    ])


def sanitize(text: str) -> str:
    """Replace the delimiter and line breaks with spaces, then trim the ends."""
    for ch in (DELIMITER, "\r", "\n"):
        text = text.replace(ch, " ")
    return text.strip()


def _format_bool(value: bool) -> str:
    return "true" if value else "false"
