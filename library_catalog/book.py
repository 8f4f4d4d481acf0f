from __future__ import annotations


class Book:
    """A single book in the catalog."""

    def __init__(self, id: int, title: str, author: str, available: bool = True) -> None:
        self.id = id
        self.title = title
        self.author = author
        self.available = available

    @property
    def status(self) -> str:
        return "Available" if self.available else "Issued"

    def __str__(self) -> str:
        return f"{self.id:<4d} | {self.title:<30} | {self.author:<20} | {self.status}"

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"Book(id={self.id!r}, title={self.title!r}, author={self.author!r}, available={self.available!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "available": self.available,
        }
