from typing import Optional

from library_catalog.results import Failure, Result


class TextValidator:
    """Checks for the free text the shell collects (titles, authors)."""

    @staticmethod
    def validate_text(text: Optional[str]) -> bool:
        if text is None:
            return False
        return bool(text.strip())

    @staticmethod
    def validate_title(title: Optional[str]) -> bool:
        return TextValidator.validate_text(title)

    @staticmethod
    def validate_author(author: Optional[str]) -> bool:
        return TextValidator.validate_text(author)


class IdValidator:
    """Parses book ids typed by the user."""

    @staticmethod
    def parse_id(raw: Optional[str]) -> Result:
        s = (raw or "").strip()
        try:
            return Result.success(int(s))
        except ValueError:
            return Result.fail(Failure.INVALID_INPUT, f"Not a number: {s!r}")
