from library_catalog.book import Book
from library_catalog.library import Catalog
from library_catalog.results import Failure


def test_add_assigns_sequential_ids():
    catalog = Catalog()
    assert catalog.add("Dune", "Herbert") == 1
    assert catalog.add("Foundation", "Asimov") == 2
    assert catalog.add("Hyperion", "Simmons") == 3

    book = catalog.find(1)
    assert book.title == "Dune"
    assert book.author == "Herbert"
    assert book.available is True


def test_add_uses_max_id_plus_one():
    catalog = Catalog([Book(7, "Ulysses", "James Joyce"), Book(3, "Sapiens", "Harari")])
    assert catalog.add("Emma", "Jane Austen") == 8


def test_removing_lower_id_does_not_free_it():
    catalog = Catalog()
    assert catalog.add("Dune", "Herbert") == 1
    assert catalog.add("Foundation", "Asimov") == 2
    assert catalog.remove(1).ok
    assert catalog.add("Hyperion", "Simmons") == 3
    assert [b.id for b in catalog] == [2, 3]


def test_id_reuse_after_removing_highest():
    catalog = Catalog()
    catalog.add("Dune", "Herbert")
    catalog.add("Foundation", "Asimov")
    catalog.remove(2)
    assert catalog.add("Hyperion", "Simmons") == 2
    assert [(b.id, b.title) for b in catalog] == [(1, "Dune"), (2, "Hyperion")]


def test_list_books_empty_is_none():
    assert Catalog().list_books() is None


def test_list_books_keeps_insertion_order(lib):
    books = lib.list_books()
    assert [b.title for b in books] == ["Dune", "Foundation", "Hyperion"]


def test_list_books_returns_a_copy(lib):
    books = lib.list_books()
    books.clear()
    assert len(lib) == 3


def test_search_is_case_insensitive(lib):
    assert [b.id for b in lib.search("dUNE")] == [1]
    assert [b.id for b in lib.search("asimov")] == [2]


def test_search_matches_substring_of_title_or_author(lib):
    results = lib.search("on")
    assert [b.title for b in results] == ["Foundation", "Hyperion"]


def test_search_empty_query_matches_everything(lib):
    assert len(lib.search("")) == 3


def test_search_no_match(lib):
    assert lib.search("Tolkien") == []


def test_issue_and_return():
    catalog = Catalog()
    book_id = catalog.add("Dune", "Herbert")

    result = catalog.issue(book_id)
    assert result.ok
    assert result.value == "Dune"
    assert catalog.find(book_id).available is False

    result = catalog.return_book(book_id)
    assert result.ok
    assert result.value == "Dune"
    assert catalog.find(book_id).available is True


def test_issue_twice_reports_already_issued(lib):
    assert lib.issue(1).ok
    result = lib.issue(1)
    assert not result.ok
    assert result.failure is Failure.ALREADY_ISSUED
    assert lib.find(1).available is False


def test_return_available_book_reports_not_issued(lib):
    result = lib.return_book(2)
    assert not result
    assert result.failure is Failure.NOT_ISSUED
    assert lib.find(2).available is True


def test_unknown_id_reports_not_found(lib):
    for op in (lib.issue, lib.return_book, lib.remove):
        result = op(99)
        assert result.failure is Failure.NOT_FOUND
    assert len(lib) == 3


def test_remove(lib):
    result = lib.remove(2)
    assert result.ok
    assert result.value == "Foundation"
    assert lib.find(2) is None
    assert [b.id for b in lib.list_books()] == [1, 3]
    assert lib.remove(2).failure is Failure.NOT_FOUND
    assert lib.issue(2).failure is Failure.NOT_FOUND


def test_restore_refuses_duplicate_id(lib):
    assert lib.restore(Book(1, "Other", "Someone")) is False
    assert lib.find(1).title == "Dune"
    assert lib.restore(Book(10, "Emma", "Jane Austen", False)) is True
    assert lib.find(10).available is False


def test_statistics(lib):
    lib.issue(1)
    lib.add("Dune Messiah", "Frank Herbert")
    stats = lib.get_statistics()
    assert stats == {
        "total_books": 4,
        "available_books": 3,
        "issued_books": 1,
        "unique_authors": 3,
    }


def test_book_display_format():
    book = Book(1, "Dune", "Herbert", False)
    assert str(book) == f"{'1':<4} | {'Dune':<30} | {'Herbert':<20} | Issued"


def test_next_id_is_at_least_one():
    catalog = Catalog([Book(-5, "Negative", "Someone"), Book(0, "Zero", "Someone")])
    assert catalog.add("Dune", "Herbert") == 1
    assert catalog.add("Emma", "Austen") == 2


def test_book_to_dict():
    book = Book(4, "Dune", "Herbert", False)
    assert book.to_dict() == {"id": 4, "title": "Dune", "author": "Herbert", "available": False}
