import pytest

from library_catalog.library import Catalog
from library_catalog.ui_helpers import OUTPUT_MODE_ENV


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    # Output mode lives in the environment; reset it for every test
    monkeypatch.delenv(OUTPUT_MODE_ENV, raising=False)


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "data" / "books.csv"


@pytest.fixture
def lib():
    catalog = Catalog()
    catalog.add("Dune", "Frank Herbert")
    catalog.add("Foundation", "Isaac Asimov")
    catalog.add("Hyperion", "Dan Simmons")
    return catalog
