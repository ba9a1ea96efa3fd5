"""Tests for view derivation."""
import pytest

from bookdash.models import Book, FilterState
from bookdash.view import derive_view, derive_view_for, filter_books, page_window


def make_books(count):
    return [
        Book(i, f"Title {i}", f"Author {i}", "Fiction", 2000, "Available")
        for i in range(1, count + 1)
    ]


LIBRARY = [
    Book(1, "The Hobbit", "J.R.R. Tolkien", "Fiction", 1937, "Available"),
    Book(2, "Gone Girl", "Gillian Flynn", "Mystery", 2012, "Issued"),
    Book(3, "Sapiens", "Yuval Noah Harari", "History", 2011, "Available"),
    Book(4, "The Silmarillion", "J.R.R. Tolkien", "Fiction", 1977, "Issued"),
    Book(5, "Dune", "Frank Herbert", "Sci-Fi", 1965, "Available"),
]


def test_twelve_books_two_pages():
    """Test the 12 books / page size 10 split."""
    books = make_books(12)
    
    first = derive_view(books, page=1, page_size=10)
    second = derive_view(books, page=2, page_size=10)
    
    assert len(first.books) == 10
    assert len(second.books) == 2
    assert first.total_pages == 2
    assert first.total_matched == 12
    assert [b.id for b in second.books] == [11, 12]


def test_empty_collection():
    """Test that an empty collection has no pages."""
    view = derive_view([], page=1, page_size=10)
    
    assert view.books == []
    assert view.total_matched == 0
    assert view.total_pages == 0


def test_search_is_case_insensitive_on_title_and_author():
    """Test that search matches title or author regardless of case."""
    assert [b.id for b in filter_books(LIBRARY, search="TOLKIEN")] == [1, 4]
    assert [b.id for b in filter_books(LIBRARY, search="dune")] == [5]
    assert filter_books(LIBRARY, search="nothing like this") == []


def test_search_sound_and_complete():
    """Test that every returned book matches and no match is left out."""
    for term in ["the", "an", "r", "J.R.R.", "e"]:
        found = filter_books(LIBRARY, search=term)
        expected = [
            b for b in LIBRARY
            if term.lower() in b.title.lower() or term.lower() in b.author.lower()
        ]
        assert found == expected


def test_genre_and_status_filters_combine():
    """Test that all filters must hold together."""
    view = derive_view(LIBRARY, search="tolkien", genre="Fiction", status="Issued")
    
    assert [b.id for b in view.books] == [4]
    assert view.total_matched == 1
    assert view.total_pages == 1


def test_empty_filters_match_everything():
    assert filter_books(LIBRARY) == LIBRARY


def test_page_past_end_is_empty():
    """Test that an out-of-range page is not clamped."""
    view = derive_view(make_books(12), page=3, page_size=10)
    
    assert view.books == []
    assert view.total_pages == 2


def test_last_page_not_empty():
    """Test that page total_pages always has books when something matched."""
    for count in range(1, 31):
        for page_size in (1, 3, 10):
            books = make_books(count)
            view = derive_view(books, page=1, page_size=page_size)
            last = derive_view(books, page=view.total_pages, page_size=page_size)
            assert last.books
            assert len(last.books) <= page_size
            assert view.total_pages == -(-count // page_size)


def test_deterministic():
    first = derive_view(LIBRARY, search="a", page=1, page_size=2)
    second = derive_view(LIBRARY, search="a", page=1, page_size=2)
    
    assert first == second


def test_invalid_page_size():
    with pytest.raises(ValueError):
        derive_view(LIBRARY, page_size=0)


def test_derive_view_for_filter_state():
    filters = FilterState(search="", genre="Fiction", status="", page=1)
    
    view = derive_view_for(LIBRARY, filters, page_size=1)
    
    assert [b.id for b in view.books] == [1]
    assert view.total_pages == 2


def test_page_window():
    assert page_window(1, 10, 12) == (1, 10)
    assert page_window(2, 10, 12) == (11, 12)
    assert page_window(1, 10, 0) == (0, 0)
    assert page_window(3, 10, 12) == (0, 0)
