"""Derive the visible page of books from the full collection."""
import math
from typing import List, NamedTuple, Sequence, Tuple

from bookdash.models import Book, FilterState


class PageView(NamedTuple):
    books: List[Book]
    total_matched: int
    total_pages: int


def matches(book: Book, search: str = "", genre: str = "", status: str = "") -> bool:
    """Check a book against the search term and the genre/status filters."""
    if search:
        needle = search.lower()
        if needle not in book.title.lower() and needle not in book.author.lower():
            return False
    if genre and book.genre != genre:
        return False
    if status and book.status != status:
        return False
    return True


def filter_books(
    books: Sequence[Book],
    search: str = "",
    genre: str = "",
    status: str = ""
) -> List[Book]:
    """Return the matching books in collection order."""
    return [book for book in books if matches(book, search, genre, status)]


def derive_view(
    books: Sequence[Book],
    search: str = "",
    genre: str = "",
    status: str = "",
    page: int = 1,
    page_size: int = 10
) -> PageView:
    """
    Filter the collection and cut out one page.
    
    Args:
        books: Full in-memory collection
        search: Case-insensitive substring of title or author
        genre: Exact genre, empty for all
        status: Exact status, empty for all
        page: 1-based page number; pages past the end are empty
        page_size: Books per page
        
    Returns:
        PageView with the visible books, match count and page count
    """
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    
    matched = filter_books(books, search, genre, status)
    total_pages = math.ceil(len(matched) / page_size)
    
    if page < 1:
        return PageView([], len(matched), total_pages)
    
    start = (page - 1) * page_size
    return PageView(matched[start:start + page_size], len(matched), total_pages)


def derive_view_for(books: Sequence[Book], filters: FilterState, page_size: int = 10) -> PageView:
    return derive_view(books, filters.search, filters.genre, filters.status, filters.page, page_size)


def page_window(page: int, page_size: int, total_matched: int) -> Tuple[int, int]:
    """First and last 1-based positions shown on ``page`` (0, 0 when empty)."""
    if total_matched == 0:
        return 0, 0
    first = (page - 1) * page_size + 1
    last = min(page * page_size, total_matched)
    if first > last:
        return 0, 0
    return first, last
