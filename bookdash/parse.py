"""Convert between books collection JSON and Book objects."""
from dataclasses import replace
from typing import Dict, Any, List, Optional
import logging

from bookdash.models import Book, BookDraft, id_key

logger = logging.getLogger(__name__)


def parse_book(item: Dict[str, Any]) -> Optional[Book]:
    """
    Parse a single book object from the books collection.
    
    Args:
        item: Single JSON object as returned by the server
        
    Returns:
        Book object or None if the item is unusable
    """
    try:
        book_id = item.get("id")
        if book_id is None or book_id == "":
            return None
        
        # Older records were posted with the year as a string
        year = item.get("publishedYear")
        published_year = int(year) if year not in (None, "") else 0
        
        return Book(
            id=book_id,
            title=item.get("title") or "",
            author=item.get("author") or "",
            genre=item.get("genre") or "",
            published_year=published_year,
            status=item.get("status") or "Available",
        )
    except (AttributeError, TypeError, ValueError) as e:
        logger.warning(f"Failed to parse book: {e}")
        return None


def parse_books_response(response_json: Any) -> List[Book]:
    """
    Parse the full collection returned by GET /Books.
    
    Args:
        response_json: Decoded JSON body, expected to be a list
        
    Returns:
        List of Book objects (empty if the body is not a list)
    """
    if not isinstance(response_json, list):
        logger.warning(f"Expected a list of books, got {type(response_json).__name__}")
        return []
    
    books = []
    for item in response_json:
        book = parse_book(item)
        if book:
            books.append(book)
    
    return books


def deduplicate_books(books: List[Book]) -> List[Book]:
    """
    Remove duplicate books by ID (compared as text), keeping the first occurrence.
    
    Args:
        books: List of Book objects
        
    Returns:
        Deduplicated list of books
    """
    seen_ids = set()
    unique_books = []
    
    for book in books:
        key = id_key(book.id)
        if key not in seen_ids:
            seen_ids.add(key)
            unique_books.append(book)
    
    return unique_books


def draft_to_payload(draft: BookDraft) -> Dict[str, Any]:
    """Build the JSON body for POST/PUT. Expects a validated draft."""
    return {
        "title": draft.title.strip(),
        "author": draft.author.strip(),
        "genre": draft.genre,
        "publishedYear": int(draft.published_year),
        "status": draft.status,
    }


def book_to_dict(book: Book) -> Dict[str, Any]:
    return {
        "id": book.id,
        "title": book.title,
        "author": book.author,
        "genre": book.genre,
        "publishedYear": book.published_year,
        "status": book.status,
    }


def merge_draft(book: Book, draft: BookDraft) -> Book:
    """Return ``book`` with the draft's fields applied; the id is kept."""
    return replace(
        book,
        title=draft.title.strip(),
        author=draft.author.strip(),
        genre=draft.genre,
        published_year=int(draft.published_year),
        status=draft.status,
    )
