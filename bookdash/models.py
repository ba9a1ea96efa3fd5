"""Data models for books and dashboard state."""
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

GENRES = [
    "Fiction",
    "Non-Fiction",
    "Mystery",
    "Romance",
    "Sci-Fi",
    "Biography",
    "History",
    "Self-Help",
]

STATUSES = ["Available", "Issued"]

BookId = Union[int, str]


def id_key(book_id: BookId) -> str:
    """Identity of a book id; the server may send 5 or "5" for the same record."""
    return str(book_id)


@dataclass
class Book:
    """A book record as stored by the remote collection."""
    id: BookId
    title: str
    author: str
    genre: str
    published_year: int
    status: str = "Available"


@dataclass
class BookDraft:
    """Form contents for a book; the year stays raw text until validated."""
    title: str = ""
    author: str = ""
    genre: str = ""
    published_year: str = ""
    status: str = "Available"
    
    @classmethod
    def from_book(cls, book: Book) -> "BookDraft":
        """Prefill a draft from an existing book."""
        return cls(
            title=book.title,
            author=book.author,
            genre=book.genre,
            published_year=str(book.published_year),
            status=book.status,
        )


@dataclass
class FilterState:
    """Search, filters and the current (1-based) page."""
    search: str = ""
    genre: str = ""
    status: str = ""
    page: int = 1


@dataclass
class FormState:
    """An open add/edit form."""
    draft: BookDraft = field(default_factory=BookDraft)
    errors: Dict[str, str] = field(default_factory=dict)
    editing_id: Optional[BookId] = None
    
    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None
