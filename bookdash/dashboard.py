"""Dashboard state and the create/edit/delete workflows."""
from typing import Callable, List, Optional
import logging

from bookdash.client import BooksClientError
from bookdash.models import Book, BookDraft, BookId, FilterState, FormState, GENRES, STATUSES, id_key
from bookdash.notify import Notifier, ERROR
from bookdash.parse import deduplicate_books, merge_draft
from bookdash.validation import validate
from bookdash.view import PageView, derive_view_for

logger = logging.getLogger(__name__)

FORM_FIELDS = {
    "title": "title",
    "author": "author",
    "genre": "genre",
    "publishedYear": "published_year",
    "year": "published_year",
    "status": "status",
}


class Dashboard:
    """
    In-memory view of the remote books collection.
    
    The collection is fetched once by ``load`` and then patched locally after
    every successful mutation. Works with BooksClient or any object exposing
    the same ``list_books``/``create_book``/``update_book``/``delete_book``.
    """
    
    def __init__(self, client, page_size: int = 10, notifier: Optional[Notifier] = None):
        self.client = client
        self.page_size = page_size
        self.notifier = notifier or Notifier()
        self.books: List[Book] = []
        self.filters = FilterState()
        self.form: Optional[FormState] = None
        self.pending_delete: Optional[Book] = None
        self.busy = False
    
    # Collection
    
    def load(self, fetch: Optional[Callable[[], List[Book]]] = None) -> bool:
        """
        Fetch the full collection, replacing the local copy.
        
        Args:
            fetch: Called instead of ``client.list_books``, e.g. to run the
                async client
        """
        fetch = fetch or self.client.list_books
        try:
            books = fetch()
        except BooksClientError as e:
            logger.error(f"Loading books failed: {e}")
            self.notifier.show(f"Could not load books: {e}", ERROR)
            return False
        self.set_books(books)
        return True
    
    def set_books(self, books: List[Book]):
        self.books = deduplicate_books(books)
        self._clamp_page()
    
    def find(self, book_id: BookId) -> Optional[Book]:
        for book in self.books:
            if id_key(book.id) == id_key(book_id):
                return book
        return None
    
    def _without(self, book_id: BookId) -> List[Book]:
        return [b for b in self.books if id_key(b.id) != id_key(book_id)]
    
    # Filters and paging
    
    def view(self) -> PageView:
        return derive_view_for(self.books, self.filters, self.page_size)
    
    def set_search(self, search: str):
        self.filters.search = search
        self.filters.page = 1
    
    def set_genre(self, genre: str):
        if genre and genre not in GENRES:
            raise ValueError(f"Unknown genre: {genre}")
        self.filters.genre = genre
        self.filters.page = 1
    
    def set_status(self, status: str):
        if status and status not in STATUSES:
            raise ValueError(f"Unknown status: {status}")
        self.filters.status = status
        self.filters.page = 1
    
    def clear_filters(self):
        self.filters = FilterState()
    
    def go_to_page(self, page: int) -> int:
        """Move to ``page``, clamped to the pages that exist."""
        last = max(self.view().total_pages, 1)
        self.filters.page = min(max(page, 1), last)
        return self.filters.page
    
    def next_page(self) -> int:
        return self.go_to_page(self.filters.page + 1)
    
    def prev_page(self) -> int:
        return self.go_to_page(self.filters.page - 1)
    
    def _clamp_page(self):
        total_pages = self.view().total_pages
        if self.filters.page > max(total_pages, 1):
            self.filters.page = max(total_pages, 1)
    
    # Add/edit form
    
    def open_form(self, book: Optional[Book] = None) -> FormState:
        """Open a blank form, or one prefilled from ``book`` for editing."""
        if book is None:
            self.form = FormState()
        else:
            self.form = FormState(draft=BookDraft.from_book(book), editing_id=book.id)
        return self.form
    
    def edit(self, book_id: BookId) -> FormState:
        book = self.find(book_id)
        if book is None:
            raise LookupError(f"No book with id {book_id}")
        return self.open_form(book)
    
    def set_field(self, name: str, value: str):
        if self.form is None:
            raise RuntimeError("No form is open")
        if name not in FORM_FIELDS:
            raise KeyError(name)
        setattr(self.form.draft, FORM_FIELDS[name], value)
    
    def close_form(self):
        self.form = None
    
    def submit(self) -> Optional[Book]:
        """
        Validate the open form and send it.
        
        Returns:
            The created or updated Book, or None when validation or the
            request failed (the form then stays open)
        """
        if self.form is None:
            raise RuntimeError("No form is open")
        if self.busy:
            logger.warning("Submit ignored: a request is already in flight")
            return None
        
        form = self.form
        form.errors = validate(form.draft)
        if form.errors:
            return None
        
        self.busy = True
        try:
            if form.is_editing:
                book = self._update(form.editing_id, form.draft)
            else:
                book = self._create(form.draft)
        except BooksClientError as e:
            action = "update" if form.is_editing else "add"
            logger.error(f"Could not {action} book: {e}")
            self.notifier.show(f"Could not {action} book: {e}", ERROR)
            return None
        finally:
            self.busy = False
        
        self.close_form()
        return book
    
    def _create(self, draft: BookDraft) -> Book:
        book = self.client.create_book(draft)
        if self.find(book.id) is not None:
            # Keep ids unique even if the server reuses one we already hold
            self.books = self._without(book.id)
        self.books.append(book)
        self.notifier.show("Book added successfully!")
        return book
    
    def _update(self, book_id: BookId, draft: BookDraft) -> Book:
        existing = self.find(book_id)
        if existing is None:
            raise LookupError(f"No book with id {book_id}")
        self.client.update_book(existing.id, draft)
        updated = merge_draft(existing, draft)
        self.books = [updated if id_key(b.id) == id_key(existing.id) else b for b in self.books]
        self.notifier.show("Book updated successfully!")
        return updated
    
    # Delete confirmation
    
    def request_delete(self, book_id: BookId) -> Book:
        book = self.find(book_id)
        if book is None:
            raise LookupError(f"No book with id {book_id}")
        self.pending_delete = book
        return book
    
    def cancel_delete(self):
        self.pending_delete = None
    
    def confirm_delete(self) -> bool:
        """Delete the book awaiting confirmation. Returns True on success."""
        book = self.pending_delete
        if book is None:
            raise RuntimeError("No delete is awaiting confirmation")
        if self.busy:
            logger.warning("Delete ignored: a request is already in flight")
            return False
        
        self.busy = True
        try:
            self.client.delete_book(book.id)
        except BooksClientError as e:
            logger.error(f"Could not delete book {book.id}: {e}")
            self.notifier.show(f"Could not delete book: {e}", ERROR)
            return False
        finally:
            self.busy = False
        
        self.books = self._without(book.id)
        self.pending_delete = None
        self._clamp_page()
        self.notifier.show("Book deleted successfully!")
        return True
