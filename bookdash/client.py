"""HTTP client for the books collection endpoint."""
import requests
from typing import Optional, List, Any
import logging

from bookdash.models import Book, BookDraft, BookId
from bookdash.parse import parse_book, parse_books_response, draft_to_payload

logger = logging.getLogger(__name__)


class BooksClientError(Exception):
    """Base error for failed calls to the books endpoint."""


class BooksTransportError(BooksClientError):
    """The request never produced an HTTP response."""


class BooksApiError(BooksClientError):
    """The server answered with a non-2xx status or an unusable body."""
    
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def check_status(method: str, url: str, status_code: int, text: str = "") -> None:
    """Raise BooksApiError unless the status code is 2xx."""
    if 200 <= status_code < 300:
        return
    logger.error(f"{method} {url} failed ({status_code}): {text[:200]}")
    raise BooksApiError(f"{method} {url} returned HTTP {status_code}", status_code)


class BooksClient:
    """Client for the ``<base>/Books`` collection. No retries."""
    
    def __init__(self, base_url: str, timeout: Optional[float] = 10):
        """
        Initialize the books client.
        
        Args:
            base_url: Server root; the collection lives at ``<base_url>/Books``
            timeout: Request timeout in seconds, None to wait forever
        """
        self.endpoint = f"{base_url.rstrip('/')}/Books"
        self.timeout = timeout
        
        # Create session for connection pooling
        self.session = requests.Session()
    
    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        logger.info(f"{method} {url}")
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise BooksTransportError(f"{method} {url} failed: {e}") from e
        
        check_status(method, url, response.status_code, response.text)
        return response
    
    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise BooksApiError(f"Invalid JSON from {response.url}", response.status_code) from e
    
    def list_books(self) -> List[Book]:
        """Fetch the whole collection."""
        response = self._request("GET", self.endpoint)
        books = parse_books_response(self._json(response))
        logger.info(f"Fetched {len(books)} books")
        return books
    
    def create_book(self, draft: BookDraft) -> Book:
        """
        Create a book and return it as the server stored it.
        
        Args:
            draft: Validated form contents
            
        Returns:
            Book carrying the server-assigned id
        """
        response = self._request("POST", self.endpoint, json=draft_to_payload(draft))
        book = parse_book(self._json(response) or {})
        if book is None:
            raise BooksApiError("Create response did not contain a book with an id", response.status_code)
        logger.info(f"Created book {book.id}")
        return book
    
    def update_book(self, book_id: BookId, draft: BookDraft) -> None:
        """Replace the stored fields of one book."""
        self._request("PUT", f"{self.endpoint}/{book_id}", json=draft_to_payload(draft))
        logger.info(f"Updated book {book_id}")
    
    def delete_book(self, book_id: BookId) -> None:
        """Delete one book."""
        self._request("DELETE", f"{self.endpoint}/{book_id}")
        logger.info(f"Deleted book {book_id}")
    
    def close(self):
        """Close the session."""
        self.session.close()
    
    def __enter__(self):
        """Context manager entry."""
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
