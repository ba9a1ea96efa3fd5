"""Async HTTP client for the books collection endpoint."""
import httpx
from typing import List, Optional, Any
import logging

from bookdash.client import BooksApiError, BooksTransportError, check_status
from bookdash.models import Book, BookDraft, BookId
from bookdash.parse import parse_book, parse_books_response, draft_to_payload

logger = logging.getLogger(__name__)


class AsyncBooksClient:
    """Async counterpart of BooksClient."""
    
    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize async client.
        
        Args:
            base_url: Server root; the collection lives at ``<base_url>/Books``
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used to stub the server
        """
        self.endpoint = f"{base_url.rstrip('/')}/Books"
        
        # Create async HTTP client
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)
    
    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        logger.info(f"Async {method} {url}")
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Async {method} {url} failed: {e}")
            raise BooksTransportError(f"{method} {url} failed: {e}") from e
        
        check_status(method, url, response.status_code, response.text)
        return response
    
    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise BooksApiError(f"Invalid JSON from {response.url}", response.status_code) from e
    
    async def list_books(self) -> List[Book]:
        response = await self._request("GET", self.endpoint)
        return parse_books_response(self._json(response))
    
    async def create_book(self, draft: BookDraft) -> Book:
        response = await self._request("POST", self.endpoint, json=draft_to_payload(draft))
        book = parse_book(self._json(response) or {})
        if book is None:
            raise BooksApiError("Create response did not contain a book with an id", response.status_code)
        return book
    
    async def update_book(self, book_id: BookId, draft: BookDraft) -> None:
        await self._request("PUT", f"{self.endpoint}/{book_id}", json=draft_to_payload(draft))
    
    async def delete_book(self, book_id: BookId) -> None:
        await self._request("DELETE", f"{self.endpoint}/{book_id}")
    
    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
    
    async def __aenter__(self):
        """Async context manager entry."""
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
