"""Tests for the async books client."""
import asyncio
import json

import httpx
import pytest

from bookdash.async_client import AsyncBooksClient
from bookdash.client import BooksApiError, BooksTransportError
from bookdash.models import BookDraft


def run_with(handler, action):
    """Run ``action(client)`` against a stubbed server."""
    async def main():
        async with AsyncBooksClient("http://books.test", transport=httpx.MockTransport(handler)) as client:
            return await action(client)
    
    return asyncio.run(main())


def test_list_books():
    def handler(request):
        assert request.method == "GET"
        assert str(request.url) == "http://books.test/Books"
        return httpx.Response(200, json=[
            {"id": 1, "title": "A", "author": "B", "genre": "Fiction", "publishedYear": 2000},
            {"id": 2, "title": "C", "author": "D", "genre": "History", "publishedYear": "1990"},
        ])
    
    books = run_with(handler, lambda client: client.list_books())
    
    assert [b.published_year for b in books] == [2000, 1990]


def test_create_book():
    def handler(request):
        body = json.loads(request.content)
        assert body["publishedYear"] == 1999
        return httpx.Response(201, json=dict(body, id="abc"))
    
    book = run_with(handler, lambda client: client.create_book(BookDraft("X", "Y", "Fiction", "1999")))
    
    assert book.id == "abc"
    assert book.title == "X"


def test_update_and_delete():
    seen = []
    
    def handler(request):
        seen.append((request.method, request.url.path))
        return httpx.Response(200, json={})
    
    async def action(client):
        await client.update_book(5, BookDraft("X", "Y", "Fiction", "1999"))
        await client.delete_book(5)
    
    run_with(handler, action)
    
    assert seen == [("PUT", "/Books/5"), ("DELETE", "/Books/5")]


def test_error_status_raises():
    def handler(request):
        return httpx.Response(500, json={"error": "boom"})
    
    with pytest.raises(BooksApiError) as excinfo:
        run_with(handler, lambda client: client.delete_book(1))
    
    assert excinfo.value.status_code == 500


def test_transport_error_raises():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)
    
    with pytest.raises(BooksTransportError):
        run_with(handler, lambda client: client.list_books())
