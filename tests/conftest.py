"""
Pytest configuration and fixtures for ReadShelf client tests.
"""

import json
import uuid
from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from fastapi import APIRouter, FastAPI, HTTPException, Request, Response

from readshelf.client.http import HttpResourceClient
from readshelf.identity.memory import InMemoryIdentityProvider
from readshelf.models import utc_now_iso
from readshelf.reporting import CollectingSink
from readshelf.session import SessionResolver


TEST_EMAIL = "reader@example.com"
TEST_PASSWORD = "correct-horse-battery"
TEST_NAME = "Test Reader"

FAKE_BASE_URL = "http://test/api"


# =============================================================================
# Data Fixtures
# =============================================================================

@pytest.fixture
def sample_book_data() -> dict:
    """Sample book payload (wire names)."""
    return {
        "title": "The Great Gatsby",
        "author": "F. Scott Fitzgerald",
        "genre": "Classic",
        "publishedYear": 1925,
        "description": "A story of decadence and excess in the Jazz Age.",
        "isbn": "9780743273565",
    }


@pytest.fixture
def sample_books_batch() -> list[dict]:
    """Books already stored by the fake backend."""
    return [
        {"id": "1", "title": "1984", "author": "George Orwell", "genre": "Dystopian"},
        {"id": "2", "title": "Dune", "author": "Frank Herbert", "genre": "Science Fiction"},
        {"id": "3", "title": "Emma", "author": "Jane Austen", "genre": "Romance"},
    ]


# =============================================================================
# Identity Fixtures
# =============================================================================

@pytest.fixture
def identity() -> InMemoryIdentityProvider:
    """Identity provider with no registered accounts."""
    return InMemoryIdentityProvider()


@pytest_asyncio.fixture
async def registered_identity(identity) -> InMemoryIdentityProvider:
    """Identity provider with one registered, signed-out account."""
    await identity.sign_up(TEST_EMAIL, TEST_PASSWORD, {"email": TEST_EMAIL, "name": TEST_NAME})
    return identity


@pytest_asyncio.fixture
async def signed_in_identity(registered_identity) -> InMemoryIdentityProvider:
    """Identity provider with the test account signed in."""
    await registered_identity.sign_in(TEST_EMAIL, TEST_PASSWORD)
    return registered_identity


@pytest.fixture
def sink() -> CollectingSink:
    """Notification sink that records everything."""
    return CollectingSink()


# =============================================================================
# Fake Catalog Backend
# =============================================================================

def create_fake_catalog_app(books: list[dict]) -> FastAPI:
    """
    Build a FastAPI app that behaves like the catalog backend.
    
    ``app.state.requests`` records every request's method, path and
    headers; ``app.state.last_body`` holds the last JSON body received.
    Set ``app.state.require_auth`` to reject anonymous mutating calls
    with 401.
    """
    app = FastAPI()
    app.state.books = {book["id"]: dict(book) for book in books}
    app.state.reading_lists = {}
    app.state.reviews = {}
    app.state.requests = []
    app.state.last_body = None
    app.state.require_auth = False
    
    @app.middleware("http")
    async def record_requests(request: Request, call_next):
        app.state.requests.append({
            "method": request.method,
            "path": request.url.path,
            "headers": dict(request.headers),
        })
        return await call_next(request)
    
    async def read_json(request: Request) -> dict:
        app.state.last_body = await request.json()
        return app.state.last_body
    
    def check_auth(request: Request) -> None:
        if app.state.require_auth and "authorization" not in request.headers:
            raise HTTPException(status_code=401, detail="Unauthorized")
    
    router = APIRouter(prefix="/api")
    
    @router.get("/books")
    async def list_books():
        return {"body": json.dumps(list(app.state.books.values()))}
    
    @router.get("/books/{book_id}")
    async def get_book(book_id: str):
        if book_id not in app.state.books:
            raise HTTPException(status_code=404, detail="Book not found")
        return app.state.books[book_id]
    
    @router.post("/books", status_code=201)
    async def create_book(request: Request):
        check_auth(request)
        book = {**(await read_json(request)), "id": uuid.uuid4().hex}
        app.state.books[book["id"]] = book
        return book
    
    @router.delete("/books/{book_id}")
    async def delete_book(book_id: str, request: Request):
        check_auth(request)
        if app.state.books.pop(book_id, None) is None:
            raise HTTPException(status_code=404, detail="Book not found")
        return Response(status_code=204)
    
    @router.post("/recommendations")
    async def recommend(request: Request):
        check_auth(request)
        query = (await read_json(request))["query"]
        return {
            "recommendations": [
                {"title": "Dune", "author": "Frank Herbert", "reason": f"Because you asked for {query}"},
            ]
        }
    
    @router.get("/reading-lists")
    async def list_reading_lists(request: Request):
        check_auth(request)
        return list(app.state.reading_lists.values())
    
    @router.post("/reading-lists", status_code=201)
    async def create_reading_list(request: Request):
        check_auth(request)
        now = utc_now_iso()
        reading_list = {
            "userId": "user-1",
            **(await read_json(request)),
            "id": uuid.uuid4().hex,
            "createdAt": now,
            "updatedAt": now,
        }
        app.state.reading_lists[reading_list["id"]] = reading_list
        return reading_list
    
    @router.put("/reading-lists/{list_id}")
    async def update_reading_list(list_id: str, request: Request):
        check_auth(request)
        if list_id not in app.state.reading_lists:
            raise HTTPException(status_code=404, detail="Reading list not found")
        reading_list = app.state.reading_lists[list_id]
        reading_list.update(await read_json(request))
        reading_list["updatedAt"] = utc_now_iso()
        return reading_list
    
    @router.delete("/reading-lists/{list_id}")
    async def delete_reading_list(list_id: str, request: Request):
        check_auth(request)
        if app.state.reading_lists.pop(list_id, None) is None:
            raise HTTPException(status_code=404, detail="Reading list not found")
        return Response(status_code=204)
    
    @router.get("/books/{book_id}/reviews")
    async def list_reviews(book_id: str):
        return [r for r in app.state.reviews.values() if r["bookId"] == book_id]
    
    @router.post("/books/{book_id}/reviews", status_code=201)
    async def create_review(book_id: str, request: Request):
        check_auth(request)
        if book_id not in app.state.books:
            raise HTTPException(status_code=404, detail="Book not found")
        review = {
            **(await read_json(request)),
            "id": uuid.uuid4().hex,
            "bookId": book_id,
            "userId": "user-1",
            "createdAt": utc_now_iso(),
        }
        app.state.reviews[review["id"]] = review
        return review
    
    app.include_router(router)
    return app


@pytest.fixture
def fake_backend(sample_books_batch) -> FastAPI:
    """Fake catalog backend seeded with sample_books_batch."""
    return create_fake_catalog_app(sample_books_batch)


def make_live_client(app: FastAPI, identity) -> HttpResourceClient:
    """Live client wired to an in-process ASGI app."""
    return HttpResourceClient(
        base_url=FAKE_BASE_URL,
        session_resolver=SessionResolver(identity),
        transport=httpx.ASGITransport(app=app),
    )


@pytest_asyncio.fixture
async def anonymous_client(fake_backend, identity) -> AsyncGenerator[HttpResourceClient, None]:
    """Live client with nobody signed in."""
    async with make_live_client(fake_backend, identity) as client:
        yield client


@pytest_asyncio.fixture
async def authed_client(fake_backend, signed_in_identity) -> AsyncGenerator[HttpResourceClient, None]:
    """Live client with the test account signed in."""
    async with make_live_client(fake_backend, signed_in_identity) as client:
        yield client
