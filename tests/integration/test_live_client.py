"""
Integration tests: live resource client against a fake catalog backend.

The backend is a FastAPI app served in-process through
``httpx.ASGITransport``; auth headers come from a real session resolver
over the in-memory identity provider.
"""

import pytest

from readshelf.errors import NotFoundError, UnauthorizedError
from readshelf.models import Book, ReadingListInput, ReadingListUpdate, ReviewInput

from tests.conftest import create_fake_catalog_app, make_live_client

pytestmark = pytest.mark.asyncio


def last_request(app, method: str, path: str) -> dict:
    matches = [r for r in app.state.requests if r["method"] == method and r["path"] == path]
    assert matches, f"no {method} {path} recorded"
    return matches[-1]


class TestCatalogReads:
    """Public catalog reads."""
    
    async def test_get_books_double_decoded(self, anonymous_client, sample_books_batch):
        """The enveloped list arrives as parsed books."""
        books = await anonymous_client.get_books()
        
        assert books == [Book.model_validate(b) for b in sample_books_batch]
    
    async def test_get_book(self, anonymous_client):
        book = await anonymous_client.get_book("2")
        
        assert book.title == "Dune"
    
    async def test_get_missing_book_is_none(self, anonymous_client):
        assert await anonymous_client.get_book("404id") is None
    
    async def test_backend_owned_fields_are_not_validated(self, identity):
        """Whatever the backend stores comes back, even without an author."""
        app = create_fake_catalog_app([
            {"id": "7", "title": "Anonymous Pamphlet"},
            {"id": "8", "title": "Rated Elsewhere", "author": "Someone", "rating": 9.1},
        ])
        
        async with make_live_client(app, identity) as client:
            books = await client.get_books()
            single = await client.get_book("7")
        
        assert [book.id for book in books] == ["7", "8"]
        assert books[1].rating == 9.1
        assert single.author is None
    
    async def test_reads_send_no_authorization(self, authed_client, fake_backend):
        """Even with a session, public reads stay anonymous."""
        await authed_client.get_books()
        await authed_client.get_book("1")
        
        assert "authorization" not in last_request(fake_backend, "GET", "/api/books")["headers"]
        assert "authorization" not in last_request(fake_backend, "GET", "/api/books/1")["headers"]


class TestAuthorizedWrites:
    """Mutating and user-scoped operations."""
    
    async def test_create_book_with_session(self, authed_client, fake_backend, signed_in_identity, sample_book_data):
        session = await signed_in_identity.fetch_session()
        
        created = await authed_client.create_book(sample_book_data)
        
        headers = last_request(fake_backend, "POST", "/api/books")["headers"]
        assert headers["authorization"] == f"Bearer {session.id_token}"
        assert headers["content-type"] == "application/json"
        assert fake_backend.state.last_body == sample_book_data
        assert (await authed_client.get_book(created.id)).title == sample_book_data["title"]
    
    async def test_create_reading_list_without_session(self, anonymous_client, fake_backend):
        """No session: request goes out without Authorization and still succeeds."""
        created = await anonymous_client.create_reading_list(
            ReadingListInput(name="To read", book_ids=["1", "3"]),
        )
        
        headers = last_request(fake_backend, "POST", "/api/reading-lists")["headers"]
        assert "authorization" not in headers
        assert headers["content-type"] == "application/json"
        assert created.name == "To read"
        assert created.book_ids == ["1", "3"]
        assert created.created_at
    
    async def test_backend_rejects_anonymous(self, anonymous_client, fake_backend):
        """The backend, not the client, enforces access control."""
        fake_backend.state.require_auth = True
        
        with pytest.raises(UnauthorizedError) as exc_info:
            await anonymous_client.delete_book("1")
        
        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Failed to delete book"
        assert "1" in fake_backend.state.books
    
    async def test_delete_book_twice(self, authed_client, fake_backend):
        """Second delete fails; no local state exists to corrupt."""
        await authed_client.delete_book("1")
        
        with pytest.raises(NotFoundError):
            await authed_client.delete_book("1")
        
        assert [b.id for b in await authed_client.get_books()] == ["2", "3"]
    
    async def test_recommendations(self, authed_client, fake_backend):
        results = await authed_client.get_recommendations("sci-fi")
        
        assert [r.title for r in results] == ["Dune"]
        assert results[0].reason == "Because you asked for sci-fi"
        assert fake_backend.state.last_body == {"query": "sci-fi"}
    
    async def test_reading_list_lifecycle(self, authed_client, fake_backend):
        created = await authed_client.create_reading_list({"name": "Winter", "description": "Long nights"})
        
        updated = await authed_client.update_reading_list(
            created.id, ReadingListUpdate(book_ids=["2"]),
        )
        
        assert fake_backend.state.last_body == {"bookIds": ["2"]}
        assert updated.description == "Long nights"
        assert updated.book_ids == ["2"]
        assert [rl.id for rl in await authed_client.get_reading_lists()] == [created.id]
        
        await authed_client.delete_reading_list(created.id)
        
        assert await authed_client.get_reading_lists() == []
        with pytest.raises(NotFoundError):
            await authed_client.update_reading_list(created.id, {"name": "Gone"})
    
    async def test_reviews(self, authed_client, fake_backend):
        review = await authed_client.create_review("2", ReviewInput(rating=4, comment="Dense but great"))
        
        assert "authorization" in last_request(fake_backend, "POST", "/api/books/2/reviews")["headers"]
        assert review.book_id == "2"
        assert await authed_client.get_reviews("2") == [review]
        assert await authed_client.get_reviews("1") == []


class TestSessionChanges:
    """Headers follow the session as it changes."""
    
    async def test_sign_out_drops_authorization(self, fake_backend, signed_in_identity):
        async with make_live_client(fake_backend, signed_in_identity) as client:
            await client.get_reading_lists()
            assert "authorization" in last_request(fake_backend, "GET", "/api/reading-lists")["headers"]
            
            await signed_in_identity.sign_out()
            await client.get_reading_lists()
            assert "authorization" not in last_request(fake_backend, "GET", "/api/reading-lists")["headers"]
