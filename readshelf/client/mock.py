"""
Mock Resource Client

In-memory catalog for development without a backend. Same contract as
the live client: missing resources behave like a backend 404 and
mutations are visible to later reads on the same instance.
"""

import asyncio
import re
import uuid
from typing import Optional

from loguru import logger

from readshelf.client.base import (
    BookLike,
    ReadingListLike,
    ReadingListPatch,
    ResourceClient,
    ReviewLike,
    validate_model,
)
from readshelf.errors import NotFoundError
from readshelf.identity.base import IdentityProvider
from readshelf.models import (
    Book,
    BookInput,
    BookRecommendation,
    ReadingList,
    ReadingListInput,
    ReadingListUpdate,
    Review,
    ReviewInput,
    utc_now_iso,
)


ANONYMOUS_USER_ID = "anonymous"

SAMPLE_BOOKS = [
    {
        "id": "1",
        "title": "Dune",
        "author": "Frank Herbert",
        "genre": "Science Fiction",
        "publishedYear": 1965,
        "description": "A desert planet, a noble family and a fight over the spice melange.",
        "rating": 4.6,
    },
    {
        "id": "2",
        "title": "1984",
        "author": "George Orwell",
        "genre": "Dystopian",
        "publishedYear": 1949,
        "description": "A totalitarian state watches every citizen.",
        "rating": 4.5,
    },
    {
        "id": "3",
        "title": "Pride and Prejudice",
        "author": "Jane Austen",
        "genre": "Romance",
        "publishedYear": 1813,
        "description": "Manners, marriage and first impressions in Regency England.",
        "rating": 4.4,
    },
    {
        "id": "4",
        "title": "The Left Hand of Darkness",
        "author": "Ursula K. Le Guin",
        "genre": "Science Fiction",
        "publishedYear": 1969,
        "description": "An envoy on a winter world whose people have no fixed sex.",
        "rating": 4.3,
    },
    {
        "id": "5",
        "title": "The Hobbit",
        "author": "J.R.R. Tolkien",
        "genre": "Fantasy",
        "publishedYear": 1937,
        "description": "A reluctant hobbit joins a company of dwarves on a quest for treasure.",
        "rating": 4.7,
    },
]

MAX_RECOMMENDATIONS = 5


def _tokens(text: str) -> set[str]:
    return {t for t in re.split(r"[^a-z0-9]+", text.lower()) if len(t) > 1}


class MockResourceClient(ResourceClient):
    """
    Resource client backed by in-memory dicts.
    
    Every read returns copies, so callers can never mutate the store.
    """
    
    def __init__(
        self,
        books: Optional[list[dict]] = None,
        identity: Optional[IdentityProvider] = None,
        latency: float = 0.0,
    ):
        """
        Initialize mock client.
        
        Args:
            books: Seed catalog (defaults to SAMPLE_BOOKS)
            identity: Identity provider used to attribute reviews and
                reading lists to the current user
            latency: Simulated delay per call, in seconds
        """
        self.identity = identity
        self.latency = latency
        
        seed = SAMPLE_BOOKS if books is None else books
        self._books: dict[str, Book] = {}
        for item in seed:
            book = Book.model_validate(item)
            self._books[book.id] = book
        
        self._reading_lists: dict[str, ReadingList] = {}
        self._reviews: dict[str, Review] = {}
        
        logger.info(f"MockResourceClient initialized with {len(self._books)} books")
    
    async def _simulate_io(self) -> None:
        await asyncio.sleep(self.latency)
    
    async def _current_user_id(self) -> str:
        if self.identity is None:
            return ANONYMOUS_USER_ID
        try:
            user = await self.identity.get_current_user()
        except Exception:
            return ANONYMOUS_USER_ID
        return user.user_id
    
    @staticmethod
    def _not_found(operation: str, message: str, resource_id: str) -> NotFoundError:
        return NotFoundError(
            message=message,
            operation=operation,
            status_code=404,
            detail=f"No resource with identifier '{resource_id}' exists",
        )
    
    # Books
    
    async def get_books(self) -> list[Book]:
        await self._simulate_io()
        return [book.model_copy(deep=True) for book in self._books.values()]
    
    async def get_book(self, book_id: str) -> Optional[Book]:
        await self._simulate_io()
        book = self._books.get(book_id)
        return book.model_copy(deep=True) if book else None
    
    async def create_book(self, book: BookLike) -> Book:
        await self._simulate_io()
        data = validate_model(BookInput, book, "create_book", "Failed to create book").to_payload()
        data["id"] = uuid.uuid4().hex
        
        created = Book.model_validate(data)
        self._books[created.id] = created
        return created.model_copy(deep=True)
    
    async def delete_book(self, book_id: str) -> None:
        await self._simulate_io()
        if self._books.pop(book_id, None) is None:
            raise self._not_found("delete_book", "Failed to delete book", book_id)
    
    # Recommendations
    
    async def get_recommendations(self, query: str) -> list[BookRecommendation]:
        """Rank seeded books by keyword overlap with the query."""
        await self._simulate_io()
        query_tokens = _tokens(query)
        if not query_tokens:
            return []
        
        scored = []
        for book in self._books.values():
            text = " ".join(filter(None, [book.title, book.author, book.genre, book.description]))
            overlap = query_tokens & _tokens(text)
            if overlap:
                scored.append((len(overlap) / len(query_tokens), book, sorted(overlap)))
        
        scored.sort(key=lambda item: (-item[0], item[1].title or ""))
        
        return [
            BookRecommendation(
                title=book.title or "",
                author=book.author or "",
                reason=f"Matches: {', '.join(terms)}",
                confidence=round(score, 3),
            )
            for score, book, terms in scored[:MAX_RECOMMENDATIONS]
        ]
    
    # Reading lists
    
    async def _owned_list(self, list_id: str, operation: str, message: str) -> ReadingList:
        """Look up a list of the current user; other users' lists look missing."""
        reading_list = self._reading_lists.get(list_id)
        if reading_list is None or reading_list.user_id != await self._current_user_id():
            raise self._not_found(operation, message, list_id)
        return reading_list
    
    async def get_reading_lists(self) -> list[ReadingList]:
        await self._simulate_io()
        user_id = await self._current_user_id()
        return [
            reading_list.model_copy(deep=True)
            for reading_list in self._reading_lists.values()
            if reading_list.user_id == user_id
        ]
    
    async def create_reading_list(self, reading_list: ReadingListLike) -> ReadingList:
        await self._simulate_io()
        data = validate_model(
            ReadingListInput, reading_list, "create_reading_list", "Failed to create reading list",
        ).to_payload()
        
        now = utc_now_iso()
        data.update({
            "id": uuid.uuid4().hex,
            "userId": await self._current_user_id(),
            "createdAt": now,
            "updatedAt": now,
        })
        
        created = ReadingList.model_validate(data)
        self._reading_lists[created.id] = created
        return created.model_copy(deep=True)
    
    async def update_reading_list(
        self,
        list_id: str,
        changes: ReadingListPatch,
    ) -> ReadingList:
        await self._simulate_io()
        operation, message = "update_reading_list", "Failed to update reading list"
        
        existing = await self._owned_list(list_id, operation, message)
        patch = validate_model(ReadingListUpdate, changes, operation, message)
        
        data = existing.to_payload()
        data.update(patch.to_payload(exclude_unset=True))
        data.update({
            "id": existing.id,
            "userId": existing.user_id,
            "createdAt": existing.created_at,
            "updatedAt": utc_now_iso(),
        })
        
        updated = validate_model(ReadingList, data, operation, message)
        self._reading_lists[list_id] = updated
        return updated.model_copy(deep=True)
    
    async def delete_reading_list(self, list_id: str) -> None:
        await self._simulate_io()
        await self._owned_list(list_id, "delete_reading_list", "Failed to delete reading list")
        del self._reading_lists[list_id]
    
    # Reviews
    
    async def get_reviews(self, book_id: str) -> list[Review]:
        await self._simulate_io()
        return [
            review.model_copy(deep=True)
            for review in self._reviews.values()
            if review.book_id == book_id
        ]
    
    async def create_review(self, book_id: str, review: ReviewLike) -> Review:
        await self._simulate_io()
        operation, message = "create_review", "Failed to create review"
        
        if book_id not in self._books:
            raise self._not_found(operation, message, book_id)
        
        data = validate_model(ReviewInput, review, operation, message).to_payload()
        data.update({
            "id": uuid.uuid4().hex,
            "bookId": book_id,
            "userId": await self._current_user_id(),
            "createdAt": utc_now_iso(),
        })
        
        created = Review.model_validate(data)
        self._reviews[created.id] = created
        return created.model_copy(deep=True)
