"""
Resource Client interface.

One async operation per resource/verb pair. The live HTTP client and the
in-memory mock both implement this contract, so callers never branch on
which one they hold.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, TypeVar, Union

import pydantic

from readshelf.errors import ValidationError
from readshelf.models import (
    Book,
    BookInput,
    BookRecommendation,
    CatalogModel,
    ReadingList,
    ReadingListInput,
    ReadingListUpdate,
    Review,
    ReviewInput,
)


BookLike = Union[BookInput, dict]
ReadingListLike = Union[ReadingListInput, dict]
ReadingListPatch = Union[ReadingListUpdate, dict]
ReviewLike = Union[ReviewInput, dict]

ModelT = TypeVar("ModelT", bound=CatalogModel)


def validate_model(model_cls: type[ModelT], value: Any, operation: str, message: str) -> ModelT:
    """
    Validate caller input or a decoded response body against a model.
    
    Another catalog model is accepted through its wire payload.
    
    Raises:
        ValidationError: If the value does not fit the model
    """
    if isinstance(value, model_cls):
        return value
    if isinstance(value, CatalogModel):
        value = value.to_payload()
    try:
        return model_cls.model_validate(value)
    except pydantic.ValidationError as e:
        raise ValidationError(message=message, operation=operation, detail=str(e)) from e


class ResourceClient(ABC):
    """Abstract base class for catalog resource clients."""
    
    # Books
    
    @abstractmethod
    async def get_books(self) -> list[Book]:
        """List all books in the catalog."""
        pass
    
    @abstractmethod
    async def get_book(self, book_id: str) -> Optional[Book]:
        """Get one book, or None if it does not exist."""
        pass
    
    @abstractmethod
    async def create_book(self, book: BookLike) -> Book:
        """Create a book; the backend assigns its id."""
        pass
    
    @abstractmethod
    async def delete_book(self, book_id: str) -> None:
        """Delete a book."""
        pass
    
    # Recommendations
    
    @abstractmethod
    async def get_recommendations(self, query: str) -> list[BookRecommendation]:
        """Recommend books for a free-text query."""
        pass
    
    # Reading lists
    
    @abstractmethod
    async def get_reading_lists(self) -> list[ReadingList]:
        """List the current user's reading lists."""
        pass
    
    @abstractmethod
    async def create_reading_list(self, reading_list: ReadingListLike) -> ReadingList:
        """Create a reading list."""
        pass
    
    @abstractmethod
    async def update_reading_list(
        self,
        list_id: str,
        changes: ReadingListPatch,
    ) -> ReadingList:
        """Apply a partial update to a reading list."""
        pass
    
    @abstractmethod
    async def delete_reading_list(self, list_id: str) -> None:
        """Delete a reading list."""
        pass
    
    # Reviews
    
    @abstractmethod
    async def get_reviews(self, book_id: str) -> list[Review]:
        """List reviews of a book."""
        pass
    
    @abstractmethod
    async def create_review(self, book_id: str, review: ReviewLike) -> Review:
        """Review a book as the current user."""
        pass
    
    async def close(self) -> None:
        """Release any held resources."""
        return None
    
    async def __aenter__(self) -> "ResourceClient":
        return self
    
    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
