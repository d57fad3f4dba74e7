"""
Catalog data model.

Pydantic models for the entities exchanged with the catalog backend:
- Users (held in memory by the auth state manager)
- Books and book recommendations
- Reading lists
- Reviews

Wire names are camelCase (``createdAt``, ``bookIds``); attributes are
snake_case. Fields the backend adds that are not modelled here are kept
so that round-tripping an entity never drops data.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


class CatalogModel(BaseModel):
    """Base for all wire entities."""
    
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )
    
    def to_payload(self, exclude_unset: bool = False) -> dict:
        """Serialize to a JSON-ready dict using wire names."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=not exclude_unset,
            exclude_unset=exclude_unset,
        )


# =============================================================================
# Users
# =============================================================================

class UserRole(str, Enum):
    """Application role of a user."""
    USER = "user"
    ADMIN = "admin"


class User(CatalogModel):
    """The signed-in user."""
    
    id: str
    email: str = ""
    name: str = ""
    role: UserRole = UserRole.USER
    created_at: str = Field(default_factory=utc_now_iso)


# =============================================================================
# Books
# =============================================================================

class BookInput(CatalogModel):
    """Book fields sent on creation; the backend assigns the id."""
    
    title: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    
    description: Optional[str] = None
    cover_image: Optional[str] = None
    genre: Optional[str] = None
    published_year: Optional[int] = None
    isbn: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Dune",
                "author": "Frank Herbert",
                "genre": "Science Fiction",
                "publishedYear": 1965,
            }
        }
    )


class Book(CatalogModel):
    """
    A catalog book as the backend returns it.
    
    Only the id is required; the backend owns the remaining fields and
    may leave them out or use its own rating scale.
    """
    
    id: str
    title: Optional[str] = None
    author: Optional[str] = None
    
    description: Optional[str] = None
    cover_image: Optional[str] = None
    genre: Optional[str] = None
    published_year: Optional[int] = None
    isbn: Optional[str] = None
    rating: Optional[float] = None


class BookRecommendation(CatalogModel):
    """A recommendation derived from a free-text query. Never stored."""
    
    title: str
    author: str = ""
    reason: Optional[str] = None
    confidence: Optional[float] = None


# =============================================================================
# Reading Lists
# =============================================================================

class ReadingListInput(CatalogModel):
    """Reading list fields sent on creation."""
    
    user_id: Optional[str] = None
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    book_ids: list[str] = Field(default_factory=list)


class ReadingListUpdate(CatalogModel):
    """Partial reading list update; only fields that were set are sent."""
    
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    book_ids: Optional[list[str]] = None


class ReadingList(CatalogModel):
    """A user's reading list as the backend returns it."""
    
    id: str
    user_id: Optional[str] = None
    name: str = ""
    description: Optional[str] = None
    book_ids: list[str] = Field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


# =============================================================================
# Reviews
# =============================================================================

class ReviewInput(CatalogModel):
    """Review fields sent on creation."""
    
    rating: int = Field(..., ge=1, le=5)
    comment: str = ""


class Review(CatalogModel):
    """A user's review of one book as the backend returns it."""
    
    id: str
    book_id: Optional[str] = None
    user_id: Optional[str] = None
    rating: Optional[float] = None
    comment: str = ""
    created_at: Optional[str] = None
