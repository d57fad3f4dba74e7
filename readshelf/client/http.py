"""
Live Resource Client

Talks to the catalog backend over HTTP with httpx. Mutating and
user-scoped operations attach the session resolver's headers; public
catalog reads do not. A single failed attempt is final: no retries.
"""

from typing import Any, Optional
from urllib.parse import quote

import httpx
from loguru import logger

from readshelf.client.base import (
    BookLike,
    ModelT,
    ReadingListLike,
    ReadingListPatch,
    ResourceClient,
    ReviewLike,
    validate_model,
)
from readshelf.client.envelope import decode_envelope
from readshelf.errors import (
    ServerError,
    TransportError,
    ValidationError,
    error_for_status,
)
from readshelf.models import (
    Book,
    BookInput,
    BookRecommendation,
    ReadingList,
    ReadingListInput,
    ReadingListUpdate,
    Review,
    ReviewInput,
)
from readshelf.session import JSON_CONTENT_TYPE, SessionResolver


def _path_id(value: str) -> str:
    return quote(str(value), safe="")


class HttpResourceClient(ResourceClient):
    """
    Resource client for the live catalog backend.
    
    The underlying ``httpx.AsyncClient`` is created on first use and
    released by ``close()`` (or leaving ``async with``).
    """
    
    def __init__(
        self,
        base_url: str,
        session_resolver: SessionResolver,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize client.
        
        Args:
            base_url: Backend base URL (``API_BASE_URL``)
            session_resolver: Source of authorization headers
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests, custom networking)
        """
        if not base_url:
            raise ValueError("API base URL is required for the live resource client")
        
        self.base_url = base_url.rstrip("/")
        self.session_resolver = session_resolver
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
    
    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client
    
    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
    
    # -------------------------------------------------------------------------
    # Request plumbing
    # -------------------------------------------------------------------------
    
    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        message: str,
        auth: bool,
        json: Optional[Any] = None,
    ) -> httpx.Response:
        """
        Issue one request.
        
        The header fetch always completes before the request is sent.
        
        Raises:
            TransportError: If the request never completed
            ValidationError: If the response body could not be decoded
            ServerError: For any other request failure, e.g. too many redirects
        """
        if auth:
            headers = await self.session_resolver.get_auth_headers()
        else:
            headers = {"Content-Type": JSON_CONTENT_TYPE}
        
        client = await self._get_client()
        
        try:
            response = await client.request(method, path, headers=headers, json=json)
        except httpx.TransportError as e:
            logger.warning(f"{method} {path} failed: {type(e).__name__}: {e}")
            raise TransportError(
                message=message,
                operation=operation,
                detail=str(e) or type(e).__name__,
            ) from e
        except httpx.DecodingError as e:
            logger.warning(f"{method} {path} returned an undecodable body: {e}")
            raise ValidationError(
                message=message,
                operation=operation,
                detail=f"Response body could not be decoded: {e}",
            ) from e
        except httpx.RequestError as e:
            logger.warning(f"{method} {path} failed: {type(e).__name__}: {e}")
            raise ServerError(
                message=message,
                operation=operation,
                detail=str(e) or type(e).__name__,
            ) from e
        
        logger.debug(f"{method} {path} -> {response.status_code}")
        return response
    
    @staticmethod
    def _check(response: httpx.Response, operation: str, message: str) -> None:
        if not response.is_success:
            logger.warning(f"{operation} failed with status {response.status_code}")
            raise error_for_status(
                status_code=response.status_code,
                message=message,
                operation=operation,
                detail=response.text or None,
            )
    
    @staticmethod
    def _json(response: httpx.Response, operation: str, message: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ValidationError(
                message=message,
                operation=operation,
                status_code=response.status_code,
                detail=f"Response is not valid JSON: {e}",
            ) from e
    
    @staticmethod
    def _parse_list(
        model_cls: type[ModelT],
        data: Any,
        operation: str,
        message: str,
    ) -> list[ModelT]:
        if not isinstance(data, list):
            raise ValidationError(
                message=message,
                operation=operation,
                detail=f"Expected a JSON array, got {type(data).__name__}",
            )
        return [validate_model(model_cls, item, operation, message) for item in data]
    
    # -------------------------------------------------------------------------
    # Books
    # -------------------------------------------------------------------------
    
    async def get_books(self) -> list[Book]:
        operation, message = "get_books", "Failed to fetch books"
        
        response = await self._request("GET", "/books", operation, message, auth=False)
        self._check(response, operation, message)
        
        books = decode_envelope(self._json(response, operation, message), operation, message)
        return self._parse_list(Book, books, operation, message)
    
    async def get_book(self, book_id: str) -> Optional[Book]:
        operation, message = "get_book", "Failed to fetch book"
        
        response = await self._request(
            "GET", f"/books/{_path_id(book_id)}", operation, message, auth=False,
        )
        if response.status_code == 404:
            return None
        self._check(response, operation, message)
        
        return validate_model(Book, self._json(response, operation, message), operation, message)
    
    async def create_book(self, book: BookLike) -> Book:
        operation, message = "create_book", "Failed to create book"
        payload = validate_model(BookInput, book, operation, message).to_payload()
        payload.pop("id", None)
        
        response = await self._request(
            "POST", "/books", operation, message, auth=True, json=payload,
        )
        self._check(response, operation, message)
        
        return validate_model(Book, self._json(response, operation, message), operation, message)
    
    async def delete_book(self, book_id: str) -> None:
        operation, message = "delete_book", "Failed to delete book"
        
        response = await self._request(
            "DELETE", f"/books/{_path_id(book_id)}", operation, message, auth=True,
        )
        self._check(response, operation, message)
    
    # -------------------------------------------------------------------------
    # Recommendations
    # -------------------------------------------------------------------------
    
    async def get_recommendations(self, query: str) -> list[BookRecommendation]:
        operation, message = "get_recommendations", "Failed to get recommendations"
        
        response = await self._request(
            "POST", "/recommendations", operation, message, auth=True, json={"query": query},
        )
        self._check(response, operation, message)
        
        data = self._json(response, operation, message)
        if not isinstance(data, dict) or "recommendations" not in data:
            raise ValidationError(
                message=message,
                operation=operation,
                detail="Response is missing 'recommendations'",
            )
        return self._parse_list(BookRecommendation, data["recommendations"], operation, message)
    
    # -------------------------------------------------------------------------
    # Reading lists
    # -------------------------------------------------------------------------
    
    async def get_reading_lists(self) -> list[ReadingList]:
        operation, message = "get_reading_lists", "Failed to fetch reading lists"
        
        response = await self._request("GET", "/reading-lists", operation, message, auth=True)
        self._check(response, operation, message)
        
        return self._parse_list(
            ReadingList, self._json(response, operation, message), operation, message,
        )
    
    async def create_reading_list(self, reading_list: ReadingListLike) -> ReadingList:
        operation, message = "create_reading_list", "Failed to create reading list"
        payload = validate_model(ReadingListInput, reading_list, operation, message).to_payload()
        for server_field in ("id", "createdAt", "updatedAt"):
            payload.pop(server_field, None)
        
        response = await self._request(
            "POST", "/reading-lists", operation, message, auth=True, json=payload,
        )
        self._check(response, operation, message)
        
        return validate_model(
            ReadingList, self._json(response, operation, message), operation, message,
        )
    
    async def update_reading_list(
        self,
        list_id: str,
        changes: ReadingListPatch,
    ) -> ReadingList:
        operation, message = "update_reading_list", "Failed to update reading list"
        payload = validate_model(ReadingListUpdate, changes, operation, message).to_payload(
            exclude_unset=True,
        )
        
        response = await self._request(
            "PUT", f"/reading-lists/{_path_id(list_id)}", operation, message,
            auth=True, json=payload,
        )
        self._check(response, operation, message)
        
        return validate_model(
            ReadingList, self._json(response, operation, message), operation, message,
        )
    
    async def delete_reading_list(self, list_id: str) -> None:
        operation, message = "delete_reading_list", "Failed to delete reading list"
        
        response = await self._request(
            "DELETE", f"/reading-lists/{_path_id(list_id)}", operation, message, auth=True,
        )
        self._check(response, operation, message)
    
    # -------------------------------------------------------------------------
    # Reviews
    # -------------------------------------------------------------------------
    
    async def get_reviews(self, book_id: str) -> list[Review]:
        operation, message = "get_reviews", "Failed to fetch reviews"
        
        response = await self._request(
            "GET", f"/books/{_path_id(book_id)}/reviews", operation, message, auth=False,
        )
        self._check(response, operation, message)
        
        return self._parse_list(Review, self._json(response, operation, message), operation, message)
    
    async def create_review(self, book_id: str, review: ReviewLike) -> Review:
        operation, message = "create_review", "Failed to create review"
        payload = validate_model(ReviewInput, review, operation, message).to_payload()
        
        response = await self._request(
            "POST", f"/books/{_path_id(book_id)}/reviews", operation, message,
            auth=True, json=payload,
        )
        self._check(response, operation, message)
        
        return validate_model(Review, self._json(response, operation, message), operation, message)
