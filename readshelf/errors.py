"""
Error taxonomy for ReadShelf client operations.

Every failed Resource Client call raises exactly one of these kinds.
The human-readable message names the failed operation; the HTTP
status and response text, when available, travel alongside it.
"""

from typing import Optional


class ReadShelfError(Exception):
    """Base exception for ReadShelf client errors."""
    
    code = "INTERNAL_ERROR"
    
    def __init__(
        self,
        message: str,
        operation: str = "",
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
    ):
        self.message = message
        self.operation = operation
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)
    
    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"operation={self.operation!r}, status_code={self.status_code!r})"
        )


class NotFoundError(ReadShelfError):
    """Resource does not exist."""
    
    code = "NOT_FOUND"


class UnauthorizedError(ReadShelfError):
    """Backend rejected the credentials (or their absence)."""
    
    code = "UNAUTHORIZED"


class TransportError(ReadShelfError):
    """Request never completed: connection, DNS or timeout failure."""
    
    code = "TRANSPORT_ERROR"


class ServerError(ReadShelfError):
    """Backend answered with a non-success status."""
    
    code = "SERVER_ERROR"


class ValidationError(ReadShelfError):
    """Request rejected as invalid, or response could not be decoded."""
    
    code = "VALIDATION_ERROR"


def error_for_status(
    status_code: int,
    message: str,
    operation: str,
    detail: Optional[str] = None,
) -> ReadShelfError:
    """
    Map a non-success HTTP status onto the error taxonomy.
    
    Args:
        status_code: HTTP status returned by the backend
        message: Human-readable message naming the operation
        operation: Operation identifier (e.g. ``"get_books"``)
        detail: Response text, if any
        
    Returns:
        The matching ReadShelfError subclass instance
    """
    if status_code in (401, 403):
        error_cls = UnauthorizedError
    elif status_code == 404:
        error_cls = NotFoundError
    elif status_code in (400, 409, 422):
        error_cls = ValidationError
    else:
        error_cls = ServerError
    
    return error_cls(
        message=message,
        operation=operation,
        status_code=status_code,
        detail=detail,
    )
