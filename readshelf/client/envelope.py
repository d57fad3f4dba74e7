"""
Response envelope decoding.

``GET /books`` wraps its payload as ``{"body": "<JSON string>"}``, so the
payload has to be parsed twice. This is the only place that knows.
"""

import json
from typing import Any

from readshelf.errors import ValidationError


def decode_envelope(payload: Any, operation: str, message: str) -> Any:
    """
    Unwrap a double-encoded ``{"body": "<json>"}`` envelope.
    
    Args:
        payload: Already-parsed outer JSON
        operation: Operation name for error context
        message: Human-readable failure message
        
    Returns:
        The decoded inner payload
        
    Raises:
        ValidationError: If the envelope or its body is malformed
    """
    if not isinstance(payload, dict) or "body" not in payload:
        raise ValidationError(
            message=message,
            operation=operation,
            detail="Response is missing the 'body' envelope",
        )
    
    body = payload["body"]
    if not isinstance(body, (str, bytes, bytearray)):
        raise ValidationError(
            message=message,
            operation=operation,
            detail=f"Envelope body must be a JSON string, got {type(body).__name__}",
        )
    
    try:
        return json.loads(body)
    except ValueError as e:
        raise ValidationError(
            message=message,
            operation=operation,
            detail=f"Envelope body is not valid JSON: {e}",
        ) from e
