"""
API key authentication for the status API.
"""

from typing import Optional
from fastapi import Header, HTTPException, Request, status


def verify_api_key(request: Request, x_api_key: Optional[str] = Header(None)) -> Optional[str]:
    """
    Verify API key from x-api-key header.

    Authentication is skipped when no api_key is configured.

    Args:
        request: Incoming request (carries the configured key on app.state)
        x_api_key: API key from header

    Returns:
        Validated API key, or None when authentication is disabled

    Raises:
        HTTPException: If API key is missing or invalid (401)
    """
    expected_key = request.app.state.context.config.api_key

    if not expected_key:
        return None

    if not x_api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing x-api-key header"
        )

    if x_api_key != expected_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key"
        )

    return x_api_key


# Alias for consistency with route usage
validate_api_key = verify_api_key
