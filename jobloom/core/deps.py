"""
FastAPI dependencies for authentication and process-scoped clients.

The token verifier, completion client and cache client are built once in the
application lifespan and kept on app.state; these dependencies hand them to
endpoints so tests can swap them via app.dependency_overrides.
"""

import logging
from typing import Optional

import redis
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from fastapi.security.utils import get_authorization_scheme_param

from jobloom.core.security import AuthenticationError, TokenVerifier
from jobloom.services.completion_client import CompletionClient

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>)
# auto_error is off so a missing or malformed header gets our own 401
security = HTTPBearer(auto_error=False)

UNAUTHORIZED = "Unauthorized"


def unauthorized_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=UNAUTHORIZED,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_token_verifier(request: Request) -> TokenVerifier:
    return request.app.state.token_verifier


def get_completion_client(request: Request) -> CompletionClient:
    return request.app.state.completion_client


def get_cache(request: Request) -> Optional[redis.Redis]:
    return getattr(request.app.state, "cache", None)


def verify_token(verifier: TokenVerifier, token: Optional[str]) -> Optional[str]:
    """Return the subject id for token, or None if it is missing or fails verification"""
    if not token:
        return None

    try:
        return verifier.verify(token)
    except AuthenticationError as e:
        logger.warning(f"Token verification failed: {e}")
        return None


def uid_from_header(verifier: TokenVerifier, authorization: Optional[str]) -> Optional[str]:
    """
    Resolve a raw Authorization header to a subject id.

    Used where the bearer dependency never ran, e.g. when the request body
    could not be parsed.
    """
    scheme, token = get_authorization_scheme_param(authorization)
    if scheme.lower() != "bearer":
        return None
    return verify_token(verifier, token)


def get_current_uid(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> str:
    """
    Verify the bearer token and return the caller's subject id.

    Raises:
        HTTPException 401: If the header is missing or malformed, or the token fails verification
    """
    uid = verify_token(verifier, credentials.credentials if credentials else None)
    if uid is None:
        raise unauthorized_exception()
    return uid
