"""
Bearer token verification.

Every request is verified on its own; nothing about a caller is kept between
requests. Two providers are supported:

- firebase: Firebase ID tokens, checked with the Firebase Admin SDK
- jwt: locally signed tokens (python-jose), for development and tests

Both resolve a token to the caller's subject id, which owns their jobs.
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import firebase_admin
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials as firebase_credentials
from firebase_admin.exceptions import FirebaseError
from jose import JWTError, jwt

from jobloom.core.config import Settings, settings

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Raised when a bearer token cannot be verified"""
    pass


class TokenVerifier:
    """Base class for token verifiers"""

    def verify(self, token: str) -> str:
        """Return the subject id for a valid token or raise AuthenticationError"""
        raise NotImplementedError


class FirebaseTokenVerifier(TokenVerifier):
    """Verifies Firebase ID tokens against the project's signing keys"""

    def __init__(self, app: firebase_admin.App):
        self.app = app

    def verify(self, token: str) -> str:
        try:
            decoded = firebase_auth.verify_id_token(token, app=self.app)
        except (ValueError, FirebaseError) as e:
            raise AuthenticationError(str(e)) from e

        uid = decoded.get("uid")
        if not uid:
            raise AuthenticationError("Token has no uid claim")
        return uid


class JWTTokenVerifier(TokenVerifier):
    """Verifies tokens signed with the shared JWT secret"""

    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        self.secret_key = secret_key
        self.algorithm = algorithm

    def verify(self, token: str) -> str:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise AuthenticationError(str(e)) from e

        subject = payload.get("sub")
        if not subject:
            raise AuthenticationError("Token has no sub claim")
        return subject


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token for the jwt provider.

    Args:
        subject: Subject id the token is issued for
        expires_delta: Optional expiration time delta (default: ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        Encoded JWT token as a string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "sub": subject,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def init_firebase_app(credentials_blob: str) -> firebase_admin.App:
    """
    Initialize the default Firebase app from a service-account JSON blob.

    Reuses the default app if it was already initialized in this process.

    Raises:
        ValueError: If the blob is empty or not valid JSON
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    if not credentials_blob:
        raise ValueError("FIREBASE_CREDENTIALS is not set")

    cert = firebase_credentials.Certificate(json.loads(credentials_blob))
    app = firebase_admin.initialize_app(cert)
    logger.info(f"Firebase app initialized for project {app.project_id}")
    return app


def build_token_verifier(config: Settings) -> TokenVerifier:
    """Build the verifier selected by AUTH_PROVIDER"""
    provider = config.AUTH_PROVIDER.lower()

    if provider == "firebase":
        return FirebaseTokenVerifier(init_firebase_app(config.FIREBASE_CREDENTIALS))
    if provider == "jwt":
        logger.warning("Using local JWT verification - not for production use")
        return JWTTokenVerifier(config.JWT_SECRET_KEY, config.JWT_ALGORITHM)

    raise ValueError(f"Unknown AUTH_PROVIDER: {config.AUTH_PROVIDER}")
