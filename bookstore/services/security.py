"""
Security Service

Handles password hashing and JWT token operations.

Security Features:
==================
1. Password hashing with bcrypt (passlib)
2. JWT access token generation and validation (python-jose, HS256)

Usage:
    from bookstore.services.security import hash_password, verify_password

    hashed = hash_password("what333i")
    is_valid = verify_password("what333i", hashed)
"""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from bookstore.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

# -------------------------------------------------------------------------
# Password Hashing Configuration
# -------------------------------------------------------------------------
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ALGORITHM = "HS256"
ACCESS_TOKEN_TYPE = "access"


def hash_password(password: str) -> str:
    """
    Hash a plain text password using bcrypt.

    Example:
        >>> hashed = hash_password("what333i")
        >>> hashed.startswith("$2b$")
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a bcrypt hash.

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    data: dict,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Payload data to encode in the token (e.g. {"sub": user_id})
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode.update({"exp": expire, "type": ACCESS_TOKEN_TYPE})

    return jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=ALGORITHM,
    )


def decode_token(token: str) -> dict | None:
    """
    Decode and validate a JWT access token.

    Returns:
        Decoded payload if valid, None if invalid, expired or not an access token
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[ALGORITHM],
        )
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        return None

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        logger.warning("Token type mismatch: expected access token")
        return None

    return payload
