"""
Authentication Service

Registers users, resolves them by id or username, and validates
credentials.

Security:
=========
- Passwords are hashed with bcrypt before storage
- Unknown usernames and wrong passwords produce the same error, so the
  login endpoint cannot be used to enumerate accounts
"""

import logging
import uuid

from bookstore.exceptions import ConflictError, NotFoundError, UnauthorizedError
from bookstore.models import User
from bookstore.repositories import UserRepository
from bookstore.schemas.user import PublicUser
from bookstore.services.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Incorrect username and password combination"


class AuthService:
    def __init__(self, users: UserRepository) -> None:
        self.users = users

    def get_user(self, id_or_username: str | uuid.UUID) -> User:
        """
        Look a user up by id or username.

        Raises:
            NotFoundError: if no user matches
        """
        user = self.users.get_user(id_or_username)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def create_user(self, username: str, password: str) -> None:
        """
        Register a new user.

        The uniqueness check is a lookup, not a lock; the unique index on
        users.username catches a concurrent duplicate.

        Raises:
            ConflictError: if the username is taken
        """
        if self.users.get_user(username) is not None:
            logger.info(f"Registration rejected, username taken: {username}")
            raise ConflictError("User already exists")

        self.users.create_user(username, hash_password(password))
        logger.info(f"New user registered: {username}")

    def validate_user(self, username: str, password: str) -> PublicUser:
        """
        Check a username/password pair.

        Returns:
            The user's public identity (no password hash)

        Raises:
            UnauthorizedError: same message whether the user is unknown or
            the password is wrong
        """
        user = self.users.get_user(username)

        if user is None:
            logger.warning(f"Login failed: user not found for {username}")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if not verify_password(password, user.hashed_password):
            logger.warning(f"Login failed: incorrect password for {username}")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        return PublicUser(id=user.id, username=user.username)

    def issue_token(self, user: PublicUser) -> str:
        return create_access_token({"sub": str(user.id)})
