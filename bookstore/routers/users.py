"""
User Router

Handles registration and login:
- POST /user/register: create an account
- POST /user/login: exchange credentials for a JWT

Security:
=========
- Passwords are hashed with bcrypt before storage
- Plain text passwords are never logged or stored
- Tokens are sent back as "Authorization: JWT <token>" on later requests
"""

import logging

from fastapi import APIRouter, status

from bookstore.dependencies import AuthServiceDep
from bookstore.schemas.common import Envelope, ErrorResponse, envelope
from bookstore.schemas.user import LoginCredentials, LoginResponse, UserCredentials

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/user",
    tags=["Users"],
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        401: {"model": ErrorResponse, "description": "Bad credentials"},
        409: {"model": ErrorResponse, "description": "Username already exists"},
    },
)


@router.post(
    "/register",
    response_model=Envelope[None],
    status_code=status.HTTP_200_OK,
    summary="Register a new user",
)
def register(credentials: UserCredentials, auth: AuthServiceDep) -> dict:
    """
    Create a new user account.

    Returns 409 if the username is already taken.
    """
    auth.create_user(credentials.username, credentials.password)
    return envelope("User registered successfully", status.HTTP_200_OK)


@router.post(
    "/login",
    response_model=Envelope[LoginResponse],
    summary="Login with username and password",
)
def login(credentials: LoginCredentials, auth: AuthServiceDep) -> dict:
    """
    Authenticate and receive an access token.

    Unknown usernames and wrong passwords get the same 401 response.
    """
    user = auth.validate_user(credentials.username, credentials.password)
    token = auth.issue_token(user)

    logger.info(f"User logged in: {user.username}")
    return envelope(
        "User logged in successfully",
        status.HTTP_200_OK,
        LoginResponse(token=token, user=user),
    )
