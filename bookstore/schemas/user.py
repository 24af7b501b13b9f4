"""
User Pydantic Schemas

- UserCredentials: registration body
- LoginCredentials: login body, no password length rule
- PublicUser: user identity without the password hash
- LoginResponse: token plus the identity it was issued for
"""

import uuid

from pydantic import BaseModel, ConfigDict, Field


class UserCredentials(BaseModel):
    """Body of POST /user/register."""

    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Unique username",
        examples=["Jane Doe"],
    )

    password: str = Field(
        ...,
        min_length=6,
        max_length=128,
        description="Plain text password, hashed before storage",
        examples=["what333i"],
    )


class LoginCredentials(BaseModel):
    """Body of POST /user/login."""

    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(..., min_length=1, max_length=255, examples=["Jane Doe"])
    password: str = Field(..., min_length=1, examples=["what333i"])


class PublicUser(BaseModel):
    """The identity returned by login and attached to authenticated requests."""

    id: uuid.UUID
    username: str

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    token: str = Field(..., description="JWT, sent back as 'Authorization: JWT <token>'")
    user: PublicUser
