from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, EmailStr, StringConstraints

from user_api.domain.user import MAX_FIELD_LENGTH

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=MAX_FIELD_LENGTH)]
Password = Annotated[str, StringConstraints(min_length=1, max_length=MAX_FIELD_LENGTH)]


class CreateUserRequest(BaseModel):
    name: NonEmptyStr
    email: EmailStr
    password: Password

class UpdateUserRequest(BaseModel):
    name: NonEmptyStr
    email: EmailStr

class CreateSessionRequest(BaseModel):
    email: EmailStr
    password: Password

class UserResponse(BaseModel):
    id: str
    name: str
    email: str

class UserPageResponse(BaseModel):
    content: list[UserResponse]
    page: int
    size: int
    total_elements: int
    total_pages: int

class SessionResponse(BaseModel):
    token: str
    type: str
    expires_at: datetime
    user: UserResponse

class ErrorEntry(BaseModel):
    field: str | None
    message: str
