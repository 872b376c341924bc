from datetime import datetime

from pydantic import BaseModel

from user_api.domain.user import User

# DTO (Data Transfer Object - データ転送オブジェクト)

class CreateUserInput(BaseModel):
    name: str
    email: str
    password: str

class UpdateUserInput(BaseModel):
    name: str
    email: str

class CreateSessionInput(BaseModel):
    email: str
    password: str

class UserOutput(BaseModel):
    id: str
    name: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> "UserOutput":
        return cls(id=str(user.id), name=user.name, email=user.email)

class PageOutput(BaseModel):
    content: list[UserOutput]
    page: int
    size: int
    total_elements: int
    total_pages: int

class SessionOutput(BaseModel):
    token: str
    type: str = "Bearer"
    expires_at: datetime
    user: UserOutput
