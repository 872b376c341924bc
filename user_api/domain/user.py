from datetime import datetime, timezone
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

# usersテーブルの文字列カラム長
MAX_FIELD_LENGTH = 255


#
# 値オブジェクト
#
class UserId(BaseModel):
    value: UUID = Field(default_factory=uuid4)
    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, raw: str) -> "UserId":
        return cls(value=UUID(raw))

    def __str__(self) -> str:
        return str(self.value)


#
# エンティティ
#
class User(BaseModel):
    id: UserId = Field(default_factory=UserId)
    name: str
    email: EmailStr
    password_hash: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(validate_assignment=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
        if len(v) > MAX_FIELD_LENGTH:
            raise ValueError(f"name must be at most {MAX_FIELD_LENGTH} characters")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    def change_name(self, new_name: str) -> None:
        self.name = new_name

    def change_email(self, new_email: str) -> None:
        self.email = new_email
