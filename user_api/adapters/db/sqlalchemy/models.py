from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from user_api.domain.user import MAX_FIELD_LENGTH

class Base(DeclarativeBase): pass

class User(Base):
    __tablename__ = "users"
    id: Mapped[str] = mapped_column(String(36), primary_key=True)           # UUIDをstr保存
    name: Mapped[str] = mapped_column(String(MAX_FIELD_LENGTH), nullable=False)
    email: Mapped[str] = mapped_column(String(MAX_FIELD_LENGTH), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(MAX_FIELD_LENGTH), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
