from abc import ABC, abstractmethod
from datetime import datetime

from user_api.domain.user import User, UserId


class UserRepository(ABC):
    @abstractmethod
    def add(self, user: User) -> None: ...

    @abstractmethod
    def add_all(self, users: list[User]) -> None: ...

    @abstractmethod
    def update(self, user: User) -> None: ...

    @abstractmethod
    def get_by_id(self, user_id: UserId) -> User | None: ...

    @abstractmethod
    def get_by_email(self, email: str) -> User | None: ...

    @abstractmethod
    def find_page(self, page: int, size: int) -> tuple[list[User], int]:
        """Return the users on ``page`` (0-based) and the total user count."""

    @abstractmethod
    def delete_by_id(self, user_id: UserId) -> bool:
        """Delete the user; False when no such user exists."""


class UnitOfWork(ABC):
    @abstractmethod
    def __enter__(self) -> "UnitOfWork": ...

    @abstractmethod
    def __exit__(self, exc_type, exc_value, traceback) -> None: ...

    @property
    @abstractmethod
    def users(self) -> UserRepository: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...


class PasswordHasher(ABC):
    @abstractmethod
    def hash(self, raw: str) -> str: ...

    @abstractmethod
    def verify(self, raw: str, hashed: str) -> bool: ...


class TokenIssuer(ABC):
    @abstractmethod
    def issue(self, subject: str) -> tuple[str, datetime]: ...

    @abstractmethod
    def verify(self, token: str) -> dict: ...
