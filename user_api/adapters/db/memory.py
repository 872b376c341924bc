"""In-memory store satisfying the repository and unit of work ports.

Used by unit tests that exercise use cases without a database. Changes are
staged per unit of work and applied on ``commit``; a process-wide lock
serializes units of work so the uniqueness check and insert are atomic.
"""
import threading

from user_api.application.ports import UnitOfWork, UserRepository
from user_api.domain.errors import DuplicateEmailError
from user_api.domain.user import User, UserId


class InMemoryUserRepository(UserRepository):
    def __init__(self, users: dict[UserId, User] | None = None):
        self._users: dict[UserId, User] = users if users is not None else {}

    def add(self, user: User) -> None:
        self.add_all([user])

    def add_all(self, users: list[User]) -> None:
        for user in users:
            if self.get_by_email(user.email) is not None:
                raise DuplicateEmailError(user.email)
            self._users[user.id] = user.model_copy()

    def update(self, user: User) -> None:
        if user.id in self._users:
            self._users[user.id] = user.model_copy()

    def get_by_id(self, user_id: UserId) -> User | None:
        user = self._users.get(user_id)
        return user.model_copy() if user else None

    def get_by_email(self, email: str) -> User | None:
        for user in self._users.values():
            if user.email == email:
                return user.model_copy()
        return None

    def find_page(self, page: int, size: int) -> tuple[list[User], int]:
        ordered = sorted(self._users.values(), key=lambda u: (u.created_at, str(u.id)))
        start = page * size
        return [u.model_copy() for u in ordered[start:start + size]], len(ordered)

    def delete_by_id(self, user_id: UserId) -> bool:
        return self._users.pop(user_id, None) is not None


class InMemoryUnitOfWork(UnitOfWork):
    def __init__(self):
        self._lock = threading.RLock()
        self._committed: dict[UserId, User] = {}
        self._users: InMemoryUserRepository | None = None

    def __enter__(self) -> "InMemoryUnitOfWork":
        self._lock.acquire()
        self._users = InMemoryUserRepository(dict(self._committed))
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self._users = None
        self._lock.release()

    @property
    def users(self) -> UserRepository:
        assert self._users is not None, "UnitOfWork is not entered."
        return self._users

    def commit(self) -> None:
        assert self._users is not None, "UnitOfWork is not entered."
        self._committed = dict(self._users._users)

    def rollback(self) -> None:
        assert self._users is not None, "UnitOfWork is not entered."
        self._users = InMemoryUserRepository(dict(self._committed))
