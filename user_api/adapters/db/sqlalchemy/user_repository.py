from datetime import timezone
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from user_api.adapters.db.sqlalchemy import models
from user_api.application.ports import UserRepository
from user_api.domain.errors import DuplicateEmailError
from user_api.domain.user import User, UserId


def to_entity(user_model: models.User) -> User:
    created_at = user_model.created_at
    # SQLiteはタイムゾーンを保持しない
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return User(
        id=UserId(value=UUID(user_model.id)),
        name=user_model.name,
        email=user_model.email,
        password_hash=user_model.password_hash,
        created_at=created_at,
    )


class SQLAlchemyUserRepository(UserRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, user: User) -> None:
        self.add_all([user])

    def add_all(self, users: list[User]) -> None:
        for user in users:
            self.session.add(models.User(
                id=str(user.id),
                name=user.name,
                email=user.email,
                password_hash=user.password_hash,
                created_at=user.created_at,
            ))
        self._flush(users)

    def update(self, user: User) -> None:
        user_model = self.session.get(models.User, str(user.id))
        if user_model is None:
            return
        user_model.name = user.name
        user_model.email = user.email
        user_model.password_hash = user.password_hash
        self._flush([user])

    def get_by_id(self, user_id: UserId) -> User | None:
        user_model = self.session.get(models.User, str(user_id))
        if user_model:
            return to_entity(user_model)
        return None

    def get_by_email(self, email: str) -> User | None:
        user_model = self.session.scalars(
            select(models.User).filter_by(email=email)
        ).first()
        if user_model:
            return to_entity(user_model)
        return None

    def find_page(self, page: int, size: int) -> tuple[list[User], int]:
        total = self.session.scalar(select(func.count()).select_from(models.User)) or 0
        user_models = self.session.scalars(
            select(models.User)
            .order_by(models.User.created_at, models.User.id)
            .offset(page * size)
            .limit(size)
        ).all()
        return [to_entity(user_model) for user_model in user_models], total

    def delete_by_id(self, user_id: UserId) -> bool:
        result = self.session.execute(
            delete(models.User).where(models.User.id == str(user_id))
        )
        return result.rowcount > 0

    def _flush(self, users: list[User]) -> None:
        # 一意制約違反は同時作成の競合を含めてここで検出する
        try:
            self.session.flush()
        except IntegrityError as e:
            emails = ", ".join(user.email for user in users)
            raise DuplicateEmailError(emails) from e
