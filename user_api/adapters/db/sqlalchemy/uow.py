from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from user_api.adapters.db.sqlalchemy.user_repository import SQLAlchemyUserRepository
from user_api.application.ports import UnitOfWork, UserRepository


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        # インメモリDBは全コネクションで同じDBを共有する
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, echo=echo, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=True, expire_on_commit=False)


# データベースの変更を伴う単一のビジネスロジック全体をラップするデザインパターン
class SQLAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self.session: Session | None = None
        self._users: UserRepository | None = None

    def __enter__(self) -> "SQLAlchemyUnitOfWork":
        self.session = self._session_factory()
        assert self.session is not None, "UnitOfWork is not entered."
        self.session.begin()
        self._users = SQLAlchemyUserRepository(self.session)
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        try:
            if exc_type:
                self.rollback()
        finally:
            if self.session:
                self.session.close()
            self.session = None
            self._users = None

    @property
    def users(self) -> UserRepository:
        assert self._users is not None, "UnitOfWork is not entered."
        return self._users

    def commit(self) -> None:
        assert self.session is not None, "UnitOfWork is not entered."
        self.session.commit()

    def rollback(self) -> None:
        assert self.session is not None, "UnitOfWork is not entered."
        self.session.rollback()
