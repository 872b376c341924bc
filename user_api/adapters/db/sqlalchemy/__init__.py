from user_api.adapters.db.sqlalchemy.models import Base
from user_api.adapters.db.sqlalchemy.uow import (
    SQLAlchemyUnitOfWork,
    create_db_engine,
    create_session_factory,
)

__all__ = ["Base", "SQLAlchemyUnitOfWork", "create_db_engine", "create_session_factory"]
