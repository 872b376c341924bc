"""SQLAlchemy repository and unit of work tests."""
import pytest

from user_api.adapters.db.sqlalchemy import SQLAlchemyUnitOfWork
from user_api.domain.errors import DuplicateEmailError
from user_api.domain.user import UserId


def test_add_and_get(session_factory, random_user):
    user = random_user()

    with SQLAlchemyUnitOfWork(session_factory) as uow:
        uow.users.add(user)
        uow.commit()

    with SQLAlchemyUnitOfWork(session_factory) as uow:
        by_id = uow.users.get_by_id(user.id)
        by_email = uow.users.get_by_email(user.email)

    assert by_id == by_email
    assert by_id.name == user.name
    assert by_id.password_hash == user.password_hash
    assert by_id.created_at.tzinfo is not None


def test_uncommitted_changes_are_discarded(session_factory, random_user):
    user = random_user()

    with SQLAlchemyUnitOfWork(session_factory) as uow:
        uow.users.add(user)

    with SQLAlchemyUnitOfWork(session_factory) as uow:
        assert uow.users.get_by_id(user.id) is None


def test_unique_constraint_maps_to_duplicate_email(session_factory, save_users, random_user):
    existing, = save_users(random_user())
    clash = random_user()
    clash.email = existing.email

    # 事前チェックを通り抜けた同時作成を再現する
    with pytest.raises(DuplicateEmailError):
        with SQLAlchemyUnitOfWork(session_factory) as uow:
            uow.users.add(clash)
            uow.commit()

    with SQLAlchemyUnitOfWork(session_factory) as uow:
        assert uow.users.find_page(0, 10)[1] == 1


def test_find_page(session_factory, save_users, random_user):
    saved = save_users(*(random_user() for _ in range(3)))

    with SQLAlchemyUnitOfWork(session_factory) as uow:
        users, total = uow.users.find_page(1, 2)

    assert total == 3
    assert [u.id for u in users] == [saved[2].id]


def test_delete_by_id_reports_missing(session_factory, save_users, random_user):
    user, = save_users(random_user())

    with SQLAlchemyUnitOfWork(session_factory) as uow:
        assert uow.users.delete_by_id(user.id) is True
        uow.commit()

    with SQLAlchemyUnitOfWork(session_factory) as uow:
        assert uow.users.delete_by_id(user.id) is False
        assert uow.users.delete_by_id(UserId()) is False


def test_users_outside_unit_of_work_fails(session_factory):
    uow = SQLAlchemyUnitOfWork(session_factory)

    with pytest.raises(AssertionError):
        uow.users
