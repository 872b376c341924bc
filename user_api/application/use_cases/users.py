import logging
import math

import pydantic

from user_api.application.dto import CreateUserInput, PageOutput, UpdateUserInput, UserOutput
from user_api.application.ports import PasswordHasher, UnitOfWork
from user_api.domain.errors import DuplicateEmailError, FieldError, UserNotFoundError, ValidationError
from user_api.domain.user import User, UserId

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100
# page * size はDBの符号付き64bit整数に収める
MAX_PAGE = (2**63 - 1) // MAX_PAGE_SIZE


def to_validation_error(e: pydantic.ValidationError) -> ValidationError:
    errors = []
    for error in e.errors():
        field = ".".join(str(part) for part in error["loc"]) or None
        errors.append(FieldError(field, error["msg"]))
    return ValidationError(errors)


def parse_user_id(raw: str) -> UserId:
    # 不正な形式のIDは存在しないユーザーとして扱う
    try:
        return UserId.parse(raw)
    except ValueError:
        raise UserNotFoundError(raw)


class CreateUserUseCase:
    def __init__(self, uow: UnitOfWork, hasher: PasswordHasher):
        self.uow = uow
        self.hasher = hasher

    def execute(self, input: CreateUserInput) -> UserOutput:
        if not input.password:
            raise ValidationError([FieldError("password", "password must not be empty")])
        try:
            user = User(
                name=input.name,
                email=input.email,
                password_hash=self.hasher.hash(input.password),
            )
        except pydantic.ValidationError as e:
            raise to_validation_error(e) from e

        with self.uow:
            if self.uow.users.get_by_email(user.email):
                logger.info("rejected user with duplicate email")
                raise DuplicateEmailError(user.email)
            self.uow.users.add(user)
            self.uow.commit()
        logger.info("created user %s", user.id)
        return UserOutput.from_user(user)


class ListUsersUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def execute(self, page: int = 0, size: int = 10) -> PageOutput:
        errors = []
        if not 0 <= page <= MAX_PAGE:
            errors.append(FieldError("page", f"page must be between 0 and {MAX_PAGE}"))
        if not 1 <= size <= MAX_PAGE_SIZE:
            errors.append(FieldError("size", f"size must be between 1 and {MAX_PAGE_SIZE}"))
        if errors:
            raise ValidationError(errors)

        with self.uow:
            users, total = self.uow.users.find_page(page, size)
            return PageOutput(
                content=[UserOutput.from_user(user) for user in users],
                page=page,
                size=size,
                total_elements=total,
                total_pages=math.ceil(total / size),
            )


class FindUserUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def execute(self, user_id: str) -> UserOutput:
        id = parse_user_id(user_id)
        with self.uow:
            user = self.uow.users.get_by_id(id)
            if user is None:
                raise UserNotFoundError(user_id)
            return UserOutput.from_user(user)


class UpdateUserUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def execute(self, user_id: str, input: UpdateUserInput) -> UserOutput:
        id = parse_user_id(user_id)
        with self.uow:
            user = self.uow.users.get_by_id(id)
            if user is None:
                raise UserNotFoundError(user_id)
            try:
                user.change_name(input.name)
                user.change_email(input.email)
            except pydantic.ValidationError as e:
                raise to_validation_error(e) from e

            owner = self.uow.users.get_by_email(user.email)
            if owner is not None and owner.id != user.id:
                logger.info("rejected update of user %s with duplicate email", user.id)
                raise DuplicateEmailError(user.email)
            self.uow.users.update(user)
            self.uow.commit()
        logger.info("updated user %s", user.id)
        return UserOutput.from_user(user)


class DeleteUserUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def execute(self, user_id: str) -> None:
        id = parse_user_id(user_id)
        with self.uow:
            if not self.uow.users.delete_by_id(id):
                logger.info("user %s not found for delete", user_id)
                raise UserNotFoundError(user_id)
            self.uow.commit()
        logger.info("deleted user %s", user_id)
