from user_api.application.use_cases.sessions import CreateSessionUseCase
from user_api.application.use_cases.users import (
    CreateUserUseCase,
    DeleteUserUseCase,
    FindUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
)

__all__ = [
    "CreateSessionUseCase",
    "CreateUserUseCase",
    "DeleteUserUseCase",
    "FindUserUseCase",
    "ListUsersUseCase",
    "UpdateUserUseCase",
]
