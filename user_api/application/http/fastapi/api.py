from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, Query, Request, Response, status
from sqlalchemy import Engine
from sqlalchemy.orm import sessionmaker

from user_api.adapters.db.sqlalchemy import (
    Base,
    SQLAlchemyUnitOfWork,
    create_db_engine,
    create_session_factory,
)
from user_api.adapters.security.bcrypt_hasher import BcryptPasswordHasher
from user_api.adapters.security.jwt_tokens import JWTTokenIssuer
from user_api.application.dto import CreateSessionInput, CreateUserInput, UpdateUserInput
from user_api.application.http.fastapi.errors import register_exception_handlers
from user_api.application.http.fastapi.schemas import (
    CreateSessionRequest,
    CreateUserRequest,
    ErrorEntry,
    SessionResponse,
    UpdateUserRequest,
    UserPageResponse,
    UserResponse,
)
from user_api.application.http.fastapi.security import require_token
from user_api.application.ports import PasswordHasher
from user_api.application.use_cases import (
    CreateSessionUseCase,
    CreateUserUseCase,
    DeleteUserUseCase,
    FindUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
)
from user_api.application.use_cases.users import MAX_PAGE, MAX_PAGE_SIZE
from user_api.config import Settings

users_router = APIRouter(prefix="/users", tags=["users"])
sessions_router = APIRouter(prefix="/sessions", tags=["sessions"])

ERROR_LIST = {"model": list[ErrorEntry], "description": "Field errors"}


def get_uow(request: Request) -> SQLAlchemyUnitOfWork:
    return SQLAlchemyUnitOfWork(request.app.state.session_factory)

def get_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher

def get_create_user_uc(
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    hasher: PasswordHasher = Depends(get_hasher),
):
    return CreateUserUseCase(uow=uow, hasher=hasher)

def get_list_users_uc(uow: SQLAlchemyUnitOfWork = Depends(get_uow)):
    return ListUsersUseCase(uow=uow)

def get_find_user_uc(uow: SQLAlchemyUnitOfWork = Depends(get_uow)):
    return FindUserUseCase(uow=uow)

def get_update_user_uc(uow: SQLAlchemyUnitOfWork = Depends(get_uow)):
    return UpdateUserUseCase(uow=uow)

def get_delete_user_uc(uow: SQLAlchemyUnitOfWork = Depends(get_uow)):
    return DeleteUserUseCase(uow=uow)

def get_create_session_uc(
    request: Request,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    hasher: PasswordHasher = Depends(get_hasher),
):
    return CreateSessionUseCase(uow=uow, hasher=hasher, tokens=request.app.state.tokens)


@users_router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: ERROR_LIST},
)
def create_user(
    data: CreateUserRequest,
    uc: CreateUserUseCase = Depends(get_create_user_uc),
):
    return uc.execute(CreateUserInput(**data.model_dump()))


@users_router.get(
    "",
    response_model=UserPageResponse,
    responses={400: ERROR_LIST},
    dependencies=[Depends(require_token)],
)
def list_users(
    page: int = Query(0, ge=0, le=MAX_PAGE),
    size: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
    uc: ListUsersUseCase = Depends(get_list_users_uc),
):
    return uc.execute(page=page, size=size)


@users_router.get("/{user_id}", response_model=UserResponse, dependencies=[Depends(require_token)])
def find_user(user_id: str, uc: FindUserUseCase = Depends(get_find_user_uc)):
    return uc.execute(user_id)


@users_router.put(
    "/{user_id}",
    response_model=UserResponse,
    responses={400: ERROR_LIST},
    dependencies=[Depends(require_token)],
)
def update_user(
    user_id: str,
    data: UpdateUserRequest,
    uc: UpdateUserUseCase = Depends(get_update_user_uc),
):
    return uc.execute(user_id, UpdateUserInput(**data.model_dump()))


@users_router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(require_token)],
)
def delete_user(user_id: str, uc: DeleteUserUseCase = Depends(get_delete_user_uc)):
    uc.execute(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@sessions_router.post(
    "",
    response_model=SessionResponse,
    responses={400: ERROR_LIST, 403: {"model": list[ErrorEntry], "description": "Invalid credentials"}},
)
def create_session(
    data: CreateSessionRequest,
    uc: CreateSessionUseCase = Depends(get_create_session_uc),
):
    return uc.execute(CreateSessionInput(**data.model_dump()))


def create_app(
    settings: Settings,
    session_factory: sessionmaker | None = None,
    hasher: PasswordHasher | None = None,
    create_schema: bool = False,
) -> FastAPI:
    engine: Engine | None = None
    if session_factory is None:
        engine = create_db_engine(settings.database_url, echo=settings.sql_echo)
        session_factory = create_session_factory(engine)
    if create_schema:
        Base.metadata.create_all(session_factory.kw["bind"])

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        # 自分で作成したエンジンのみ破棄する
        if engine is not None:
            engine.dispose()

    app = FastAPI(title="user-api", lifespan=lifespan)
    app.state.session_factory = session_factory
    app.state.hasher = hasher or BcryptPasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.tokens = JWTTokenIssuer(settings.token_secret, settings.token_expiration_in_hours)

    register_exception_handlers(app)
    app.include_router(users_router)
    app.include_router(sessions_router)
    return app
