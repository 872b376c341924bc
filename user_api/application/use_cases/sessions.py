import logging

from user_api.application.dto import CreateSessionInput, SessionOutput, UserOutput
from user_api.application.ports import PasswordHasher, TokenIssuer, UnitOfWork
from user_api.domain.errors import InvalidCredentialsError

logger = logging.getLogger(__name__)


class CreateSessionUseCase:
    """Exchange email and password for a bearer token."""

    def __init__(self, uow: UnitOfWork, hasher: PasswordHasher, tokens: TokenIssuer):
        self.uow = uow
        self.hasher = hasher
        self.tokens = tokens

    def execute(self, input: CreateSessionInput) -> SessionOutput:
        with self.uow:
            user = self.uow.users.get_by_email(input.email.strip().lower())
        if user is None or not self.hasher.verify(input.password, user.password_hash):
            logger.warning("failed login attempt")
            raise InvalidCredentialsError()

        token, expires_at = self.tokens.issue(str(user.id))
        logger.info("issued session for user %s", user.id)
        return SessionOutput(token=token, expires_at=expires_at, user=UserOutput.from_user(user))
