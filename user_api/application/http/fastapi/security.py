import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from user_api.adapters.security.jwt_tokens import InvalidTokenError
from user_api.application.ports import TokenIssuer

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.tokens


def unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def require_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> dict:
    """Verify the bearer token and return its claims, raise 401 otherwise."""
    if credentials is None:
        raise unauthorized("Not authenticated")
    try:
        return tokens.verify(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning("rejected bearer token: %s", e)
        raise unauthorized("Invalid token") from e
