from datetime import datetime, timedelta, timezone
from typing import Any
import uuid

import jwt

from user_api.application.ports import TokenIssuer

JWT_ALGORITHM = "HS256"


class InvalidTokenError(Exception):
    """The bearer token is missing, malformed, badly signed or expired."""


class JWTTokenIssuer(TokenIssuer):
    def __init__(self, secret: str, expiration_in_hours: int):
        if not secret:
            raise ValueError("token secret must not be empty")
        self.secret = secret
        self.expiration = timedelta(hours=expiration_in_hours)

    def issue(self, subject: str) -> tuple[str, datetime]:
        now = datetime.now(timezone.utc)
        expires = now + self.expiration
        claims: dict[str, Any] = {
            "sub": subject,
            "iat": now,
            "exp": expires,
            "jti": str(uuid.uuid4()),
        }
        token = jwt.encode(claims, self.secret, algorithm=JWT_ALGORITHM)
        return token, expires

    def verify(self, token: str) -> dict:
        try:
            # 署名と有効期限はdecode()が検証する
            return jwt.decode(
                token,
                self.secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError(str(e)) from e
