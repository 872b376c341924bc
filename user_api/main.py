"""Entry points: the ASGI app, the ``user-api`` server and ``user-api-token``."""
import argparse
from functools import lru_cache

import uvicorn
from fastapi import FastAPI

from user_api.adapters.security.jwt_tokens import JWTTokenIssuer
from user_api.application.http.fastapi import create_app
from user_api.config import Settings
from user_api.log import configure_logging


@lru_cache()
def get_app() -> FastAPI:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    return create_app(settings)


def run() -> None:
    parser = argparse.ArgumentParser(description="Serve the users API.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--create-schema", action="store_true", help="create missing tables on startup")
    args = parser.parse_args()

    settings = Settings.from_env()
    configure_logging(settings.log_level)
    app = create_app(settings, create_schema=args.create_schema)
    uvicorn.run(app, host=args.host, port=args.port, log_level=settings.log_level.lower())


def issue_token() -> None:
    parser = argparse.ArgumentParser(description="Print a bearer token for a subject.")
    parser.add_argument("subject", help="value of the token's sub claim, e.g. a user id")
    args = parser.parse_args()

    settings = Settings.from_env()
    token, expires_at = JWTTokenIssuer(
        settings.token_secret, settings.token_expiration_in_hours
    ).issue(args.subject)
    print(f"Bearer {token}")
    print(f"expires at {expires_at.isoformat()}")


if __name__ == "__main__":
    run()
