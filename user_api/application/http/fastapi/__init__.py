from user_api.application.http.fastapi.api import create_app

__all__ = ["create_app"]
