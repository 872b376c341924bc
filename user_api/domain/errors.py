class DomainError(Exception): ...


class FieldError(dict):
    def __init__(self, field: str | None, message: str):
        super().__init__(field=field, message=message)


class ValidationError(DomainError):
    def __init__(self, errors: list[FieldError]):
        super().__init__("; ".join(f"{e['field']}: {e['message']}" for e in errors))
        self.errors = errors


class DuplicateEmailError(DomainError):
    def __init__(self, email: str):
        super().__init__(f"Email {email} is already in use.")
        self.email = email
        self.errors = [FieldError("email", "email already in use")]


class UserNotFoundError(DomainError):
    def __init__(self, user_id: str):
        super().__init__(f"User {user_id} not found.")
        self.user_id = user_id


class InvalidCredentialsError(DomainError):
    def __init__(self):
        super().__init__("invalid email or password")
        self.errors = [FieldError(None, "invalid email or password")]
