import bcrypt

from user_api.application.ports import PasswordHasher


class BcryptPasswordHasher(PasswordHasher):
    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, raw: str) -> str:
        # bcryptは72バイトを超える入力を受け付けない
        hashed = bcrypt.hashpw(raw.encode("utf-8")[:72], bcrypt.gensalt(rounds=self.rounds))
        return hashed.decode("utf-8")

    def verify(self, raw: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(raw.encode("utf-8")[:72], hashed.encode("utf-8"))
        except ValueError:
            return False
