from __future__ import annotations

from dataclasses import dataclass

from notekeeper.app_logger import get_logger
from notekeeper.errors import DuplicateEmail, InvalidCredentials, InvalidToken, ValidationError
from notekeeper.storage.users_store import UserRecord, UsersStore
from notekeeper.utils.auth_hash import PasswordHasher
from notekeeper.utils.jwt_auth import TokenIssuer

logger = get_logger(__name__)


@dataclass(frozen=True)
class AuthResult:
    user: UserRecord
    token: str


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def _looks_like_email(email: str) -> bool:
    local, sep, domain = email.partition("@")
    return bool(sep and local and domain) and "@" not in domain and " " not in email


class AuthService:
    def __init__(self, users: UsersStore, tokens: TokenIssuer, hasher: PasswordHasher):
        self.users = users
        self.tokens = tokens
        self.hasher = hasher

    def signup(self, name: str, email: str, password: str) -> AuthResult:
        name = (name or "").strip()
        email = normalize_email(email)
        if not name or not email or not password:
            raise ValidationError("Please add all fields")
        if not _looks_like_email(email):
            raise ValidationError("Please add a valid email")

        if self.users.email_taken(email):
            raise DuplicateEmail()

        hpw = self.hasher.hash(password)  # never store plaintext
        try:
            user = self.users.create(name=name, email=email, hashed_password=hpw)
        except FileExistsError:
            # lost a race with a concurrent signup for the same address
            raise DuplicateEmail()

        logger.info("user signed up: %s", user.id)
        return AuthResult(user=user, token=self.tokens.issue(user.id))

    def login(self, email: str, password: str) -> AuthResult:
        rec = self.users.get_by_email(normalize_email(email))
        # same error for unknown email and wrong password
        if rec is None or not self.hasher.verify(password or "", rec.hashed_password):
            logger.warning("failed login attempt")
            raise InvalidCredentials()

        return AuthResult(user=rec, token=self.tokens.issue(rec.id))

    def authenticate(self, token: str) -> str:
        return self.tokens.verify(token)

    def current_user(self, user_id: str) -> UserRecord:
        try:
            rec = self.users.get(user_id)
        except ValueError:
            rec = None
        if rec is None:
            raise InvalidToken("User not found")
        return rec
