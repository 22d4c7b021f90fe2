from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from notekeeper.errors import InvalidToken


class TokenIssuer:
    """Issues and verifies stateless HS256 session tokens.

    Claims are ``sub`` (user id), ``iat`` and ``exp``. There is no revocation
    list: a token stays valid until ``exp``.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expires_minutes: int = 60):
        if not secret:
            raise RuntimeError("JWT secret is not set")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    def issue(self, user_id: str) -> str:
        now = datetime.now(timezone.utc)
        exp = now + timedelta(minutes=self.expires_minutes)
        payload = {"sub": user_id, "iat": int(now.timestamp()), "exp": int(exp.timestamp())}
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> dict:
        try:
            return jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except JWTError as exc:
            raise InvalidToken() from exc

    def verify(self, token: str) -> str:
        if not token:
            raise InvalidToken("Missing token")
        sub = self.decode(token).get("sub")
        if not sub:
            raise InvalidToken("Invalid token")
        return str(sub)
