from __future__ import annotations

import hashlib
import json
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from notekeeper.storage.notes_store import _atomic_write_json, _utc_now_iso


def _email_key(email: str) -> str:
    # index files are named by digest so the address never becomes a path
    return hashlib.sha256(email.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class UserRecord:
    id: str
    name: str
    email: str
    hashed_password: str
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "hashed_password": self.hashed_password,
            "created_at": self.created_at,
        }

    def profile(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "created_at": self.created_at,
        }


class UsersStore:
    """Users under <base_dir>/users, plus an email index under <base_dir>/emails.

    The index entry is created with O_EXCL, which is what makes emails unique.
    It is claimed only after the user record is on disk, so a crash between the
    two steps leaves an unreferenced user file rather than a locked email.
    """

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir

    def _user_path(self, user_id: str) -> Path:
        # evitat path traversal
        if not user_id or any(ch in user_id for ch in ["/", "\\"]) or ".." in user_id:
            raise ValueError("Invalid user_id")
        return self.base_dir / "users" / f"{user_id}.json"

    def _email_path(self, email: str) -> Path:
        return self.base_dir / "emails" / f"{_email_key(email)}.json"

    def get(self, user_id: str) -> Optional[UserRecord]:
        p = self._user_path(user_id)
        if not p.exists():
            return None
        raw = json.loads(p.read_text(encoding="utf-8"))
        return UserRecord(**raw)

    def _index_owner(self, idx: Path) -> Optional[str]:
        try:
            return json.loads(idx.read_text(encoding="utf-8"))["user_id"]
        except (ValueError, KeyError):
            # claim still being written by a concurrent signup
            return None

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        idx = self._email_path(email)
        if not idx.exists():
            return None
        user_id = self._index_owner(idx)
        return self.get(user_id) if user_id else None

    def email_taken(self, email: str) -> bool:
        return self._email_path(email).exists()

    def _claim_email(self, idx: Path, user_id: str) -> None:
        idx.parent.mkdir(parents=True, exist_ok=True)
        with idx.open("x", encoding="utf-8") as f:
            json.dump({"user_id": user_id}, f)

    def create(self, name: str, email: str, hashed_password: str) -> UserRecord:
        """Write the user record, then claim the email.

        Raises FileExistsError, leaving no user record behind, when the email
        is already claimed.
        """
        rec = UserRecord(
            id=str(uuid.uuid4()),
            name=name,
            email=email,
            hashed_password=hashed_password,
            created_at=_utc_now_iso(),
        )
        user_path = self._user_path(rec.id)
        _atomic_write_json(user_path, rec.to_dict())

        # raises FileExistsError if another signup claimed the address first
        try:
            self._claim_email(self._email_path(email), rec.id)
        except OSError:
            user_path.unlink(missing_ok=True)
            raise
        return rec
