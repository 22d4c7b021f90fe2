import json
import os
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from notekeeper.app_logger import get_logger

logger = get_logger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _atomic_write_json(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
        f.flush()
        os.fsync(f.fileno())
    tmp_path.replace(path)


def _notes_dir(base_dir: Path) -> Path:
    return base_dir / "notes"


def _note_path(base_dir: Path, note_id: uuid.UUID) -> Path:
    # note_id is always a parsed UUID, so it cannot escape the notes dir
    return _notes_dir(base_dir) / f"{note_id}.json"


@dataclass(frozen=True)
class Note:
    id: uuid.UUID
    owner_user_id: str
    title: str
    content: str
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "owner_user_id": self.owner_user_id,
            "title": self.title,
            "content": self.content,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Note":
        return cls(
            id=uuid.UUID(raw["id"]),
            owner_user_id=raw["owner_user_id"],
            title=raw["title"],
            content=raw["content"],
            created_at=raw["created_at"],
            updated_at=raw.get("updated_at", raw["created_at"]),
        )


class NotesStore:
    """One JSON document per note under <base_dir>/notes.

    Lookups are by note id only; ownership is checked by the caller.
    """

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir

    def create_note(self, owner_user_id: str, title: str, content: str) -> Note:
        now = _utc_now_iso()
        note = Note(
            id=uuid.uuid4(),
            owner_user_id=owner_user_id,
            title=title,
            content=content,
            created_at=now,
            updated_at=now,
        )
        _atomic_write_json(_note_path(self.base_dir, note.id), note.to_dict())
        return note

    def get_note(self, note_id: uuid.UUID) -> Note | None:
        path = _note_path(self.base_dir, note_id)
        if not path.exists():
            return None
        raw = json.loads(path.read_text(encoding="utf-8"))
        return Note.from_dict(raw)

    def list_notes(self, owner_user_id: str) -> list[Note]:
        notes_dir = _notes_dir(self.base_dir)
        if not notes_dir.exists():
            return []
        out: list[Note] = []
        for p in sorted(notes_dir.glob("*.json")):
            try:
                note = Note.from_dict(json.loads(p.read_text(encoding="utf-8")))
            except (OSError, ValueError, KeyError) as exc:
                logger.warning("skipping unreadable note file %s: %s", p.name, exc)
                continue
            if note.owner_user_id == owner_user_id:
                out.append(note)
        return out

    def update_note(self, note_id: uuid.UUID, title: str, content: str) -> Note | None:
        path = _note_path(self.base_dir, note_id)
        if not path.exists():
            return None

        raw = json.loads(path.read_text(encoding="utf-8"))
        raw["title"] = title
        raw["content"] = content
        raw["updated_at"] = _utc_now_iso()

        _atomic_write_json(path, raw)
        return Note.from_dict(raw)

    def delete_note(self, note_id: uuid.UUID) -> bool:
        path = _note_path(self.base_dir, note_id)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        return True
