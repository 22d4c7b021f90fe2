from __future__ import annotations

import uuid
from typing import Any, Mapping, Optional

from notekeeper.app_logger import get_logger
from notekeeper.errors import Forbidden, NotFound, ValidationError
from notekeeper.storage.notes_store import Note, NotesStore

logger = get_logger(__name__)

TITLE_MAX_LEN = 50
SORT_ORDERS = ("newest", "oldest")


def clean_title(title: Optional[str]) -> str:
    title = (title or "").strip()
    if not title:
        raise ValidationError("Please add a title")
    if len(title) > TITLE_MAX_LEN:
        raise ValidationError(f"Title cannot be more than {TITLE_MAX_LEN} characters")
    return title


def clean_content(content: Optional[str]) -> str:
    if content is None or not content.strip():
        raise ValidationError("Please add content")
    return content


def filter_and_sort(notes: list[Note], search: Optional[str] = None, sort: Optional[str] = None) -> list[Note]:
    """Case-insensitive search over title/content, then order by created_at."""
    out = list(notes)
    sort = (sort or "").strip() or None
    if search and search.strip():
        q = search.strip().lower()
        out = [n for n in out if q in n.title.lower() or q in n.content.lower()]
    if sort is not None:
        if sort not in SORT_ORDERS:
            raise ValidationError(f"sort must be one of: {', '.join(SORT_ORDERS)}")
        out.sort(key=lambda n: n.created_at, reverse=(sort == "newest"))
    return out


def _parse_note_id(note_id: str | uuid.UUID) -> uuid.UUID:
    if isinstance(note_id, uuid.UUID):
        return note_id
    try:
        return uuid.UUID(str(note_id))
    except ValueError:
        raise NotFound("Note not found")


class NoteService:
    """CRUD on notes for an already-authenticated user id.

    Ownership is checked by loading the note by id and comparing its owner,
    so a missing note (NotFound) and someone else's note (Forbidden) stay
    distinguishable.
    """

    def __init__(self, store: NotesStore):
        self.store = store

    def _load_owned(self, user_id: str, note_id: str | uuid.UUID) -> Note:
        note = self.store.get_note(_parse_note_id(note_id))
        if note is None:
            raise NotFound("Note not found")
        if note.owner_user_id != user_id:
            logger.warning("user %s denied access to note %s", user_id, note.id)
            raise Forbidden()
        return note

    def list(self, user_id: str, search: Optional[str] = None, sort: Optional[str] = None) -> list[Note]:
        notes = self.store.list_notes(owner_user_id=user_id)
        if search is None and sort is None:
            return notes
        return filter_and_sort(notes, search=search, sort=sort)

    def get(self, user_id: str, note_id: str | uuid.UUID) -> Note:
        return self._load_owned(user_id, note_id)

    def create(self, user_id: str, title: str, content: str) -> Note:
        title = clean_title(title)
        content = clean_content(content)
        note = self.store.create_note(owner_user_id=user_id, title=title, content=content)
        logger.debug("note %s created by %s", note.id, user_id)
        return note

    def update(self, user_id: str, note_id: str | uuid.UUID, patch: Mapping[str, Any]) -> Note:
        existing = self._load_owned(user_id, note_id)

        title = existing.title
        content = existing.content
        if patch.get("title") is not None:
            title = clean_title(patch["title"])
        if patch.get("content") is not None:
            content = clean_content(patch["content"])

        updated = self.store.update_note(existing.id, title=title, content=content)
        if updated is None:
            # deleted between load and write
            raise NotFound("Note not found")
        return updated

    def delete(self, user_id: str, note_id: str | uuid.UUID) -> str:
        existing = self._load_owned(user_id, note_id)
        if not self.store.delete_note(existing.id):
            raise NotFound("Note not found")
        logger.debug("note %s deleted by %s", existing.id, user_id)
        return str(existing.id)
