from typing import Optional

from fastapi import APIRouter, Depends, Query

from notekeeper.api.deps import get_current_user, get_note_service
from notekeeper.models.notes import NoteCreate, NoteDeleted, NoteOut, NoteUpdate
from notekeeper.services.note_service import NoteService

router = APIRouter(prefix="/notes", tags=["notes"])


@router.get("", response_model=list[NoteOut])
def list_notes(
    search: Optional[str] = Query(default=None),
    sort: Optional[str] = Query(default=None),
    user_id: str = Depends(get_current_user),
    notes: NoteService = Depends(get_note_service),
) -> list[NoteOut]:
    return [NoteOut(**n.to_dict()) for n in notes.list(user_id, search=search, sort=sort)]


@router.post("", response_model=NoteOut)
def create_note(
    payload: NoteCreate,
    user_id: str = Depends(get_current_user),
    notes: NoteService = Depends(get_note_service),
) -> NoteOut:
    note = notes.create(user_id, title=payload.title, content=payload.content)
    return NoteOut(**note.to_dict())


# note ids are taken as plain strings; anything that is not a UUID is a 404
@router.get("/{note_id}", response_model=NoteOut)
def get_note(
    note_id: str,
    user_id: str = Depends(get_current_user),
    notes: NoteService = Depends(get_note_service),
) -> NoteOut:
    return NoteOut(**notes.get(user_id, note_id).to_dict())


@router.put("/{note_id}", response_model=NoteOut)
def update_note(
    note_id: str,
    payload: NoteUpdate,
    user_id: str = Depends(get_current_user),
    notes: NoteService = Depends(get_note_service),
) -> NoteOut:
    updated = notes.update(user_id, note_id, payload.model_dump(exclude_unset=True))
    return NoteOut(**updated.to_dict())


@router.delete("/{note_id}", response_model=NoteDeleted)
def delete_note(
    note_id: str,
    user_id: str = Depends(get_current_user),
    notes: NoteService = Depends(get_note_service),
) -> NoteDeleted:
    return NoteDeleted(id=notes.delete(user_id, note_id))
