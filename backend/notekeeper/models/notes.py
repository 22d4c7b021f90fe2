from typing import Optional

from pydantic import BaseModel


# Length/emptiness rules live in NoteService so they apply after trimming.
class NoteCreate(BaseModel):
    title: str
    content: str


class NoteUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None


class NoteOut(BaseModel):
    id: str
    owner_user_id: str
    title: str
    content: str
    created_at: str
    updated_at: str


class NoteDeleted(BaseModel):
    id: str
