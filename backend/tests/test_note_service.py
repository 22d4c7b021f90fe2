import pytest

from notekeeper.errors import ErrorKind, Forbidden, NotFound, ValidationError
from notekeeper.services.note_service import NoteService, filter_and_sort
from notekeeper.storage.notes_store import NotesStore


@pytest.fixture()
def service(tmp_path):
    return NoteService(NotesStore(tmp_path))


def test_create_trims_title_and_sets_owner(service):
    note = service.create("u1", "  Groceries  ", "Milk, eggs")
    assert note.title == "Groceries"
    assert note.content == "Milk, eggs"
    assert note.owner_user_id == "u1"
    assert note.created_at == note.updated_at


def test_title_limit_is_applied_after_trimming(service):
    assert service.create("u1", "  " + "a" * 50 + "  ", "c").title == "a" * 50


@pytest.mark.parametrize("title,content", [("", "c"), ("   ", "c"), ("t", ""), ("t", "   "), ("a" * 51, "c")])
def test_create_validation_persists_nothing(service, title, content):
    with pytest.raises(ValidationError) as ei:
        service.create("u1", title, content)
    assert ei.value.kind is ErrorKind.VALIDATION
    assert service.list("u1") == []


def test_list_only_returns_own_notes(service):
    mine = service.create("u1", "mine", "c")
    service.create("u2", "theirs", "c")
    assert [n.id for n in service.list("u1")] == [mine.id]


def test_update_keeps_created_at(service):
    note = service.create("u1", "old", "body")
    updated = service.update("u1", note.id, {"title": "new"})

    assert updated.title == "new"
    assert updated.content == "body"
    assert updated.created_at == note.created_at
    assert service.get("u1", note.id).title == "new"


def test_update_validates_patch(service):
    note = service.create("u1", "old", "body")
    with pytest.raises(ValidationError):
        service.update("u1", note.id, {"title": "x" * 51})
    with pytest.raises(ValidationError):
        service.update("u1", note.id, {"content": ""})
    assert service.get("u1", note.id).title == "old"


def test_update_ignores_unknown_fields(service):
    note = service.create("u1", "old", "body")
    updated = service.update("u1", note.id, {"owner_user_id": "u2", "created_at": "1970"})
    assert updated.owner_user_id == "u1"
    assert updated.created_at == note.created_at


def test_other_user_gets_forbidden_and_note_is_unchanged(service):
    note = service.create("u1", "secret", "body")

    with pytest.raises(Forbidden):
        service.get("u2", note.id)
    with pytest.raises(Forbidden):
        service.update("u2", note.id, {"title": "hacked"})
    with pytest.raises(Forbidden):
        service.delete("u2", note.id)

    assert service.get("u1", note.id) == note


def test_missing_note_is_not_found(service):
    with pytest.raises(NotFound):
        service.update("u1", "9b2f6c1e-0000-4000-8000-000000000000", {"title": "x"})
    with pytest.raises(NotFound):
        service.delete("u1", "not-a-uuid")


def test_delete_then_get_is_not_found(service):
    note = service.create("u1", "t", "c")
    assert service.delete("u1", note.id) == str(note.id)
    with pytest.raises(NotFound):
        service.get("u1", note.id)
    with pytest.raises(NotFound):
        service.delete("u1", note.id)


def test_search_and_sort(service):
    a = service.create("u1", "Groceries", "Milk, eggs")
    b = service.create("u1", "Work", "Buy more milk for the office")
    c = service.create("u1", "Ideas", "nothing here")

    found = service.list("u1", search="MILK")
    assert {n.id for n in found} == {a.id, b.id}

    newest = service.list("u1", sort="newest")
    oldest = service.list("u1", sort="oldest")
    assert [n.created_at for n in newest] == sorted((n.created_at for n in newest), reverse=True)
    assert [n.created_at for n in oldest] == sorted(n.created_at for n in oldest)
    assert {n.id for n in newest} == {a.id, b.id, c.id}


def test_unknown_sort_rejected():
    with pytest.raises(ValidationError):
        filter_and_sort([], sort="sideways")


def test_list_skips_corrupt_note_files(service, tmp_path):
    good = service.create("u1", "good", "c")
    (tmp_path / "notes" / "broken.json").write_text("{not json", encoding="utf-8")
    (tmp_path / "notes" / "partial.json").write_text('{"id": "x"}', encoding="utf-8")

    assert [n.id for n in service.list("u1")] == [good.id]
