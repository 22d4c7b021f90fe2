import pytest
from jose import jwt

from notekeeper.errors import DuplicateEmail, ErrorKind, InvalidCredentials, InvalidToken, ValidationError
from notekeeper.services.auth_service import AuthService
from notekeeper.storage import users_store
from notekeeper.storage.users_store import UsersStore
from notekeeper.utils.auth_hash import PasswordHasher
from notekeeper.utils.jwt_auth import TokenIssuer

from conftest import TEST_SECRET


@pytest.fixture()
def service(tmp_path):
    return AuthService(
        users=UsersStore(tmp_path),
        tokens=TokenIssuer(TEST_SECRET, expires_minutes=15),
        hasher=PasswordHasher(rounds=4),
    )


def test_signup_then_login_identity_matches(service):
    created = service.signup("Ana", "ana@x.com", "pw123")
    logged_in = service.login("ana@x.com", "pw123")

    assert logged_in.user.id == created.user.id
    assert service.authenticate(logged_in.token) == created.user.id
    assert jwt.get_unverified_claims(created.token)["sub"] == created.user.id


def test_password_is_stored_hashed(service, tmp_path):
    created = service.signup("Ana", "ana@x.com", "pw123")
    raw = (tmp_path / "users" / f"{created.user.id}.json").read_text(encoding="utf-8")
    assert "pw123" not in raw
    assert created.user.hashed_password != "pw123"


def test_duplicate_email_creates_no_record(service, tmp_path):
    service.signup("Ana", "ana@x.com", "pw123")
    with pytest.raises(DuplicateEmail) as ei:
        service.signup("Impostor", "Ana@X.com", "other")
    assert ei.value.kind is ErrorKind.DUPLICATE_EMAIL

    assert len(list((tmp_path / "users").glob("*.json"))) == 1
    # the original credentials still work
    assert service.login("ana@x.com", "pw123").user.name == "Ana"


@pytest.mark.parametrize(
    "name,email,password",
    [("", "a@x.com", "pw"), ("Ana", "", "pw"), ("Ana", "a@x.com", ""), ("Ana", "not-an-email", "pw")],
)
def test_signup_validation(service, name, email, password):
    with pytest.raises(ValidationError):
        service.signup(name, email, password)


def test_login_errors_do_not_reveal_which_part_failed(service):
    service.signup("Ana", "ana@x.com", "pw123")
    with pytest.raises(InvalidCredentials) as wrong_pw:
        service.login("ana@x.com", "nope")
    with pytest.raises(InvalidCredentials) as unknown:
        service.login("ghost@x.com", "pw123")
    assert wrong_pw.value.message == unknown.value.message


def test_authenticate_rejects_bad_token(service):
    with pytest.raises(InvalidToken):
        service.authenticate("abc")


def test_current_user_missing(service):
    with pytest.raises(InvalidToken):
        service.current_user("no-such-user")


def test_concurrent_duplicate_signup_loses(service, tmp_path, monkeypatch):
    service.signup("Ana", "ana@x.com", "pw123")

    # the second signup passes the up-front check, as it would when both
    # requests arrive before either has claimed the address
    monkeypatch.setattr(service.users, "email_taken", lambda email: False)
    with pytest.raises(DuplicateEmail):
        service.signup("Other", "ana@x.com", "pw456")

    assert len(list((tmp_path / "users").glob("*.json"))) == 1
    assert service.login("ana@x.com", "pw123").user.name == "Ana"


def test_failed_user_write_does_not_lock_email(service, tmp_path, monkeypatch):
    def disk_full(path, data):
        raise OSError("no space left on device")

    monkeypatch.setattr(users_store, "_atomic_write_json", disk_full)
    with pytest.raises(OSError):
        service.signup("Ana", "ana@x.com", "pw123")
    assert not service.users.email_taken("ana@x.com")

    monkeypatch.undo()
    assert service.signup("Ana", "ana@x.com", "pw123").user.email == "ana@x.com"
