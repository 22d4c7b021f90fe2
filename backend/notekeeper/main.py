from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notekeeper.api import auth, notes
from notekeeper.api.errors import register_exception_handlers
from notekeeper.app_logger import setup_logging
from notekeeper.config import Settings, get_settings
from notekeeper.services.auth_service import AuthService
from notekeeper.services.note_service import NoteService
from notekeeper.storage.notes_store import NotesStore
from notekeeper.storage.users_store import UsersStore
from notekeeper.utils.auth_hash import PasswordHasher
from notekeeper.utils.jwt_auth import TokenIssuer

API_V1_PREFIX = "/api/v1"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logger = setup_logging(settings.log_level)

    app = FastAPI(title="Notekeeper API")
    app.state.settings = settings
    app.state.auth_service = AuthService(
        users=UsersStore(settings.data_dir),
        tokens=TokenIssuer(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_minutes=settings.jwt_exp_minutes,
        ),
        hasher=PasswordHasher(rounds=settings.bcrypt_rounds),
    )
    app.state.note_service = NoteService(NotesStore(settings.data_dir))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    api = APIRouter(prefix=API_V1_PREFIX)
    api.include_router(auth.router)
    api.include_router(notes.router)
    app.include_router(api)

    @app.get("/health")
    def health():
        return {"ok": True}

    logger.info("notekeeper ready, data dir %s", settings.data_dir)
    return app
