from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger
from starlette.middleware.sessions import SessionMiddleware

from resume_studio import __version__
from resume_studio.api.editor import router as editor_router
from resume_studio.api.router import router
from resume_studio.auth import IdentityService
from resume_studio.config import Settings, settings as default_settings
from resume_studio.editor.export import ExportTrigger
from resume_studio.editor.session import EditorSessions
from resume_studio.errors import register_exception_handlers
from resume_studio.generation import DraftGenerator
from resume_studio.persistence import ResumeService
from resume_studio.seed import seed_demo_data
from resume_studio.store import BaseStorage, open_storage


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    app.state.storage.close()


def create_app(settings: Settings | None = None, storage: BaseStorage | None = None) -> FastAPI:
    settings = settings or default_settings
    storage = storage or open_storage(settings.database_path)

    if settings.is_production and settings.session_secret == Settings.model_fields["session_secret"].default:
        logger.warning("SESSION_SECRET is left at its default value in production")

    app = FastAPI(
        title="Resume Studio",
        description="Résumé editor with live preview, export and AI drafts",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(SessionMiddleware, secret_key=settings.session_secret, same_site="lax")
    register_exception_handlers(app)

    resumes = ResumeService(storage)
    exporter = ExportTrigger()
    app.state.settings = settings
    app.state.storage = storage
    app.state.resumes = resumes
    app.state.identity = IdentityService(storage, rounds=settings.password_rounds)
    app.state.exporter = exporter
    app.state.generator = DraftGenerator.from_settings(settings)
    app.state.editor_sessions = EditorSessions(
        resumes,
        exporter=exporter,
        export_delay_seconds=settings.export_delay_ms / 1000,
        preview_scale=settings.preview_scale,
        ttl_seconds=settings.editor_session_ttl_seconds,
        max_per_user=settings.max_editor_sessions_per_user,
    )

    app.include_router(router)
    app.include_router(editor_router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    if settings.seed_demo and not settings.is_production:
        seed_demo_data(app.state.identity, resumes)

    logger.info(
        f"Resume Studio ready: storage={storage.name}, generator={settings.generator_framework}"
        f"/{settings.default_model}, environment={settings.environment}"
    )
    return app
