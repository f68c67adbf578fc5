"""
Editor sessions: one working copy per open editor.

A session loads the stored résumé into a ``ResumeForm`` and keeps it in
memory until an explicit save. Closing a session drops unsaved edits.
Network-bound operations (load, save, export) refuse to start while the same
operation is still running on the session.
"""

from __future__ import annotations

import asyncio
import time
import uuid
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any
from urllib.parse import urlsplit, urlunsplit

from loguru import logger

from resume_studio.editor.export import AutoExport, ExportTrigger, Navigation
from resume_studio.editor.form import ResumeForm
from resume_studio.errors import Forbidden, NotFound, OperationPending
from resume_studio.persistence import ResumeService
from resume_studio.preview.printing import ExportArtifact
from resume_studio.preview.renderer import render_preview
from resume_studio.schemas.document import ResumeDocument
from resume_studio.schemas.resume import Resume, User


def editor_address(resume_id: int) -> str:
    return f"/editor/{resume_id}"


def normalize_address(address: str | None, resume_id: int) -> str:
    """Pin ``address`` to the editor path of ``resume_id``, keeping its query."""
    expected = editor_address(resume_id)
    parts = urlsplit(address or "")
    if parts.path and parts.path != expected:
        logger.warning(f"Editor address {address!r} does not match resume {resume_id}, using {expected}")
    return urlunsplit(("", "", expected, parts.query, ""))


class EditorSession:
    def __init__(
        self,
        service: ResumeService,
        user: User,
        resume_id: int,
        exporter: ExportTrigger | None = None,
        auto_export: AutoExport | None = None,
        preview_scale: float = 1.0,
    ):
        self.id = uuid.uuid4().hex
        self.service = service
        self.user = user
        self.resume_id = resume_id
        self.exporter = exporter or ExportTrigger()
        self.auto_export = auto_export or AutoExport()
        self.preview_scale = preview_scale

        self.form = ResumeForm()
        self.resume: Resume | None = None
        self._pending: set[str] = set()

    @property
    def title(self) -> str:
        return self.resume.title if self.resume else ""

    def is_pending(self, operation: str) -> bool:
        return operation in self._pending

    @property
    def has_unsaved_changes(self) -> bool:
        if self.resume is None:
            return False
        return self.form.get_values() != self.resume.content

    @asynccontextmanager
    async def _operation(self, name: str) -> AsyncIterator[None]:
        if name in self._pending:
            raise OperationPending(name)
        self._pending.add(name)
        try:
            yield
        finally:
            self._pending.discard(name)

    async def load(self) -> Resume:
        """Fetch the stored résumé. The working copy is overwritten unconditionally."""
        async with self._operation("load"):
            resume = await asyncio.to_thread(self.service.load, self.user, self.resume_id)
        if self.has_unsaved_changes:
            logger.debug(f"Session {self.id}: reload discards unsaved edits to resume {self.resume_id}")
        self.resume = resume
        self.form.reset(resume.content)
        return resume

    async def open(self, address: str | None = None) -> Navigation:
        await self.load()
        self.preview()
        return await self.auto_export.navigate(normalize_address(address, self.resume_id), self.export)

    async def save(self) -> Resume:
        async with self._operation("save"):
            document = self.form.get_values()
            saved = await asyncio.to_thread(self.service.save, self.user, self.resume_id, document)
        self.resume = saved
        return saved

    async def export(self) -> ExportArtifact:
        async with self._operation("export"):
            return await asyncio.to_thread(self.exporter.export, self.form.get_values(), self.title)

    def values(self) -> ResumeDocument:
        return self.form.get_values()

    def preview(self, scale: float | None = None) -> str:
        return render_preview(self.form.get_values(), self.preview_scale if scale is None else scale)

    # Form commands

    def append(self, section: str, entry: dict | None = None) -> str:
        return self.form.section(section).append(entry)

    def remove(self, section: str, index: int) -> None:
        self.form.section(section).remove(index)

    def set_value(self, path: str, value: Any) -> None:
        self.form.set_value(path, value)


class EditorSessions:
    """
    In-memory registry of open editor sessions, keyed by session id.

    Clients may navigate away without closing their session, so sessions
    idle for longer than ``ttl_seconds`` are evicted, and each user keeps at
    most ``max_per_user`` sessions (least recently used go first). Sessions
    on a deleted résumé are dropped with it.
    """

    def __init__(
        self,
        service: ResumeService,
        exporter: ExportTrigger | None = None,
        export_delay_seconds: float = 0.5,
        preview_scale: float = 1.0,
        ttl_seconds: float = 1800,
        max_per_user: int = 20,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.service = service
        self.exporter = exporter or ExportTrigger()
        self.export_delay_seconds = export_delay_seconds
        self.preview_scale = preview_scale
        self.ttl_seconds = ttl_seconds
        self.max_per_user = max_per_user
        self.clock = clock
        self._sessions: dict[str, EditorSession] = {}
        self._last_used: dict[str, float] = {}
        service.on_delete(self.discard_resume)

    def __len__(self) -> int:
        return len(self._sessions)

    async def open(self, user: User, resume_id: int, address: str | None = None) -> tuple[EditorSession, Navigation]:
        self.evict_idle()
        session = EditorSession(
            self.service,
            user,
            resume_id,
            exporter=self.exporter,
            auto_export=AutoExport(self.export_delay_seconds),
            preview_scale=self.preview_scale,
        )
        navigation = await session.open(address)
        self._make_room(user)
        self._sessions[session.id] = session
        self._last_used[session.id] = self.clock()
        logger.info(f"Opened editor session {session.id} on resume {resume_id} for user {user.id}")
        return session, navigation

    def get(self, user: User, session_id: str) -> EditorSession:
        session = self._sessions.get(session_id)
        if session is None or self._is_idle(session_id):
            self._drop(session_id)
            raise NotFound(f"Editor session {session_id} not found")
        if session.user.id != user.id:
            raise Forbidden()
        self._last_used[session_id] = self.clock()
        return session

    def close(self, user: User, session_id: str) -> None:
        session = self.get(user, session_id)
        self._drop(session.id)
        if session.has_unsaved_changes:
            logger.info(f"Closed editor session {session.id} with unsaved changes")

    def evict_idle(self) -> int:
        idle = [sid for sid in list(self._sessions) if self._is_idle(sid)]
        for sid in idle:
            self._drop(sid)
        if idle:
            logger.debug(f"Evicted {len(idle)} idle editor session(s)")
        return len(idle)

    def discard_resume(self, resume_id: int) -> None:
        """Drop every session editing ``resume_id``, unsaved edits included."""
        stale = [sid for sid, s in list(self._sessions.items()) if s.resume_id == resume_id]
        for sid in stale:
            self._drop(sid)
        if stale:
            logger.info(f"Dropped {len(stale)} editor session(s) on deleted resume {resume_id}")

    def _is_idle(self, session_id: str) -> bool:
        last_used = self._last_used.get(session_id)
        return last_used is not None and self.clock() - last_used > self.ttl_seconds

    def _make_room(self, user: User) -> None:
        owned = sorted(
            (sid for sid, s in list(self._sessions.items()) if s.user.id == user.id),
            key=lambda sid: self._last_used.get(sid, 0.0),
        )
        while owned and len(owned) >= self.max_per_user:
            sid = owned.pop(0)
            self._drop(sid)
            logger.debug(f"Evicted editor session {sid}: user {user.id} is at {self.max_per_user} sessions")

    def _drop(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)
        self._last_used.pop(session_id, None)
