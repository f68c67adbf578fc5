from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import HTMLResponse

from resume_studio.api.models import EditorCommand, EditorSessionView, OpenEditorRequest
from resume_studio.api.router import attachment
from resume_studio.auth import current_user
from resume_studio.editor.session import EditorSession, EditorSessions
from resume_studio.errors import ValidationFailure
from resume_studio.schemas.resume import User

router = APIRouter(prefix="/api/editor")


def get_sessions(request: Request) -> EditorSessions:
    return request.app.state.editor_sessions


def get_session(
    session_id: str,
    user: User = Depends(current_user),
    sessions: EditorSessions = Depends(get_sessions),
) -> EditorSession:
    return sessions.get(user, session_id)


def apply_command(session: EditorSession, command: EditorCommand) -> None:
    if command.op == "append":
        if not command.section:
            raise ValidationFailure("Required for append", field="section")
        session.append(command.section, command.entry)
    elif command.op == "remove":
        if not command.section:
            raise ValidationFailure("Required for remove", field="section")
        if command.index is None:
            raise ValidationFailure("Required for remove", field="index")
        try:
            session.remove(command.section, command.index)
        except IndexError as e:
            raise ValidationFailure(str(e), field="index") from e
    else:
        if not command.path:
            raise ValidationFailure("Required for set", field="path")
        try:
            session.set_value(command.path, command.value)
        except IndexError as e:
            raise ValidationFailure(str(e), field="path") from e


@router.post("/sessions", status_code=201, response_model=EditorSessionView)
async def open_session(
    body: OpenEditorRequest,
    user: User = Depends(current_user),
    sessions: EditorSessions = Depends(get_sessions),
) -> EditorSessionView:
    session, navigation = await sessions.open(user, body.resume_id, body.address)
    return EditorSessionView.from_session(session, navigation.address, navigation.export)


@router.get("/sessions/{session_id}", response_model=EditorSessionView)
def get_session_view(session: EditorSession = Depends(get_session)) -> EditorSessionView:
    return EditorSessionView.from_session(session)


@router.post("/sessions/{session_id}/commands", response_model=EditorSessionView)
def run_command(
    command: EditorCommand,
    session: EditorSession = Depends(get_session),
) -> EditorSessionView:
    apply_command(session, command)
    return EditorSessionView.from_session(session)


@router.post("/sessions/{session_id}/reload", response_model=EditorSessionView)
async def reload_session(session: EditorSession = Depends(get_session)) -> EditorSessionView:
    await session.load()
    return EditorSessionView.from_session(session)


@router.post("/sessions/{session_id}/save", response_model=EditorSessionView)
async def save_session(session: EditorSession = Depends(get_session)) -> EditorSessionView:
    await session.save()
    return EditorSessionView.from_session(session)


@router.get("/sessions/{session_id}/preview", response_class=HTMLResponse)
def preview_session(
    scale: float | None = Query(default=None, gt=0, le=2),
    session: EditorSession = Depends(get_session),
) -> HTMLResponse:
    return HTMLResponse(session.preview(scale))


@router.get("/sessions/{session_id}/export")
async def export_session(session: EditorSession = Depends(get_session)) -> Response:
    return attachment(await session.export())


@router.delete("/sessions/{session_id}", status_code=204)
async def close_session(
    session_id: str,
    user: User = Depends(current_user),
    sessions: EditorSessions = Depends(get_sessions),
) -> Response:
    sessions.close(user, session_id)
    return Response(status_code=204)
