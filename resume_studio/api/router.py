from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response

from resume_studio.auth import IdentityService, current_user, login, logout
from resume_studio.editor.export import ExportTrigger
from resume_studio.generation.drafts import DraftGenerator
from resume_studio.persistence import ResumeService
from resume_studio.preview.printing import ExportArtifact
from resume_studio.schemas.document import ResumeDocument
from resume_studio.schemas.generation import GenerateResumeRequest
from resume_studio.schemas.resume import (
    Credentials,
    Registration,
    Resume,
    ResumeCreate,
    ResumeUpdate,
    User,
)

router = APIRouter(prefix="/api")


def get_resumes(request: Request) -> ResumeService:
    return request.app.state.resumes


def get_identity(request: Request) -> IdentityService:
    return request.app.state.identity


def get_generator(request: Request) -> DraftGenerator:
    return request.app.state.generator


def get_exporter(request: Request) -> ExportTrigger:
    return request.app.state.exporter


def attachment(artifact: ExportArtifact) -> Response:
    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
    )


# Identity


@router.post("/register", status_code=201, response_model=User)
def register(
    body: Registration,
    request: Request,
    identity: IdentityService = Depends(get_identity),
) -> User:
    user = identity.register(body.username, body.password, body.name)
    login(request, user)
    return user


@router.post("/login", response_model=User)
def login_user(
    body: Credentials,
    request: Request,
    identity: IdentityService = Depends(get_identity),
) -> User:
    user = identity.authenticate(body.username, body.password)
    login(request, user)
    return user


@router.post("/logout", status_code=204)
async def logout_user(request: Request) -> Response:
    logout(request)
    return Response(status_code=204)


@router.get("/user", response_model=User)
async def get_user(user: User = Depends(current_user)) -> User:
    return user


# Résumés


@router.get("/resumes", response_model=list[Resume])
def list_resumes(
    user: User = Depends(current_user),
    resumes: ResumeService = Depends(get_resumes),
) -> list[Resume]:
    return resumes.list_resumes(user)


@router.get("/resumes/{resume_id}", response_model=Resume)
def get_resume(
    resume_id: int,
    user: User = Depends(current_user),
    resumes: ResumeService = Depends(get_resumes),
) -> Resume:
    return resumes.load(user, resume_id)


@router.post("/resumes", status_code=201, response_model=Resume)
def create_resume(
    body: ResumeCreate,
    user: User = Depends(current_user),
    resumes: ResumeService = Depends(get_resumes),
) -> Resume:
    return resumes.create(user, body.title, body.content, body.is_ai_generated)


@router.put("/resumes/{resume_id}", response_model=Resume)
def update_resume(
    resume_id: int,
    body: ResumeUpdate,
    user: User = Depends(current_user),
    resumes: ResumeService = Depends(get_resumes),
) -> Resume:
    return resumes.save(user, resume_id, body.content, title=body.title)


@router.delete("/resumes/{resume_id}", status_code=204)
def delete_resume(
    resume_id: int,
    user: User = Depends(current_user),
    resumes: ResumeService = Depends(get_resumes),
) -> Response:
    resumes.delete(user, resume_id)
    return Response(status_code=204)


@router.get("/resumes/{resume_id}/download")
def download_resume(
    resume_id: int,
    user: User = Depends(current_user),
    resumes: ResumeService = Depends(get_resumes),
    exporter: ExportTrigger = Depends(get_exporter),
) -> Response:
    resume = resumes.load(user, resume_id)
    return attachment(exporter.export(resume.content, resume.title))


# AI drafts


@router.post("/ai/generate-resume", response_model=ResumeDocument)
async def generate_resume(
    body: GenerateResumeRequest,
    user: User = Depends(current_user),
    generator: DraftGenerator = Depends(get_generator),
) -> ResumeDocument:
    return await generator.generate(body)
