import logging

from fastapi import APIRouter, Depends, Response

from app.api.deps import SessionRegistry, get_generator, get_resume_sessions
from app.core.config import settings
from app.core.llm import Generator
from app.schemas.resume import (
    PersonalInfoUpdate,
    ResumePreview,
    ResumeSection,
    ResumeSessionState,
    SectionUpdate,
    TemplateUpdate,
)
from app.services.resume import ResumeBuilder
from app.services.resume.exporter import DOCX_MEDIA_TYPE

logger = logging.getLogger(__name__)

resume_router = APIRouter(prefix="/resume/sessions")


def _snapshot(session_id: str, builder: ResumeBuilder) -> ResumeSessionState:
    return ResumeSessionState(session_id=session_id, draft=builder.draft, preview=builder.preview())


@resume_router.post("", response_model=ResumeSessionState, status_code=201)
async def create_resume_session(
    sessions: SessionRegistry[ResumeBuilder] = Depends(get_resume_sessions),
    generator: Generator = Depends(get_generator),
):
    """Open the resume builder with an empty draft."""
    session_id, builder = sessions.create(lambda: ResumeBuilder(generator))
    logger.info("Resume session created")
    return _snapshot(session_id, builder)


@resume_router.get("/{session_id}", response_model=ResumeSessionState)
async def get_resume_session(session_id: str, sessions: SessionRegistry[ResumeBuilder] = Depends(get_resume_sessions)):
    return _snapshot(session_id, sessions.get(session_id))


@resume_router.patch("/{session_id}/personal-info", response_model=ResumeSessionState)
async def update_personal_info(
    session_id: str,
    update: PersonalInfoUpdate,
    sessions: SessionRegistry[ResumeBuilder] = Depends(get_resume_sessions),
):
    builder = sessions.get(session_id)
    builder.update_personal_info(update.field, update.value)
    return _snapshot(session_id, builder)


@resume_router.put("/{session_id}/sections/{section}", response_model=ResumeSessionState)
async def update_section(
    session_id: str,
    section: ResumeSection,
    update: SectionUpdate,
    sessions: SessionRegistry[ResumeBuilder] = Depends(get_resume_sessions),
):
    builder = sessions.get(session_id)
    builder.update_section(section, update.value)
    return _snapshot(session_id, builder)


@resume_router.put("/{session_id}/template", response_model=ResumeSessionState)
async def select_template(
    session_id: str,
    update: TemplateUpdate,
    sessions: SessionRegistry[ResumeBuilder] = Depends(get_resume_sessions),
):
    builder = sessions.get(session_id)
    builder.select_template(update.template)
    return _snapshot(session_id, builder)


@resume_router.post("/{session_id}/generate", response_model=ResumePreview)
async def generate_ai_preview(session_id: str, sessions: SessionRegistry[ResumeBuilder] = Depends(get_resume_sessions)):
    """
    Generate the final AI preview. A failed generation still answers 200 with
    the local preview and a ``notice``.
    """
    return await sessions.get(session_id).generate_ai_preview()


@resume_router.get("/{session_id}/export")
async def export_resume(session_id: str, sessions: SessionRegistry[ResumeBuilder] = Depends(get_resume_sessions)):
    """Download the resume as a .docx file."""
    content = sessions.get(session_id).export_docx()
    filename = settings.RESUME_EXPORT_FILENAME
    logger.info(f"Serving resume download: {filename}")
    return Response(
        content=content,
        media_type=DOCX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@resume_router.delete("/{session_id}", status_code=204)
async def discard_resume_session(session_id: str, sessions: SessionRegistry[ResumeBuilder] = Depends(get_resume_sessions)):
    sessions.discard(session_id)
    logger.info("Resume session discarded")
    return Response(status_code=204)
