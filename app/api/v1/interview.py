import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response

from app.api.deps import SessionRegistry, get_generator, get_interview_sessions
from app.core.llm import Generator
from app.schemas.interview import (
    AnswerUpdate,
    CaptureCapabilities,
    InterviewSessionCreate,
    InterviewSessionState,
    TranscriptUpdate,
)
from app.services.interview import InterviewSession

logger = logging.getLogger(__name__)

interview_router = APIRouter(prefix="/interview/sessions")


def _snapshot(session_id: str, session: InterviewSession) -> InterviewSessionState:
    return InterviewSessionState(
        session_id=session_id,
        capabilities=session.capabilities,
        state=session.state,
        notice=session.notice,
    )


@interview_router.post("", response_model=InterviewSessionState, status_code=201)
async def create_interview_session(
    request: Optional[InterviewSessionCreate] = None,
    sessions: SessionRegistry[InterviewSession] = Depends(get_interview_sessions),
    generator: Generator = Depends(get_generator),
):
    """Open the interview view; the client reports which capture features it has."""
    capabilities = request.capabilities if request else CaptureCapabilities()
    session_id, session = sessions.create(lambda: InterviewSession(generator, capabilities))
    logger.info(f"Interview session created (capabilities={capabilities.model_dump()})")
    return _snapshot(session_id, session)


@interview_router.get("/{session_id}", response_model=InterviewSessionState)
async def get_interview_session(
    session_id: str,
    sessions: SessionRegistry[InterviewSession] = Depends(get_interview_sessions),
):
    return _snapshot(session_id, sessions.get(session_id))


@interview_router.post("/{session_id}/start", response_model=InterviewSessionState)
async def start_interview(
    session_id: str,
    sessions: SessionRegistry[InterviewSession] = Depends(get_interview_sessions),
):
    session = sessions.get(session_id)
    await session.start_interview()
    return _snapshot(session_id, session)


@interview_router.put("/{session_id}/answer", response_model=InterviewSessionState)
async def update_answer(
    session_id: str,
    update: AnswerUpdate,
    sessions: SessionRegistry[InterviewSession] = Depends(get_interview_sessions),
):
    session = sessions.get(session_id)
    session.update_answer(update.text)
    return _snapshot(session_id, session)


@interview_router.post("/{session_id}/recording", response_model=InterviewSessionState)
async def toggle_recording(
    session_id: str,
    sessions: SessionRegistry[InterviewSession] = Depends(get_interview_sessions),
):
    session = sessions.get(session_id)
    session.toggle_recording()
    return _snapshot(session_id, session)


@interview_router.post("/{session_id}/transcript", response_model=InterviewSessionState)
async def receive_transcript(
    session_id: str,
    update: TranscriptUpdate,
    sessions: SessionRegistry[InterviewSession] = Depends(get_interview_sessions),
):
    session = sessions.get(session_id)
    session.receive_transcript(update.transcript)
    return _snapshot(session_id, session)


@interview_router.post("/{session_id}/next", response_model=InterviewSessionState)
async def next_question(
    session_id: str,
    sessions: SessionRegistry[InterviewSession] = Depends(get_interview_sessions),
):
    """
    Advance to the next question. After the last one this runs the
    evaluation batch and answers with the completed session.
    """
    session = sessions.get(session_id)
    await session.handle_next_question()
    return _snapshot(session_id, session)


@interview_router.delete("/{session_id}", status_code=204)
async def discard_interview_session(
    session_id: str,
    sessions: SessionRegistry[InterviewSession] = Depends(get_interview_sessions),
):
    """Discard all session state; opening a new session starts over."""
    sessions.discard(session_id)
    logger.info("Interview session discarded")
    return Response(status_code=204)
