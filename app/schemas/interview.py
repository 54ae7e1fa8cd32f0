from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

# --- Shared Models ---

class Answer(BaseModel):
    """An answer aligned by index with its question."""
    text: str = ""


class AnswerEvaluation(BaseModel):
    """Score and feedback the model gave for a single answer."""
    score: float = Field(..., ge=0, le=100)
    feedback: str


class CaptureCapabilities(BaseModel):
    """What the client runtime can capture; absence only degrades the UI."""
    speech_recognition: bool = Field(default=False, description="Live speech-to-text is available.")
    camera: bool = Field(default=False, description="A camera preview can be rendered.")


# --- Session States ---

class NotStarted(BaseModel):
    phase: Literal["not_started"] = "not_started"


class InProgress(BaseModel):
    phase: Literal["in_progress"] = "in_progress"
    questions: list[str] = Field(..., min_length=1)
    answers: list[Answer]
    current_index: int = Field(default=0, ge=0)
    recording_active: bool = False
    transcript: str = Field(default="", description="Live transcription accumulated for the current question.")


class Evaluating(BaseModel):
    phase: Literal["evaluating"] = "evaluating"
    questions: list[str]
    answers: list[Answer]
    current_index: int


class Complete(BaseModel):
    phase: Literal["complete"] = "complete"
    questions: list[str]
    answers: list[Answer]
    evaluations: list[AnswerEvaluation]
    score: int = Field(..., ge=0, le=100)
    feedback_lines: list[str]


SessionState = Annotated[
    Union[NotStarted, InProgress, Evaluating, Complete],
    Field(discriminator="phase"),
]


# --- API Models ---

class InterviewSessionCreate(BaseModel):
    capabilities: CaptureCapabilities = Field(default_factory=CaptureCapabilities)


class AnswerUpdate(BaseModel):
    text: str


class TranscriptUpdate(BaseModel):
    transcript: str


class InterviewSessionState(BaseModel):
    """
    Session snapshot for the client.
    ``notice`` explains degraded capture (e.g. speech recognition unsupported).
    """
    session_id: str
    capabilities: CaptureCapabilities
    state: SessionState
    notice: Optional[str] = None
