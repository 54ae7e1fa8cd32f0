"""
Mock-interview session state machine.

    NotStarted -> InProgress -> Evaluating -> Complete

Each state is its own model (see ``app.schemas.interview``), so combinations
such as "complete without feedback" cannot be represented. Complete is
terminal; restarting means discarding the session.
"""
import asyncio
import logging
from typing import List, Optional

from app.core.exceptions import (
    BlankAnswerError,
    EvaluationError,
    GenerationError,
    InterviewStateError,
)
from app.core.llm import Generator
from app.core.logger import log_async_execution_time
from app.core.prompts import QUESTION_GENERATION_PROMPT
from app.schemas.interview import (
    Answer,
    CaptureCapabilities,
    Complete,
    Evaluating,
    InProgress,
    NotStarted,
    SessionState,
)
from app.services.interview.evaluator import InterviewEvaluator
from app.services.interview.parser import split_nonblank_lines

logger = logging.getLogger(__name__)

SAMPLE_QUESTIONS = [
    "Explain the virtual DOM concept in React",
    "What is REST API and how does it differ from GraphQL?",
    "Describe your experience with version control systems",
    "How do you handle state management in large applications?",
    "Explain the concept of closure in JavaScript",
]

SPEECH_UNSUPPORTED_NOTICE = "Note: Speech recognition is not supported in your browser."


class InterviewSession:
    """
    One mock interview, from question generation to the final score.

    Args:
        generator: Text-generation client used for questions and scoring.
        capabilities: Capture support reported by the client runtime.
    """

    def __init__(self, generator: Generator, capabilities: Optional[CaptureCapabilities] = None):
        self.generator = generator
        self.capabilities = capabilities or CaptureCapabilities()
        self.evaluator = InterviewEvaluator(generator)
        self.state: SessionState = NotStarted()
        self._starting = False

    @property
    def notice(self) -> Optional[str]:
        if not self.capabilities.speech_recognition:
            return SPEECH_UNSUPPORTED_NOTICE
        return None

    def _require_in_progress(self, operation: str) -> InProgress:
        if not isinstance(self.state, InProgress):
            raise InterviewStateError(
                f"Cannot {operation} while the interview is {self.state.phase.replace('_', ' ')}."
            )
        return self.state

    async def _fetch_questions(self) -> List[str]:
        try:
            response = await self.generator.generate(QUESTION_GENERATION_PROMPT)
        except GenerationError as e:
            logger.warning(f"Question generation failed, using sample questions: {e}")
            return list(SAMPLE_QUESTIONS)

        questions = split_nonblank_lines(response)
        if not questions:
            logger.warning("Question generation returned no questions, using sample questions")
            return list(SAMPLE_QUESTIONS)
        return questions

    @log_async_execution_time
    async def start_interview(self) -> InProgress:
        """Generate the question set (or fall back to samples) and begin."""
        if not isinstance(self.state, NotStarted) or self._starting:
            raise InterviewStateError("The interview has already been started.")

        self._starting = True
        try:
            questions = await self._fetch_questions()
        finally:
            self._starting = False

        self.state = InProgress(
            questions=questions,
            answers=[Answer() for _ in questions],
            current_index=0,
        )
        logger.info(f"Interview started with {len(questions)} question(s)")
        return self.state

    def update_answer(self, text: str) -> InProgress:
        """Manual edit of the current answer."""
        state = self._require_in_progress("edit an answer")
        if state.recording_active:
            raise InterviewStateError("Stop recording before editing the answer by hand.")
        state.answers[state.current_index] = Answer(text=text)
        return state

    def toggle_recording(self) -> SessionState:
        """
        Start or stop live transcription. Stopping keeps the transcript as the
        answer. Without speech support this is a no-op.
        """
        if not self.capabilities.speech_recognition:
            logger.info("Recording toggle ignored: speech recognition unsupported")
            return self.state

        state = self._require_in_progress("toggle recording")
        state.recording_active = not state.recording_active
        logger.info(f"Recording {'started' if state.recording_active else 'stopped'} "
                    f"for question {state.current_index + 1}")
        return state

    def receive_transcript(self, transcript: str) -> InProgress:
        """
        Apply a live transcription update: the full accumulated transcript
        replaces the current answer. Empty updates leave the answer as is.
        """
        state = self._require_in_progress("record an answer")
        if not state.recording_active:
            logger.debug("Transcript update ignored: not recording")
            return state

        state.transcript = transcript
        if transcript:
            state.answers[state.current_index] = Answer(text=transcript)
        return state

    async def handle_next_question(self) -> SessionState:
        """Advance to the next question, or evaluate after the last one."""
        state = self._require_in_progress("advance")
        if not state.answers[state.current_index].text.strip():
            raise BlankAnswerError("Answer the current question before moving on.")

        if state.current_index < len(state.questions) - 1:
            state.current_index += 1
            state.transcript = ""
            logger.info(f"Moved to question {state.current_index + 1}/{len(state.questions)}")
            return state

        return await self.evaluate_interview()

    async def evaluate_interview(self) -> Complete:
        """
        Run the evaluation batch. On failure the session returns to the
        in-progress state it was in and ``EvaluationError`` is raised.
        """
        previous = self._require_in_progress("evaluate")
        previous.recording_active = False
        self.state = Evaluating(
            questions=previous.questions,
            answers=previous.answers,
            current_index=previous.current_index,
        )

        answers = [answer.text for answer in previous.answers]
        try:
            result = await self.evaluator.evaluate(previous.questions, answers)
        except asyncio.CancelledError:
            logger.warning("Evaluation cancelled, interview returned to in progress")
            self.state = previous
            raise
        except Exception as e:
            logger.error(f"Evaluation error: {e}", exc_info=True)
            self.state = previous
            raise EvaluationError(f"Interview evaluation failed: {e}") from e

        self.state = Complete(
            questions=previous.questions,
            answers=previous.answers,
            evaluations=result.evaluations,
            score=result.score,
            feedback_lines=result.feedback_lines,
        )
        return self.state
