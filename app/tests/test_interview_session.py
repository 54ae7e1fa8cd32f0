"""
Tests for the interview session state machine.
"""
import asyncio

import pytest

from app.core.exceptions import BlankAnswerError, EvaluationError, GenerationError, InterviewStateError
from app.schemas.interview import CaptureCapabilities, Complete, InProgress, NotStarted
from app.services.interview import SAMPLE_QUESTIONS, InterviewSession
from app.services.interview.session import SPEECH_UNSUPPORTED_NOTICE
from app.tests.fakes import FakeGenerator, scripted_responder

WITH_SPEECH = CaptureCapabilities(speech_recognition=True, camera=True)


def _started(responder=None, capabilities=WITH_SPEECH) -> InterviewSession:
    session = InterviewSession(FakeGenerator(responder or scripted_responder()), capabilities)
    asyncio.run(session.start_interview())
    return session


@pytest.mark.parametrize(
    "questions, expected",
    [
        ("1. What is HTTP?\n\n  \n2. What is CSS?\n", ["1. What is HTTP?", "2. What is CSS?"]),
        (None, SAMPLE_QUESTIONS),
        ("", SAMPLE_QUESTIONS),
        ("\n   \n", SAMPLE_QUESTIONS),
    ],
    ids=["generated", "service-error", "empty-response", "blank-response"],
)
def test_start_interview_initializes_session(questions, expected):
    session = _started(scripted_responder(questions=questions))

    state = session.state
    assert isinstance(state, InProgress)
    assert state.questions == expected
    assert state.current_index == 0
    assert len(state.answers) == len(state.questions)
    assert all(answer.text == "" for answer in state.answers)


def test_start_twice_is_rejected():
    session = _started()

    with pytest.raises(InterviewStateError):
        asyncio.run(session.start_interview())


def test_operations_before_start_are_rejected():
    session = InterviewSession(FakeGenerator(scripted_responder()), WITH_SPEECH)

    assert isinstance(session.state, NotStarted)
    with pytest.raises(InterviewStateError):
        session.update_answer("hello")
    with pytest.raises(InterviewStateError):
        asyncio.run(session.handle_next_question())


@pytest.mark.parametrize("blank", ["", "   ", "\n\t"])
def test_advance_rejected_for_blank_answer_at_every_index(blank):
    session = _started(scripted_responder(questions="A\nB\nC"))

    for index in range(3):
        session.update_answer(blank)
        with pytest.raises(BlankAnswerError):
            asyncio.run(session.handle_next_question())
        assert session.state.current_index == index

        session.update_answer(f"answer {index}")
        if index < 2:
            asyncio.run(session.handle_next_question())


def test_advance_keeps_previous_answer_and_clears_transcript():
    session = _started()
    session.toggle_recording()
    session.receive_transcript("spoken answer")

    asyncio.run(session.handle_next_question())

    state = session.state
    assert state.current_index == 1
    assert state.answers[0].text == "spoken answer"
    assert state.answers[1].text == ""
    assert state.transcript == ""
    assert state.recording_active is True


def test_recording_continues_into_next_question():
    session = _started()
    session.toggle_recording()
    session.receive_transcript("first answer")

    asyncio.run(session.handle_next_question())
    session.receive_transcript("second answer")

    state = session.state
    assert state.recording_active is True
    assert state.answers[0].text == "first answer"
    assert state.answers[1].text == "second answer"


def test_cancelled_evaluation_returns_to_in_progress():
    release = asyncio.Event()
    responder = scripted_responder(questions="Only question")

    class StalledScoring(FakeGenerator):
        async def generate(self, prompt):
            if prompt.startswith("Evaluate the following answer"):
                await release.wait()
            return await super().generate(prompt)

    session = InterviewSession(StalledScoring(responder), WITH_SPEECH)

    async def run():
        await session.start_interview()
        session.update_answer("my answer")
        task = asyncio.create_task(session.handle_next_question())
        await asyncio.sleep(0.01)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(run())

    state = session.state
    assert isinstance(state, InProgress)
    assert state.answers[0].text == "my answer"
    session.update_answer("still editable")
    assert session.state.answers[0].text == "still editable"


def test_transcript_overwrites_typed_text_while_recording():
    session = _started()
    session.update_answer("typed")
    session.toggle_recording()

    session.receive_transcript("hello")
    session.receive_transcript("hello world")

    assert session.state.answers[0].text == "hello world"
    with pytest.raises(InterviewStateError):
        session.update_answer("typing while recording")


def test_toggle_off_and_on_keeps_transcribed_answer():
    session = _started()
    session.toggle_recording()
    session.receive_transcript("first part")

    session.toggle_recording()
    assert session.state.recording_active is False
    assert session.state.answers[0].text == "first part"
    assert session.state.transcript == "first part"

    session.toggle_recording()
    assert session.state.recording_active is True
    assert session.state.answers[0].text == "first part"

    session.receive_transcript("")
    assert session.state.answers[0].text == "first part"


def test_transcript_ignored_when_not_recording():
    session = _started()
    session.update_answer("typed")

    session.receive_transcript("stray update")

    assert session.state.answers[0].text == "typed"


def test_toggle_is_noop_without_speech_support():
    session = _started(capabilities=CaptureCapabilities())

    session.toggle_recording()

    assert session.state.recording_active is False
    assert session.notice == SPEECH_UNSUPPORTED_NOTICE


def test_full_interview_completes():
    session = _started()
    session.update_answer("first")
    asyncio.run(session.handle_next_question())
    session.update_answer("second")

    state = asyncio.run(session.handle_next_question())

    assert isinstance(state, Complete)
    assert session.state is state
    assert state.score == 80
    assert [e.feedback for e in state.evaluations] == ["Solid", "Solid"]
    assert state.feedback_lines == ["- Good structure", "- Add examples"]

    with pytest.raises(InterviewStateError):
        session.update_answer("too late")


def test_scoring_outage_returns_to_in_progress():
    responder = scripted_responder(questions="Only question")

    def respond(prompt):
        if prompt.startswith("Evaluate the following answer"):
            return GenerationError("scoring service unavailable")
        return responder(prompt)

    session = _started(respond)
    session.update_answer("my answer")

    with pytest.raises(EvaluationError):
        asyncio.run(session.handle_next_question())

    state = session.state
    assert isinstance(state, InProgress)
    assert state.current_index == 0
    assert state.answers[0].text == "my answer"

    # Still interactable
    session.update_answer("revised answer")
    assert session.state.answers[0].text == "revised answer"


def test_feedback_failure_does_not_complete():
    responder = scripted_responder(questions="Only question")

    def respond(prompt):
        if prompt.startswith("Provide comprehensive feedback"):
            return GenerationError("timeout")
        return responder(prompt)

    session = _started(respond)
    session.update_answer("answer")

    with pytest.raises(EvaluationError):
        asyncio.run(session.handle_next_question())
    assert isinstance(session.state, InProgress)
