import json
import logging
import math
import re
from typing import Any, Optional

from app.schemas.interview import AnswerEvaluation

logger = logging.getLogger(__name__)

INVALID_RESPONSE_FEEDBACK = "Invalid response"


def split_nonblank_lines(text: str) -> list[str]:
    """Split model output into lines, dropping blank ones."""
    return [line.strip() for line in text.split("\n") if line.strip()]


def strip_code_fences(raw_text: str) -> str:
    """Remove markdown ```json fences the model tends to wrap JSON in."""
    text = re.sub(r"^```(?:json)?\s*", "", raw_text.strip())
    text = re.sub(r"\s*```$", "", text)
    return text.strip()


def _coerce_score(value: Any) -> Optional[float]:
    # bool is an int subclass but never a score
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        score = float(value)
    elif isinstance(value, str):
        try:
            score = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return score if math.isfinite(score) else None


def parse_answer_evaluation(raw_text: str) -> AnswerEvaluation:
    """
    Parse one scoring response of the form ``{"score": number, "feedback": str}``.

    Anything unusable (not JSON, not an object, score missing or not a finite
    number) scores 0 with the feedback ``"Invalid response"``; this never raises.
    Valid scores are clamped to 0-100.
    """
    try:
        data = json.loads(strip_code_fences(raw_text or ""))
    except json.JSONDecodeError:
        logger.warning(f"Unparseable evaluation response: {str(raw_text)[:200]!r}")
        return AnswerEvaluation(score=0, feedback=INVALID_RESPONSE_FEEDBACK)

    if not isinstance(data, dict):
        logger.warning(f"Evaluation response is not a JSON object: {type(data).__name__}")
        return AnswerEvaluation(score=0, feedback=INVALID_RESPONSE_FEEDBACK)

    score = _coerce_score(data.get("score"))
    if score is None:
        logger.warning(f"Evaluation response has no usable score: {data.get('score')!r}")
        return AnswerEvaluation(score=0, feedback=INVALID_RESPONSE_FEEDBACK)

    feedback = data.get("feedback")
    return AnswerEvaluation(
        score=min(max(score, 0.0), 100.0),
        feedback=feedback if isinstance(feedback, str) else "",
    )
