"""
Evaluation batch for a finished interview.

Every answer is scored by its own generation call; all of them are dispatched
together and joined with ``asyncio.gather`` so latency is bounded by the
slowest call. A single consolidated feedback call follows.
"""
import asyncio
import logging
import math
from typing import List, Sequence

from pydantic import BaseModel

from app.core.llm import Generator
from app.core.logger import log_async_execution_time
from app.core.prompts import (
    generate_answer_evaluation_prompt,
    generate_consolidated_feedback_prompt,
)
from app.schemas.interview import AnswerEvaluation
from app.services.interview.parser import parse_answer_evaluation, split_nonblank_lines

logger = logging.getLogger(__name__)


class EvaluationResult(BaseModel):
    evaluations: List[AnswerEvaluation]
    score: int
    feedback_lines: List[str]


def overall_score(evaluations: Sequence[AnswerEvaluation]) -> int:
    """Mean of the per-answer scores rounded half up; 0 when there are none."""
    if not evaluations:
        return 0
    mean = sum(e.score for e in evaluations) / len(evaluations)
    return int(math.floor(mean + 0.5))


class InterviewEvaluator:
    """Scores answers and gathers consolidated feedback."""

    def __init__(self, generator: Generator):
        self.generator = generator

    async def _score_answer(self, index: int, question: str, answer: str) -> AnswerEvaluation:
        raw = await self.generator.generate(generate_answer_evaluation_prompt(question, answer))
        evaluation = parse_answer_evaluation(raw)
        logger.info(f"[Answer {index + 1}] scored {evaluation.score:g}")
        return evaluation

    async def score_answers(self, questions: Sequence[str], answers: Sequence[str]) -> List[AnswerEvaluation]:
        """
        Score all answers concurrently. Results keep the order of ``answers``
        regardless of completion order. Generation failures propagate.
        """
        tasks = [
            self._score_answer(i, question, answer)
            for i, (question, answer) in enumerate(zip(questions, answers))
        ]
        return list(await asyncio.gather(*tasks))

    async def consolidated_feedback(self, answers: Sequence[str]) -> List[str]:
        raw = await self.generator.generate(generate_consolidated_feedback_prompt(list(answers)))
        return split_nonblank_lines(raw)

    @log_async_execution_time
    async def evaluate(self, questions: Sequence[str], answers: Sequence[str]) -> EvaluationResult:
        logger.info(f"Evaluating {len(answers)} answer(s)")
        evaluations = await self.score_answers(questions, answers)
        score = overall_score(evaluations)
        feedback_lines = await self.consolidated_feedback(answers)
        logger.info(f"Evaluation complete: score={score}, {len(feedback_lines)} feedback line(s)")
        return EvaluationResult(evaluations=evaluations, score=score, feedback_lines=feedback_lines)
