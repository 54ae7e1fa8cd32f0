"""
Mock interview package

- session.py: session state machine (start, answer, record, advance)
- evaluator.py: concurrent per-answer scoring + consolidated feedback
- parser.py: defensive parsing of model output
"""

from .session import InterviewSession, SAMPLE_QUESTIONS
from .evaluator import InterviewEvaluator, overall_score
from .parser import parse_answer_evaluation

__all__ = [
    'InterviewSession',
    'SAMPLE_QUESTIONS',
    'InterviewEvaluator',
    'overall_score',
    'parse_answer_evaluation',
]
