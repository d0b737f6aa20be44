# /edura/services/assignment_helpers/grading.py

"""
Objective auto-grading for quiz content.

Every function here is pure: the same content and answer map always give the
same result, and nothing touches the store or the clock.
"""

from typing import Any, Mapping

from ...core.exceptions import EmptyQuizError, UnsupportedVariant
from ...models.assignment_model import GradingResult, QuestionResult, QuizContent


def normalize(value: Any) -> str:
    """Trim and lowercase. `None` normalizes to the empty string."""
    if value is None:
        return ""
    return str(value).strip().lower()


def _as_answer(value: Any):
    # JSON clients may send real booleans for true/false questions.
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def is_correct(question, answer: Any) -> bool:
    answer = _as_answer(answer)
    if answer is None:
        return False
    if question.type == "simple":
        return normalize(answer) == normalize(question.correctAnswer)
    if question.type == "multiple":
        return normalize(answer) == normalize(question.correctAnswer)
    if question.type == "truefalse":
        return answer == question.correctAnswer
    raise UnsupportedVariant(f"Unknown question type: {question.type}")


def round_half_up_percent(correct: int, total: int) -> int:
    """round(100 * correct / total) with .5 rounding up, in integer arithmetic."""
    return (200 * correct + total) // (2 * total)


def grade(content, answer_map: Mapping[str, Any]) -> GradingResult:
    """
    Scores a quiz. Raises UnsupportedVariant for written or flashcard content
    and EmptyQuizError for a quiz with no questions; saved assignments can
    reach neither state.
    """
    if not isinstance(content, QuizContent):
        variant = getattr(content, "assignmentType", type(content).__name__)
        raise UnsupportedVariant(f"Cannot auto-grade '{variant}' content.")

    total = len(content.questions)
    if total == 0:
        raise EmptyQuizError()

    per_question = [
        QuestionResult(questionId=q.id, correct=is_correct(q, answer_map.get(q.id)))
        for q in content.questions
    ]
    correct_count = sum(1 for r in per_question if r.correct)

    return GradingResult(
        score=round_half_up_percent(correct_count, total),
        perQuestion=per_question,
    )
