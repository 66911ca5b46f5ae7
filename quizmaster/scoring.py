import math
from typing import Mapping, Optional, Sequence

from quizmaster.schema.quiz_schema import QuestionKey, ScoreResult


def round_half_up(value: Optional[float]) -> int:
    """Round .5 away from zero for positive values, like the frontend's Math.round."""
    if value is None:
        return 0
    return math.floor(float(value) + 0.5)


def percentage(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)


def score_submission(questions: Sequence[QuestionKey], answers: Mapping) -> ScoreResult:
    """
    Score a set of submitted answers against a quiz's answer key.

    Args:
        questions: The quiz's questions with their correct option and points
        answers: question id -> submitted letter; keys may be ints or numeric strings

    Returns:
        ScoreResult: points earned, number of correct answers and the rounded
        percentage of questions answered correctly. Unanswered questions score
        zero and ids not in the quiz are ignored.
    """
    submitted = {str(question_id): answer for question_id, answer in answers.items()}

    score = 0
    correct_answers = 0
    for question in questions:
        if submitted.get(str(question.question_id)) == question.correct_answer:
            score += question.points
            correct_answers += 1

    return ScoreResult(
        score=score,
        correct_answers=correct_answers,
        total_questions=len(questions),
        percentage=percentage(correct_answers, len(questions)),
    )
