from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from quizmaster.model.attempts import Attempt
from quizmaster.model.questions import Question
from quizmaster.model.quizzes import Quiz
from quizmaster.model.users import User
from quizmaster.schema.quiz_schema import QuestionKey, QuizSubmission, SubmissionResultOut
from quizmaster.scoring import score_submission
from quizmaster.time_util import utcnow


async def get_answer_key(db: AsyncSession, quiz_id: int) -> list:
    result = await db.execute(
        select(Question.id, Question.correct_answer, Question.points)
        .where(Question.quiz_id == quiz_id)
        .order_by(Question.id)
    )
    return [
        QuestionKey(question_id=row.id, correct_answer=row.correct_answer, points=row.points)
        for row in result.all()
    ]


async def submit_quiz_logic(
    db: AsyncSession,
    user: User,
    quiz_id: int,
    submission: QuizSubmission,
) -> SubmissionResultOut:
    """Score a submission against the quiz's answer key and store it as a new attempt.

    Args:
        db (AsyncSession): Database session
        user (User): User submitting the quiz
        quiz_id (int): Quiz being submitted
        submission (QuizSubmission): Answers keyed by question id, and time taken

    Returns:
        SubmissionResultOut: Score summary plus the new attempt id

    Raises:
        HTTPException: If the quiz does not exist
    """
    quiz = await db.get(Quiz, quiz_id)
    if quiz is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quiz not found")

    answer_key = await get_answer_key(db, quiz_id)
    result = score_submission(answer_key, submission.answers)

    attempt = Attempt(
        user_id=user.id,
        quiz_id=quiz_id,
        score=result.score,
        total_questions=result.total_questions,
        time_taken=submission.timeTaken,
        completed_at=utcnow(),
    )
    db.add(attempt)
    await db.commit()

    return SubmissionResultOut(
        score=result.score,
        totalQuestions=result.total_questions,
        correctAnswers=result.correct_answers,
        percentage=result.percentage,
        timeTaken=submission.timeTaken,
        attemptId=attempt.id,
    )
