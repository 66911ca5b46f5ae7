from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from quizmaster.database import get_db
from quizmaster.model.users import User
from quizmaster.router.api.logics.quiz_logic import submit_quiz_logic
from quizmaster.router.dependencies import get_current_user
from quizmaster.schema.quiz_schema import QuizSubmission, SubmissionResultOut

router = APIRouter()


@router.post("/{quiz_id}/submit", response_model=SubmissionResultOut, status_code=status.HTTP_200_OK)
async def submit_quiz(
    quiz_id: int,
    submission: QuizSubmission,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return await submit_quiz_logic(db, user, quiz_id, submission)
