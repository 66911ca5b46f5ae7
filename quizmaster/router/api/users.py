from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from quizmaster.database import get_db
from quizmaster.model.users import User
from quizmaster.router.api.logics.user_logic import (
    get_attempt_history_logic,
    get_preferences_logic,
    update_preferences_logic,
)
from quizmaster.router.dependencies import get_current_user
from quizmaster.schema.quiz_schema import AttemptsOut
from quizmaster.schema.user_schema import PreferencesOut, PreferencesUpdate

router = APIRouter()


@router.get("/preferences", response_model=PreferencesOut, status_code=status.HTTP_200_OK)
async def get_preferences(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return await get_preferences_logic(db, user)


@router.put("/preferences", response_model=PreferencesOut, status_code=status.HTTP_200_OK)
async def update_preferences(
    update: PreferencesUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return await update_preferences_logic(db, user, update)


@router.get("/attempts", response_model=AttemptsOut, status_code=status.HTTP_200_OK)
async def get_attempt_history(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return await get_attempt_history_logic(db, user)
