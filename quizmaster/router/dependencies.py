from fastapi import Depends, Query, Request, status, HTTPException
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from quizmaster.config import settings
from quizmaster.database import get_db
from quizmaster.log import get_logger
from quizmaster.model.users import User
from quizmaster.repeated_tasks.registry import JobRunner
from quizmaster.schema.auth_schema import TokenPayload

log = get_logger(__name__)

# tokens are issued elsewhere; this service only verifies them
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")


def get_limit_param(limit: int = Query(50, gt=0, le=500)) -> int:
    return limit


def get_token(token: str = Depends(oauth2_scheme)) -> TokenPayload:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        token_data = TokenPayload(**payload)
    except (JWTError, ValidationError) as e:
        log.info(f"Rejected token: {e}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Could not validate credentials") from e
    if token_data.sub is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Could not validate credentials")
    return token_data


async def get_current_user(
    db: AsyncSession = Depends(get_db), token: TokenPayload = Depends(get_token)
) -> User:
    try:
        user_id = int(token.sub)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Could not validate credentials")

    user = await db.get(User, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="User not found"
        )
    return user


def get_current_admin(
    current_user: User = Depends(get_current_user),
) -> User:
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user


def get_job_runner(request: Request) -> JobRunner:
    return request.app.state.job_runner
