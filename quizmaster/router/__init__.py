from quizmaster.router.api.quizzes import router as quizzes_router
from quizmaster.router.api.users import router as users_router
from quizmaster.router.api.admin import router as admin_router
__all__ = [
    "quizzes_router",
    "users_router",
    "admin_router",
]
