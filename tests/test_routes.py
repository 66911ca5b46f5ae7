from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt

from quizmaster.config import settings
from quizmaster.database import get_db
from quizmaster.main import app
from quizmaster.model.attempts import Attempt
from quizmaster.model.job_logs import JobLog
from quizmaster.model.questions import Question
from quizmaster.model.system_metrics import SystemMetric
from quizmaster.model.user_preferences import UserPreference
from quizmaster.router.dependencies import get_current_user, get_job_runner

from conftest import NOW


@pytest.fixture
def current_user():
    """Mutable holder; tests put the User the request should run as in slot 0."""
    return [None]


@pytest.fixture
async def client(session_factory, runner, current_user):
    async def override_get_db():
        async with session_factory() as db:
            yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = lambda: current_user[0]
    app.dependency_overrides[get_job_runner] = lambda: runner
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def alice(factory, current_user):
    user = await factory.user("alice")
    current_user[0] = user
    return user


@pytest.fixture
async def admin(factory, current_user):
    user = await factory.user("root", role="admin")
    current_user[0] = user
    return user


##############
### Quizzes ###
##############

async def test_submit_scores_and_stores_attempt(client, alice, factory) -> None:
    quiz = await factory.quiz(answers=("a", "b", "c", "d", "a"))
    questions = await factory.all(Question)
    ids = [q.id for q in questions]
    answers = {str(ids[0]): "a", str(ids[1]): "b", str(ids[2]): "c", str(ids[3]): "a", str(ids[4]): "b"}

    response = await client.post(f"/quizzes/{quiz.id}/submit", json={"answers": answers, "timeTaken": 300})

    assert response.status_code == 200
    body = response.json()
    assert body["score"] == 3
    assert body["totalQuestions"] == 5
    assert body["correctAnswers"] == 3
    assert body["percentage"] == 60
    assert body["timeTaken"] == 300

    [attempt] = await factory.all(Attempt)
    assert body["attemptId"] == attempt.id
    assert attempt.user_id == alice.id
    assert attempt.score == 3
    assert attempt.total_questions == 5
    assert attempt.time_taken == 300


async def test_submit_to_missing_quiz_is_404(client, alice, factory) -> None:
    response = await client.post("/quizzes/999/submit", json={"answers": {}})

    assert response.status_code == 404
    assert response.json()["detail"] == "Quiz not found"
    assert await factory.all(Attempt) == []


async def test_submit_quiz_without_questions(client, alice, factory) -> None:
    quiz = await factory.quiz(answers=())

    response = await client.post(f"/quizzes/{quiz.id}/submit", json={"answers": {"1": "a"}})

    assert response.status_code == 200
    assert response.json()["percentage"] == 0
    assert response.json()["totalQuestions"] == 0


async def test_submit_requires_a_token(factory) -> None:
    quiz = await factory.quiz()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.post(f"/quizzes/{quiz.id}/submit", json={"answers": {}})

    assert response.status_code == 401


async def test_submit_rejects_bad_token(factory) -> None:
    quiz = await factory.quiz()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.post(
            f"/quizzes/{quiz.id}/submit",
            json={"answers": {}},
            headers={"Authorization": "Bearer not-a-jwt"},
        )

    assert response.status_code == 403


async def test_valid_token_resolves_user(session_factory, factory) -> None:
    user = await factory.user("carol")
    quiz = await factory.quiz(answers=("a",))
    token = jwt.encode({"sub": str(user.id)}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    async def override_get_db():
        async with session_factory() as db:
            yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            response = await ac.post(
                f"/quizzes/{quiz.id}/submit",
                json={"answers": {}},
                headers={"Authorization": f"Bearer {token}"},
            )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    [attempt] = await factory.all(Attempt)
    assert attempt.user_id == user.id


#############
### Users ###
#############

async def test_preferences_default_when_never_saved(client, alice) -> None:
    response = await client.get("/users/preferences")

    assert response.status_code == 200
    assert response.json() == {
        "email_reminders": True,
        "reminder_time": "09:00",
        "weekly_reports": True,
        "last_reminder_sent": None,
    }


async def test_update_preferences_keeps_last_reminder(client, alice, factory) -> None:
    await factory.preference(alice, last_reminder_sent=NOW - timedelta(hours=2))

    response = await client.put(
        "/users/preferences",
        json={"email_reminders": False, "reminder_time": "18:45", "weekly_reports": False},
    )

    assert response.status_code == 200
    [preference] = await factory.all(UserPreference, UserPreference.user_id)
    assert preference.email_reminders is False
    assert preference.reminder_time == "18:45"
    assert preference.weekly_reports is False
    assert preference.last_reminder_sent == NOW - timedelta(hours=2)


async def test_update_preferences_creates_row(client, alice, factory) -> None:
    response = await client.put("/users/preferences", json={"email_reminders": False})

    assert response.status_code == 200
    assert response.json()["email_reminders"] is False
    [preference] = await factory.all(UserPreference, UserPreference.user_id)
    assert preference.user_id == alice.id
    assert preference.last_reminder_sent is None

    assert (await client.get("/users/preferences")).json()["email_reminders"] is False


async def test_update_preferences_rejects_bad_time(client, alice) -> None:
    response = await client.put("/users/preferences", json={"reminder_time": "25:00"})

    assert response.status_code == 422


async def test_attempt_history_newest_first(client, alice, factory) -> None:
    bob = await factory.user("bob")
    basics = await factory.quiz(title="Python Basics")
    advanced = await factory.quiz(title="Advanced Python")
    await factory.attempt(alice, basics, score=2, total_questions=5, completed_at=NOW - timedelta(days=2))
    await factory.attempt(alice, advanced, score=5, total_questions=5, completed_at=NOW - timedelta(hours=1))
    await factory.attempt(bob, basics, score=1, total_questions=5)

    response = await client.get("/users/attempts")

    assert response.status_code == 200
    attempts = response.json()["attempts"]
    assert [a["quiz_title"] for a in attempts] == ["Advanced Python", "Python Basics"]
    assert attempts[0]["score"] == 5


#############
### Admin ###
#############

async def test_job_logs_are_admin_only(client, alice) -> None:
    response = await client.get("/admin/jobs")

    assert response.status_code == 403
    assert response.json()["detail"] == "Admin access required"


async def test_list_job_logs_with_limit(client, admin, factory) -> None:
    for hours_ago in range(4):
        await factory.job_log("HEALTH_CHECK", "COMPLETED", NOW - timedelta(hours=hours_ago), details=str(hours_ago))

    response = await client.get("/admin/jobs", params={"limit": 3})

    assert response.status_code == 200
    logs = response.json()["logs"]
    assert [entry["details"] for entry in logs] == ["0", "1", "2"]
    assert logs[0]["job_name"] == "HEALTH_CHECK"


async def test_list_job_logs_rejects_zero_limit(client, admin) -> None:
    response = await client.get("/admin/jobs", params={"limit": 0})

    assert response.status_code == 422


async def test_run_job_waits_for_completion(client, admin, factory) -> None:
    response = await client.post("/admin/jobs/collect-metrics/run")

    assert response.status_code == 200
    assert response.json() == {"message": "Job collect-metrics executed successfully"}
    assert len(await factory.all(SystemMetric)) == 1
    assert [entry.status for entry in await factory.all(JobLog)] == ["STARTED", "COMPLETED"]


async def test_run_unknown_job_is_400(client, admin, factory) -> None:
    response = await client.post("/admin/jobs/send-spam/run")

    assert response.status_code == 400
    assert "send-spam" in response.json()["detail"]
    assert await factory.all(JobLog) == []


async def test_health_check_cannot_be_run_by_hand(client, admin) -> None:
    response = await client.post("/admin/jobs/health-check/run")

    assert response.status_code == 400


async def test_run_job_as_non_admin_is_403(client, alice, factory) -> None:
    response = await client.post("/admin/jobs/collect-metrics/run")

    assert response.status_code == 403
    assert await factory.all(SystemMetric) == []


async def test_failed_job_is_500(client, admin, runner, monkeypatch) -> None:
    async def broken(job_name):
        raise RuntimeError("boom")

    monkeypatch.setattr(runner, "trigger", broken)

    response = await client.post("/admin/jobs/daily-reminder/run")

    assert response.status_code == 500
    assert response.json()["detail"] == "Job execution failed"


async def test_metrics_history(client, admin) -> None:
    assert (await client.post("/admin/jobs/collect-metrics/run")).status_code == 200

    response = await client.get("/admin/metrics")

    assert response.status_code == 200
    [metric] = response.json()["metrics"]
    assert metric["metric_date"] == "2026-10-18"
    assert metric["total_users"] == 0


async def test_root_endpoint() -> None:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/")

    assert response.status_code == 200
    assert response.json()["QuizMaster"] == settings.PROJECT_NAME
