from quizmaster import run_job
from quizmaster import tasks
from quizmaster.database.base_class import Base
from quizmaster.database.session import get_async_engine
from quizmaster.exceptions import UnknownJob
from quizmaster.model.job_logs import JobLog


###########
### CLI ###
###########

def test_no_job_name_lists_jobs(capsys) -> None:
    assert run_job.main([]) == 1

    out = capsys.readouterr().out
    assert "Please specify a job name" in out
    assert "  - daily-reminder" in out
    assert "health-check" not in out


def test_unknown_job_exits_nonzero(monkeypatch, capsys) -> None:
    async def fake_run(job_name):
        raise UnknownJob(job_name)

    monkeypatch.setattr(run_job, "run", fake_run)

    assert run_job.main(["send-spam"]) == 1
    out = capsys.readouterr().out
    assert "Unknown job: send-spam" in out
    assert "Available jobs:" in out


def test_failed_job_exits_nonzero(monkeypatch, capsys) -> None:
    async def fake_run(job_name):
        raise RuntimeError("smtp down")

    monkeypatch.setattr(run_job, "run", fake_run)

    assert run_job.main(["daily-reminder"]) == 1
    assert "Job 'daily-reminder' failed: smtp down" in capsys.readouterr().out


def test_successful_job_exits_zero(monkeypatch, capsys) -> None:
    ran = []

    async def fake_run(job_name):
        ran.append(job_name)

    monkeypatch.setattr(run_job, "run", fake_run)

    assert run_job.main(["collect-metrics"]) == 0
    assert ran == ["collect-metrics"]
    assert "Job 'collect-metrics' completed successfully!" in capsys.readouterr().out


#######################
### Scheduled firing ###
#######################

async def test_fire_job_uses_its_own_engine(tmp_path, monkeypatch) -> None:
    url = f"sqlite+aiosqlite:///{tmp_path / 'cron.db'}"
    engine = get_async_engine(url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
    monkeypatch.setattr(tasks, "SQLALCHEMY_DATABASE_URL", url)

    await tasks.fire_job("health-check")

    engine = get_async_engine(url)
    try:
        async with engine.connect() as conn:
            rows = (await conn.execute(JobLog.__table__.select().order_by(JobLog.id))).all()
    finally:
        await engine.dispose()
    assert [(row.job_name, row.status) for row in rows] == [("HEALTH_CHECK", "COMPLETED")]


def test_celery_task_runs_the_job(monkeypatch) -> None:
    fired = []

    async def fake_fire_job(job_name):
        fired.append(job_name)

    monkeypatch.setattr(tasks, "fire_job", fake_fire_job)

    tasks.run_scheduled_job("weekly-report")

    assert fired == ["weekly-report"]
