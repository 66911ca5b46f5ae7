from celery import Celery
from celery.schedules import crontab

from quizmaster.config import settings
from quizmaster.repeated_tasks.registry import JOB_REGISTRY, JobRegistry

RUN_SCHEDULED_JOB_TASK = "quizmaster.tasks.run_scheduled_job"


def to_crontab(schedule: str) -> crontab:
    minute, hour, day_of_month, month_of_year, day_of_week = schedule.split()
    return crontab(
        minute=minute,
        hour=hour,
        day_of_month=day_of_month,
        month_of_year=month_of_year,
        day_of_week=day_of_week,
    )


def build_beat_schedule(registry: JobRegistry) -> dict:
    return {
        job.name: {
            'task': RUN_SCHEDULED_JOB_TASK,
            'schedule': to_crontab(job.schedule),
            'args': (job.name,),
        }
        for job in registry
    }


celery_app = Celery(
    "quizmaster",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["quizmaster.tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    worker_send_task_events=False,
    worker_enable_remote_control=False,
)

celery_app.conf.beat_schedule = build_beat_schedule(JOB_REGISTRY)
