from quizmaster.model import users, quizzes, questions, attempts, user_preferences, job_logs, system_metrics  # noqa: F401
