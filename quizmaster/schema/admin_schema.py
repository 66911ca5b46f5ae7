from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import date, datetime


class JobLogOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    job_name: str
    status: str
    details: Optional[str]
    executed_at: datetime


class JobLogsOut(BaseModel):
    logs: List[JobLogOut]


class JobRunOut(BaseModel):
    message: str


class SystemMetricOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    metric_date: date
    total_users: int
    total_quizzes: int
    total_attempts: int
    daily_attempts: int
    average_score: float


class SystemMetricsOut(BaseModel):
    metrics: List[SystemMetricOut]
