from sqlalchemy import Column, Date, DateTime, Float, Integer
from quizmaster.database.base_class import Base
from quizmaster.time_util import utcnow


class SystemMetric(Base):
    __tablename__ = "system_metrics"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # one row per UTC calendar day
    metric_date = Column(Date, nullable=False, unique=True)

    # attributes
    total_users = Column(Integer, nullable=False, default=0)
    total_quizzes = Column(Integer, nullable=False, default=0)
    total_attempts = Column(Integer, nullable=False, default=0)
    daily_attempts = Column(Integer, nullable=False, default=0)
    average_score = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime, default=utcnow)
