import enum

from sqlalchemy import Column, String, DateTime, Integer, Text
from quizmaster.database.base_class import Base
from quizmaster.time_util import utcnow


class JobStatus(str, enum.Enum):
    STARTED = "STARTED"
    COMPLETED = "COMPLETED"
    ERROR = "ERROR"
    SKIPPED = "SKIPPED"


class JobLog(Base):
    __tablename__ = "job_logs"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # attributes
    job_name = Column(String(100), nullable=False)
    status = Column(String(20), nullable=False)
    details = Column(Text, nullable=True)
    executed_at = Column(DateTime, default=utcnow, nullable=False, index=True)
