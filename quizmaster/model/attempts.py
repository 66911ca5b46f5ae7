from sqlalchemy import Column, ForeignKey, DateTime, Integer
from sqlalchemy.orm import relationship
from quizmaster.database.base_class import Base
from quizmaster.time_util import utcnow


class Attempt(Base):
    __tablename__ = "quiz_attempts"

    id = Column(Integer, index=True, primary_key=True, autoincrement=True)

    # FK
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False)

    # attributes
    score = Column(Integer, nullable=False)
    total_questions = Column(Integer, nullable=False)
    time_taken = Column(Integer, nullable=True)  # seconds
    completed_at = Column(DateTime, default=utcnow, index=True)

    # relationship
    user = relationship("User", back_populates="attempts")
    quiz = relationship("Quiz", back_populates="attempts")
