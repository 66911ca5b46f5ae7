from sqlalchemy import Column, String, ForeignKey, DateTime, Integer
from sqlalchemy.orm import relationship
from quizmaster.database.base_class import Base
from quizmaster.time_util import utcnow


class Quiz(Base):
    __tablename__ = "quizzes"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # FK
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    # attributes
    title = Column(String(255), nullable=False)
    description = Column(String(1024), nullable=True)
    category = Column(String(100), nullable=True)
    difficulty = Column(String(50), nullable=True)
    time_limit = Column(Integer, nullable=True)  # seconds
    created_at = Column(DateTime, default=utcnow)

    # relationship
    creator = relationship("User", back_populates="quizzes")
    questions = relationship("Question", back_populates="quiz", cascade="all, delete-orphan", order_by="Question.id")
    attempts = relationship("Attempt", back_populates="quiz", cascade="all, delete-orphan")
