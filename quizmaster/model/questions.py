from sqlalchemy import Column, String, ForeignKey, Integer, CheckConstraint
from sqlalchemy.orm import relationship, validates
from quizmaster.database.base_class import Base

ANSWER_OPTIONS = ("a", "b", "c", "d")


class Question(Base):
    __tablename__ = "questions"
    __table_args__ = (
        CheckConstraint("correct_answer IN ('a', 'b', 'c', 'd')", name="ck_questions_correct_answer"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True)

    # attributes
    question = Column(String(1024), nullable=False)
    option_a = Column(String(512), nullable=False)
    option_b = Column(String(512), nullable=False)
    option_c = Column(String(512), nullable=False)
    option_d = Column(String(512), nullable=False)
    correct_answer = Column(String(1), nullable=False)
    points = Column(Integer, nullable=False, default=1)

    # relationship
    quiz = relationship("Quiz", back_populates="questions")

    @validates("correct_answer")
    def validate_correct_answer(self, key, value):
        if value not in ANSWER_OPTIONS:
            raise ValueError(f"correct_answer must be one of {ANSWER_OPTIONS}, got {value!r}")
        return value
