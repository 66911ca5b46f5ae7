from sqlalchemy import Column, String, DateTime, Integer
from sqlalchemy.orm import relationship
from quizmaster.database.base_class import Base
from quizmaster.time_util import utcnow

ROLE_USER = "user"
ROLE_ADMIN = "admin"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    username = Column(String(50), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=ROLE_USER)
    created_at = Column(DateTime, default=utcnow)

    attempts = relationship("Attempt", back_populates="user", cascade="all, delete-orphan")
    preference = relationship("UserPreference", back_populates="user", uselist=False, cascade="all, delete-orphan")
    quizzes = relationship("Quiz", back_populates="creator")

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
