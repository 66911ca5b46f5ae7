from sqlalchemy import Column, String, Boolean, ForeignKey, DateTime, Integer
from sqlalchemy.orm import relationship
from quizmaster.database.base_class import Base

DEFAULT_REMINDER_TIME = "09:00"


class UserPreference(Base):
    __tablename__ = "user_preferences"

    #PK
    #FK
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)

    # attributes
    email_reminders = Column(Boolean, nullable=False, default=True)
    reminder_time = Column(String(5), nullable=False, default=DEFAULT_REMINDER_TIME)
    weekly_reports = Column(Boolean, nullable=False, default=True)
    last_reminder_sent = Column(DateTime, nullable=True)

    # relationship
    user = relationship("User", back_populates="preference")
