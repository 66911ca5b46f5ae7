from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class PreferencesOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    email_reminders: bool = True
    reminder_time: str = "09:00"
    weekly_reports: bool = True
    last_reminder_sent: Optional[datetime] = None


class PreferencesUpdate(BaseModel):
    email_reminders: bool = True
    reminder_time: str = Field(default="09:00", pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    weekly_reports: bool = True
