from datetime import date

from pydantic import BaseModel, Field, field_validator

from webpulse.models.status import Status
from webpulse.schemas.project import due_date_or_none
from webpulse.utils.sanitization import sanitize_string


class TaskBase(BaseModel):
    task_name: str = Field(..., min_length=1, max_length=100)
    task_description: str | None = None
    task_status: Status = Status.Created
    date_due: date | None = None

    @field_validator("task_name", "task_description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    @field_validator("date_due", mode="before")
    @classmethod
    def parse_date_due(cls, v):
        return due_date_or_none(v)


class TaskCreate(TaskBase):
    assigned_user_id: int | None = None


class TaskUpdate(BaseModel):
    task_name: str | None = Field(None, min_length=1, max_length=100)
    task_description: str | None = None
    task_status: Status | None = None
    date_due: date | None = None
    # Accepted for input compatibility; the assignee never changes on update.
    assigned_user_id: int | None = None

    @field_validator("task_name", "task_description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    @field_validator("date_due", mode="before")
    @classmethod
    def parse_date_due(cls, v):
        return due_date_or_none(v)
