from datetime import date

from pydantic import BaseModel, Field, field_validator

from webpulse.models.status import Status, parse_due_date
from webpulse.utils.sanitization import sanitize_string


def due_date_or_none(v):
    if v is None or v == "":
        return None
    return parse_due_date(v)


class ProjectBase(BaseModel):
    project_name: str = Field(..., min_length=1, max_length=100)
    project_description: str | None = None
    project_status: Status = Status.Created
    date_due: date | None = None

    @field_validator("project_name", "project_description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    @field_validator("date_due", mode="before")
    @classmethod
    def parse_date_due(cls, v):
        return due_date_or_none(v)


class ProjectCreate(ProjectBase):
    team_id: int | None = None


class ProjectUpdate(BaseModel):
    project_name: str | None = Field(None, min_length=1, max_length=100)
    project_description: str | None = None
    project_status: Status | None = None
    date_due: date | None = None
    team_id: int | None = None

    @field_validator("project_name", "project_description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    @field_validator("date_due", mode="before")
    @classmethod
    def parse_date_due(cls, v):
        return due_date_or_none(v)
