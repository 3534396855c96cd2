from pydantic import BaseModel, Field, field_validator

from webpulse.utils.sanitization import sanitize_string


class TeamCreate(BaseModel):
    team_name: str = Field(..., min_length=1, max_length=100)

    @field_validator("team_name", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)
