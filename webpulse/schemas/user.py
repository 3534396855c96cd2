from pydantic import BaseModel, EmailStr, Field, field_validator

from webpulse.utils.sanitization import sanitize_string


class UserBase(BaseModel):
    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)


class UserCreate(UserBase):
    password: str = Field(..., min_length=5)
    team_id: int | None = None


class UserUpdate(BaseModel):
    email: EmailStr | None = None
    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    password: str | None = Field(None, min_length=5)
    team_id: int | None = None

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)


class Token(BaseModel):
    access_token: str
    token_type: str


class TokenData(BaseModel):
    """Identity claims carried by a session credential."""

    id: int
    email: str | None = None
    first_name: str | None = None
