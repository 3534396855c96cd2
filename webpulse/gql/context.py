from dataclasses import dataclass

from fastapi import Request
from graphql import GraphQLResolveInfo
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from webpulse.config import Settings
from webpulse.exceptions import AuthenticationError, InputError
from webpulse.schemas.user import TokenData


@dataclass
class GraphQLContext:
    """Per-request values handed to every resolver as ``info.context``."""

    request: Request
    db: AsyncSession
    settings: Settings
    user: TokenData | None = None


def require_user(info: GraphQLResolveInfo) -> TokenData:
    user = info.context.user
    if user is None:
        raise AuthenticationError("You need to be logged in!")
    return user


def parse_input(model: type[BaseModel], data) -> BaseModel:
    """Validate a GraphQL input object with its pydantic model."""
    try:
        return model.model_validate(dict(data or {}))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'input'}: {err['msg']}"
            for err in exc.errors()
        )
        raise InputError(f"Invalid input: {problems}") from exc


def to_id(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InputError(f"Invalid id: {value!r}")
