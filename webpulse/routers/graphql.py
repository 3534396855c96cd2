import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from graphql import GraphQLError
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from webpulse.config import Settings
from webpulse.dependencies import get_db, get_settings, get_token_user
from webpulse.gql.context import GraphQLContext
from webpulse.gql.schema import schema
from webpulse.schemas.user import TokenData

logger = logging.getLogger(__name__)

router = APIRouter(tags=["graphql"])


class GraphQLRequest(BaseModel):
    query: str
    variables: dict[str, Any] | None = None
    operation_name: str | None = Field(None, alias="operationName")


def _log_unexpected(errors: list[GraphQLError]) -> None:
    for error in errors:
        original = error.original_error
        if original is not None and not isinstance(original, GraphQLError):
            logger.error(
                "Resolver failed at %s: %s",
                error.path, error.message,
                exc_info=(type(original), original, original.__traceback__),
            )


@router.post("/graphql")
async def graphql_endpoint(
    payload: GraphQLRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    token_user: TokenData | None = Depends(get_token_user),
):
    context = GraphQLContext(request=request, db=db, settings=settings, user=token_user)
    result = await schema.execute_async(
        payload.query,
        variable_values=payload.variables,
        operation_name=payload.operation_name,
        context_value=context,
    )

    body: dict[str, Any] = {"data": result.data}
    if result.errors:
        _log_unexpected(result.errors)
        body["errors"] = [error.formatted for error in result.errors]

    # No data at all means the document never executed (syntax/validation)
    status_code = 400 if result.data is None and result.errors else 200
    return JSONResponse(body, status_code=status_code)
