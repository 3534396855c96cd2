import logging
from contextlib import asynccontextmanager

from graphql import GraphQLError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from webpulse.exceptions import InputError, OperationError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def unit_of_work(db: AsyncSession, action: str):
    """Commit every write made inside the block together, or none of them.

    Domain errors (authentication, not found, bad input) roll back and
    propagate unchanged. Database failures roll back and surface as an
    ``OperationError`` reading ``"Failed to <action>"``.
    """
    try:
        yield db
        await db.commit()
    except GraphQLError:
        await db.rollback()
        raise
    except IntegrityError as exc:
        await db.rollback()
        logger.warning("Integrity error while trying to %s: %s", action, exc.orig)
        raise InputError(f"Failed to {action}: conflicting or missing reference") from exc
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Database error while trying to %s", action)
        raise OperationError(f"Failed to {action}") from exc
