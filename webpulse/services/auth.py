import logging

from sqlalchemy.ext.asyncio import AsyncSession

from webpulse.config import Settings
from webpulse.exceptions import AuthenticationError
from webpulse.models.user import User
from webpulse.schemas.user import TokenData
from webpulse.services import users as user_service
from webpulse.utils.security import create_access_token, decode_access_token, verify_password

logger = logging.getLogger(__name__)


def sign_token(user: User, settings: Settings) -> str:
    return create_access_token(
        data={"sub": str(user.id), "email": user.email, "first_name": user.first_name},
        settings=settings,
    )


def read_token(token: str | None, settings: Settings) -> TokenData | None:
    """Decode a bearer credential into the caller's identity, if it is valid."""
    if not token:
        return None
    claims = decode_access_token(token, settings)
    if not claims or claims.get("sub") is None:
        return None
    try:
        return TokenData(
            id=int(claims["sub"]),
            email=claims.get("email"),
            first_name=claims.get("first_name"),
        )
    except ValueError:
        return None


async def login(db: AsyncSession, email: str, password: str, settings: Settings) -> tuple[str, User]:
    user = await user_service.get_user_by_email(db, email)
    if not user or not verify_password(password, user.password):
        logger.info("Rejected login for %s", email)
        raise AuthenticationError()
    return sign_token(user, settings), user
