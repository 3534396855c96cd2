from collections.abc import AsyncIterator

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from webpulse.config import Settings
from webpulse.database import AppContext
from webpulse.models.user import User as UserModel
from webpulse.schemas.user import TokenData
from webpulse.services import auth as auth_service
from webpulse.services import users as user_service

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)


def get_app_context(request: Request) -> AppContext:
    return request.app.state.context


def get_settings(context: AppContext = Depends(get_app_context)) -> Settings:
    return context.settings


async def get_db(context: AppContext = Depends(get_app_context)) -> AsyncIterator[AsyncSession]:
    async with context.sessionmaker() as db:
        try:
            yield db
        finally:
            await db.close()


def get_token_user(
    token: str | None = Depends(oauth2_scheme),
    settings: Settings = Depends(get_settings),
) -> TokenData | None:
    """Identity from the bearer credential; anonymous when missing or invalid."""
    return auth_service.read_token(token, settings)


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    token_user: TokenData | None = Depends(get_token_user),
) -> UserModel:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if token_user is None:
        raise credentials_exception

    user = await user_service.get_user(db, token_user.id)
    if user is None:
        raise credentials_exception
    return user
