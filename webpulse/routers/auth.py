from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from webpulse.config import Settings
from webpulse.dependencies import get_db, get_settings
from webpulse.exceptions import AuthenticationError
from webpulse.schemas.user import Token
from webpulse.services import auth as auth_service

router = APIRouter(tags=["auth"])

@router.post("/token", response_model=Token)
async def login_for_access_token(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    form_data: OAuth2PasswordRequestForm = Depends()
):
    # The form's username field carries the account email
    try:
        access_token, _ = await auth_service.login(db, form_data.username, form_data.password, settings)
    except AuthenticationError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return {"access_token": access_token, "token_type": "bearer"}
