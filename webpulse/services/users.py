import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from webpulse.exceptions import InputError, NotFoundError
from webpulse.models.project import Project
from webpulse.models.team import Team
from webpulse.models.user import User
from webpulse.schemas.user import UserCreate, UserUpdate
from webpulse.services import teams as team_service
from webpulse.services.transactions import unit_of_work
from webpulse.utils.security import get_password_hash

logger = logging.getLogger(__name__)


def user_expansion():
    """Projects, tasks and team, plus each teammate's tasks."""
    return (
        selectinload(User.projects).selectinload(Project.team),
        selectinload(User.tasks),
        selectinload(User.team).selectinload(Team.members).selectinload(User.tasks),
    )


async def get_user(db: AsyncSession, user_id: int) -> User | None:
    result = await db.execute(
        select(User)
        .options(*user_expansion())
        .filter(User.id == user_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().unique().first()


async def get_user_or_404(db: AsyncSession, user_id: int) -> User:
    user = await get_user(db, user_id)
    if not user:
        raise NotFoundError("User", user_id)
    return user


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(
        select(User).options(*user_expansion()).filter(User.email == email.lower())
    )
    return result.scalars().unique().first()


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).options(*user_expansion()).order_by(User.id))
    return list(result.scalars().unique().all())


async def create_user(db: AsyncSession, data: UserCreate) -> User:
    async with unit_of_work(db, "add user"):
        if await get_user_by_email(db, data.email):
            raise InputError("Email already registered")

        user = User(
            email=data.email.lower(),
            password=get_password_hash(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
        )
        if data.team_id is not None:
            user.team = await team_service.get_team_or_404(db, data.team_id)

        db.add(user)
        await db.flush()

    logger.info("Registered user %s (team=%s)", user.id, data.team_id)
    return await get_user(db, user.id)


async def update_user(db: AsyncSession, user_id: int, data: UserUpdate) -> User:
    async with unit_of_work(db, "update user"):
        user = await get_user_or_404(db, user_id)
        patch = data.model_dump(exclude_unset=True)

        team_id = patch.pop("team_id", None)
        if team_id is not None:
            user.team = await team_service.get_team_or_404(db, team_id)

        password = patch.pop("password", None)
        if password is not None:
            user.password = get_password_hash(password)

        email = patch.pop("email", None)
        if email is not None and email.lower() != user.email:
            if await get_user_by_email(db, email):
                raise InputError("Email already registered")
            user.email = email.lower()

        for key, value in patch.items():
            if value is not None:
                setattr(user, key, value)

    return await get_user(db, user_id)


async def delete_user(db: AsyncSession, user_id: int) -> User:
    async with unit_of_work(db, "remove user"):
        user = await get_user_or_404(db, user_id)
        await db.delete(user)
    logger.info("Removed user %s", user_id)
    return user
