import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from webpulse.exceptions import NotFoundError
from webpulse.models.team import Team
from webpulse.models.user import User
from webpulse.schemas.team import TeamCreate
from webpulse.services.transactions import unit_of_work

logger = logging.getLogger(__name__)


def team_expansion():
    return (
        selectinload(Team.members).selectinload(User.tasks),
        selectinload(Team.projects),
    )


async def get_team(db: AsyncSession, team_id: int) -> Team | None:
    result = await db.execute(
        select(Team).options(*team_expansion()).filter(Team.id == team_id)
    )
    return result.scalars().unique().first()


async def get_team_or_404(db: AsyncSession, team_id: int) -> Team:
    team = await get_team(db, team_id)
    if not team:
        raise NotFoundError("Team", team_id)
    return team


async def list_teams(db: AsyncSession) -> list[Team]:
    result = await db.execute(select(Team).options(*team_expansion()).order_by(Team.id))
    return list(result.scalars().unique().all())


async def create_team(db: AsyncSession, data: TeamCreate) -> Team:
    async with unit_of_work(db, "add team"):
        team = Team(team_name=data.team_name)
        db.add(team)
        await db.flush()
    logger.info("Created team %s (%s)", team.id, team.team_name)
    return await get_team(db, team.id)
