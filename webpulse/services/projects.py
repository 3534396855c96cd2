import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from webpulse.exceptions import NotFoundError
from webpulse.models.project import Project
from webpulse.models.task import Task
from webpulse.models.team import Team
from webpulse.models.user import User
from webpulse.schemas.project import ProjectCreate, ProjectUpdate
from webpulse.services import teams as team_service
from webpulse.services.transactions import unit_of_work

logger = logging.getLogger(__name__)

# Optional columns an explicit null in a patch resets
CLEARABLE = frozenset({"project_description", "date_due"})


# team with its members, tasks with their assignees
def project_expansion():
    return (
        selectinload(Project.team).selectinload(Team.members),
        selectinload(Project.members),
        selectinload(Project.tasks).selectinload(Task.assigned_user),
    )


async def get_project(db: AsyncSession, project_id: int) -> Project | None:
    result = await db.execute(
        select(Project)
        .options(*project_expansion())
        .filter(Project.id == project_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().unique().first()


async def get_project_or_404(db: AsyncSession, project_id: int) -> Project:
    project = await get_project(db, project_id)
    if not project:
        raise NotFoundError("Project", project_id)
    return project


async def list_projects(db: AsyncSession) -> list[Project]:
    result = await db.execute(select(Project).options(*project_expansion()).order_by(Project.id))
    return list(result.scalars().unique().all())


async def create_project(db: AsyncSession, data: ProjectCreate, owner_id: int | None = None) -> Project:
    """Create a project and hand it to every member of its team.

    The caller (``owner_id``) also receives the project when they are not
    already a member of that team.
    """
    async with unit_of_work(db, "add project"):
        project = Project(**data.model_dump(exclude={"team_id"}))

        members: list[User] = []
        if data.team_id is not None:
            team = await team_service.get_team_or_404(db, data.team_id)
            project.team = team
            members.extend(await team.awaitable_attrs.members)

        if owner_id is not None and all(m.id != owner_id for m in members):
            result = await db.execute(select(User).filter(User.id == owner_id))
            owner = result.scalars().first()
            if owner:
                members.append(owner)

        project.members = members
        db.add(project)
        await db.flush()

    logger.info(
        "Created project %s for team %s (%d members)", project.id, data.team_id, len(members)
    )
    return await get_project(db, project.id)


async def update_project(db: AsyncSession, project_id: int, data: ProjectUpdate) -> Project:
    async with unit_of_work(db, "update project"):
        project = await get_project_or_404(db, project_id)
        patch = data.model_dump(exclude_unset=True)

        team_id = patch.pop("team_id", None)
        if team_id is not None:
            project.team = await team_service.get_team_or_404(db, team_id)

        for key, value in patch.items():
            if value is not None or key in CLEARABLE:
                setattr(project, key, value)

    return await get_project(db, project_id)


async def delete_project(db: AsyncSession, project_id: int) -> Project:
    async with unit_of_work(db, "remove project"):
        project = await get_project_or_404(db, project_id)
        await db.delete(project)
    logger.info("Removed project %s with %d tasks", project_id, len(project.tasks))
    return project
