import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from webpulse.exceptions import NotFoundError
from webpulse.models.project import Project
from webpulse.models.task import Task
from webpulse.models.user import User
from webpulse.schemas.task import TaskCreate, TaskUpdate
from webpulse.services import users as user_service
from webpulse.services.transactions import unit_of_work

logger = logging.getLogger(__name__)

# Optional columns an explicit null in a patch resets
CLEARABLE = frozenset({"task_description", "date_due"})


def task_expansion():
    return (
        selectinload(Task.assigned_user).selectinload(User.projects).selectinload(Project.tasks),
        selectinload(Task.project),
    )


async def get_task(db: AsyncSession, task_id: int) -> Task | None:
    result = await db.execute(
        select(Task)
        .options(*task_expansion())
        .filter(Task.id == task_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().unique().first()


async def get_task_or_404(db: AsyncSession, task_id: int) -> Task:
    task = await get_task(db, task_id)
    if not task:
        raise NotFoundError("Task", task_id)
    return task


async def list_tasks_for_user(db: AsyncSession, user_id: int) -> list[Task]:
    result = await db.execute(
        select(Task)
        .options(*task_expansion())
        .filter(Task.assigned_user_id == user_id)
        .order_by(Task.id)
    )
    return list(result.scalars().unique().all())


async def create_task(db: AsyncSession, project_id: int, data: TaskCreate) -> Task:
    """Create a task inside a project and put it on the assignee's list.

    Both lists are derived from the task's own references, so the task shows
    up exactly once in the project's tasks and once in the assignee's tasks.
    """
    async with unit_of_work(db, "add task"):
        result = await db.execute(select(Project).filter(Project.id == project_id))
        project = result.scalars().first()
        if not project:
            raise NotFoundError("Project", project_id)

        task = Task(**data.model_dump(exclude={"assigned_user_id"}))
        task.project = project
        if data.assigned_user_id is not None:
            task.assigned_user = await user_service.get_user_or_404(db, data.assigned_user_id)

        db.add(task)
        await db.flush()

    logger.info(
        "Created task %s in project %s for user %s", task.id, project_id, data.assigned_user_id
    )
    return await get_task(db, task.id)


async def update_task(db: AsyncSession, task_id: int, data: TaskUpdate) -> Task:
    async with unit_of_work(db, "update task"):
        task = await get_task_or_404(db, task_id)
        patch = data.model_dump(exclude_unset=True)

        # The assignee is fixed once the task exists.
        requested = patch.pop("assigned_user_id", None)
        if requested is not None and requested != task.assigned_user_id:
            logger.info(
                "Ignoring assignee change on task %s (%s -> %s)",
                task_id, task.assigned_user_id, requested,
            )

        for key, value in patch.items():
            if value is not None or key in CLEARABLE:
                setattr(task, key, value)

    return await get_task(db, task_id)


async def delete_task(db: AsyncSession, task_id: int) -> Task:
    async with unit_of_work(db, "remove task"):
        task = await get_task_or_404(db, task_id)
        await db.delete(task)
    logger.info("Removed task %s", task_id)
    return task
