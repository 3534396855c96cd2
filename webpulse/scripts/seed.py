"""
Seed data for local development.

Creates a handful of teams with members, team projects spread across every
status, and tasks assigned to project members. Every seeded account uses the
password ``password123``.

    python -m webpulse.scripts.seed
"""
import asyncio
import logging
import random
from datetime import date, timedelta

from faker import Faker
from sqlalchemy import delete

from webpulse.config import Settings
from webpulse.database import AppContext
from webpulse.logging_setup import setup_logging
from webpulse.models.project import Project, user_projects
from webpulse.models.status import Status
from webpulse.models.task import Task
from webpulse.models.team import Team
from webpulse.models.user import User
from webpulse.utils.security import get_password_hash

logger = logging.getLogger(__name__)

fake = Faker()

SEED_PASSWORD = "password123"

TEAM_PROJECTS = {
    "Platform": [
        ("API Performance Optimization", "Reduce API response times and improve caching"),
        ("CI/CD Pipeline Implementation", "Automate testing and deployment workflows"),
        ("Database Migration", "Move the legacy store onto the managed cluster"),
    ],
    "Marketing": [
        ("Q1 Digital Marketing Campaign", "Launch multi-channel campaign for new product line"),
        ("Brand Identity Refresh", "Update logo, colors, and brand guidelines"),
    ],
    "Product": [
        ("Customer Feedback Analysis", "Analyze user research and prioritize feature requests"),
        ("Product Roadmap Planning", "Define and sequence next quarter deliverables"),
        ("Beta Testing Program", "Establish early access program for new features"),
    ],
}

TASK_NAMES = [
    "Write requirements", "Draft design", "Implement", "Review", "Test",
    "Document", "Present to stakeholders", "Collect feedback",
]


def due_date_for(status: Status, today: date) -> date:
    if status == Status.Completed:
        return today - timedelta(days=random.randint(1, 60))
    return today + timedelta(days=random.randint(0, 45))


async def clear_existing_data(db) -> None:
    # Delete in order respecting foreign keys
    await db.execute(delete(Task))
    await db.execute(delete(user_projects))
    await db.execute(delete(Project))
    await db.execute(delete(User))
    await db.execute(delete(Team))
    await db.commit()
    logger.info("Existing data cleared")


async def create_teams(db, members_per_team: int = 4) -> list[Team]:
    password = get_password_hash(SEED_PASSWORD)
    teams = []

    for team_name in TEAM_PROJECTS:
        team = Team(team_name=team_name)
        db.add(team)
        for _ in range(members_per_team):
            db.add(User(
                email=fake.unique.email().lower(),
                password=password,
                first_name=fake.first_name(),
                last_name=fake.last_name(),
                team=team,
            ))
        teams.append(team)

    await db.flush()
    logger.info("Created %d teams with %d members each", len(teams), members_per_team)
    return teams


async def create_projects(db, teams: list[Team]) -> list[Project]:
    today = date.today()
    projects = []

    for team in teams:
        members = await team.awaitable_attrs.members
        for name, description in TEAM_PROJECTS[team.team_name]:
            status = random.choice(list(Status))
            project = Project(
                project_name=name,
                project_description=description,
                project_status=status,
                date_due=due_date_for(status, today),
                team=team,
                members=list(members),
            )
            db.add(project)

            for task_name in random.sample(TASK_NAMES, k=random.randint(2, 5)):
                task_status = Status.Completed if status == Status.Completed else random.choice(list(Status))
                db.add(Task(
                    task_name=task_name,
                    task_description=fake.sentence(),
                    task_status=task_status,
                    date_due=due_date_for(task_status, today),
                    project=project,
                    assigned_user=random.choice(members),
                ))
            projects.append(project)

    await db.flush()
    logger.info("Created %d projects", len(projects))
    return projects


async def main(settings: Settings | None = None) -> None:
    settings = settings or Settings()
    setup_logging(settings.LOG_LEVEL)
    context = AppContext.from_settings(settings)
    await context.create_all()

    try:
        async with context.sessionmaker() as db:
            try:
                await clear_existing_data(db)
                teams = await create_teams(db)
                await create_projects(db, teams)
                await db.commit()
            except Exception:
                await db.rollback()
                logger.exception("Seeding failed")
                raise
        logger.info("Database seeded; log in with any seeded email and %r", SEED_PASSWORD)
    finally:
        await context.dispose()


if __name__ == "__main__":
    asyncio.run(main())
