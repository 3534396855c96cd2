import graphene

from webpulse.exceptions import AuthenticationError
from webpulse.gql.context import require_user, to_id
from webpulse.gql.object_types import OverviewType, ProjectType, TaskType, TeamType, UserType
from webpulse.services import projects as project_service
from webpulse.services import tasks as task_service
from webpulse.services import teams as team_service
from webpulse.services import users as user_service
from webpulse.services.overview import build_overview


class Query(graphene.ObjectType):
    me = graphene.Field(UserType)
    users = graphene.List(graphene.NonNull(UserType), required=True)
    user = graphene.Field(UserType, id=graphene.ID(required=True))
    teams = graphene.List(graphene.NonNull(TeamType), required=True)
    team = graphene.Field(TeamType, id=graphene.ID(required=True))
    projects = graphene.List(graphene.NonNull(ProjectType), required=True)
    project = graphene.Field(ProjectType, id=graphene.ID(required=True))
    tasks = graphene.List(graphene.NonNull(TaskType), description="Tasks assigned to the caller")
    task = graphene.Field(TaskType, id=graphene.ID(required=True))
    overview = graphene.Field(OverviewType, description="Dashboard figures for the caller")

    async def resolve_me(root, info):
        token_user = require_user(info)
        user = await user_service.get_user(info.context.db, token_user.id)
        if user is None:
            # Valid token for an account that no longer exists
            raise AuthenticationError()
        return user

    async def resolve_users(root, info):
        return await user_service.list_users(info.context.db)

    async def resolve_user(root, info, id):
        return await user_service.get_user(info.context.db, to_id(id))

    async def resolve_teams(root, info):
        return await team_service.list_teams(info.context.db)

    async def resolve_team(root, info, id):
        return await team_service.get_team(info.context.db, to_id(id))

    async def resolve_projects(root, info):
        return await project_service.list_projects(info.context.db)

    async def resolve_project(root, info, id):
        return await project_service.get_project(info.context.db, to_id(id))

    async def resolve_tasks(root, info):
        token_user = require_user(info)
        return await task_service.list_tasks_for_user(info.context.db, token_user.id)

    async def resolve_task(root, info, id):
        return await task_service.get_task(info.context.db, to_id(id))

    async def resolve_overview(root, info):
        token_user = require_user(info)
        user = await user_service.get_user(info.context.db, token_user.id)
        if user is None:
            raise AuthenticationError()
        projects = await user.awaitable_attrs.projects
        tasks = await user.awaitable_attrs.tasks
        return build_overview(projects, tasks)
