import graphene

from webpulse.gql.context import parse_input, require_user, to_id
from webpulse.gql.inputs import ProjectInput, TaskInput, UserInput
from webpulse.gql.object_types import AuthType, ProjectType, TaskType, TeamType, UserType
from webpulse.schemas.project import ProjectCreate, ProjectUpdate
from webpulse.schemas.task import TaskCreate, TaskUpdate
from webpulse.schemas.team import TeamCreate
from webpulse.schemas.user import UserCreate, UserUpdate
from webpulse.services import auth as auth_service
from webpulse.services import projects as project_service
from webpulse.services import tasks as task_service
from webpulse.services import teams as team_service
from webpulse.services import users as user_service


class Mutation(graphene.ObjectType):
    login = graphene.Field(
        AuthType,
        email=graphene.String(required=True),
        password=graphene.String(required=True),
    )
    add_user = graphene.Field(AuthType, input=UserInput(required=True))
    update_user = graphene.Field(UserType, user_id=graphene.ID(required=True), input=UserInput(required=True))
    remove_user = graphene.Field(UserType, user_id=graphene.ID(required=True))

    add_team = graphene.Field(TeamType, team_name=graphene.String(required=True))

    add_project = graphene.Field(ProjectType, input=ProjectInput(required=True))
    update_project = graphene.Field(
        ProjectType, project_id=graphene.ID(required=True), input=ProjectInput(required=True)
    )
    remove_project = graphene.Field(ProjectType, project_id=graphene.ID(required=True))

    add_task = graphene.Field(
        TaskType, project_id=graphene.ID(required=True), input=TaskInput(required=True)
    )
    update_task = graphene.Field(TaskType, task_id=graphene.ID(required=True), input=TaskInput(required=True))
    remove_task = graphene.Field(TaskType, task_id=graphene.ID(required=True))

    async def resolve_login(root, info, email, password):
        ctx = info.context
        token, user = await auth_service.login(ctx.db, email, password, ctx.settings)
        return AuthType(token=token, user=user)

    async def resolve_add_user(root, info, input):
        ctx = info.context
        user = await user_service.create_user(ctx.db, parse_input(UserCreate, input))
        return AuthType(token=auth_service.sign_token(user, ctx.settings), user=user)

    async def resolve_update_user(root, info, user_id, input):
        require_user(info)
        return await user_service.update_user(info.context.db, to_id(user_id), parse_input(UserUpdate, input))

    async def resolve_remove_user(root, info, user_id):
        require_user(info)
        return await user_service.delete_user(info.context.db, to_id(user_id))

    async def resolve_add_team(root, info, team_name):
        require_user(info)
        data = parse_input(TeamCreate, {"team_name": team_name})
        return await team_service.create_team(info.context.db, data)

    async def resolve_add_project(root, info, input):
        token_user = require_user(info)
        data = parse_input(ProjectCreate, input)
        return await project_service.create_project(info.context.db, data, owner_id=token_user.id)

    async def resolve_update_project(root, info, project_id, input):
        require_user(info)
        data = parse_input(ProjectUpdate, input)
        return await project_service.update_project(info.context.db, to_id(project_id), data)

    async def resolve_remove_project(root, info, project_id):
        require_user(info)
        return await project_service.delete_project(info.context.db, to_id(project_id))

    async def resolve_add_task(root, info, project_id, input):
        require_user(info)
        data = parse_input(TaskCreate, input)
        return await task_service.create_task(info.context.db, to_id(project_id), data)

    async def resolve_update_task(root, info, task_id, input):
        require_user(info)
        data = parse_input(TaskUpdate, input)
        return await task_service.update_task(info.context.db, to_id(task_id), data)

    async def resolve_remove_task(root, info, task_id):
        require_user(info)
        return await task_service.delete_task(info.context.db, to_id(task_id))
