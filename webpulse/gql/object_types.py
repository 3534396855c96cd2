import graphene

from webpulse.models.status import Status, format_due_date

StatusEnum = graphene.Enum.from_enum(Status, description="Lifecycle of a project or task")


class TeamType(graphene.ObjectType):
    class Meta:
        name = "Team"

    id = graphene.ID(required=True)
    team_name = graphene.String(required=True)
    created_at = graphene.DateTime()
    members = graphene.List(graphene.NonNull(lambda: UserType), required=True)
    projects = graphene.List(graphene.NonNull(lambda: ProjectType), required=True)

    async def resolve_members(root, info):
        return await root.awaitable_attrs.members

    async def resolve_projects(root, info):
        return await root.awaitable_attrs.projects


class UserType(graphene.ObjectType):
    class Meta:
        name = "User"

    id = graphene.ID(required=True)
    email = graphene.String(required=True)
    first_name = graphene.String(required=True)
    last_name = graphene.String(required=True)
    created_at = graphene.DateTime()
    team = graphene.Field(TeamType)
    projects = graphene.List(graphene.NonNull(lambda: ProjectType), required=True)
    tasks = graphene.List(graphene.NonNull(lambda: TaskType), required=True)

    async def resolve_team(root, info):
        return await root.awaitable_attrs.team

    async def resolve_projects(root, info):
        return await root.awaitable_attrs.projects

    async def resolve_tasks(root, info):
        return await root.awaitable_attrs.tasks


class ProjectType(graphene.ObjectType):
    class Meta:
        name = "Project"

    id = graphene.ID(required=True)
    project_name = graphene.String(required=True)
    project_description = graphene.String()
    project_status = graphene.Field(StatusEnum, required=True)
    date_created = graphene.DateTime()
    date_due = graphene.String(description='Due date formatted as "Mon D YYYY"')
    team = graphene.Field(TeamType)
    members = graphene.List(graphene.NonNull(UserType), required=True)
    tasks = graphene.List(graphene.NonNull(lambda: TaskType), required=True)

    def resolve_date_due(root, info):
        return format_due_date(root.date_due)

    async def resolve_team(root, info):
        return await root.awaitable_attrs.team

    async def resolve_members(root, info):
        return await root.awaitable_attrs.members

    async def resolve_tasks(root, info):
        return await root.awaitable_attrs.tasks


class TaskType(graphene.ObjectType):
    class Meta:
        name = "Task"

    id = graphene.ID(required=True)
    task_name = graphene.String(required=True)
    task_description = graphene.String()
    task_status = graphene.Field(StatusEnum, required=True)
    date_created = graphene.DateTime()
    date_due = graphene.String(description='Due date formatted as "Mon D YYYY"')
    project = graphene.Field(ProjectType)
    assigned_user = graphene.Field(UserType)

    def resolve_date_due(root, info):
        return format_due_date(root.date_due)

    async def resolve_project(root, info):
        return await root.awaitable_attrs.project

    async def resolve_assigned_user(root, info):
        return await root.awaitable_attrs.assigned_user


class AuthType(graphene.ObjectType):
    class Meta:
        name = "Auth"

    token = graphene.String(required=True)
    user = graphene.Field(UserType, required=True)


class StatusCountType(graphene.ObjectType):
    class Meta:
        name = "StatusCount"

    status = graphene.String(required=True)
    count = graphene.Int(required=True)


class ChartSliceType(graphene.ObjectType):
    class Meta:
        name = "ChartSlice"

    id = graphene.ID(required=True)
    value = graphene.Int(required=True)
    label = graphene.String(required=True)


def _counts(counts: dict[str, int]) -> list[StatusCountType]:
    return [StatusCountType(status=status, count=count) for status, count in counts.items()]


def _slices(slices: list[dict]) -> list[ChartSliceType]:
    return [ChartSliceType(**s) for s in slices]


class OverviewType(graphene.ObjectType):
    class Meta:
        name = "Overview"

    project_status_counts = graphene.List(graphene.NonNull(StatusCountType), required=True)
    task_status_counts = graphene.List(graphene.NonNull(StatusCountType), required=True)
    project_chart = graphene.List(graphene.NonNull(ChartSliceType), required=True)
    task_chart = graphene.List(graphene.NonNull(ChartSliceType), required=True)
    total_projects = graphene.Int(required=True)
    total_tasks = graphene.Int(required=True)
    completed_tasks = graphene.Int(required=True)
    incomplete_tasks = graphene.Int(required=True)
    next_project = graphene.Field(ProjectType)
    next_project_due = graphene.String(required=True)
    next_task = graphene.Field(TaskType)
    next_task_due = graphene.String(required=True)

    def resolve_project_status_counts(root, info):
        return _counts(root.project_counts)

    def resolve_task_status_counts(root, info):
        return _counts(root.task_counts)

    def resolve_project_chart(root, info):
        return _slices(root.project_chart)

    def resolve_task_chart(root, info):
        return _slices(root.task_chart)
