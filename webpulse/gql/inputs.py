import graphene

from webpulse.gql.object_types import StatusEnum


class UserInput(graphene.InputObjectType):
    email = graphene.String()
    password = graphene.String()
    first_name = graphene.String()
    last_name = graphene.String()
    team_id = graphene.ID()


class ProjectInput(graphene.InputObjectType):
    project_name = graphene.String()
    project_description = graphene.String()
    project_status = StatusEnum()
    date_due = graphene.String(description='"Mon D YYYY" or YYYY-MM-DD')
    team_id = graphene.ID()


class TaskInput(graphene.InputObjectType):
    task_name = graphene.String()
    task_description = graphene.String()
    task_status = StatusEnum()
    date_due = graphene.String(description='"Mon D YYYY" or YYYY-MM-DD')
    assigned_user_id = graphene.ID()
