import graphene

from webpulse.gql.mutations import Mutation
from webpulse.gql.queries import Query

schema = graphene.Schema(query=Query, mutation=Mutation)
