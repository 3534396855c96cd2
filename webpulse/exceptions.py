from graphql import GraphQLError


class BaseGraphQLException(GraphQLError):
    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str):
        super().__init__(message, extensions={"code": self.code})


class AuthenticationError(BaseGraphQLException):
    code = "UNAUTHENTICATED"

    def __init__(self, message: str = "Could not authenticate user."):
        super().__init__(message)


class NotFoundError(BaseGraphQLException):
    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id=None):
        if entity_id is None:
            super().__init__(f"{entity} not found")
        else:
            super().__init__(f"{entity} not found, id: {entity_id}")


class InputError(BaseGraphQLException):
    code = "BAD_USER_INPUT"


class OperationError(BaseGraphQLException):
    """An unexpected persistence failure, reported with a readable summary."""
