from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from webpulse.config import Settings
from webpulse.main import create_app


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'webpulse.db'}",
        SECRET_KEY="test-secret",
        ENVIRONMENT="development",
    )


@pytest.fixture()
def client(settings: Settings):
    app = create_app(settings)
    with TestClient(app) as client:
        yield client


class GraphQLClient:
    """Thin helper posting documents to /graphql with an optional bearer token."""

    def __init__(self, client: TestClient):
        self.client = client
        self.token: str | None = None

    def execute(self, query: str, variables: dict | None = None, token: str | None = None) -> dict:
        headers = {}
        token = token or self.token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        response = self.client.post(
            "/graphql", json={"query": query, "variables": variables or {}}, headers=headers
        )
        return response.json()

    def data(self, query: str, variables: dict | None = None, token: str | None = None) -> dict:
        body = self.execute(query, variables, token)
        assert not body.get("errors"), body["errors"]
        return body["data"]

    def add_user(self, email: str, team_id: str | None = None, password: str = "secret123") -> dict:
        payload = {
            "email": email,
            "password": password,
            "firstName": email.split("@")[0].title(),
            "lastName": "Tester",
        }
        if team_id is not None:
            payload["teamId"] = team_id
        data = self.data(ADD_USER, {"input": payload})
        return data["addUser"]


ADD_USER = """
mutation AddUser($input: UserInput!) {
  addUser(input: $input) {
    token
    user { id email firstName team { id } }
  }
}
"""


@pytest.fixture()
def gql(client: TestClient) -> GraphQLClient:
    return GraphQLClient(client)


@pytest.fixture()
def admin(gql: GraphQLClient) -> dict:
    """A registered user whose token is used by default for later calls."""
    auth = gql.add_user("admin@example.com")
    gql.token = auth["token"]
    return auth["user"]


@pytest.fixture()
def team(gql: GraphQLClient, admin: dict) -> dict:
    data = gql.data('mutation { addTeam(teamName: "Platform") { id teamName } }')
    return data["addTeam"]
