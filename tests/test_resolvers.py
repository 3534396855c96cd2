from datetime import date

from webpulse.models.status import format_due_date

ADD_PROJECT = """
mutation AddProject($input: ProjectInput!) {
  addProject(input: $input) {
    id projectName projectStatus dateDue
    team { id members { id } }
    members { id }
  }
}
"""

ADD_TASK = """
mutation AddTask($projectId: ID!, $input: TaskInput!) {
  addTask(projectId: $projectId, input: $input) {
    id taskName taskStatus dateDue
    project { id }
    assignedUser { id email tasks { id } }
  }
}
"""

USER_LISTS = """
query User($id: ID!) {
  user(id: $id) { id projects { id } tasks { id } team { id members { id tasks { id } } } }
}
"""

PROJECT_TASKS = """
query Project($id: ID!) {
  project(id: $id) { id tasks { id assignedUser { id } } team { id } }
}
"""


def error_codes(body: dict) -> list[str]:
    return [e["extensions"]["code"] for e in body.get("errors", [])]


def add_project(gql, **fields) -> dict:
    payload = {"projectName": "Launch", **fields}
    return gql.data(ADD_PROJECT, {"input": payload})["addProject"]


def add_task(gql, project_id, **fields) -> dict:
    payload = {"taskName": "Write docs", **fields}
    return gql.data(ADD_TASK, {"projectId": project_id, "input": payload})["addTask"]


def test_add_user_links_team_both_ways(gql, team):
    member = gql.add_user("grace@example.com", team_id=team["id"])
    assert member["user"]["team"]["id"] == team["id"]

    data = gql.data("query($id: ID!) { team(id: $id) { members { id } } }", {"id": team["id"]})
    assert {"id": member["user"]["id"]} in data["team"]["members"]


def test_add_user_with_unknown_team_creates_nothing(gql, admin):
    body = gql.execute(
        "mutation($input: UserInput!) { addUser(input: $input) { token } }",
        {"input": {"email": "ghost@example.com", "password": "secret123",
                   "firstName": "Ghost", "lastName": "User", "teamId": "999"}},
    )
    assert body["data"]["addUser"] is None
    assert error_codes(body) == ["NOT_FOUND"]

    emails = [u["email"] for u in gql.data("{ users { email } }")["users"]]
    assert "ghost@example.com" not in emails


def test_add_project_reaches_every_team_member(gql, admin, team):
    alice = gql.add_user("alice@example.com", team_id=team["id"])["user"]
    bob = gql.add_user("bob@example.com", team_id=team["id"])["user"]

    project = add_project(gql, teamId=team["id"], projectStatus="Pending", dateDue="Nov 2 2026")

    assert project["team"]["id"] == team["id"]
    assert project["projectStatus"] == "Pending"
    assert project["dateDue"] == "Nov 2 2026"
    for member in (alice, bob):
        user = gql.data(USER_LISTS, {"id": member["id"]})["user"]
        assert [p["id"] for p in user["projects"]] == [project["id"]]

    # the caller holds the project too
    me = gql.data("{ me { projects { id } } }")["me"]
    assert {"id": project["id"]} in me["projects"]


def test_add_project_with_unknown_team(gql, admin):
    body = gql.execute(ADD_PROJECT, {"input": {"projectName": "Orphan", "teamId": "424242"}})
    assert body["data"]["addProject"] is None
    assert error_codes(body) == ["NOT_FOUND"]
    assert gql.data("{ projects { id } }")["projects"] == []


def test_add_task_lands_once_in_project_and_assignee_lists(gql, admin, team):
    alice = gql.add_user("alice@example.com", team_id=team["id"])["user"]
    project = add_project(gql, teamId=team["id"])

    task = add_task(gql, project["id"], assignedUserId=alice["id"], dateDue="2026-12-01")

    assert task["assignedUser"]["id"] == alice["id"]
    assert task["project"]["id"] == project["id"]
    assert task["dateDue"] == "Dec 1 2026"
    assert task["taskStatus"] == "Created"

    project_tasks = gql.data(PROJECT_TASKS, {"id": project["id"]})["project"]["tasks"]
    assert [t["id"] for t in project_tasks].count(task["id"]) == 1
    user_tasks = gql.data(USER_LISTS, {"id": alice["id"]})["user"]["tasks"]
    assert [t["id"] for t in user_tasks].count(task["id"]) == 1


def test_add_task_to_missing_project(gql, admin):
    body = gql.execute(ADD_TASK, {"projectId": "77", "input": {"taskName": "Lost"}})
    assert body["data"]["addTask"] is None
    assert error_codes(body) == ["NOT_FOUND"]


def test_add_task_with_missing_assignee_rolls_back(gql, admin):
    project = add_project(gql)
    body = gql.execute(
        ADD_TASK, {"projectId": project["id"], "input": {"taskName": "Lost", "assignedUserId": "999"}}
    )
    assert error_codes(body) == ["NOT_FOUND"]
    assert gql.data(PROJECT_TASKS, {"id": project["id"]})["project"]["tasks"] == []


def test_tasks_returns_only_the_callers_tasks(gql, admin, team):
    alice = gql.add_user("alice@example.com", team_id=team["id"])
    project = add_project(gql, teamId=team["id"])
    mine = add_task(gql, project["id"], taskName="Mine", assignedUserId=alice["user"]["id"])
    add_task(gql, project["id"], taskName="Someone else's", assignedUserId=admin["id"])

    data = gql.data("{ tasks { id taskName } }", token=alice["token"])
    assert data["tasks"] == [{"id": mine["id"], "taskName": "Mine"}]


def test_update_task_keeps_the_assignee(gql, admin, team):
    alice = gql.add_user("alice@example.com", team_id=team["id"])["user"]
    bob = gql.add_user("bob@example.com", team_id=team["id"])["user"]
    project = add_project(gql, teamId=team["id"])
    task = add_task(gql, project["id"], assignedUserId=alice["id"])

    update = """
    mutation($id: ID!, $input: TaskInput!) {
      updateTask(taskId: $id, input: $input) { id taskName taskStatus assignedUser { id } }
    }
    """
    renamed = gql.data(update, {"id": task["id"], "input": {"taskName": "Renamed", "taskStatus": "Completed"}})
    assert renamed["updateTask"]["taskName"] == "Renamed"
    assert renamed["updateTask"]["taskStatus"] == "Completed"
    assert renamed["updateTask"]["assignedUser"]["id"] == alice["id"]

    reassigned = gql.data(update, {"id": task["id"], "input": {"assignedUserId": bob["id"]}})
    assert reassigned["updateTask"]["assignedUser"]["id"] == alice["id"]
    assert gql.data(USER_LISTS, {"id": bob["id"]})["user"]["tasks"] == []


def test_update_project_patches_fields_and_team(gql, admin, team):
    other = gql.data('mutation { addTeam(teamName: "Design") { id } }')["addTeam"]
    project = add_project(gql, teamId=team["id"])

    data = gql.data(
        """
        mutation($id: ID!, $input: ProjectInput!) {
          updateProject(projectId: $id, input: $input) { projectName projectStatus team { id } }
        }
        """,
        {"id": project["id"], "input": {"projectStatus": "InProgress", "teamId": other["id"]}},
    )["updateProject"]

    assert data == {"projectName": "Launch", "projectStatus": "InProgress", "team": {"id": other["id"]}}


def test_explicit_null_clears_optional_fields(gql, admin):
    project = add_project(gql, projectDescription="Q4 launch", dateDue="Nov 2 2026")
    task = add_task(gql, project["id"], taskDescription="Outline", dateDue="Nov 1 2026")

    cleared = gql.data(
        """
        mutation($id: ID!, $input: ProjectInput!) {
          updateProject(projectId: $id, input: $input) { projectName projectDescription dateDue }
        }
        """,
        {"id": project["id"], "input": {"projectName": None, "projectDescription": None, "dateDue": None}},
    )["updateProject"]
    assert cleared == {"projectName": "Launch", "projectDescription": None, "dateDue": None}

    cleared = gql.data(
        """
        mutation($id: ID!, $input: TaskInput!) {
          updateTask(taskId: $id, input: $input) { taskName taskDescription dateDue }
        }
        """,
        {"id": task["id"], "input": {"taskDescription": None, "dateDue": None}},
    )["updateTask"]
    assert cleared == {"taskName": "Write docs", "taskDescription": None, "dateDue": None}


def test_remove_project_takes_its_tasks(gql, admin):
    project = add_project(gql)
    task = add_task(gql, project["id"], assignedUserId=admin["id"])

    removed = gql.data(
        "mutation($id: ID!) { removeProject(projectId: $id) { id projectName } }", {"id": project["id"]}
    )
    assert removed["removeProject"]["id"] == project["id"]

    assert gql.data(PROJECT_TASKS, {"id": project["id"]})["project"] is None
    assert gql.data("query($id: ID!) { task(id: $id) { id } }", {"id": task["id"]})["task"] is None
    assert gql.data(USER_LISTS, {"id": admin["id"]})["user"]["tasks"] == []


def test_remove_task_clears_both_lists(gql, admin):
    project = add_project(gql)
    task = add_task(gql, project["id"], assignedUserId=admin["id"])

    gql.data("mutation($id: ID!) { removeTask(taskId: $id) { id } }", {"id": task["id"]})

    assert gql.data(PROJECT_TASKS, {"id": project["id"]})["project"]["tasks"] == []
    assert gql.data(USER_LISTS, {"id": admin["id"]})["user"]["tasks"] == []


def test_remove_user_unassigns_tasks(gql, admin, team):
    alice = gql.add_user("alice@example.com", team_id=team["id"])["user"]
    project = add_project(gql, teamId=team["id"])
    task = add_task(gql, project["id"], assignedUserId=alice["id"])

    removed = gql.data("mutation($id: ID!) { removeUser(userId: $id) { email } }", {"id": alice["id"]})
    assert removed["removeUser"]["email"] == "alice@example.com"

    assert gql.data("query($id: ID!) { user(id: $id) { id } }", {"id": alice["id"]})["user"] is None
    remaining = gql.data("query($id: ID!) { task(id: $id) { id assignedUser { id } } }", {"id": task["id"]})
    assert remaining["task"] == {"id": task["id"], "assignedUser": None}


def test_users_query_expands_teammates_tasks(gql, admin, team):
    alice = gql.add_user("alice@example.com", team_id=team["id"])["user"]
    bob = gql.add_user("bob@example.com", team_id=team["id"])["user"]
    project = add_project(gql, teamId=team["id"])
    task = add_task(gql, project["id"], assignedUserId=bob["id"])

    user = gql.data(USER_LISTS, {"id": alice["id"]})["user"]
    teammates = {m["id"]: m["tasks"] for m in user["team"]["members"]}
    assert teammates[bob["id"]] == [{"id": task["id"]}]


def test_teams_and_projects_listing(gql, admin, team):
    add_project(gql, teamId=team["id"], projectName="One")
    add_project(gql, teamId=team["id"], projectName="Two")

    teams = gql.data("{ teams { teamName projects { projectName } } }")["teams"]
    assert teams == [{"teamName": "Platform", "projects": [{"projectName": "One"}, {"projectName": "Two"}]}]

    projects = gql.data("{ projects { projectName team { teamName } } }")["projects"]
    assert [p["projectName"] for p in projects] == ["One", "Two"]


def test_overview_query_for_the_caller(gql, admin):
    project = add_project(gql, projectStatus="Completed")
    today = format_due_date(date.today())
    add_task(gql, project["id"], taskName="Today", assignedUserId=admin["id"], dateDue=today)
    add_task(gql, project["id"], taskName="Done", assignedUserId=admin["id"], taskStatus="Completed")

    overview = gql.data(
        """
        {
          overview {
            projectStatusCounts { status count }
            taskStatusCounts { status count }
            totalProjects totalTasks completedTasks incompleteTasks
            nextTask { taskName } nextTaskDue
            nextProjectDue
            taskChart { id value label }
          }
        }
        """
    )["overview"]

    assert overview["projectStatusCounts"] == [{"status": "Completed", "count": 1}]
    assert overview["totalProjects"] == 1
    assert overview["totalTasks"] == 2
    assert overview["completedTasks"] == 1
    assert overview["incompleteTasks"] == 1
    assert overview["nextTask"] == {"taskName": "Today"}
    assert overview["nextTaskDue"] == "TODAY"
    assert overview["nextProjectDue"] == "No upcoming due date"
    assert overview["taskChart"][0] == {"id": "status_Created_0", "value": 1, "label": "Created"}


def test_bad_due_date_is_rejected(gql, admin):
    body = gql.execute(ADD_PROJECT, {"input": {"projectName": "X", "dateDue": "whenever"}})
    assert error_codes(body) == ["BAD_USER_INPUT"]


def test_malformed_document_is_a_bad_request(client):
    response = client.post("/graphql", json={"query": "{ me { "})
    assert response.status_code == 400
    assert response.json()["errors"]


def test_update_user_moves_to_another_team(gql, admin, team):
    other = gql.data('mutation { addTeam(teamName: "Design") { id } }')["addTeam"]
    alice = gql.add_user("alice@example.com", team_id=team["id"])["user"]

    moved = gql.data(
        """
        mutation($id: ID!, $input: UserInput!) {
          updateUser(userId: $id, input: $input) { id team { id } }
        }
        """,
        {"id": alice["id"], "input": {"teamId": other["id"]}},
    )["updateUser"]
    assert moved == {"id": alice["id"], "team": {"id": other["id"]}}

    members = "query($id: ID!) { team(id: $id) { members { id } } }"
    assert {"id": alice["id"]} in gql.data(members, {"id": other["id"]})["team"]["members"]
    assert {"id": alice["id"]} not in gql.data(members, {"id": team["id"]})["team"]["members"]


def test_remove_user_leaves_project_members(gql, admin, team):
    alice = gql.add_user("alice@example.com", team_id=team["id"])["user"]
    project = add_project(gql, teamId=team["id"])

    members = "query($id: ID!) { project(id: $id) { members { id } } }"
    assert {"id": alice["id"]} in gql.data(members, {"id": project["id"]})["project"]["members"]

    gql.data("mutation($id: ID!) { removeUser(userId: $id) { id } }", {"id": alice["id"]})

    remaining = gql.data(members, {"id": project["id"]})["project"]["members"]
    assert {"id": alice["id"]} not in remaining
    assert {"id": admin["id"]} in remaining
