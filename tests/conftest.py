"""
Pytest configuration and shared fixtures.
"""

from pathlib import Path

import pytest

# Current content of app/routes/users/$userId.tsx after the change
USER_ROUTE_SOURCE = "\n".join([
    'import { json } from "@remix-run/node";',
    "",
    "export async function action({ request, params }) {",
    "  const formData = await request.formData();",
    "  const userId = params.userId;",
    '  const name = formData.get("name");',
    "  return json({ userId, name });",
    "}",
]) + "\n"

# Content of the newly added app/routes/users.tsx
USERS_ROUTE_SOURCE = "\n".join([
    'import { json } from "@remix-run/node";',
    "",
    "export const loader = async () => {",
    "  return json({ users: [] });",
    "};",
]) + "\n"


@pytest.fixture
def modified_action_diff() -> str:
    """A diff adding a params access inside an existing action."""
    # Context lines start with exactly one space, the diff marker
    lines = [
        "diff --git a/app/routes/users/$userId.tsx b/app/routes/users/$userId.tsx",
        "index 1111111..2222222 100644",
        "--- a/app/routes/users/$userId.tsx",
        "+++ b/app/routes/users/$userId.tsx",
        "@@ -2,6 +2,7 @@ import { json } from \"@remix-run/node\";",
        " ",
        " export async function action({ request, params }) {",
        "   const formData = await request.formData();",
        "+  const userId = params.userId;",
        "   const name = formData.get(\"name\");",
        "-  return json({ name });",
        "+  return json({ userId, name });",
        " }",
    ]
    return "\n".join(lines) + "\n"


@pytest.fixture
def new_file_diff() -> str:
    """A diff adding a new route module with a loader."""
    lines = [
        "diff --git a/app/routes/users.tsx b/app/routes/users.tsx",
        "new file mode 100644",
        "index 0000000..3333333",
        "--- /dev/null",
        "+++ b/app/routes/users.tsx",
        "@@ -0,0 +1,5 @@",
        "+import { json } from \"@remix-run/node\";",
        "+",
        "+export const loader = async () => {",
        "+  return json({ users: [] });",
        "+};",
    ]
    return "\n".join(lines) + "\n"


@pytest.fixture
def deleted_file_diff() -> str:
    """A diff deleting a route module."""
    lines = [
        "diff --git a/app/routes/old.tsx b/app/routes/old.tsx",
        "deleted file mode 100644",
        "index 4444444..0000000",
        "--- a/app/routes/old.tsx",
        "+++ /dev/null",
        "@@ -1,2 +0,0 @@",
        "-export const loader = () => null;",
        "-export default function Old() { return null; }",
    ]
    return "\n".join(lines) + "\n"


@pytest.fixture
def multi_file_diff(modified_action_diff: str, new_file_diff: str) -> str:
    """The modified and new route diffs combined."""
    return modified_action_diff + new_file_diff


@pytest.fixture
def route_project(tmp_path: Path) -> Path:
    """A project tree holding the current content of both route modules."""
    routes = tmp_path / "app" / "routes"
    (routes / "users").mkdir(parents=True)
    (routes / "users" / "$userId.tsx").write_text(USER_ROUTE_SOURCE, encoding="utf-8")
    (routes / "users.tsx").write_text(USERS_ROUTE_SOURCE, encoding="utf-8")
    return tmp_path
