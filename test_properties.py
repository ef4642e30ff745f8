"""Tests for result shaping."""

from assignee_bot.github.models import RepositoryRef
from assignee_bot.github.properties import (
    TYPE_NAME_KEY,
    add_issue_properties,
    add_user_properties,
)


def test_user_properties():
    user = {"login": "octocat", "id": 583231}

    shaped = add_user_properties(user)

    assert shaped is user
    assert user[TYPE_NAME_KEY] == "GitHub.User"
    assert user["user_name"] == "octocat"
    assert user["user_id"] == 583231


def test_user_properties_on_list_and_non_dict():
    users = add_user_properties([{"login": "a", "id": 1}, {"login": "b", "id": 2}])
    assert [u["user_name"] for u in users] == ["a", "b"]
    assert add_user_properties(None) is None


def test_issue_properties_decorate_nested_objects():
    issue = {
        "id": 1,
        "number": 1347,
        "html_url": "https://github.com/octocat/Hello-World/issues/1347",
        "repository_url": "https://api.github.com/repos/octocat/Hello-World",
        "user": {"login": "octocat", "id": 1},
        "assignee": {"login": "octocat", "id": 1},
        "assignees": [{"login": "octocat", "id": 1}, {"login": "hubot", "id": 2}],
        "closed_by": None,
        "labels": [{"name": "bug"}],
        "milestone": {"number": 1},
    }

    add_issue_properties(issue)

    assert issue[TYPE_NAME_KEY] == "GitHub.Issue"
    assert issue["issue_id"] == 1
    assert issue["issue_number"] == 1347
    assert issue["repository_html_url"] == "https://github.com/octocat/Hello-World"
    # API-provided keys are left untouched
    assert issue["repository_url"] == "https://api.github.com/repos/octocat/Hello-World"
    assert issue["user"]["user_name"] == "octocat"
    assert issue["assignee"][TYPE_NAME_KEY] == "GitHub.User"
    assert [a["user_name"] for a in issue["assignees"]] == ["octocat", "hubot"]
    assert issue["closed_by"] is None
    assert issue["labels"][0][TYPE_NAME_KEY] == "GitHub.Label"
    assert issue["labels"][0]["label_name"] == "bug"
    assert issue["milestone"][TYPE_NAME_KEY] == "GitHub.Milestone"
    assert issue["milestone"]["milestone_number"] == 1


def test_pull_request_is_tagged_separately():
    issue = {"id": 2, "number": 5, "pull_request": {"url": "x"}, "html_url": "https://github.com/o/r/pull/5"}

    add_issue_properties(issue)

    assert issue[TYPE_NAME_KEY] == "GitHub.PullRequest"
    assert issue["repository_html_url"] == "https://github.com/o/r"


def test_repository_html_url_falls_back_to_resolved_repository():
    issue = add_issue_properties({"id": 3, "number": 9}, RepositoryRef(owner="o", name="r"))

    assert issue["repository_html_url"] == "https://github.com/o/r"
