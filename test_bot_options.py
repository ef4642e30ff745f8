"""Tests for command option helpers and the per-user repository store."""

import json

import pytest

from assignee_bot.bot.options import parse_usernames, resolve_command_repository
from assignee_bot.github.models import GitHubConfig, RepositoryRef
from assignee_bot.github.repository import RepositoryResolutionError
from assignee_bot.utils.repository_manager import RepositoryManager


@pytest.fixture
def manager(tmp_path):
    return RepositoryManager(str(tmp_path / "user_repositories.json"))


def test_parse_usernames():
    assert parse_usernames("@octocat, hubot  monalisa,,") == ["octocat", "hubot", "monalisa"]
    assert parse_usernames("") == []


def test_repository_manager_persists(tmp_path, manager):
    manager.set_repository("42", RepositoryRef(owner="octocat", name="Hello-World"))

    reloaded = RepositoryManager(str(tmp_path / "user_repositories.json"))
    assert reloaded.get_repository("42") == RepositoryRef(owner="octocat", name="Hello-World")
    assert reloaded.get_repository("43") is None

    reloaded.remove_repository("42")
    assert reloaded.get_repository("42") is None
    assert json.loads((tmp_path / "user_repositories.json").read_text(encoding="utf-8")) == {}


def test_repository_manager_ignores_invalid_entries(tmp_path):
    path = tmp_path / "user_repositories.json"
    path.write_text(json.dumps({"1": {"owner": ""}}), encoding="utf-8")

    assert RepositoryManager(str(path)).get_repository("1") is None


def test_resolve_command_repository_precedence(manager):
    config = GitHubConfig(default_owner="default-org", default_repository="default-repo")

    assert resolve_command_repository(None, "1", manager, config).full_name == "default-org/default-repo"

    manager.set_repository("1", RepositoryRef(owner="mine", name="repo"))
    assert resolve_command_repository(None, "1", manager, config).full_name == "mine/repo"

    explicit = resolve_command_repository("https://github.com/o/r", "1", manager, config)
    assert explicit.full_name == "o/r"


def test_resolve_command_repository_without_any_default(manager):
    with pytest.raises(RepositoryResolutionError):
        resolve_command_repository(None, "1", manager, GitHubConfig())
