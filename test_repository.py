"""Tests for repository reference resolution."""

import pytest

from assignee_bot.github.models import GitHubConfig, RepositoryRef
from assignee_bot.github.repository import (
    RepositoryResolutionError,
    parse_repository_reference,
    parse_repository_url,
    resolve_repository,
)


@pytest.mark.parametrize(
    "url",
    [
        "https://github.com/microsoft/PowerShellForGitHub",
        "https://github.com/microsoft/PowerShellForGitHub/",
        "https://github.com/microsoft/PowerShellForGitHub.git",
        "https://github.com/microsoft/PowerShellForGitHub/issues/1",
        "https://api.github.com/repos/microsoft/PowerShellForGitHub",
        "https://api.github.com/repos/microsoft/PowerShellForGitHub/issues/1/assignees",
        "git@github.com:microsoft/PowerShellForGitHub.git",
        "https://ghe.example.com/api/v3/repos/microsoft/PowerShellForGitHub",
        "https://ghe.example.com/api/v3/repos/microsoft/PowerShellForGitHub/issues/1/assignees",
        "https://ghe.example.com/microsoft/PowerShellForGitHub",
    ],
)
def test_url_matches_explicit_fields(url):
    from_url = resolve_repository(uri=url)
    from_fields = resolve_repository(owner="microsoft", repository_name="PowerShellForGitHub")

    assert from_url == from_fields
    assert from_url.full_name == "microsoft/PowerShellForGitHub"


@pytest.mark.parametrize(
    "url",
    ["", "not a url", "https://github.com/", "https://github.com/microsoft", "github.com/a/b"],
)
def test_unparseable_urls_are_rejected(url):
    with pytest.raises(RepositoryResolutionError):
        parse_repository_url(url)


def test_uri_and_explicit_fields_are_mutually_exclusive():
    with pytest.raises(RepositoryResolutionError):
        resolve_repository(owner="microsoft", uri="https://github.com/microsoft/PowerShellForGitHub")


def test_falls_back_to_config_defaults():
    config = GitHubConfig(default_owner="octo-org", default_repository="octo-repo")

    assert resolve_repository(config=config) == RepositoryRef(owner="octo-org", name="octo-repo")
    assert resolve_repository(repository_name="other", config=config).full_name == "octo-org/other"
    assert resolve_repository(owner="me", config=config).full_name == "me/octo-repo"


@pytest.mark.parametrize(
    "owner, name",
    [(None, None), ("microsoft", None), (None, "repo"), ("  ", "repo"), ("microsoft", "")],
)
def test_missing_owner_or_name_fails_fast(owner, name):
    with pytest.raises(RepositoryResolutionError):
        resolve_repository(owner=owner, repository_name=name, config=GitHubConfig())


def test_slash_in_owner_is_rejected():
    with pytest.raises(RepositoryResolutionError):
        resolve_repository(owner="a/b", repository_name="c")


def test_parse_repository_reference_accepts_short_form_and_url():
    assert parse_repository_reference("octocat/Hello-World").full_name == "octocat/Hello-World"
    assert (
        parse_repository_reference("https://github.com/octocat/Hello-World").full_name
        == "octocat/Hello-World"
    )
    with pytest.raises(RepositoryResolutionError):
        parse_repository_reference("Hello-World")


def test_repository_ref_html_url():
    ref = RepositoryRef(owner=" octocat ", name="Hello-World")
    assert ref.owner == "octocat"
    assert ref.html_url == "https://github.com/octocat/Hello-World"


def test_repos_owner_on_github_com_is_not_an_api_prefix():
    assert parse_repository_url("https://github.com/repos/tools").full_name == "repos/tools"
    assert parse_repository_url("https://github.com/octo/repos").full_name == "octo/repos"


@pytest.mark.parametrize(
    "owner, name",
    [
        ("octo?x=", "r"),
        ("octo#frag", "r"),
        ("octo.org", "r"),
        ("o", "r?x=1"),
        ("o", "r w"),
        ("o", "."),
        ("o", ".."),
    ],
)
def test_characters_outside_github_rules_are_rejected(owner, name):
    with pytest.raises(RepositoryResolutionError):
        resolve_repository(owner=owner, repository_name=name)


def test_dotted_repository_names_are_allowed():
    ref = resolve_repository(owner="my-org", repository_name="site.github.io")
    assert ref.full_name == "my-org/site.github.io"
