import re
from typing import Optional
from urllib.parse import urlparse
from pydantic import ValidationError
from assignee_bot.github.models import GitHubConfig, RepositoryRef

# git@github.com:owner/repo.git
SSH_URL_PATTERN = re.compile(r"^[\w.-]+@[\w.-]+:(?P<owner>[^/]+)/(?P<name>[^/]+?)(?:\.git)?/?$")

WEB_HOST = "github.com"

# GitHub Enterprise Serverのエンドポイント（https://<host>/api/v3）
API_PATH_PREFIX = ("api", "v3")


class RepositoryResolutionError(ValueError):
    """リポジトリのowner/nameを解決できない"""

    pass


def _build(owner: str, name: str, source: str) -> RepositoryRef:
    try:
        return RepositoryRef(owner=owner, name=name)
    except ValidationError as e:
        raise RepositoryResolutionError(f"Invalid repository reference '{source}'") from e


def parse_repository_url(url: str) -> RepositoryRef:
    """リポジトリURLからowner/nameを取り出す

    対応形式:
        https://github.com/<owner>/<repo>[.git][/...]
        https://api.github.com/repos/<owner>/<repo>[/...]
        https://<host>/api/v3/repos/<owner>/<repo>[/...]
        git@github.com:<owner>/<repo>.git

    Raises:
        RepositoryResolutionError: URLから解決できない場合
    """
    text = (url or "").strip()

    match = SSH_URL_PATTERN.match(text)
    if match:
        return _build(match.group("owner"), match.group("name"), text)

    parsed = urlparse(text)
    if not parsed.scheme or not parsed.netloc:
        raise RepositoryResolutionError(f"Not a repository URL: '{url}'")

    segments = [s for s in parsed.path.split("/") if s]
    # APIのURLは [/api/v3]/repos/<owner>/<repo> の形（GitHub Enterpriseを含む）
    if "repos" in segments:
        index = segments.index("repos")
        prefix = segments[:index]
        is_api_path = all(s in API_PATH_PREFIX for s in prefix)
        # github.com上の "repos" はowner名として扱う
        if is_api_path and (prefix or parsed.netloc.lower() != WEB_HOST):
            segments = segments[index + 1:]

    if len(segments) < 2:
        raise RepositoryResolutionError(f"URL does not name a repository: '{url}'")

    name = segments[1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    return _build(segments[0], name, text)


def parse_repository_reference(text: str) -> RepositoryRef:
    """URLまたは "owner/name" 形式の文字列を解決"""
    text = (text or "").strip()
    if "://" in text or SSH_URL_PATTERN.match(text):
        return parse_repository_url(text)

    parts = text.split("/")
    if len(parts) != 2:
        raise RepositoryResolutionError(
            f"Repository must be 'owner/name' or a URL: '{text}'"
        )
    return _build(parts[0], parts[1], text)


def resolve_repository(
    owner: Optional[str] = None,
    repository_name: Optional[str] = None,
    uri: Optional[str] = None,
    config: Optional[GitHubConfig] = None,
) -> RepositoryRef:
    """明示的なowner/name、URL、設定のデフォルトの順でリポジトリを解決

    Args:
        owner: リポジトリのowner
        repository_name: リポジトリ名
        uri: リポジトリURL（owner/repository_nameとは併用不可）
        config: デフォルトのowner/repositoryを持つ設定

    Returns:
        RepositoryRef: 解決済みのリポジトリ参照

    Raises:
        RepositoryResolutionError: 解決できない、または指定が矛盾している場合
    """
    if uri:
        if owner or repository_name:
            raise RepositoryResolutionError(
                "Specify either a repository URL or owner/repository_name, not both"
            )
        return parse_repository_url(uri)

    if config is not None:
        owner = owner or config.default_owner
        repository_name = repository_name or config.default_repository

    if not owner or not owner.strip():
        raise RepositoryResolutionError("Unable to determine the repository owner")
    if not repository_name or not repository_name.strip():
        raise RepositoryResolutionError("Unable to determine the repository name")

    return _build(owner, repository_name, f"{owner}/{repository_name}")
