import inspect
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Union
from urllib.parse import quote
from assignee_bot.github import endpoints
from assignee_bot.github.client import GitHubRestClient, GitHubRequestError
from assignee_bot.github.models import RepositoryRef
from assignee_bot.github.properties import add_issue_properties, add_user_properties
from assignee_bot.github.repository import resolve_repository
from assignee_bot.utils.logger import get_logger, get_pii_safe_string

logger = get_logger(__name__)

# 1回のPOSTで追加できる担当者の上限（API側の制約）
MAX_ASSIGNEES_PER_CALL = 10

ConfirmCallback = Callable[[str], Union[bool, Awaitable[bool]]]


class AssigneeParameterError(ValueError):
    """Issue番号や担当者の指定が不正"""

    pass


def _telemetry_properties(repository: RepositoryRef, **extra) -> Dict[str, Any]:
    properties = {
        "owner_name": get_pii_safe_string(repository.owner),
        "repository_name": get_pii_safe_string(repository.name),
    }
    properties.update(extra)
    return properties


def _uri(template: str, repository: RepositoryRef, **params) -> str:
    """パスの各要素をURLエンコードしてURIフラグメントを組み立てる"""
    values = {key: quote(str(value), safe="") for key, value in params.items()}
    return template.format(
        owner=quote(repository.owner, safe=""),
        repo=quote(repository.name, safe=""),
        **values,
    )


def validate_issue(issue: Any) -> int:
    """Issue番号の検証（正の整数のみ）"""
    if isinstance(issue, bool) or not isinstance(issue, int) or issue < 1:
        raise AssigneeParameterError(f"Issue number must be a positive integer: {issue!r}")
    return issue


def normalize_assignees(
    assignees: Union[str, Sequence[str]],
    max_count: Optional[int] = None,
) -> List[str]:
    """担当者リストの検証

    文字列1つはそのまま1件のリストとして扱う。順序は変更しない。

    Raises:
        AssigneeParameterError: 空、空白のみの名前を含む、または上限超過の場合
    """
    if isinstance(assignees, str):
        assignees = [assignees]
    names = list(assignees or [])

    if not names:
        raise AssigneeParameterError("At least one assignee must be specified")
    if max_count is not None and len(names) > max_count:
        raise AssigneeParameterError(
            f"At most {max_count} assignees can be specified per call (got {len(names)})"
        )
    for name in names:
        if not isinstance(name, str) or not name.strip():
            raise AssigneeParameterError(f"Invalid assignee name: {name!r}")
    return names


async def get_assignees(
    client: GitHubRestClient,
    owner: Optional[str] = None,
    repository_name: Optional[str] = None,
    uri: Optional[str] = None,
    access_token: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """リポジトリで担当者に設定できるユーザーを全件取得

    Returns:
        List[Dict[str, Any]]: 型名付きのユーザー一覧
    """
    repository = resolve_repository(owner, repository_name, uri, client.config)

    users = await client.invoke_multiple(
        _uri(endpoints.ASSIGNEES, repository),
        description=f"Getting assignee list for {repository.full_name}",
        access_token=access_token,
        telemetry_event_name="get_assignees",
        telemetry_properties=_telemetry_properties(repository),
    )
    return add_user_properties(users)


async def test_assignee(
    client: GitHubRestClient,
    assignee: str,
    owner: Optional[str] = None,
    repository_name: Optional[str] = None,
    uri: Optional[str] = None,
    access_token: Optional[str] = None,
) -> bool:
    """ユーザーがリポジトリの担当者に設定できるか確認

    APIが204を返した場合のみTrue。HTTPエラーや通信エラーは
    「設定できない」と区別せずFalseとして返す。

    Raises:
        RepositoryResolutionError: リポジトリを解決できない場合
        AssigneeParameterError: assigneeが空の場合
    """
    repository = resolve_repository(owner, repository_name, uri, client.config)
    normalize_assignees(assignee)

    try:
        result = await client.invoke(
            _uri(endpoints.ASSIGNEE, repository, assignee=assignee),
            description=f"Checking permission for {assignee} being an assignee for {repository.full_name}",
            access_token=access_token,
            extended_result=True,
            telemetry_event_name="test_assignee",
            telemetry_properties=_telemetry_properties(repository),
        )
    except GitHubRequestError as e:
        logger.info(f"{assignee} is not assignable in {repository.full_name}: {e}")
        return False

    return result.status_code == 204


async def add_assignees(
    client: GitHubRestClient,
    issue: int,
    assignees: Union[str, Sequence[str]],
    owner: Optional[str] = None,
    repository_name: Optional[str] = None,
    uri: Optional[str] = None,
    access_token: Optional[str] = None,
) -> Dict[str, Any]:
    """Issueに担当者を追加

    権限のないユーザーはAPI側で黙って無視される。

    Args:
        client: RESTクライアント
        issue: Issue番号
        assignees: 追加するユーザー名（1〜10件）

    Returns:
        Dict[str, Any]: 更新後のIssue
    """
    repository = resolve_repository(owner, repository_name, uri, client.config)
    issue = validate_issue(issue)
    names = normalize_assignees(assignees, max_count=MAX_ASSIGNEES_PER_CALL)

    result = await client.invoke(
        _uri(endpoints.ISSUE_ASSIGNEES, repository, issue=issue),
        method="POST",
        description=f"Add assignees to issue #{issue} for {repository.full_name}",
        body={"assignees": names},
        access_token=access_token,
        telemetry_event_name="add_assignees",
        telemetry_properties=_telemetry_properties(repository, assignee_count=len(names)),
    )

    if isinstance(result, dict):
        returned = {a.get("login", "").lower() for a in result.get("assignees") or []}
        dropped = [name for name in names if name.lower() not in returned]
        if dropped:
            logger.warning(
                f"Assignees not added to {repository.full_name}#{issue} "
                f"(missing permission?): {', '.join(dropped)}"
            )

    return add_issue_properties(result, repository)


async def remove_assignees(
    client: GitHubRestClient,
    issue: int,
    assignees: Union[str, Sequence[str]],
    owner: Optional[str] = None,
    repository_name: Optional[str] = None,
    uri: Optional[str] = None,
    access_token: Optional[str] = None,
    force: bool = False,
    confirm: Optional[ConfirmCallback] = None,
) -> Optional[Dict[str, Any]]:
    """Issueから担当者を削除

    forceがFalseの場合はconfirmで確認を取り、承認された場合のみDELETEを送る。
    confirmが無い場合は却下として扱う。

    Returns:
        更新後のIssue。確認が却下された場合はNone
    """
    repository = resolve_repository(owner, repository_name, uri, client.config)
    issue = validate_issue(issue)
    names = normalize_assignees(assignees)

    if not force:
        message = (
            f"Remove assignee(s) {', '.join(names)} from issue #{issue} "
            f"in {repository.full_name}?"
        )
        approved = False
        if confirm is not None:
            approved = confirm(message)
            if inspect.isawaitable(approved):
                approved = await approved
        if not approved:
            logger.info(f"Removing assignees from {repository.full_name}#{issue} was declined")
            return None

    result = await client.invoke(
        _uri(endpoints.ISSUE_ASSIGNEES, repository, issue=issue),
        method="DELETE",
        description=f"Removing assignees from issue #{issue} for {repository.full_name}",
        body={"assignees": names},
        access_token=access_token,
        telemetry_event_name="remove_assignees",
        telemetry_properties=_telemetry_properties(repository, assignee_count=len(names)),
    )
    return add_issue_properties(result, repository)
