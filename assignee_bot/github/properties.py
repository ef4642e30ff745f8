from typing import Any, Optional
from assignee_bot.github.models import RepositoryRef

TYPE_NAME_KEY = "type_name"

USER_TYPE_NAME = "GitHub.User"
ISSUE_TYPE_NAME = "GitHub.Issue"
PULL_REQUEST_TYPE_NAME = "GitHub.PullRequest"
LABEL_TYPE_NAME = "GitHub.Label"
MILESTONE_TYPE_NAME = "GitHub.Milestone"


def add_user_properties(user: Any) -> Any:
    """ユーザーオブジェクトに型名と便利プロパティを付与

    リストの場合は各要素に付与する。dict以外はそのまま返す。
    """
    if isinstance(user, list):
        return [add_user_properties(item) for item in user]
    if not isinstance(user, dict):
        return user

    user[TYPE_NAME_KEY] = USER_TYPE_NAME
    user["user_name"] = user.get("login")
    user["user_id"] = user.get("id")
    return user


def add_label_properties(label: Any) -> Any:
    if isinstance(label, dict):
        label[TYPE_NAME_KEY] = LABEL_TYPE_NAME
        label["label_name"] = label.get("name")
    return label


def add_milestone_properties(milestone: Any) -> Any:
    if isinstance(milestone, dict):
        milestone[TYPE_NAME_KEY] = MILESTONE_TYPE_NAME
        milestone["milestone_number"] = milestone.get("number")
    return milestone


def _repository_html_url(issue: dict, repository: Optional[RepositoryRef]) -> Optional[str]:
    # html_url: https://github.com/<owner>/<repo>/issues/<number>
    html_url = issue.get("html_url")
    if isinstance(html_url, str):
        for marker in ("/issues/", "/pull/"):
            if marker in html_url:
                return html_url.split(marker, 1)[0]
    if repository is not None:
        return repository.html_url
    return None


def add_issue_properties(issue: Any, repository: Optional[RepositoryRef] = None) -> Any:
    """Issueオブジェクトに型名と便利プロパティを付与

    ネストしたuser/assignee/assignees/closed_by/labels/milestoneも整形する。

    Args:
        issue: APIが返したIssue（dictまたはそのリスト）
        repository: html_urlが無い場合にrepository_html_urlの算出に使うリポジトリ

    Returns:
        付与後の同じオブジェクト
    """
    if isinstance(issue, list):
        return [add_issue_properties(item, repository) for item in issue]
    if not isinstance(issue, dict):
        return issue

    issue[TYPE_NAME_KEY] = PULL_REQUEST_TYPE_NAME if issue.get("pull_request") else ISSUE_TYPE_NAME
    issue["repository_html_url"] = _repository_html_url(issue, repository)
    issue["issue_id"] = issue.get("id")
    issue["issue_number"] = issue.get("number")

    for key in ("user", "assignee", "closed_by"):
        if issue.get(key):
            add_user_properties(issue[key])

    for assignee in issue.get("assignees") or []:
        add_user_properties(assignee)

    for label in issue.get("labels") or []:
        add_label_properties(label)

    if issue.get("milestone"):
        add_milestone_properties(issue["milestone"])

    return issue
