import re
from typing import List, Optional
from assignee_bot.github.models import GitHubConfig, RepositoryRef
from assignee_bot.github.repository import parse_repository_reference, resolve_repository
from assignee_bot.utils.repository_manager import RepositoryManager

USERNAME_SEPARATOR = re.compile(r"[\s,]+")


def parse_usernames(text: str) -> List[str]:
    """カンマ・空白区切りのGitHub IDをリストに変換（先頭の@は除去）"""
    names = []
    for token in USERNAME_SEPARATOR.split(text or ""):
        token = token.lstrip("@")
        if token:
            names.append(token)
    return names


def resolve_command_repository(
    repository: Optional[str],
    discord_id: str,
    repository_manager: RepositoryManager,
    config: GitHubConfig,
) -> RepositoryRef:
    """コマンド引数 → ユーザー設定 → 全体設定の順でリポジトリを決定"""
    if repository:
        return parse_repository_reference(repository)

    stored = repository_manager.get_repository(discord_id)
    if stored is not None:
        return stored

    return resolve_repository(config=config)
