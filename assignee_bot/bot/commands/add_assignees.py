import time
import discord
from discord import app_commands
from typing import Optional
from assignee_bot.github import assignees
from assignee_bot.github.assignees import AssigneeParameterError
from assignee_bot.github.client import GitHubRestClient, GitHubRequestError
from assignee_bot.github.repository import RepositoryResolutionError
from assignee_bot.bot.options import parse_usernames, resolve_command_repository
from assignee_bot.utils.logger import get_logger, StructuredLogger
from assignee_bot.utils.repository_manager import RepositoryManager

logger = get_logger(__name__)


def build_issue_embed(title: str, issue: dict, color: discord.Color) -> discord.Embed:
    """Issueの担当者一覧を表示するEmbedを作成"""
    embed = discord.Embed(
        title=title,
        description=f"**{issue.get('title', '')}**",
        color=color,
        url=issue.get("html_url"),
    )
    current = [a["user_name"] for a in issue.get("assignees") or []]
    embed.add_field(
        name="現在の担当者",
        value=", ".join(f"@{name}" for name in current) if current else "なし",
        inline=False,
    )
    return embed


async def setup_add_assignees_command(
    tree: app_commands.CommandTree,
    github: GitHubRestClient,
    repository_manager: RepositoryManager,
):
    """/add-assigneesコマンドをセットアップ"""

    @tree.command(name="add-assignees", description="Issueに担当者を追加（最大10人）")
    @app_commands.describe(
        issue_number="Issue番号",
        assignees_text="追加するGitHub ID（カンマまたはスペース区切り）",
        repository="対象リポジトリ（owner/name またはURL）",
    )
    @app_commands.rename(assignees_text="assignees")
    async def add_assignees(
        interaction: discord.Interaction,
        issue_number: int,
        assignees_text: str,
        repository: Optional[str] = None,
    ):
        await interaction.response.defer()
        started = time.perf_counter()
        success = False

        try:
            repo = resolve_command_repository(
                repository, str(interaction.user.id), repository_manager, github.config
            )
            names = parse_usernames(assignees_text)

            issue = await assignees.add_assignees(
                github,
                issue_number,
                names,
                owner=repo.owner,
                repository_name=repo.name,
            )

            embed = build_issue_embed(
                f"担当者追加 #{issue_number}", issue, discord.Color.green()
            )
            current = {a["user_name"].lower() for a in issue.get("assignees") or []}
            dropped = [name for name in names if name.lower() not in current]
            if dropped:
                embed.add_field(
                    name="追加されなかったユーザー",
                    value=", ".join(f"@{name}" for name in dropped),
                    inline=False,
                )

            await interaction.followup.send(embed=embed)
            success = True
            logger.info(
                f"add-assignees executed by {interaction.user.name} "
                f"for {repo.full_name}#{issue_number}"
            )

        except (RepositoryResolutionError, AssigneeParameterError) as e:
            await interaction.followup.send(f"パラメータが不正です: {e}")
        except GitHubRequestError as e:
            logger.error(f"GitHub request failed in add-assignees: {e}")
            await interaction.followup.send(f"GitHub APIエラー: {e}")
        except Exception as e:
            logger.error(f"Error in add-assignees: {e}", exc_info=True)
            await interaction.followup.send(f"エラーが発生しました: {str(e)}")
        finally:
            StructuredLogger.log_command_execution(
                "add-assignees",
                interaction.user.name,
                success,
                (time.perf_counter() - started) * 1000,
                {"issue_number": issue_number},
            )
