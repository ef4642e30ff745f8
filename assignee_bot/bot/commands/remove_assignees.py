import time
import discord
from discord import app_commands
from typing import Optional
from assignee_bot.github import assignees
from assignee_bot.github.assignees import AssigneeParameterError
from assignee_bot.github.client import GitHubRestClient, GitHubRequestError
from assignee_bot.github.repository import RepositoryResolutionError
from assignee_bot.bot.commands.add_assignees import build_issue_embed
from assignee_bot.bot.confirm import interaction_confirmer
from assignee_bot.bot.options import parse_usernames, resolve_command_repository
from assignee_bot.utils.logger import get_logger, StructuredLogger
from assignee_bot.utils.repository_manager import RepositoryManager

logger = get_logger(__name__)


async def setup_remove_assignees_command(
    tree: app_commands.CommandTree,
    github: GitHubRestClient,
    repository_manager: RepositoryManager,
):
    """/remove-assigneesコマンドをセットアップ"""

    @tree.command(name="remove-assignees", description="Issueから担当者を削除")
    @app_commands.describe(
        issue_number="Issue番号",
        assignees_text="削除するGitHub ID（カンマまたはスペース区切り）",
        repository="対象リポジトリ（owner/name またはURL）",
        force="確認なしで削除する",
    )
    @app_commands.rename(assignees_text="assignees")
    async def remove_assignees(
        interaction: discord.Interaction,
        issue_number: int,
        assignees_text: str,
        repository: Optional[str] = None,
        force: bool = False,
    ):
        await interaction.response.defer()
        started = time.perf_counter()
        success = False

        try:
            repo = resolve_command_repository(
                repository, str(interaction.user.id), repository_manager, github.config
            )

            issue = await assignees.remove_assignees(
                github,
                issue_number,
                parse_usernames(assignees_text),
                owner=repo.owner,
                repository_name=repo.name,
                force=force,
                confirm=interaction_confirmer(interaction),
            )

            if issue is None:
                await interaction.followup.send(
                    f"#{issue_number} の担当者削除を中止しました"
                )
                success = True
                return

            embed = build_issue_embed(
                f"担当者削除 #{issue_number}", issue, discord.Color.orange()
            )
            await interaction.followup.send(embed=embed)
            success = True
            logger.info(
                f"remove-assignees executed by {interaction.user.name} "
                f"for {repo.full_name}#{issue_number}"
            )

        except (RepositoryResolutionError, AssigneeParameterError) as e:
            await interaction.followup.send(f"パラメータが不正です: {e}")
        except GitHubRequestError as e:
            logger.error(f"GitHub request failed in remove-assignees: {e}")
            await interaction.followup.send(f"GitHub APIエラー: {e}")
        except Exception as e:
            logger.error(f"Error in remove-assignees: {e}", exc_info=True)
            await interaction.followup.send(f"エラーが発生しました: {str(e)}")
        finally:
            StructuredLogger.log_command_execution(
                "remove-assignees",
                interaction.user.name,
                success,
                (time.perf_counter() - started) * 1000,
                {"issue_number": issue_number, "force": force},
            )
