import time
import discord
from discord import app_commands
from typing import Optional
from assignee_bot.github import assignees
from assignee_bot.github.assignees import AssigneeParameterError
from assignee_bot.github.client import GitHubRestClient
from assignee_bot.github.repository import RepositoryResolutionError
from assignee_bot.bot.options import resolve_command_repository
from assignee_bot.utils.logger import get_logger, StructuredLogger
from assignee_bot.utils.repository_manager import RepositoryManager

logger = get_logger(__name__)


async def setup_check_assignee_command(
    tree: app_commands.CommandTree,
    github: GitHubRestClient,
    repository_manager: RepositoryManager,
):
    """/check-assigneeコマンドをセットアップ"""

    @tree.command(
        name="check-assignee", description="GitHubユーザーを担当者に設定できるか確認"
    )
    @app_commands.describe(
        user="GitHub ユーザーID",
        repository="対象リポジトリ（owner/name またはURL）",
    )
    async def check_assignee(
        interaction: discord.Interaction, user: str, repository: Optional[str] = None
    ):
        await interaction.response.defer()
        started = time.perf_counter()
        success = False

        try:
            repo = resolve_command_repository(
                repository, str(interaction.user.id), repository_manager, github.config
            )
            login = user.lstrip("@")
            assignable = await assignees.test_assignee(
                github, login, owner=repo.owner, repository_name=repo.name
            )

            if assignable:
                await interaction.followup.send(
                    f"✅ `{login}` は {repo.full_name} の担当者に設定できます"
                )
            else:
                await interaction.followup.send(
                    f"❌ `{login}` は {repo.full_name} の担当者に設定できません"
                )
            success = True
            logger.info(f"check-assignee executed for {login} in {repo.full_name}: {assignable}")

        except (RepositoryResolutionError, AssigneeParameterError) as e:
            await interaction.followup.send(f"パラメータが不正です: {e}")
        except Exception as e:
            logger.error(f"Error in check-assignee: {e}", exc_info=True)
            await interaction.followup.send(f"エラーが発生しました: {str(e)}")
        finally:
            StructuredLogger.log_command_execution(
                "check-assignee",
                interaction.user.name,
                success,
                (time.perf_counter() - started) * 1000,
            )
