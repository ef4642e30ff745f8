import time
import discord
from discord import app_commands
from typing import Optional
from assignee_bot.github import assignees
from assignee_bot.github.client import GitHubRestClient, GitHubRequestError
from assignee_bot.github.repository import RepositoryResolutionError
from assignee_bot.bot.options import resolve_command_repository
from assignee_bot.utils.logger import get_logger, StructuredLogger
from assignee_bot.utils.repository_manager import RepositoryManager

logger = get_logger(__name__)


async def setup_list_assignees_command(
    tree: app_commands.CommandTree,
    github: GitHubRestClient,
    repository_manager: RepositoryManager,
):
    """/list-assigneesコマンドをセットアップ"""

    @tree.command(
        name="list-assignees", description="リポジトリで担当者に設定できるユーザー一覧"
    )
    @app_commands.describe(repository="対象リポジトリ（owner/name またはURL）")
    async def list_assignees(
        interaction: discord.Interaction, repository: Optional[str] = None
    ):
        await interaction.response.defer()
        started = time.perf_counter()
        success = False

        try:
            repo = resolve_command_repository(
                repository, str(interaction.user.id), repository_manager, github.config
            )
            users = await assignees.get_assignees(
                github, owner=repo.owner, repository_name=repo.name
            )

            embed = discord.Embed(
                title=f"👥 {repo.full_name} の担当者候補",
                description=f"全{len(users)}人",
                color=discord.Color.green(),
                url=repo.html_url,
            )

            for user in users[:25]:
                embed.add_field(
                    name=user["user_name"],
                    value=f"[Profile]({user.get('html_url', '')})",
                    inline=True,
                )

            if len(users) > 25:
                embed.set_footer(
                    text=f"注: 最初の25人のみ表示。残り{len(users) - 25}人"
                )

            await interaction.followup.send(embed=embed)
            success = True
            logger.info(f"list-assignees executed for {repo.full_name}")

        except RepositoryResolutionError as e:
            await interaction.followup.send(f"リポジトリを特定できません: {e}")
        except GitHubRequestError as e:
            logger.error(f"GitHub request failed in list-assignees: {e}")
            await interaction.followup.send(f"GitHub APIエラー: {e}")
        except Exception as e:
            logger.error(f"Error in list-assignees: {e}", exc_info=True)
            await interaction.followup.send(f"エラーが発生しました: {str(e)}")
        finally:
            StructuredLogger.log_command_execution(
                "list-assignees",
                interaction.user.name,
                success,
                (time.perf_counter() - started) * 1000,
            )
