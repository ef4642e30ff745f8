import time
import discord
from discord import app_commands
from assignee_bot.github.client import GitHubRestClient
from assignee_bot.github.repository import RepositoryResolutionError, parse_repository_reference, resolve_repository
from assignee_bot.utils.logger import get_logger, StructuredLogger
from assignee_bot.utils.repository_manager import RepositoryManager

logger = get_logger(__name__)


async def setup_switch_repository_command(
    tree: app_commands.CommandTree,
    github: GitHubRestClient,
    repository_manager: RepositoryManager,
):
    """/switch-repository, /reset-repositoryコマンドをセットアップ"""

    @tree.command(
        name="switch-repository",
        description="以降のコマンドで使用するリポジトリを切り替え"
    )
    @app_commands.describe(
        repository="リポジトリ（owner/name またはURL）"
    )
    async def switch_repository(
        interaction: discord.Interaction,
        repository: str
    ):
        await interaction.response.defer(ephemeral=True)
        started = time.perf_counter()
        success = False

        try:
            repo = parse_repository_reference(repository)

            discord_id = str(interaction.user.id)
            repository_manager.set_repository(discord_id, repo)

            embed = discord.Embed(
                title="✅ リポジトリ切り替え完了",
                description=f"**{repo.full_name}** に切り替えました",
                color=discord.Color.green(),
                url=repo.html_url,
            )

            embed.add_field(
                name="次のステップ",
                value=(
                    "以降のコマンド実行時は、このリポジトリが使用されます\n"
                    "`/current-repository` で現在の設定を確認できます"
                ),
                inline=False
            )

            await interaction.followup.send(embed=embed, ephemeral=True)
            success = True
            logger.info(
                f"switch-repository executed by {interaction.user.name}: "
                f"switched to {repo.full_name}"
            )

        except RepositoryResolutionError as e:
            await interaction.followup.send(f"リポジトリを特定できません: {e}", ephemeral=True)
        except Exception as e:
            logger.error(f"Error in switch-repository: {e}", exc_info=True)
            await interaction.followup.send(f"エラーが発生しました: {str(e)}", ephemeral=True)
        finally:
            StructuredLogger.log_command_execution(
                "switch-repository",
                interaction.user.name,
                success,
                (time.perf_counter() - started) * 1000,
            )

    @tree.command(
        name="reset-repository",
        description="リポジトリ設定をデフォルトに戻す"
    )
    async def reset_repository(interaction: discord.Interaction):
        await interaction.response.defer(ephemeral=True)
        started = time.perf_counter()
        success = False

        try:
            repository_manager.remove_repository(str(interaction.user.id))
            await interaction.followup.send(
                "リポジトリ設定をデフォルトに戻しました", ephemeral=True
            )
            success = True
            logger.info(f"reset-repository executed by {interaction.user.name}")
        except Exception as e:
            logger.error(f"Error in reset-repository: {e}", exc_info=True)
            await interaction.followup.send(f"エラーが発生しました: {str(e)}", ephemeral=True)
        finally:
            StructuredLogger.log_command_execution(
                "reset-repository",
                interaction.user.name,
                success,
                (time.perf_counter() - started) * 1000,
            )


async def setup_current_repository_command(
    tree: app_commands.CommandTree,
    github: GitHubRestClient,
    repository_manager: RepositoryManager,
):
    """/current-repositoryコマンドをセットアップ"""

    @tree.command(
        name="current-repository",
        description="現在使用しているリポジトリを表示"
    )
    async def current_repository(interaction: discord.Interaction):
        await interaction.response.defer(ephemeral=True)
        started = time.perf_counter()
        success = False

        try:
            repo = repository_manager.get_repository(str(interaction.user.id))
            source = "ユーザー設定"
            if repo is None:
                repo = resolve_repository(config=github.config)
                source = "デフォルト"

            embed = discord.Embed(
                title="📂 現在のリポジトリ",
                description=f"**{repo.full_name}**（{source}）",
                color=discord.Color.blue(),
                url=repo.html_url,
            )
            await interaction.followup.send(embed=embed, ephemeral=True)
            success = True

        except RepositoryResolutionError:
            await interaction.followup.send(
                "リポジトリが設定されていません。`/switch-repository` で設定してください",
                ephemeral=True
            )
        except Exception as e:
            logger.error(f"Error in current-repository: {e}", exc_info=True)
            await interaction.followup.send(f"エラーが発生しました: {str(e)}", ephemeral=True)
        finally:
            StructuredLogger.log_command_execution(
                "current-repository",
                interaction.user.name,
                success,
                (time.perf_counter() - started) * 1000,
            )
