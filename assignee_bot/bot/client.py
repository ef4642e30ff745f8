import discord
from discord import app_commands
from assignee_bot.config import settings, build_github_config
from assignee_bot.github.client import GitHubRestClient
from assignee_bot.utils.logger import get_logger
from assignee_bot.utils.repository_manager import RepositoryManager

logger = get_logger(__name__)


class AssigneeBot(discord.Client):
    """GitHub Assignee Bot Discord クライアント"""

    def __init__(self):
        intents = discord.Intents.default()
        super().__init__(intents=intents)
        self.tree = app_commands.CommandTree(self)
        self.github = GitHubRestClient(build_github_config())
        self.repository_manager = RepositoryManager(settings.REPOSITORY_MAPPING_FILE)

    async def setup_hook(self):
        """スラッシュコマンドを登録"""
        if settings.DISCORD_GUILD_ID:
            guild = discord.Object(id=settings.DISCORD_GUILD_ID)
            self.tree.copy_global_to(guild=guild)
            await self.tree.sync(guild=guild)
            logger.info(f"Commands synced to guild {settings.DISCORD_GUILD_ID}")
        else:
            await self.tree.sync()
            logger.info("Commands synced globally")

    async def on_ready(self):
        """Bot起動時の処理"""
        logger.info(f"Logged in as {self.user} (ID: {self.user.id})")
        logger.info("------")
