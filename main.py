import asyncio
import sys
from assignee_bot.bot.client import AssigneeBot
from assignee_bot.bot.commands.list_assignees import setup_list_assignees_command
from assignee_bot.bot.commands.check_assignee import setup_check_assignee_command
from assignee_bot.bot.commands.add_assignees import setup_add_assignees_command
from assignee_bot.bot.commands.remove_assignees import setup_remove_assignees_command
from assignee_bot.bot.commands.switch_repository import setup_switch_repository_command, setup_current_repository_command
from assignee_bot.config import settings
from assignee_bot.utils.logger import get_logger

logger = get_logger(__name__)


async def main():
    """メインエントリーポイント"""
    if not settings.DISCORD_BOT_TOKEN:
        logger.error("DISCORD_BOT_TOKEN is not set")
        return 1

    bot = AssigneeBot()

    # コマンド登録
    await setup_list_assignees_command(bot.tree, bot.github, bot.repository_manager)  # 担当者候補一覧
    await setup_check_assignee_command(bot.tree, bot.github, bot.repository_manager)  # 担当者に設定可能か確認
    await setup_add_assignees_command(bot.tree, bot.github, bot.repository_manager)  # 担当者追加
    await setup_remove_assignees_command(bot.tree, bot.github, bot.repository_manager)  # 担当者削除
    await setup_switch_repository_command(bot.tree, bot.github, bot.repository_manager)  # リポジトリ切り替え
    await setup_current_repository_command(bot.tree, bot.github, bot.repository_manager)  # 現在のリポジトリ表示

    logger.info("Starting GitHub Assignee Bot...")
    if settings.GITHUB_OWNER and settings.GITHUB_REPO:
        logger.info(f"Default Repository: {settings.GITHUB_OWNER}/{settings.GITHUB_REPO}")
    logger.info(
        "All commands registered: "
        "/list-assignees, /check-assignee, /add-assignees, /remove-assignees, "
        "/switch-repository, /reset-repository, /current-repository"
    )

    try:
        await bot.start(settings.DISCORD_BOT_TOKEN)
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
        await bot.close()
    except Exception as e:
        logger.error(f"Bot error: {e}", exc_info=True)
        await bot.close()
        return 1
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Application stopped")
