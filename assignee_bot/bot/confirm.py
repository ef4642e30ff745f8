import discord
from typing import Optional
from assignee_bot.utils.logger import get_logger

logger = get_logger(__name__)


class ConfirmView(discord.ui.View):
    """実行/キャンセルボタンによる確認ビュー"""

    def __init__(self, user_id: int, timeout: float = 60):
        super().__init__(timeout=timeout)
        self.user_id = user_id
        self.confirmed: Optional[bool] = None

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        # コマンド実行者以外のボタン操作は無視
        return interaction.user.id == self.user_id

    @discord.ui.button(label="実行", style=discord.ButtonStyle.danger)
    async def confirm(self, interaction: discord.Interaction, button: discord.ui.Button):
        self.confirmed = True
        await interaction.response.edit_message(content="実行します...", view=None)
        self.stop()

    @discord.ui.button(label="キャンセル", style=discord.ButtonStyle.secondary)
    async def cancel(self, interaction: discord.Interaction, button: discord.ui.Button):
        self.confirmed = False
        await interaction.response.edit_message(content="キャンセルしました", view=None)
        self.stop()


def interaction_confirmer(interaction: discord.Interaction, timeout: float = 60):
    """remove_assigneesに渡す確認コールバックを作成

    タイムアウトした場合は却下として扱う。
    """

    async def confirm(message: str) -> bool:
        view = ConfirmView(interaction.user.id, timeout=timeout)
        await interaction.followup.send(f"⚠️ {message}", view=view)
        await view.wait()
        if view.confirmed is None:
            logger.info(f"Confirmation timed out for {interaction.user.name}")
        return bool(view.confirmed)

    return confirm
