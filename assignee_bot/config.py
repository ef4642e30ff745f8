from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from functools import lru_cache
from assignee_bot.github.models import GitHubConfig


class Settings(BaseSettings):
    """アプリケーション設定"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Discord
    DISCORD_BOT_TOKEN: str = ""
    DISCORD_GUILD_ID: int = 0

    # GitHub
    GITHUB_TOKEN: str = ""
    GITHUB_OWNER: str = ""
    GITHUB_REPO: str = ""
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_API_TIMEOUT: int = 30

    # Telemetry
    TELEMETRY_ENABLED: bool = True

    # ユーザーごとのデフォルトリポジトリ
    REPOSITORY_MAPPING_FILE: str = "user_repositories.json"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/bot.log"

    @field_validator("GITHUB_TOKEN")
    @classmethod
    def validate_github_token(cls, v: str) -> str:
        """GitHub tokenの形式検証（空の場合はスキップ）"""
        valid_prefixes = ("ghp_", "github_pat_", "gho_", "ghs_", "ghu_")
        if v and not v.startswith(valid_prefixes):
            raise ValueError(
                "Invalid GitHub token format. Must start with one of: ghp_, github_pat_, gho_, ghs_, ghu_"
            )
        return v

    @field_validator("DISCORD_BOT_TOKEN")
    @classmethod
    def validate_discord_token(cls, v: str) -> str:
        """Discord bot tokenの検証（空の場合はスキップ）"""
        if v and len(v) < 50:
            raise ValueError("Invalid Discord bot token")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """設定のシングルトンインスタンスを取得"""
    return Settings()


def build_github_config(current: Settings = None) -> GitHubConfig:
    """設定からGitHubクライアント用の明示的な設定オブジェクトを作成

    Args:
        current: 使用する設定（省略時はシングルトン）

    Returns:
        GitHubConfig: クライアントに渡す設定
    """
    current = current or get_settings()
    return GitHubConfig(
        token=current.GITHUB_TOKEN,
        api_url=current.GITHUB_API_URL,
        timeout=current.GITHUB_API_TIMEOUT,
        default_owner=current.GITHUB_OWNER,
        default_repository=current.GITHUB_REPO,
        telemetry_enabled=current.TELEMETRY_ENABLED,
    )


settings = get_settings()
