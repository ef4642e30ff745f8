import json
from pathlib import Path
from typing import Optional
from pydantic import ValidationError
from assignee_bot.github.models import RepositoryRef
from assignee_bot.utils.logger import get_logger

logger = get_logger(__name__)


class RepositoryManager:
    """Discord IDとデフォルトリポジトリのマッピング管理"""

    def __init__(self, mapping_file: str = "user_repositories.json"):
        self.mapping_file = Path(mapping_file)
        self.mappings = self._load_mappings()

    def _load_mappings(self) -> dict:
        """マッピングファイルを読み込み"""
        if not self.mapping_file.exists():
            logger.info(f"Repository mapping file {self.mapping_file} not found, creating empty mapping")
            self._save_mappings({})
            return {}

        try:
            with open(self.mapping_file, "r", encoding="utf-8") as f:
                mappings = json.load(f)
                logger.info(f"Loaded {len(mappings)} user repository mappings")
                return mappings
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load repository mappings: {e}")
            return {}

    def _save_mappings(self, mappings: dict):
        """マッピングをファイルに保存"""
        try:
            with open(self.mapping_file, "w", encoding="utf-8") as f:
                json.dump(mappings, f, indent=2, ensure_ascii=False)
            logger.info(f"Saved {len(mappings)} user repository mappings")
        except OSError as e:
            logger.error(f"Failed to save repository mappings: {e}")

    def get_repository(self, discord_id: str) -> Optional[RepositoryRef]:
        """Discord IDからリポジトリを取得（未設定の場合はNone）"""
        entry = self.mappings.get(str(discord_id))
        if entry is None:
            return None
        try:
            return RepositoryRef(**entry)
        except (TypeError, ValidationError) as e:
            logger.warning(f"Ignoring invalid repository mapping for Discord ID {discord_id}: {e}")
            return None

    def set_repository(self, discord_id: str, repository: RepositoryRef):
        """ユーザーのデフォルトリポジトリを設定"""
        self.mappings[str(discord_id)] = {"owner": repository.owner, "name": repository.name}
        self._save_mappings(self.mappings)
        logger.info(f"Set repository {repository.full_name} for Discord ID {discord_id}")

    def remove_repository(self, discord_id: str):
        """ユーザーのリポジトリ設定を削除（デフォルトに戻る）"""
        if str(discord_id) in self.mappings:
            del self.mappings[str(discord_id)]
            self._save_mappings(self.mappings)
            logger.info(f"Removed repository setting for Discord ID {discord_id}")
