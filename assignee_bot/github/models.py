import re
from pydantic import BaseModel, field_validator
from typing import Any, Dict

# GitHubで使用できる文字
OWNER_PATTERN = re.compile(r"^[A-Za-z0-9-]+$")
NAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")


class RepositoryRef(BaseModel):
    """GitHubリポジトリの参照（owner/name）"""

    model_config = {"frozen": True}

    owner: str
    name: str

    @field_validator("owner")
    @classmethod
    def validate_owner(cls, v: str) -> str:
        """ownerは英数字とハイフンのみ"""
        v = v.strip()
        if not OWNER_PATTERN.match(v):
            raise ValueError(f"Invalid repository owner: '{v}'")
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """リポジトリ名は英数字と . _ - のみ（"." と ".." は不可）"""
        v = v.strip()
        if not NAME_PATTERN.match(v) or v in (".", ".."):
            raise ValueError(f"Invalid repository name: '{v}'")
        return v

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def html_url(self) -> str:
        return f"https://github.com/{self.full_name}"


class GitHubConfig(BaseModel):
    """GitHub REST APIクライアントの設定

    各呼び出しに明示的に渡す。owner/repositoryは引数が省略された場合のデフォルト。
    """

    token: str = ""
    api_url: str = "https://api.github.com"
    timeout: int = 30
    default_owner: str = ""
    default_repository: str = ""
    user_agent: str = "github-assignee-bot"
    telemetry_enabled: bool = True


class RestResult(BaseModel):
    """REST呼び出しの拡張結果"""

    status_code: int
    data: Any = None
    headers: Dict[str, str] = {}
