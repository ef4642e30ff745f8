import requests
import asyncio
from typing import Dict, Any, List, Optional
from assignee_bot.github.models import GitHubConfig, RestResult
from assignee_bot.utils.logger import get_logger, StructuredLogger

logger = get_logger(__name__)

API_VERSION = "2022-11-28"
MEDIA_TYPE = "application/vnd.github+json"


class GitHubRequestError(Exception):
    """GitHub REST APIの呼び出しエラー（HTTPエラー・通信エラー）"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        method: str = "",
        url: str = "",
    ):
        super().__init__(message)
        self.status_code = status_code
        self.method = method
        self.url = url


class GitHubAuthError(GitHubRequestError):
    """GitHub認証エラー"""

    pass


class GitHubRestClient:
    """GitHub REST APIクライアント"""

    def __init__(self, config: GitHubConfig, session: requests.Session = None):
        self.config = config
        # Sessionはスレッドセーフではないため、未指定の場合はリクエストごとにrequests.requestを使う
        self.session = session

    def _build_url(self, uri_fragment: str) -> str:
        return f"{self.config.api_url.rstrip('/')}/{uri_fragment.lstrip('/')}"

    def _build_headers(self, access_token: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "Accept": MEDIA_TYPE,
            "User-Agent": self.config.user_agent,
            "X-GitHub-Api-Version": API_VERSION,
        }
        token = access_token or self.config.token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Any = None,
    ) -> requests.Response:
        """HTTPリクエストを1回送信

        Raises:
            GitHubAuthError: 401が返った場合
            GitHubRequestError: 通信エラーまたはその他のHTTPエラー
        """
        # requestsは同期ライブラリなので、非同期コンテキストで実行
        loop = asyncio.get_event_loop()
        sender = self.session or requests
        try:
            response = await loop.run_in_executor(
                None,
                lambda: sender.request(
                    method,
                    url,
                    headers=headers,
                    json=body,
                    timeout=self.config.timeout,
                ),
            )
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise GitHubRequestError(
                f"{method} {url} failed: {e}", method=method, url=url
            ) from e

        if response.status_code >= 400:
            message = _error_message(response)
            # 404は割り当て可否チェックの通常の応答でもある
            log = logger.info if response.status_code == 404 else logger.error
            log(f"{method} {url} returned {response.status_code}: {message}")
            error_class = GitHubAuthError if response.status_code == 401 else GitHubRequestError
            raise error_class(
                f"{method} {url} returned {response.status_code}: {message}",
                status_code=response.status_code,
                method=method,
                url=url,
            )

        return response

    def _emit_telemetry(self, event_name: Optional[str], properties: Optional[dict]):
        if event_name and self.config.telemetry_enabled:
            StructuredLogger.log_telemetry_event(event_name, properties)

    async def invoke(
        self,
        uri_fragment: str,
        method: str = "GET",
        description: str = "",
        body: Any = None,
        access_token: Optional[str] = None,
        extended_result: bool = False,
        telemetry_event_name: Optional[str] = None,
        telemetry_properties: Optional[dict] = None,
    ) -> Any:
        """REST APIを1回呼び出す

        Args:
            uri_fragment: api_urlからの相対パス（例: repos/owner/repo/assignees）
            method: HTTPメソッド
            description: ログ用の説明
            body: JSONとして送信するボディ
            access_token: 設定のトークンを上書きするトークン
            extended_result: Trueの場合RestResultを返す
            telemetry_event_name: テレメトリイベント名
            telemetry_properties: テレメトリプロパティ

        Returns:
            レスポンスJSON（内容がなければNone）、またはRestResult

        Raises:
            GitHubRequestError: HTTPエラーまたは通信エラー
        """
        url = self._build_url(uri_fragment)
        if description:
            logger.info(description)
        logger.debug(f"{method} {url}")

        response = await self._send(method, url, self._build_headers(access_token), body)
        self._emit_telemetry(telemetry_event_name, telemetry_properties)

        data = _parse_json(response)
        if extended_result:
            return RestResult(
                status_code=response.status_code,
                data=data,
                headers=dict(response.headers or {}),
            )
        return data

    async def invoke_multiple(
        self,
        uri_fragment: str,
        description: str = "",
        access_token: Optional[str] = None,
        telemetry_event_name: Optional[str] = None,
        telemetry_properties: Optional[dict] = None,
    ) -> List[Any]:
        """ページネーションを辿って全件を取得

        Linkヘッダのrel="next"がなくなるまでGETを繰り返す。

        Returns:
            List[Any]: 全ページを連結した結果
        """
        url = self._build_url(uri_fragment)
        headers = self._build_headers(access_token)
        if description:
            logger.info(description)

        results: List[Any] = []
        page = 0
        while url:
            page += 1
            logger.debug(f"GET {url} (page {page})")
            response = await self._send("GET", url, headers)
            data = _parse_json(response)
            if isinstance(data, list):
                results.extend(data)
            elif data is not None:
                results.append(data)
            url = (response.links or {}).get("next", {}).get("url")

        self._emit_telemetry(telemetry_event_name, telemetry_properties)
        return results


def _parse_json(response: requests.Response) -> Any:
    """レスポンスボディをJSONとして解釈

    Raises:
        GitHubRequestError: ボディがJSONでない場合（プロキシのHTMLなど）
    """
    if response.status_code == 204 or not response.content:
        return None
    try:
        return response.json()
    except ValueError as e:
        url = response.url or ""
        logger.error(f"Response from {url} is not JSON (status {response.status_code})")
        raise GitHubRequestError(
            f"Response from {url} is not JSON (status {response.status_code})",
            status_code=response.status_code,
            url=url,
        ) from e


def _error_message(response: requests.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.reason or ""
    if isinstance(data, dict) and data.get("message"):
        message = data["message"]
        if data.get("documentation_url"):
            message += f" ({data['documentation_url']})"
        return message
    return response.reason or ""
