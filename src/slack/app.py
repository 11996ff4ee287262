"""
Socket Mode接続モジュール。

slack_sdkのSocket Modeクライアントを構成し、受信したレコードを
ディスパッチ用のキューへ転送する。
- Protocol型でインターフェースを定義
- 接続・ハンドシェイク・再接続はslack_sdkに委譲する
- 依存性注入パターン(外部依存は引数で注入)
"""

import asyncio
import logging
from typing import Any, Protocol

from slack_sdk.socket_mode.aiohttp import SocketModeClient
from slack_sdk.socket_mode.async_client import AsyncBaseSocketModeClient
from slack_sdk.socket_mode.request import SocketModeRequest
from slack_sdk.socket_mode.response import SocketModeResponse
from slack_sdk.web.async_client import AsyncWebClient

from src.config.settings import Settings
from src.slack.events import InboundEvent, classify_message, classify_request

logger = logging.getLogger(__name__)

# slack_sdkのSocket Modeクライアントに渡すロガー名
SOCKET_MODE_LOGGER_NAME = "socketmode"


class SlackSocket(Protocol):
    """Socket Mode実行ループのインターフェース定義。"""

    async def run(self) -> None:
        """接続を開始し、シャットダウン要求まで待機する。"""
        ...


def create_socket_client(settings: Settings) -> SocketModeClient:
    """設定からSocket Modeクライアントを生成する。

    Args:
        settings: アプリケーション設定

    Returns:
        Web APIクライアントを紐付けたSocketModeClient
    """
    socket_logger = logging.getLogger(SOCKET_MODE_LOGGER_NAME)
    if settings.slack_debug:
        socket_logger.setLevel(logging.DEBUG)
        logging.getLogger("slack_sdk").setLevel(logging.DEBUG)

    web_client = AsyncWebClient(token=settings.slack_auth_token)
    return SocketModeClient(
        app_token=settings.slack_app_token,
        web_client=web_client,
        logger=socket_logger,
    )


class SlackSocketImpl:
    """SlackSocketプロトコルの具体的な実装。

    Socket Modeのリクエストはキューへ転送してからエンベロープをackする。
    エンベロープを持たない制御メッセージ(hello等)もキューへ転送する。

    Attributes:
        _client: slack_sdkのSocket Modeクライアント
        _queue: 受信イベントの転送先キュー
        _shutdown: シャットダウン要求を表すイベント
    """

    def __init__(
        self,
        client: AsyncBaseSocketModeClient,
        queue: "asyncio.Queue[InboundEvent]",
        shutdown: asyncio.Event,
    ) -> None:
        """SlackSocketImplを初期化し、リスナーを登録する。

        Args:
            client: slack_sdkのSocket Modeクライアント
            queue: 受信イベントの転送先キュー
            shutdown: シャットダウン要求を表すイベント
        """
        self._client = client
        self._queue = queue
        self._shutdown = shutdown

        self._client.socket_mode_request_listeners.append(self._on_request)
        self._client.message_listeners.append(self._on_message)

    async def _on_request(self, client: AsyncBaseSocketModeClient, req: SocketModeRequest) -> None:
        """Socket Modeリクエストをキューへ転送してからackする。

        リスナーはメッセージごとに別タスクで実行されるため、受信順を保つよう
        ackの待機より前にキューへ入れる。
        """
        self._queue.put_nowait(classify_request(req))
        await client.send_socket_mode_response(SocketModeResponse(envelope_id=req.envelope_id))

    async def _on_message(
        self,
        client: AsyncBaseSocketModeClient,
        message: dict[str, Any],
        raw_message: str | None,
    ) -> None:
        """エンベロープを持たない制御メッセージをキューへ転送する。

        エンベロープ付きのメッセージは_on_requestで扱うため無視する。
        """
        if message.get("envelope_id"):
            return
        self._queue.put_nowait(classify_message(message))

    async def run(self) -> None:
        """Socket Mode接続を開始し、シャットダウン要求まで待機する。

        シャットダウン要求を観測したら(接続に失敗した場合も)切断し、クライアントを閉じる。
        接続エラーはここでは処理せず呼び出し元へ伝播する。
        """
        try:
            logger.info("Starting Socket Mode connection...")
            await self._client.connect()
            logger.info("Socket Mode connection started")

            await self._shutdown.wait()
        finally:
            logger.info("Closing Socket Mode connection...")
            await self._client.disconnect()
            await self._client.close()
            logger.info("Socket Mode connection closed")
