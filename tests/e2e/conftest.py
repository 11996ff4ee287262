"""
E2Eテスト用の共有フィクスチャと設定。

このファイルはE2Eテストで使用される共通のフィクスチャを定義します。
外部サービス(Slack Socket Mode)のモックも含みます。
"""

import asyncio
from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def mock_socket_client() -> MagicMock:
    """Socket Modeクライアントのモックを提供。

    connect() は登録済みリスナーへ sent_requests / sent_messages を順に配送する。

    Returns:
        slack_sdkのSocketModeClient互換のMagicMock
    """
    client = MagicMock()
    client.socket_mode_request_listeners = []
    client.message_listeners = []
    client.sent_requests = []
    client.sent_messages = []

    async def connect() -> None:
        for message in client.sent_messages:
            for listener in client.message_listeners:
                await listener(client, message, None)
        for req in client.sent_requests:
            for listener in client.socket_mode_request_listeners:
                await listener(client, req)

    client.connect = AsyncMock(side_effect=connect)
    client.disconnect = AsyncMock()
    client.close = AsyncMock()
    client.send_socket_mode_response = AsyncMock()
    return client


@pytest.fixture
def shutdown_after() -> Callable[[float], Callable[[asyncio.Event], None]]:
    """シグナルハンドラの代わりに、一定時間後にシャットダウンを要求する関数を提供。"""

    def factory(delay: float) -> Callable[[asyncio.Event], None]:
        def install(shutdown: asyncio.Event) -> None:
            asyncio.get_running_loop().call_later(delay, shutdown.set)

        return install

    return factory
