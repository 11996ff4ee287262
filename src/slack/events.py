"""
受信イベントの型定義モジュール。

Socket Modeで受信したレコードを閉じたタグ付きバリアントとして表現する:
- PlatformEvent: Events APIのイベント
- SlashCommandEvent: スラッシュコマンド
- UnrecognizedEvent: 上記以外(interactive, hello, 将来追加される種別など)

ペイロードの中身は解析・検証しない。分類は type タグのみで行う。
"""

from typing import Any, Literal

from pydantic import BaseModel, Field
from slack_sdk.socket_mode.request import SocketModeRequest

EVENTS_API_TYPE = "events_api"
SLASH_COMMANDS_TYPE = "slash_commands"


class _InboundEventBase(BaseModel):
    """全バリアント共通のフィールド。

    Attributes:
        type: リモートプロトコルが定義する種別タグ
        envelope_id: Socket Modeのエンベロープ識別子(制御メッセージではNone)
        payload: 未解析のペイロード
    """

    type: str
    envelope_id: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)


class PlatformEvent(_InboundEventBase):
    """Events API経由のワークスペースイベント。"""

    kind: Literal["events_api"] = "events_api"


class SlashCommandEvent(_InboundEventBase):
    """スラッシュコマンドの呼び出し。"""

    kind: Literal["slash_commands"] = "slash_commands"


class UnrecognizedEvent(_InboundEventBase):
    """分類できないイベント。

    type には受信した元のタグ(空文字列を含む)をそのまま保持する。
    """

    kind: Literal["unrecognized"] = "unrecognized"


InboundEvent = PlatformEvent | SlashCommandEvent | UnrecognizedEvent


def classify(
    event_type: str | None,
    payload: dict[str, Any] | None = None,
    envelope_id: str | None = None,
) -> InboundEvent:
    """種別タグからバリアントを決定する。

    Args:
        event_type: 受信したタグ(Noneは空文字列として扱う)
        payload: 未解析のペイロード
        envelope_id: エンベロープ識別子

    Returns:
        タグに対応するバリアント。未知のタグはUnrecognizedEvent。
    """
    tag = event_type or ""
    data = payload or {}

    if tag == EVENTS_API_TYPE:
        return PlatformEvent(type=tag, envelope_id=envelope_id, payload=data)
    if tag == SLASH_COMMANDS_TYPE:
        return SlashCommandEvent(type=tag, envelope_id=envelope_id, payload=data)
    return UnrecognizedEvent(type=tag, envelope_id=envelope_id, payload=data)


def classify_request(request: SocketModeRequest) -> InboundEvent:
    """SocketModeRequestを分類する。"""
    return classify(request.type, request.payload, request.envelope_id)


def classify_message(message: dict[str, Any]) -> InboundEvent:
    """エンベロープを持たない制御メッセージ(hello等)を分類する。

    メッセージ全体をペイロードとして保持する。
    """
    return classify(message.get("type"), message, message.get("envelope_id"))
