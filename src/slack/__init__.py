"""
Slackモジュール。

Socket Mode接続、受信イベントの型、ディスパッチループを提供する。
"""

from src.slack.app import SlackSocket, SlackSocketImpl, create_socket_client
from src.slack.dispatcher import DispatcherState, EventDispatcher
from src.slack.events import (
    InboundEvent,
    PlatformEvent,
    SlashCommandEvent,
    UnrecognizedEvent,
    classify,
    classify_message,
    classify_request,
)

__all__ = [
    "DispatcherState",
    "EventDispatcher",
    "InboundEvent",
    "PlatformEvent",
    "SlackSocket",
    "SlackSocketImpl",
    "SlashCommandEvent",
    "UnrecognizedEvent",
    "classify",
    "classify_message",
    "classify_request",
    "create_socket_client",
]
