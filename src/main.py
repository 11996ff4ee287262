"""
アプリケーションのエントリーポイント。

Slack BotをSocket Modeで起動し、受信イベントをログへ出力する。
環境変数の検証、ロギング設定、クライアントの作成、ディスパッチタスクの起動、
Socket Mode接続、シャットダウン時のタスク合流を行う。
"""

import asyncio
import logging
import signal
import sys

from pydantic import ValidationError

from src.config import ConfigurationError, get_settings, validate_environment
from src.slack import (
    EventDispatcher,
    InboundEvent,
    SlackSocket,
    SlackSocketImpl,
    create_socket_client,
)

LOG_FORMAT = "%(asctime)s %(name)s %(filename)s:%(lineno)d: %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """行指向のログを標準出力へ出すようにロギングを設定する。

    Args:
        level: ルートロガーのログレベル
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, stream=sys.stdout)


def install_signal_handlers(shutdown: asyncio.Event) -> None:
    """SIGINT/SIGTERMでシャットダウンイベントをセットする。

    Args:
        shutdown: シャットダウン要求を表すイベント
    """
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, shutdown.set)


async def serve(
    socket: SlackSocket,
    dispatcher: EventDispatcher,
    shutdown: asyncio.Event,
    shutdown_timeout: float,
) -> None:
    """ディスパッチタスクを起動し、Socket Mode実行ループを実行する。

    実行ループが終了(正常・異常問わず)したらシャットダウンイベントをセットし、
    ディスパッチタスクの終了をタイムアウト付きで待つ。

    Args:
        socket: Socket Mode実行ループ
        dispatcher: イベントディスパッチャ
        shutdown: シャットダウン要求を表すイベント
        shutdown_timeout: ディスパッチタスクの終了を待つ秒数
    """
    dispatch_task = asyncio.create_task(dispatcher.run(), name="event-dispatcher")

    try:
        await socket.run()
    finally:
        shutdown.set()
        try:
            await asyncio.wait_for(dispatch_task, timeout=shutdown_timeout)
        except TimeoutError:
            logger.warning(
                "Event dispatcher did not stop within %.1f seconds; cancelled",
                shutdown_timeout,
            )


async def main() -> int:
    """アプリケーションのエントリーポイント。

    以下の処理を順次実行する:
    1. 必須環境変数を検証し、設定を読み込み
    2. シャットダウンイベントとシグナルハンドラを用意
    3. 受信キュー、ディスパッチャ、Socket Modeクライアントを作成
    4. ディスパッチタスクを起動してSocket Modeで接続

    Returns:
        終了コード(設定エラー時は1、正常終了時は0)
    """
    try:
        validate_environment()
        settings = get_settings()
    except (ConfigurationError, ValidationError) as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    logging.getLogger().setLevel(settings.log_level)

    shutdown = asyncio.Event()
    install_signal_handlers(shutdown)

    queue: asyncio.Queue[InboundEvent] = asyncio.Queue()
    dispatcher = EventDispatcher(queue=queue, shutdown=shutdown)
    socket = SlackSocketImpl(
        client=create_socket_client(settings),
        queue=queue,
        shutdown=shutdown,
    )

    logger.info("Starting Slack Bot...")
    await serve(socket, dispatcher, shutdown, settings.shutdown_timeout)
    logger.info("Slack Bot stopped")
    return 0


def run() -> None:
    """コンソールスクリプト用のエントリーポイント。"""
    configure_logging()
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
