"""
イベントディスパッチモジュール。

Socket Modeの実行ループと並行して動作し、受信キューのイベントを
種別ごとにログへ振り分ける。
- 単一のコンシューマとしてキュー順に1件ずつ処理する
- シャットダウンイベントを観測したらループを終了する
- 未知の種別も含め、受信したイベントは必ず1つの分岐で処理される
"""

import asyncio
import logging
from enum import Enum
from typing import assert_never

from src.slack.events import InboundEvent, PlatformEvent, SlashCommandEvent, UnrecognizedEvent

logger = logging.getLogger(__name__)


class DispatcherState(Enum):
    """ディスパッチループの状態。

    - RUNNING: イベントを処理中(初期状態)
    - STOPPED: シャットダウンを観測して終了(終端状態)
    """

    RUNNING = "running"
    STOPPED = "stopped"


class EventDispatcher:
    """受信イベントをログへ振り分けるディスパッチャ。

    Attributes:
        _queue: 受信イベントのキュー
        _shutdown: シャットダウン要求を表すイベント
        _state: 現在の状態
        _handled_count: 処理したイベント数
    """

    def __init__(
        self,
        queue: "asyncio.Queue[InboundEvent]",
        shutdown: asyncio.Event,
    ) -> None:
        """EventDispatcherを初期化する。

        Args:
            queue: 受信イベントのキュー
            shutdown: シャットダウン要求を表すイベント(一度だけセットされる)
        """
        self._queue = queue
        self._shutdown = shutdown
        self._state = DispatcherState.RUNNING
        self._handled_count = 0

    @property
    def state(self) -> DispatcherState:
        """現在の状態を返す。"""
        return self._state

    @property
    def handled_count(self) -> int:
        """処理したイベント数を返す。"""
        return self._handled_count

    async def run(self) -> None:
        """シャットダウンが要求されるまでイベントを処理する。

        キューからのイベント取得とシャットダウンイベントのうち、
        先に発生した方を処理する。シャットダウン要求後はキューに
        イベントが残っていても処理しない。
        """
        while not self._shutdown.is_set():
            get_event = asyncio.ensure_future(self._queue.get())
            wait_shutdown = asyncio.ensure_future(self._shutdown.wait())

            try:
                done, _ = await asyncio.wait(
                    {get_event, wait_shutdown},
                    return_when=asyncio.FIRST_COMPLETED,
                )
            finally:
                for future in (get_event, wait_shutdown):
                    if not future.done():
                        future.cancel()

            if wait_shutdown in done:
                # 同時に取り出されたイベントは処理せずキューの計数だけ進める
                if get_event.done() and not get_event.cancelled():
                    logger.debug("dropping event received during shutdown: %r", get_event.result())
                    self._queue.task_done()
                break

            self.handle(get_event.result())
            self._queue.task_done()

        self._state = DispatcherState.STOPPED
        logger.info("shutdown the application...")

    def handle(self, event: InboundEvent) -> None:
        """イベントを種別に応じて1つの分岐で処理する。

        Args:
            event: 受信イベント
        """
        if isinstance(event, PlatformEvent):
            logger.info("handling the event %r", event)
        elif isinstance(event, SlashCommandEvent):
            logger.info("received a command %r", event)
        elif isinstance(event, UnrecognizedEvent):
            logger.info("unhandleable event: %r", event)
            logger.info("event data ---> %r", event.payload)
        else:
            assert_never(event)

        self._handled_count += 1
