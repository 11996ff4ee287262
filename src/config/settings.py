"""
設定管理モジュール。

pydantic-settings を使用して環境変数を型安全に管理する。
os.environ の直接参照は禁止し、このモジュール経由で取得する。
"""

import os
from collections.abc import Mapping, Sequence
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# 起動前に存在を確認する環境変数(宣言順でエラーに列挙される)
REQUIRED_ENV_VARS: tuple[str, ...] = (
    "SLACK_AUTH_TOKEN",
    "SLACK_APP_TOKEN",
)


class ConfigurationError(Exception):
    """必須の環境変数が欠けている場合に発生する例外。

    Attributes:
        missing: 未設定または空の環境変数名(宣言順)
    """

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = tuple(missing)
        super().__init__(f"empty environment variables: {', '.join(self.missing)}")


def validate_environment(
    required: Sequence[str] = REQUIRED_ENV_VARS,
    environ: Mapping[str, str] | None = None,
) -> None:
    """必須の環境変数がすべて空でないことを検証する。

    値の形式や有効期限は検証しない。存在と非空のみを確認する。

    Args:
        required: 必須の環境変数名のリスト
        environ: 参照する環境(省略時はプロセスの環境変数)

    Raises:
        ConfigurationError: 未設定または空の変数が1つ以上ある場合
    """
    env = os.environ if environ is None else environ
    missing = [name for name in required if not env.get(name)]
    if missing:
        raise ConfigurationError(missing)


class Settings(BaseSettings):
    """アプリケーション設定。

    環境変数から設定を読み込み、型安全に管理する。
    トークンの存在確認は validate_environment が先に行う。
    """

    slack_auth_token: str = Field(
        ...,
        min_length=1,
        description="Slack bot/user token used by the Web API client",
    )
    slack_app_token: str = Field(
        ...,
        min_length=1,
        description="Slack app-level token used to open the Socket Mode connection",
    )
    slack_debug: bool = Field(
        default=False,
        description="Enable debug logging for the Socket Mode client",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Root log level",
    )
    shutdown_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Seconds to wait for the dispatch task to finish on shutdown",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        """ログレベル名を大文字に正規化する。"""
        if isinstance(value, str):
            return value.strip().upper()
        return value


@lru_cache
def get_settings() -> Settings:
    """Settingsインスタンスをキャッシュして返す。

    アプリケーション全体で同一のSettingsインスタンスを共有するために使用する。

    Returns:
        Settings: キャッシュされた設定インスタンス
    """
    return Settings()
