"""
設定管理モジュール。

環境変数を検証・型安全に管理し、アプリケーション全体で使用する設定を提供する。
"""

from src.config.settings import (
    REQUIRED_ENV_VARS,
    ConfigurationError,
    Settings,
    get_settings,
    validate_environment,
)

__all__ = [
    "REQUIRED_ENV_VARS",
    "ConfigurationError",
    "Settings",
    "get_settings",
    "validate_environment",
]
