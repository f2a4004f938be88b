"""設定管理モジュール。"""

from srcdst.config._locator import find_pyproject_toml, get_user_config_path
from srcdst.config._resolver import resolve_config

__all__ = [
    "find_pyproject_toml",
    "get_user_config_path",
    "resolve_config",
]
