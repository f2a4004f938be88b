"""設定ファイルの探索。

pyproject.toml はカレントから親方向へ遡って探索する。
ユーザーグローバル設定は ~/.config/srcdst/config.toml 固定。
"""

from __future__ import annotations

import stat as stat_module
from pathlib import Path

_PYPROJECT_FILE_NAME: str = "pyproject.toml"
_CONFIG_FILE_NAME: str = "config.toml"


def find_pyproject_toml(start: Path) -> Path | None:
    """start ディレクトリから親方向に pyproject.toml を探索する。

    Args:
        start: 探索開始ディレクトリ。

    Returns:
        最初に見つかった pyproject.toml のフルパス。見つからなければ None。

    Raises:
        OSError: 探索パス上のアクセス権限エラー等。
    """
    current = start.resolve()
    while True:
        candidate = current / _PYPROJECT_FILE_NAME
        try:
            st = candidate.stat()
        except FileNotFoundError:
            pass
        else:
            if stat_module.S_ISREG(st.st_mode):
                return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def get_user_config_path() -> Path:
    """ユーザーグローバル設定ファイルのパスを返す（存在チェックは行わない）。

    Raises:
        RuntimeError: ホームディレクトリを特定できない場合。
    """
    return Path.home() / ".config" / "srcdst" / _CONFIG_FILE_NAME
