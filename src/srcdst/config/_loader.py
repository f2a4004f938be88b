"""TOML 設定ファイルローダー。

パースのみを担当し、バリデーションは SrcDstConfig が行う。
アクセスエラーは例外として送出する。
"""

from __future__ import annotations

import tomllib
from pathlib import Path

_TOOL_SECTION_KEY: str = "tool"
_SRCDST_SECTION_KEY: str = "srcdst"


def load_toml_config(path: Path) -> dict[str, object]:
    """TOML 設定ファイルを読み込み辞書として返す。

    Raises:
        tomllib.TOMLDecodeError: TOML 構文エラーの場合。
        PermissionError: 読み取り権限がない場合。
        FileNotFoundError: ファイルが存在しない場合。
    """
    with path.open("rb") as f:
        return tomllib.load(f)


def load_pyproject_config(path: Path) -> dict[str, object] | None:
    """pyproject.toml から [tool.srcdst] セクションを読み込む。

    Args:
        path: pyproject.toml のパス。

    Returns:
        [tool.srcdst] セクションの辞書。セクションが存在しなければ None。

    Raises:
        tomllib.TOMLDecodeError: TOML 構文エラーの場合。
        FileNotFoundError: ファイルが存在しない場合。
        PermissionError: 読み取り権限がない場合。
    """
    with path.open("rb") as f:
        data = tomllib.load(f)
    tool = data.get(_TOOL_SECTION_KEY)
    if not isinstance(tool, dict):
        return None
    section = tool.get(_SRCDST_SECTION_KEY)
    if not isinstance(section, dict):
        return None
    return section
