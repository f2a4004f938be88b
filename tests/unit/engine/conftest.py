"""engine テスト共通フィクスチャ。"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

MakeFiles = Callable[..., list[Path]]


def _make_files(directory: Path, *names: str) -> list[Path]:
    """directory 直下に空ファイルを作成し、そのパスを返す。"""
    directory.mkdir(parents=True, exist_ok=True)
    paths = []
    for name in names:
        path = directory / name
        path.write_bytes(b"")
        paths.append(path)
    return paths


@pytest.fixture
def make_files() -> MakeFiles:
    """空ファイル作成ヘルパー。"""
    return _make_files


@pytest.fixture
def fixed_token() -> Callable[[], str]:
    """コンテナ名用の固定トークン。"""
    return lambda: "T0001"
