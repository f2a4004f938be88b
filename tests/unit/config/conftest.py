"""config テスト共通フィクスチャ。"""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """HOME を一時ディレクトリに差し替え、実ユーザー設定を読まないようにする。"""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """pyproject.toml を置くプロジェクトディレクトリ。"""
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    return project_dir
