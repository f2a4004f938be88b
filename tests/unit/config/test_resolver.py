"""設定リゾルバーのテスト。

merge_config_layers / filter_cli_overrides と、
ユーザー設定 < pyproject.toml < CLI の優先順位を検証する。
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import pytest
from pydantic import ValidationError

from srcdst.config._resolver import (
    filter_cli_overrides,
    merge_config_layers,
    resolve_config,
)


def _write_user_config(home: Path, content: str) -> None:
    path = home / ".config" / "srcdst" / "config.toml"
    path.parent.mkdir(parents=True)
    path.write_text(content, encoding="utf-8")


def _write_pyproject(project: Path, content: str) -> None:
    (project / "pyproject.toml").write_text(content, encoding="utf-8")


class TestMergeConfigLayers:
    def test_empty(self) -> None:
        assert merge_config_layers() == {}

    def test_none_skipped(self) -> None:
        assert merge_config_layers(None, {"a": 1}, None) == {"a": 1}

    def test_later_wins(self) -> None:
        merged = merge_config_layers({"a": 1, "b": 2}, {"b": 3})
        assert merged == {"a": 1, "b": 3}


class TestFilterCliOverrides:
    def test_none_removed(self) -> None:
        assert filter_cli_overrides({"a": None, "b": False, "c": "x"}) == {
            "b": False,
            "c": "x",
        }


class TestResolveConfig:
    """レイヤーの統合を検証する。"""

    def test_cli_only(self, home: Path, project: Path) -> None:
        config = resolve_config(project, {"default_extension": "png"})
        assert config.default_extension == "png"

    def test_pyproject_layer(self, home: Path, project: Path) -> None:
        _write_pyproject(
            project, '[tool.srcdst]\ndefault_extension = "webp"\nallow_inplace = true\n'
        )
        config = resolve_config(project)
        assert config.default_extension == "webp"
        assert config.allow_inplace is True

    def test_user_layer(self, home: Path, project: Path) -> None:
        _write_user_config(home, 'default_extension = "gif"\n')
        assert resolve_config(project).default_extension == "gif"

    def test_priority(self, home: Path, project: Path) -> None:
        """CLI > pyproject.toml > ユーザー設定。"""
        _write_user_config(
            home, 'default_extension = "gif"\nmatch_expression = "*.jpg"\n'
        )
        _write_pyproject(
            project,
            '[tool.srcdst]\ndefault_extension = "webp"\ncreate_container = false\n',
        )
        config = resolve_config(
            project, {"default_extension": "png", "create_container": None}
        )
        assert config.default_extension == "png"
        assert config.match_expression == "*.jpg"
        assert config.create_container is False

    def test_missing_extension(self, home: Path, project: Path) -> None:
        with pytest.raises(ValidationError):
            resolve_config(project)

    def test_unknown_key(self, home: Path, project: Path) -> None:
        _write_pyproject(
            project, '[tool.srcdst]\ndefault_extension = "png"\ncolour = "red"\n'
        )
        with pytest.raises(ValidationError):
            resolve_config(project)

    def test_syntax_error_propagates(self, home: Path, project: Path) -> None:
        _write_user_config(home, "default_extension = \n")
        with pytest.raises(tomllib.TOMLDecodeError):
            resolve_config(project)

    def test_defaults_to_cwd(
        self, home: Path, project: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_pyproject(project, '[tool.srcdst]\ndefault_extension = "avif"\n')
        monkeypatch.chdir(project)
        assert resolve_config().default_extension == "avif"
