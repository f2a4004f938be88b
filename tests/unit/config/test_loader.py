"""TOML ローダーのテスト。"""

from __future__ import annotations

import tomllib
from pathlib import Path

import pytest

from srcdst.config._loader import load_pyproject_config, load_toml_config


def _write_toml(path: Path, content: str) -> Path:
    """TOML ファイルを書き込みパスを返す。"""
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadTomlConfig:
    def test_returns_parsed_dict(self, tmp_path: Path) -> None:
        path = _write_toml(
            tmp_path / "config.toml",
            'default_extension = "png"\nallow_inplace = true\n',
        )
        assert load_toml_config(path) == {
            "default_extension": "png",
            "allow_inplace": True,
        }

    def test_syntax_error(self, tmp_path: Path) -> None:
        path = _write_toml(tmp_path / "config.toml", "default_extension = \n")
        with pytest.raises(tomllib.TOMLDecodeError):
            load_toml_config(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_toml_config(tmp_path / "nope.toml")


class TestLoadPyprojectConfig:
    """[tool.srcdst] セクションの抽出を検証する。"""

    def test_section_present(self, tmp_path: Path) -> None:
        path = _write_toml(
            tmp_path / "pyproject.toml",
            '[project]\nname = "x"\n\n[tool.srcdst]\ndefault_extension = "webp"\n',
        )
        assert load_pyproject_config(path) == {"default_extension": "webp"}

    def test_other_tool_only(self, tmp_path: Path) -> None:
        path = _write_toml(
            tmp_path / "pyproject.toml", "[tool.ruff]\nline-length = 88\n"
        )
        assert load_pyproject_config(path) is None

    def test_no_tool_table(self, tmp_path: Path) -> None:
        path = _write_toml(tmp_path / "pyproject.toml", '[project]\nname = "x"\n')
        assert load_pyproject_config(path) is None

    def test_section_not_a_table(self, tmp_path: Path) -> None:
        path = _write_toml(tmp_path / "pyproject.toml", '[tool]\nsrcdst = "png"\n')
        assert load_pyproject_config(path) is None
