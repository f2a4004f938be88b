"""PathClassifier のテスト。

"-" の STREAM 判定、ファイルシステム上の形状判定、
メタデータ取得失敗時の ClassificationError を検証する。
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from srcdst.engine._classifier import classify, is_stream, shape_from_mode, stat_path
from srcdst.engine._errors import ClassificationError
from srcdst.models.shape import Shape


class TestClassifyStream:
    """'-' センチネルの判定を検証する。"""

    def test_dash_is_stream(self) -> None:
        assert classify("-") == Shape.STREAM

    def test_dash_is_stream_even_if_file_exists(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """カレントに '-' という名前のファイルがあっても STREAM。"""
        monkeypatch.chdir(tmp_path)
        (tmp_path / "-").write_text("x")
        assert classify("-") == Shape.STREAM

    def test_is_stream_helper(self) -> None:
        assert is_stream("-") is True
        assert is_stream("./-") is False


class TestClassifyFilesystem:
    """ファイルシステム上のパスの形状判定を検証する。"""

    def test_regular_file(self, tmp_path: Path) -> None:
        f = tmp_path / "a.jpg"
        f.write_bytes(b"")
        assert classify(str(f)) == Shape.FILE

    def test_directory(self, tmp_path: Path) -> None:
        assert classify(str(tmp_path)) == Shape.DIRECTORY

    def test_missing(self, tmp_path: Path) -> None:
        assert classify(str(tmp_path / "nope")) == Shape.MISSING

    def test_child_of_file_is_missing(self, tmp_path: Path) -> None:
        """通常ファイル配下のパス（NotADirectoryError）は MISSING。"""
        f = tmp_path / "a.txt"
        f.write_text("x")
        assert classify(str(f / "child")) == Shape.MISSING

    def test_accepts_path_object(self, tmp_path: Path) -> None:
        assert classify(tmp_path) == Shape.DIRECTORY

    def test_symlink_to_file_is_followed(self, tmp_path: Path) -> None:
        target = tmp_path / "target.txt"
        target.write_text("x")
        link = tmp_path / "link.txt"
        link.symlink_to(target)
        assert classify(str(link)) == Shape.FILE

    def test_broken_symlink_is_missing(self, tmp_path: Path) -> None:
        link = tmp_path / "dangling"
        link.symlink_to(tmp_path / "gone")
        assert classify(str(link)) == Shape.MISSING


class TestClassifyErrors:
    """形状を推測せずにエラーを送出するケースを検証する。"""

    def test_empty_string(self) -> None:
        with pytest.raises(ClassificationError, match="Empty path"):
            classify("")

    def test_fifo_is_unsupported(self, tmp_path: Path) -> None:
        fifo = tmp_path / "pipe"
        os.mkfifo(fifo)
        with pytest.raises(ClassificationError, match="Unsupported file type"):
            classify(str(fifo))

    def test_permission_error_is_not_missing(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """stat の権限エラーは MISSING ではなく ClassificationError。"""
        target = str(tmp_path / "secret")
        original_stat = os.stat

        def fake_stat(path: object, *args: object, **kwargs: object) -> os.stat_result:
            if os.fspath(path) == target:  # type: ignore[arg-type]
                raise PermissionError(13, "Permission denied", target)
            return original_stat(path, *args, **kwargs)  # type: ignore[arg-type]

        monkeypatch.setattr(os, "stat", fake_stat)
        with pytest.raises(ClassificationError, match="Permission denied") as exc_info:
            classify(target)
        assert isinstance(exc_info.value.__cause__, PermissionError)


class TestHelpers:
    """stat_path / shape_from_mode を検証する。"""

    def test_stat_path_missing_returns_none(self, tmp_path: Path) -> None:
        assert stat_path(str(tmp_path / "nope")) is None

    def test_shape_from_mode(self, tmp_path: Path) -> None:
        f = tmp_path / "a"
        f.write_text("x")
        assert shape_from_mode(os.stat(f).st_mode) == Shape.FILE
        assert shape_from_mode(os.stat(tmp_path).st_mode) == Shape.DIRECTORY

    def test_shape_from_mode_other(self, tmp_path: Path) -> None:
        fifo = tmp_path / "pipe"
        os.mkfifo(fifo)
        assert shape_from_mode(os.stat(fifo).st_mode) is None
