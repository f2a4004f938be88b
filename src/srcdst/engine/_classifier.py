"""PathClassifier — 生のパス文字列を Shape に分類する。"""

from __future__ import annotations

import os
import stat as stat_module

from srcdst.engine._errors import ClassificationError
from srcdst.models.shape import STREAM_SENTINEL, Shape


def is_stream(raw: str | os.PathLike[str]) -> bool:
    """パス指定子が標準入出力のセンチネルかどうかを判定する。"""
    return os.fspath(raw) == STREAM_SENTINEL


def stat_path(
    path_str: str, *, follow_symlinks: bool = True
) -> os.stat_result | None:
    """stat する。存在しなければ None。

    follow_symlinks=False ではリンク自体を調べるため、リンク切れの
    シンボリックリンクも存在するものとして返す。

    Raises:
        ClassificationError: 権限エラー・I/O エラー等でメタデータを取得できない場合。
    """
    try:
        return os.stat(path_str, follow_symlinks=follow_symlinks)
    except (FileNotFoundError, NotADirectoryError):
        return None
    except OSError as e:
        raise ClassificationError(
            f"Cannot inspect '{path_str}': {e.strerror or e}. "
            "Check permissions on the path and its parent directories."
        ) from e


def shape_from_mode(mode: int) -> Shape | None:
    """st_mode から Shape を返す。通常ファイルでもディレクトリでもなければ None。"""
    if stat_module.S_ISREG(mode):
        return Shape.FILE
    if stat_module.S_ISDIR(mode):
        return Shape.DIRECTORY
    return None


def classify(raw: str | os.PathLike[str]) -> Shape:
    """パス指定子の形状を判定する。

    "-" はファイルシステムの状態に関わらず常に Shape.STREAM。
    それ以外はシンボリックリンクを追従して stat する。副作用なし。

    Args:
        raw: 生のパス指定子。

    Returns:
        判定された Shape。

    Raises:
        ClassificationError: メタデータ取得に失敗した場合、空文字列の場合、
            または通常ファイルでもディレクトリでもない場合。
    """
    path_str = os.fspath(raw)
    if path_str == STREAM_SENTINEL:
        return Shape.STREAM
    if not path_str:
        raise ClassificationError(
            "Empty path. Specify a file, a directory, or '-' for stdio."
        )

    st = stat_path(path_str)
    if st is None:
        return Shape.MISSING

    shape = shape_from_mode(st.st_mode)
    if shape is None:
        # ソケット、パイプ、デバイス等
        raise ClassificationError(
            f"Unsupported file type: '{path_str}' (not a regular file or directory). "
            "Use '-' to read from stdin or write to stdout."
        )
    return shape
