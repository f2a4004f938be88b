"""EntrySelector — ディレクトリ直下のエントリ選択。

ディレクトリを非再帰で列挙し、マッチ式で絞り込んだ通常ファイルを
名前の辞書順で返す。サブディレクトリには降りない。
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from srcdst.engine._classifier import shape_from_mode, stat_path
from srcdst.engine._errors import ClassificationError, SourceNotFoundError
from srcdst.engine._pattern import MatchExpression
from srcdst.models.shape import Shape

logger = logging.getLogger(__name__)


class EntrySelector:
    """ディレクトリ直下の対象ファイルを列挙する。

    イテレーションのたびにディレクトリを列挙し直すため、再開可能だが
    前回の結果はキャッシュされない。名前の列挙（マッチ式による絞り込みと
    ソート）はディレクトリカーソルを閉じてから行い、エントリの種別判定は
    要素ごとに遅延して行う。
    """

    def __init__(
        self,
        directory: Path,
        expression: MatchExpression | None = None,
    ) -> None:
        self._directory = directory
        self._expression = expression

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def expression(self) -> MatchExpression | None:
        return self._expression

    def __iter__(self) -> Iterator[Path]:
        """一致する通常ファイルのパスを辞書順に返す。

        Raises:
            SourceNotFoundError: 列挙後にエントリが消えた場合。
            ClassificationError: エントリのメタデータ取得に失敗した場合。
        """
        for name in self.list_names():
            path = self.select(name)
            if path is not None:
                yield path

    def list_names(self) -> list[str]:
        """マッチ式に一致する直下エントリ名を辞書順で返す。

        Raises:
            SourceNotFoundError: ディレクトリが存在しない場合。
            ClassificationError: ディレクトリを列挙できない場合。
        """
        try:
            with os.scandir(self._directory) as it:
                names = [
                    entry.name
                    for entry in it
                    if self._expression is None or self._expression.matches(entry.name)
                ]
        except FileNotFoundError as e:
            raise SourceNotFoundError(
                f"Directory not found: '{self._directory}'. "
                "It may have been removed after resolution; run again."
            ) from e
        except PermissionError as e:
            raise ClassificationError(
                f"Permission denied: '{self._directory}'. "
                "Check directory permissions and try again."
            ) from e
        except OSError as e:
            raise ClassificationError(
                f"Cannot list '{self._directory}': {e.strerror or e}."
            ) from e

        names.sort()
        logger.debug(
            "Listed %d matching entries in %s (pattern=%s)",
            len(names),
            self._directory,
            self._expression,
        )
        return names

    def select(self, name: str) -> Path | None:
        """直下エントリ name を判定し、通常ファイルならそのパスを返す。

        ディレクトリ・ソケット等は None（スキップ）。

        Raises:
            SourceNotFoundError: 列挙と判定の間にエントリが消えた場合。
            ClassificationError: メタデータ取得に失敗した場合。
        """
        path = self._directory / name
        st = stat_path(str(path))
        if st is None:
            raise SourceNotFoundError(
                f"Entry disappeared during resolution: '{path}'. "
                "The directory was modified while being processed."
            )
        if shape_from_mode(st.st_mode) is not Shape.FILE:
            logger.debug("Skipping non-file entry: %s", path)
            return None
        return path
