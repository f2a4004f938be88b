"""NameSynthesizer — 出力名の自動命名と衝突回避。

1 回の解決実行の中で、自動命名したファイル名・コンテナ名が
ディスク上の既存エントリや同じ実行内の他の出力と重ならないことを保証する。
空き名が見つからない場合は試行上限で NameExhaustedError を送出し、
既存ファイルを黙って上書きすることはない。
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Final

from srcdst.engine._classifier import stat_path
from srcdst.engine._errors import ContainerCreationError, NameExhaustedError
from srcdst.models.config import DEFAULT_MAX_NAME_ATTEMPTS

logger = logging.getLogger(__name__)

_TOKEN_FORMAT: Final[str] = "%Y%m%d-%H%M%S"


def synthesize(source_stem: str, target_ext: str) -> str:
    """ソースのステムと拡張子から出力ファイル名を組み立てる。

    target_ext が空の場合は拡張子なしの名前を返す。
    """
    return f"{source_stem}.{target_ext}" if target_ext else source_stem


def time_token() -> str:
    """現在時刻から生成したコンテナ名用トークン（例: 20261018-142530）。"""
    return datetime.now().strftime(_TOKEN_FORMAT)


class NameSynthesizer:
    """1 回の解決実行に閉じた命名器。

    予約済みパスの集合を保持し、同じ実行内で同じ名前を二度返さない。
    """

    def __init__(
        self,
        max_attempts: int = DEFAULT_MAX_NAME_ATTEMPTS,
        token_factory: Callable[[], str] = time_token,
    ) -> None:
        if max_attempts <= 0:
            raise ValueError(f"max_attempts must be positive, got {max_attempts}")
        self._max_attempts = max_attempts
        self._token_factory = token_factory
        self._reserved: set[Path] = set()

    @property
    def reserved(self) -> frozenset[Path]:
        return frozenset(self._reserved)

    def unique_file(self, directory: Path, source_stem: str, target_ext: str) -> Path:
        """directory 内で空いている出力ファイルパスを返し、予約する。

        候補は "stem.ext"、続いて "stem-1.ext"、"stem-2.ext" …。
        ディスク上に存在する名前と、この実行で予約済みの名前はスキップする。

        Args:
            directory: 出力先ディレクトリ。
            source_stem: ソースのファイル名から拡張子を除いた部分。
            target_ext: 出力拡張子（先頭の "." なし）。

        Returns:
            予約済みの出力ファイルパス。

        Raises:
            NameExhaustedError: 試行上限までに空き名が見つからない場合。
            ClassificationError: 候補の存在確認に失敗した場合。
        """
        for attempt in range(self._max_attempts):
            stem = source_stem if attempt == 0 else f"{source_stem}-{attempt}"
            candidate = directory / synthesize(stem, target_ext)
            if candidate in self._reserved:
                continue
            if stat_path(str(candidate), follow_symlinks=False) is not None:
                continue
            self._reserved.add(candidate)
            if attempt:
                logger.debug("Name collision avoided: %s", candidate)
            return candidate

        raise NameExhaustedError(
            f"No free name for '{synthesize(source_stem, target_ext)}' in "
            f"'{directory}' after {self._max_attempts} attempts. "
            "Clean up the output directory or specify DST explicitly."
        )

    def container(
        self,
        parent: Path,
        base: str,
        *,
        explicit: bool = False,
        create: bool = True,
    ) -> Path:
        """fan-out 出力用のコンテナディレクトリ名を決定する。

        自動命名では "base-<token>"、続いて "base-<token>-1" …を候補とする。
        explicit=True の場合は base をそのまま使い、"base-1" …を続ける。

        create=True の場合は mkdir(exist_ok=False) が成功した最初の候補を採用する。
        作成自体が予約となるため、同じ作業ディレクトリで続けて実行しても
        同じ名前が再利用されることはない。create=False の場合はディスク上に
        存在しない最初の候補を返す（作成は呼び出し側の責務）。

        Raises:
            NameExhaustedError: 試行上限までに空き名が見つからない場合。
            ContainerCreationError: 衝突以外の理由で作成に失敗した場合。
            ClassificationError: 候補の存在確認に失敗した場合。
        """
        head = base if explicit else f"{base}-{self._token_factory()}"
        for attempt in range(self._max_attempts):
            candidate = parent / (head if attempt == 0 else f"{head}-{attempt}")
            if candidate in self._reserved:
                continue
            if create:
                try:
                    candidate.mkdir()
                except FileExistsError:
                    continue
                except OSError as e:
                    raise ContainerCreationError(
                        f"Cannot create output directory '{candidate}': "
                        f"{e.strerror or e}. Check permissions on '{parent}'."
                    ) from e
            elif stat_path(str(candidate), follow_symlinks=False) is not None:
                continue
            self._reserved.add(candidate)
            logger.debug("Container directory: %s (created=%s)", candidate, create)
            return candidate

        raise NameExhaustedError(
            f"No free directory name for '{head}' in '{parent}' after "
            f"{self._max_attempts} attempts. Specify DST explicitly."
        )
