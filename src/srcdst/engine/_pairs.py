"""PairIterator — 入出力ペアの遅延シーケンス。

single / stream 戦略ではちょうど 1 組、fan_out 戦略では一致した
エントリごとに 1 組を要求時に生成する。前方専用で再開不可
（やり直すには parse() を再度呼び出して列挙し直す）。
反復中にディレクトリが変更された場合の安定性は保証しない。
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from types import TracebackType

from srcdst.engine._errors import ContainerCreationError, ResolutionError
from srcdst.engine._naming import NameSynthesizer
from srcdst.engine._selector import EntrySelector
from srcdst.models.locator import FileLocator, StdinLocator, StdoutLocator
from srcdst.models.plan import PairingPlan, PairingStrategy

logger = logging.getLogger(__name__)

Pair = tuple[FileLocator | StdinLocator, FileLocator | StdoutLocator]
"""(InputLocator, OutputLocator) のタプル。"""


class PairIterator(Iterator[Pair]):
    """(InputLocator, OutputLocator) を 1 組ずつ返すイテレータ。

    fan_out では最初の要求時にディレクトリ名を列挙し、エントリの種別判定と
    出力名の衝突確認は要素ごとに行う。エントリ単位のエラー（列挙後の消失、
    stat 失敗等）は該当要素の __next__ から送出されるが、カーソルは既に
    進んでいるため、呼び出し側は捕捉して反復を続けられる。
    ディレクトリのカーソルは列挙直後に閉じられ、要素間で保持される
    リソースはない。
    """

    def __init__(
        self,
        plan: PairingPlan,
        default_extension: str,
        synthesizer: NameSynthesizer,
        selector: EntrySelector | None = None,
        *,
        container_created: bool = True,
    ) -> None:
        if plan.is_batch and selector is None:
            raise ValueError("fan_out plan requires an EntrySelector")
        self._plan = plan
        self._extension = default_extension
        self._synthesizer = synthesizer
        self._selector = selector
        self._container_created = container_created or not plan.synthesized_container
        self._names: list[str] | None = None
        self._index = 0
        self._finished = False

    @property
    def plan(self) -> PairingPlan:
        return self._plan

    @property
    def strategy(self) -> PairingStrategy:
        return self._plan.strategy

    @property
    def is_batch(self) -> bool:
        """ディレクトリ由来の複数ペアを生成するかどうか。"""
        return self._plan.is_batch

    @property
    def container(self) -> FileLocator | None:
        """自動命名されたコンテナディレクトリ。それ以外の戦略では None。"""
        if not self._plan.synthesized_container or self._plan.destination is None:
            return None
        return FileLocator(path=self._plan.destination)

    def create_container(self) -> None:
        """自動命名されたコンテナディレクトリを作成する。

        ペアを消費する前に呼び出す。解決時に作成済みの場合や、
        コンテナを使わない戦略では何もしない。

        Raises:
            ContainerCreationError: 作成に失敗した場合（解決後に同名の
                エントリが作られた場合を含む）。
        """
        if self._container_created:
            return
        directory = self._plan.destination
        assert directory is not None
        try:
            directory.mkdir()
        except FileExistsError as e:
            raise ContainerCreationError(
                f"'{directory}' was created by someone else after resolution. "
                "Resolve again to pick a new name."
            ) from e
        except OSError as e:
            raise ContainerCreationError(
                f"Cannot create output directory '{directory}': {e.strerror or e}."
            ) from e
        self._container_created = True
        logger.debug("Created container directory: %s", directory)

    def close(self) -> None:
        """反復を打ち切る。以降の __next__ は StopIteration。"""
        self._finished = True
        self._names = None

    def __iter__(self) -> PairIterator:
        return self

    def __next__(self) -> Pair:
        if self._finished:
            raise StopIteration
        if self._plan.is_batch:
            return self._next_fan_out()
        self._finished = True
        return self._single_pair()

    def __enter__(self) -> PairIterator:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def _single_pair(self) -> Pair:
        source = self._plan.source
        destination = self._plan.destination
        return (
            StdinLocator() if source is None else FileLocator(path=source),
            StdoutLocator() if destination is None else FileLocator(path=destination),
        )

    def _next_fan_out(self) -> Pair:
        assert self._selector is not None
        assert self._plan.destination is not None
        if self._names is None:
            try:
                self._names = self._selector.list_names()
            except ResolutionError:
                self.close()
                raise

        while self._index < len(self._names):
            name = self._names[self._index]
            self._index += 1
            path = self._selector.select(name)
            if path is None:
                continue
            output = self._synthesizer.unique_file(
                self._plan.destination, path.stem, self._extension
            )
            return FileLocator(path=path), FileLocator(path=output)

        self.close()
        raise StopIteration
