"""SRC / DST 解決のエントリポイント。

設定レベル・形状レベルのエラーはここで（parse() 時点で）送出される。
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable

from srcdst.engine._naming import NameSynthesizer, time_token
from srcdst.engine._pairs import PairIterator
from srcdst.engine._pattern import MatchExpression
from srcdst.engine._planner import plan_pairing
from srcdst.engine._selector import EntrySelector
from srcdst.models.config import SrcDstConfig

logger = logging.getLogger(__name__)


def resolve_pairs(
    config: SrcDstConfig,
    src: str | os.PathLike[str],
    dst: str | os.PathLike[str] | None = None,
    *,
    token_factory: Callable[[], str] = time_token,
) -> PairIterator:
    """SRC / DST を解決し、入出力ペアの遅延シーケンスを返す。

    処理順序:
    1. マッチ式のコンパイル（構文エラーは即座に送出）
    2. SRC / DST の形状判定とペアリング方針の決定
    3. PairIterator の構築（fan_out のエントリ列挙は最初の要求時）

    Args:
        config: 解決設定。
        src: SRC パス指定子。"-" は標準入力。
        dst: DST パス指定子。"-" は標準出力、None は未指定。
        token_factory: コンテナ名用トークンの生成関数。

    Returns:
        PairIterator。

    Raises:
        PatternSyntaxError: マッチ式の構文が不正な場合。
        ResolutionError: その他の解決エラー（各サブクラス）。
    """
    expression = (
        MatchExpression.parse(config.match_expression)
        if config.match_expression is not None
        else None
    )
    synthesizer = NameSynthesizer(
        max_attempts=config.max_name_attempts,
        token_factory=token_factory,
    )
    plan = plan_pairing(config, src, dst, synthesizer)

    selector = None
    if plan.is_batch:
        assert plan.source is not None
        selector = EntrySelector(plan.source, expression)

    return PairIterator(
        plan,
        config.default_extension,
        synthesizer,
        selector,
        container_created=config.create_container,
    )
