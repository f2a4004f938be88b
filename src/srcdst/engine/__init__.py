"""SRC / DST 解決エンジン。

以下のパイプラインで入出力ペアを生成する:

1. マッチ式のコンパイル（MatchExpression）
2. SRC / DST の形状判定（classify）
3. ペアリング方針の決定（plan_pairing）
4. 自動命名と衝突回避（NameSynthesizer）
5. ペアの遅延生成（PairIterator + EntrySelector）
"""

from srcdst.engine._classifier import classify, is_stream
from srcdst.engine._errors import (
    AutoNamingForbiddenError,
    ClassificationError,
    ContainerCreationError,
    DestinationNotFoundError,
    InplaceError,
    NameExhaustedError,
    PatternSyntaxError,
    ResolutionError,
    ShapeMismatchError,
    SourceNotFoundError,
    StreamNotAllowedError,
)
from srcdst.engine._naming import NameSynthesizer, synthesize, time_token
from srcdst.engine._pairs import Pair, PairIterator
from srcdst.engine._pattern import (
    LiteralSegment,
    MatchExpression,
    RangeSegment,
    WildcardSegment,
    parse_match_expression,
)
from srcdst.engine._planner import plan_pairing
from srcdst.engine._resolver import resolve_pairs
from srcdst.engine._selector import EntrySelector

__all__ = [
    "AutoNamingForbiddenError",
    "ClassificationError",
    "ContainerCreationError",
    "DestinationNotFoundError",
    "EntrySelector",
    "InplaceError",
    "LiteralSegment",
    "MatchExpression",
    "NameExhaustedError",
    "NameSynthesizer",
    "Pair",
    "PairIterator",
    "PatternSyntaxError",
    "RangeSegment",
    "ResolutionError",
    "ShapeMismatchError",
    "SourceNotFoundError",
    "StreamNotAllowedError",
    "WildcardSegment",
    "classify",
    "is_stream",
    "parse_match_expression",
    "plan_pairing",
    "resolve_pairs",
    "synthesize",
    "time_token",
]
