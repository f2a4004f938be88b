"""srcdst — SRC / DST パス指定子を入出力ペアに解決するライブラリ。

公開 API:
    SrcDstConfig: 解決設定。parse(src, dst) で PairIterator を返す。
    resolve_pairs: parse() の関数版。
    ResolutionError: 解決エラーの基底クラス。
"""

from srcdst.engine import (
    AutoNamingForbiddenError,
    ClassificationError,
    ContainerCreationError,
    DestinationNotFoundError,
    InplaceError,
    MatchExpression,
    NameExhaustedError,
    PairIterator,
    PatternSyntaxError,
    ResolutionError,
    ShapeMismatchError,
    SourceNotFoundError,
    StreamNotAllowedError,
    resolve_pairs,
)
from srcdst.models import (
    FileLocator,
    PairingStrategy,
    Shape,
    SrcDstConfig,
    StdinLocator,
    StdoutLocator,
)


def main() -> None:
    """パッケージエントリポイント。cli.main() に委譲する。"""
    from srcdst.cli import main as cli_main

    cli_main()


__all__ = [
    "AutoNamingForbiddenError",
    "ClassificationError",
    "ContainerCreationError",
    "DestinationNotFoundError",
    "FileLocator",
    "InplaceError",
    "MatchExpression",
    "NameExhaustedError",
    "PairIterator",
    "PairingStrategy",
    "PatternSyntaxError",
    "ResolutionError",
    "Shape",
    "ShapeMismatchError",
    "SourceNotFoundError",
    "SrcDstConfig",
    "StdinLocator",
    "StdoutLocator",
    "StreamNotAllowedError",
    "main",
    "resolve_pairs",
]
