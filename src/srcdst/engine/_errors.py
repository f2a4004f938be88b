"""解決エラーの分類。

全て ResolutionError を基底とし、parse() 時点（設定・形状レベル）または
反復中（エントリ単位）に呼び出し側へ送出される。
エラーメッセージは解決方法のヒントを含む。
"""

from __future__ import annotations


class ResolutionError(Exception):
    """SRC / DST 解決エラーの基底クラス。"""


class ClassificationError(ResolutionError):
    """パスのメタデータ取得に失敗した。

    アクセス不能なパスを Missing とみなすとペアリング判定が壊れるため、
    形状を推測せずに送出する。
    """


class PatternSyntaxError(ResolutionError, ValueError):
    """マッチ式の構文エラー。

    Attributes:
        pattern: 解析対象のパターン文字列。
        position: エラー位置（0 始まりの文字オフセット）。
    """

    def __init__(self, message: str, pattern: str, position: int) -> None:
        super().__init__(f"{message} at position {position} in pattern '{pattern}'")
        self.pattern = pattern
        self.position = position


class ShapeMismatchError(ResolutionError):
    """SRC / DST の形状の組み合わせが構造的に不正。"""


class SourceNotFoundError(ResolutionError):
    """SRC（または列挙済みエントリ）が存在しない。"""


class DestinationNotFoundError(ResolutionError):
    """明示指定された DST ディレクトリが存在しない。"""


class NameExhaustedError(ResolutionError):
    """衝突回避が試行上限内に空き名を見つけられなかった。"""


class InplaceError(ResolutionError):
    """SRC と DST が同一の場所を指している。"""


class StreamNotAllowedError(ResolutionError):
    """設定により標準入出力の使用が禁止されている。"""


class AutoNamingForbiddenError(ResolutionError):
    """設定により DST の自動命名が禁止されている。"""


class ContainerCreationError(ResolutionError):
    """自動命名したコンテナディレクトリを作成できなかった。"""
