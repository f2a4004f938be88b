"""Shape — パス指定子の形状分類。"""

from enum import StrEnum
from typing import Final

STREAM_SENTINEL: Final[str] = "-"
"""標準入出力を表すパス指定子。"""


class Shape(StrEnum):
    """SRC / DST パス指定子の形状。

    解決時点のファイルシステム状態から毎回導出され、キャッシュされない。
    """

    MISSING = "missing"
    FILE = "file"
    DIRECTORY = "directory"
    STREAM = "stream"
