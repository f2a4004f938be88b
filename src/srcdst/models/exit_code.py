"""ExitCode — 終了コードの定義。"""

from enum import IntEnum


class ExitCode(IntEnum):
    """プロセス終了コード。

    1 は一部エントリの解決失敗、2 は解決そのものの失敗、
    3 は CLI 層固有の入力・設定エラー。
    """

    SUCCESS = 0
    ENTRY_ERROR = 1
    RESOLUTION_ERROR = 2
    INPUT_ERROR = 3
