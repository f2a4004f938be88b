"""Locator — 入出力先の不透明な参照。

ファイルパスまたは標準ストリームのいずれかを指す。
エンジンが生成したファイル Locator は、呼び出し側で追加の存在確認なしに
即座に open できることを前提とする。
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import Field, field_validator

from srcdst.models._base import SrcDstBaseModel


class FileLocator(SrcDstBaseModel):
    """ファイルシステム上のパスを指す Locator。

    path は常に絶対パス。
    """

    kind: Literal["file"] = "file"
    path: Path

    @field_validator("path")
    @classmethod
    def _require_absolute(cls, v: Path) -> Path:
        if not v.is_absolute():
            raise ValueError(f"path must be absolute, got '{v}'")
        return v

    def __str__(self) -> str:
        return str(self.path)


class StdinLocator(SrcDstBaseModel):
    """標準入力を指す Locator。"""

    kind: Literal["stdin"] = "stdin"

    def __str__(self) -> str:
        return "<stdin>"


class StdoutLocator(SrcDstBaseModel):
    """標準出力を指す Locator。"""

    kind: Literal["stdout"] = "stdout"

    def __str__(self) -> str:
        return "<stdout>"


InputLocator = Annotated[
    Union[FileLocator, StdinLocator],
    Field(discriminator="kind"),
]
"""入力側 Locator の判別共用体。kind フィールドの値で型を自動選択する。"""

OutputLocator = Annotated[
    Union[FileLocator, StdoutLocator],
    Field(discriminator="kind"),
]
"""出力側 Locator の判別共用体。kind フィールドの値で型を自動選択する。"""


class ResolvedPair(SrcDstBaseModel):
    """1 組の入出力ペア。JSON 出力等のシリアライズ用。"""

    source: InputLocator
    destination: OutputLocator

    @classmethod
    def from_tuple(
        cls, pair: tuple[FileLocator | StdinLocator, FileLocator | StdoutLocator]
    ) -> ResolvedPair:
        """PairIterator が返すタプルから構築する。"""
        source, destination = pair
        return cls(source=source, destination=destination)
