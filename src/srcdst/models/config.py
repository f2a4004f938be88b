"""設定管理モデル。

SrcDstConfig は解決前に呼び出し側が一度だけ構築し、反復中に変更されない。
ファイルシステムのハンドルは一切保持しない。
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Final

from pydantic import Field, StrictBool, field_validator

from srcdst.models._base import SrcDstBaseModel

if TYPE_CHECKING:
    from srcdst.engine._pairs import PairIterator

DEFAULT_MAX_NAME_ATTEMPTS: Final[int] = 1000

_SEPARATORS: Final[frozenset[str]] = frozenset({"/", os.sep, *(os.altsep or "")})


class SrcDstConfig(SrcDstBaseModel):
    """SRC / DST 解決の不変設定。

    default_extension は先頭の "." を取り除いて保持する。空文字列は
    「拡張子なし」を意味する。
    match_expression は生の文字列で保持し、parse() 時にコンパイルする
    （構文エラーは PatternSyntaxError として parse() から送出される）。
    """

    default_extension: str
    match_expression: str | None = None
    explicit_container: str | None = Field(default=None, min_length=1)

    allow_from_stdin: StrictBool = True
    allow_to_stdout: StrictBool = True
    auto_named_dst_file: StrictBool = True
    auto_named_dst_dir: StrictBool = True
    # 同一ファイルを open と create で同時に扱う可能性があるため既定で禁止
    allow_inplace: StrictBool = False
    create_container: StrictBool = True
    max_name_attempts: int = Field(default=DEFAULT_MAX_NAME_ATTEMPTS, gt=0)

    @field_validator("default_extension")
    @classmethod
    def _normalize_extension(cls, v: str) -> str:
        ext = v.removeprefix(".")
        if set(ext) & _SEPARATORS:
            raise ValueError(
                f"default_extension must not contain a path separator: '{v}'"
            )
        return ext

    @field_validator("explicit_container")
    @classmethod
    def _require_plain_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        if v == "-":
            raise ValueError("explicit_container cannot be the stdio sentinel '-'")
        if set(v) & _SEPARATORS or v in (".", ".."):
            raise ValueError(
                f"explicit_container must be a plain directory name, got '{v}'"
            )
        return v

    @classmethod
    def new(cls, default_extension: str) -> SrcDstConfig:
        """既定値で設定を構築する。"""
        return cls(default_extension=default_extension)

    def parse(
        self,
        src: str | os.PathLike[str],
        dst: str | os.PathLike[str] | None = None,
    ) -> PairIterator:
        """SRC / DST を解決し、入出力ペアの遅延シーケンスを返す。

        Args:
            src: SRC パス指定子。"-" は標準入力。
            dst: DST パス指定子。"-" は標準出力、None は未指定。

        Returns:
            (InputLocator, OutputLocator) を順に返す PairIterator。

        Raises:
            srcdst.engine.ResolutionError: 設定・形状レベルの解決エラー。
        """
        from srcdst.engine import resolve_pairs

        return resolve_pairs(self, src, dst)
