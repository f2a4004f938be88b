"""MatchExpression — ディレクトリエントリ選択用のマッチ式。

ワイルドカード（*, ?）と数値範囲パターン（{1..=999:04d}）を
リテラルと組み合わせた小さな言語。再帰下降パーサーで不変の
MatchExpression を構築し、各候補名に対して純粋関数として評価する。

文法:
    pattern := segment+
    segment := '*' | '?' | range | literal
    range   := '{' INT '..=' INT [':' WIDTH 'd'] '}'
    literal := (CHAR | '\\' ANY)+
"""

from __future__ import annotations

import functools
import os
from typing import Annotated, Final, Literal, NoReturn, Union

from pydantic import Field, model_validator

from srcdst.engine._errors import PatternSyntaxError
from srcdst.models._base import SrcDstBaseModel

_DIGITS: Final[frozenset[str]] = frozenset("0123456789")
_SEPARATORS: Final[frozenset[str]] = frozenset({"/", os.sep, *(os.altsep or "")})
_RANGE_OPERATOR: Final[str] = "..="
_SPECIAL_CHARS: Final[frozenset[str]] = frozenset("*?{}\\")


class LiteralSegment(SrcDstBaseModel):
    """そのまま一致する文字列。"""

    kind: Literal["literal"] = "literal"
    text: str = Field(min_length=1)


class WildcardSegment(SrcDstBaseModel):
    """ワイルドカード。any_run=True は '*'、False は '?'。"""

    kind: Literal["wildcard"] = "wildcard"
    any_run: bool


class RangeSegment(SrcDstBaseModel):
    """閉区間 [start, end] の整数。width > 0 の場合は width 桁にゼロ埋めされる。"""

    kind: Literal["range"] = "range"
    start: int = Field(ge=0)
    end: int = Field(ge=0)
    width: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> RangeSegment:
        if self.start > self.end:
            raise ValueError(f"start {self.start} is greater than end {self.end}")
        if self.width and len(str(self.end)) > self.width:
            raise ValueError(f"width {self.width} cannot represent {self.end}")
        return self

    def render(self, value: int) -> str:
        """値をこのセグメントの表記に整形する。"""
        return f"{value:0{self.width}d}" if self.width else str(value)


Segment = Annotated[
    Union[LiteralSegment, WildcardSegment, RangeSegment],
    Field(discriminator="kind"),
]


class MatchExpression(SrcDstBaseModel):
    """解析済みのマッチ式。

    Attributes:
        source: 元のパターン文字列。
        segments: 解析済みセグメント列。連続する '*' は 1 つにまとめられている。
    """

    source: str = Field(min_length=1)
    segments: tuple[Segment, ...] = Field(min_length=1)

    @classmethod
    def parse(cls, pattern: str) -> MatchExpression:
        """パターン文字列を解析する。

        Raises:
            PatternSyntaxError: 構文が不正な場合。部分的な一致は行わない。
        """
        return cls(source=pattern, segments=tuple(_Parser(pattern).parse()))

    def matches(self, name: str) -> bool:
        """名前全体がこのマッチ式に一致するかどうかを判定する。"""
        return _match(self.segments, name)

    def __str__(self) -> str:
        return self.source


def parse_match_expression(pattern: str) -> MatchExpression:
    """MatchExpression.parse() の関数版。"""
    return MatchExpression.parse(pattern)


class _Parser:
    """再帰下降パーサー。インスタンスは 1 回の解析にのみ使う。"""

    def __init__(self, pattern: str) -> None:
        self._pattern = pattern
        self._pos = 0

    def parse(self) -> list[LiteralSegment | WildcardSegment | RangeSegment]:
        if not self._pattern:
            self._fail("Empty pattern; use '*' to select every file")
        segments: list[LiteralSegment | WildcardSegment | RangeSegment] = []
        while not self._at_end():
            segment = self._parse_segment()
            if (
                isinstance(segment, WildcardSegment)
                and segment.any_run
                and segments
                and isinstance(segments[-1], WildcardSegment)
                and segments[-1].any_run
            ):
                continue
            segments.append(segment)
        return segments

    def _parse_segment(self) -> LiteralSegment | WildcardSegment | RangeSegment:
        char = self._peek()
        if char == "*":
            self._pos += 1
            return WildcardSegment(any_run=True)
        if char == "?":
            self._pos += 1
            return WildcardSegment(any_run=False)
        if char == "{":
            return self._parse_range()
        if char == "}":
            self._fail("Unmatched '}'; escape it as '\\}' to match it literally")
        return self._parse_literal()

    def _parse_literal(self) -> LiteralSegment:
        chars: list[str] = []
        while not self._at_end():
            char = self._peek()
            if char in _SEPARATORS:
                self._fail(
                    f"Directory separator '{char}' is not allowed; "
                    "patterns select direct entries of the source directory"
                )
            if char == "\\":
                if self._pos + 1 >= len(self._pattern):
                    self._fail("Dangling escape '\\' at end of pattern")
                chars.append(self._pattern[self._pos + 1])
                self._pos += 2
                continue
            if char in _SPECIAL_CHARS:
                break
            chars.append(char)
            self._pos += 1
        return LiteralSegment(text="".join(chars))

    def _parse_range(self) -> RangeSegment:
        open_pos = self._pos
        self._pos += 1  # '{'
        start = self._parse_bound("start")
        if not self._pattern.startswith(_RANGE_OPERATOR, self._pos):
            if self._pattern.startswith("..", self._pos):
                self._fail("Exclusive ranges are not supported; use '..=' instead")
            self._fail(f"Expected '{_RANGE_OPERATOR}' after range start")
        self._pos += len(_RANGE_OPERATOR)
        end = self._parse_bound("end")
        width = 0
        if self._peek() == ":":
            self._pos += 1
            width = self._parse_width()
        if self._at_end():
            self._fail("Unterminated '{'", position=open_pos)
        if self._peek() != "}":
            self._fail("Expected '}' to close the range")
        self._pos += 1

        if start > end:
            self._fail(
                f"Range start {start} is greater than end {end}", position=open_pos
            )
        if width and len(str(end)) > width:
            self._fail(
                f"Width {width} is too small to represent {end}; "
                f"use at least {len(str(end))}",
                position=open_pos,
            )
        return RangeSegment(start=start, end=end, width=width)

    def _parse_bound(self, label: str) -> int:
        if self._peek() == "-":
            self._fail(f"Negative range {label} is not supported")
        digits = self._take_digits()
        if not digits:
            if self._at_end():
                self._fail("Unterminated '{'")
            self._fail(f"Expected a non-negative integer as range {label}")
        return int(digits)

    def _parse_width(self) -> int:
        digits = self._take_digits()
        if not digits:
            self._fail("Expected a width such as '04d' after ':'")
        width = int(digits)
        if width == 0:
            self._fail("Width must be a positive integer")
        if self._peek() != "d":
            self._fail("Expected 'd' after the width")
        self._pos += 1
        return width

    def _take_digits(self) -> str:
        begin = self._pos
        while not self._at_end() and self._peek() in _DIGITS:
            self._pos += 1
        return self._pattern[begin : self._pos]

    def _peek(self) -> str:
        return self._pattern[self._pos] if not self._at_end() else ""

    def _at_end(self) -> bool:
        return self._pos >= len(self._pattern)

    def _fail(self, message: str, position: int | None = None) -> NoReturn:
        raise PatternSyntaxError(
            message,
            self._pattern,
            self._pos if position is None else position,
        )


def _match(
    segments: tuple[LiteralSegment | WildcardSegment | RangeSegment, ...],
    name: str,
) -> bool:
    """segments が name 全体に一致するかをバックトラックで判定する。

    (セグメント位置, 文字位置) ごとの結果をメモ化するため、* が複数あっても
    計算量は O(len(segments) * len(name) ** 2) に収まる。
    """

    @functools.cache
    def match_from(index: int, pos: int) -> bool:
        if index == len(segments):
            return pos == len(name)

        segment = segments[index]
        if isinstance(segment, LiteralSegment):
            return name.startswith(segment.text, pos) and match_from(
                index + 1, pos + len(segment.text)
            )
        if isinstance(segment, WildcardSegment):
            if not segment.any_run:
                return pos < len(name) and match_from(index + 1, pos + 1)
            if index + 1 == len(segments):
                return True
            return any(
                match_from(index + 1, end) for end in range(pos, len(name) + 1)
            )
        return any(
            match_from(index + 1, end) for end in _range_match_ends(segment, name, pos)
        )

    return match_from(0, 0)


def _range_match_ends(segment: RangeSegment, name: str, pos: int) -> list[int]:
    """name[pos:] の先頭で RangeSegment に一致し得る終端位置を列挙する。"""
    if segment.width:
        lengths = [segment.width]
    else:
        lengths = list(range(1, len(str(segment.end)) + 1))

    ends: list[int] = []
    for length in lengths:
        digits = name[pos : pos + length]
        if len(digits) != length or not set(digits) <= _DIGITS:
            break
        if not segment.width and length > 1 and digits[0] == "0":
            break
        if segment.start <= int(digits) <= segment.end:
            ends.append(pos + length)
    return ends
