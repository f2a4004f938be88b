"""PairingPlan — 形状の組み合わせから決定されたペアリング方針。"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from pydantic import model_validator

from srcdst.models._base import SrcDstBaseModel
from srcdst.models.shape import Shape


class PairingStrategy(StrEnum):
    """ペアリング戦略。

    single: 1 組のペア（少なくとも一方がファイル）。
    fan_out: ディレクトリ内の各エントリごとに 1 組。
    stream: 標準入力 → 標準出力の 1 組。
    """

    SINGLE = "single"
    FAN_OUT = "fan_out"
    STREAM = "stream"


class PairingPlan(SrcDstBaseModel):
    """PairingPlanner の決定結果。解決呼び出しごとに 1 度だけ計算される。

    Attributes:
        strategy: ペアリング戦略。
        source_shape: SRC の形状。
        destination_shape: DST の形状。DST 未指定の場合は None。
        source: SRC のパス。標準入力の場合は None。
        destination: 出力ファイル（single）または出力ディレクトリ（fan_out）。
            標準出力の場合は None。
        synthesized_container: destination が自動命名されたコンテナかどうか。
    """

    strategy: PairingStrategy
    source_shape: Shape
    destination_shape: Shape | None = None
    source: Path | None = None
    destination: Path | None = None
    synthesized_container: bool = False

    @model_validator(mode="after")
    def _check_consistency(self) -> PairingPlan:
        if self.strategy == PairingStrategy.FAN_OUT:
            if self.source is None or self.destination is None:
                raise ValueError("fan_out plan requires source and destination")
        elif self.synthesized_container:
            raise ValueError("only fan_out plans may have a synthesized container")
        if self.strategy == PairingStrategy.STREAM and (
            self.source is not None or self.destination is not None
        ):
            raise ValueError("stream plan must not carry file paths")
        return self

    @property
    def is_batch(self) -> bool:
        """複数ペアを生成し得る（fan_out）かどうか。"""
        return self.strategy == PairingStrategy.FAN_OUT
