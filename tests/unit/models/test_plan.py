"""PairingPlan / Shape / ExitCode のテスト。"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from srcdst.models.exit_code import ExitCode
from srcdst.models.plan import PairingPlan, PairingStrategy
from srcdst.models.shape import STREAM_SENTINEL, Shape


class TestPairingPlan:
    """戦略とパスの整合性検証を確認する。"""

    def test_fan_out(self, tmp_path: Path) -> None:
        plan = PairingPlan(
            strategy=PairingStrategy.FAN_OUT,
            source_shape=Shape.DIRECTORY,
            source=tmp_path,
            destination=tmp_path / "out",
            synthesized_container=True,
        )
        assert plan.is_batch is True

    def test_fan_out_requires_paths(self, tmp_path: Path) -> None:
        with pytest.raises(ValidationError, match="requires source and destination"):
            PairingPlan(
                strategy=PairingStrategy.FAN_OUT,
                source_shape=Shape.DIRECTORY,
                source=tmp_path,
            )

    def test_container_only_for_fan_out(self, tmp_path: Path) -> None:
        with pytest.raises(ValidationError, match="synthesized container"):
            PairingPlan(
                strategy=PairingStrategy.SINGLE,
                source_shape=Shape.FILE,
                source=tmp_path / "a",
                destination=tmp_path / "b",
                synthesized_container=True,
            )

    def test_stream_without_paths(self) -> None:
        plan = PairingPlan(
            strategy=PairingStrategy.STREAM,
            source_shape=Shape.STREAM,
            destination_shape=Shape.STREAM,
        )
        assert plan.is_batch is False

    def test_stream_rejects_paths(self, tmp_path: Path) -> None:
        with pytest.raises(ValidationError, match="stream plan"):
            PairingPlan(
                strategy=PairingStrategy.STREAM,
                source_shape=Shape.STREAM,
                destination=tmp_path,
            )

    def test_json_dump(self, tmp_path: Path) -> None:
        plan = PairingPlan(
            strategy=PairingStrategy.SINGLE,
            source_shape=Shape.FILE,
            source=tmp_path / "a",
            destination=tmp_path / "b",
        )
        data = plan.model_dump(mode="json")
        assert data["strategy"] == "single"
        assert data["source_shape"] == "file"
        assert data["destination_shape"] is None


class TestEnums:
    def test_sentinel(self) -> None:
        assert STREAM_SENTINEL == "-"

    def test_exit_codes(self) -> None:
        assert [int(c) for c in ExitCode] == [0, 1, 2, 3]
