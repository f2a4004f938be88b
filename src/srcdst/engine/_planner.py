"""PairingPlanner — SRC 形状 × DST 形状の判定表。

DST 未指定（None）と「指定されたが存在しない」（Shape.MISSING）を区別する。

    SRC \\ DST   未指定          Stream    Missing          File         Directory
    Stream      CWD/自動命名     stream    リテラルパス      リテラルパス   DST/自動命名
    File        SRC側/自動命名   stdout    リテラルパス      上書き        DST/自動命名
    Directory   兄弟コンテナ     ×         × (未作成)       ×            fan-out
    Missing     ×               ×         ×                ×            ×
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from srcdst.engine._classifier import classify, shape_from_mode, stat_path
from srcdst.engine._errors import (
    AutoNamingForbiddenError,
    ClassificationError,
    ContainerCreationError,
    DestinationNotFoundError,
    InplaceError,
    ShapeMismatchError,
    SourceNotFoundError,
    StreamNotAllowedError,
)
from srcdst.engine._naming import NameSynthesizer
from srcdst.models.config import SrcDstConfig
from srcdst.models.plan import PairingPlan, PairingStrategy
from srcdst.models.shape import Shape

logger = logging.getLogger(__name__)

_STDIN_STEM = "stdin"


def plan_pairing(
    config: SrcDstConfig,
    src: str | os.PathLike[str],
    dst: str | os.PathLike[str] | None,
    synthesizer: NameSynthesizer,
) -> PairingPlan:
    """SRC / DST を分類し、ペアリング方針を決定する。

    自動命名が必要な場合は synthesizer で衝突のない名前を確定する
    （fan-out のコンテナは config.create_container に従い作成まで行う）。

    Args:
        config: 解決設定。
        src: SRC パス指定子。
        dst: DST パス指定子。None は未指定。
        synthesizer: この解決実行用の命名器。

    Returns:
        決定された PairingPlan。

    Raises:
        SourceNotFoundError: SRC が存在しない場合。
        ShapeMismatchError: 形状の組み合わせが構造的に不正な場合。
        ResolutionError: その他の解決エラー（各サブクラス）。
    """
    src_raw = os.fspath(src)
    src_shape = classify(src_raw)
    if src_shape == Shape.MISSING:
        raise SourceNotFoundError(
            f"SRC '{src_raw}' does not exist. Check the path and try again."
        )

    dst_raw = os.fspath(dst) if dst is not None else None
    dst_shape = classify(dst_raw) if dst_raw is not None else None

    if src_shape == Shape.STREAM and not config.allow_from_stdin:
        raise StreamNotAllowedError(
            "Reading from stdin is disabled. Specify a source file or directory."
        )
    if dst_shape == Shape.STREAM and src_shape != Shape.DIRECTORY:
        if not config.allow_to_stdout:
            raise StreamNotAllowedError(
                "Writing to stdout is disabled. Specify a destination path."
            )

    if src_shape == Shape.DIRECTORY:
        plan = _plan_directory(config, src_raw, dst_raw, dst_shape, synthesizer)
    else:
        plan = _plan_single(
            config, src_raw, src_shape, dst_raw, dst_shape, synthesizer
        )

    logger.debug(
        "Planned %s: %s (%s) -> %s (%s)",
        plan.strategy,
        plan.source or "<stdin>",
        plan.source_shape,
        plan.destination or "<stdout>",
        plan.destination_shape or "not given",
    )
    return plan


def _plan_single(
    config: SrcDstConfig,
    src_raw: str,
    src_shape: Shape,
    dst_raw: str | None,
    dst_shape: Shape | None,
    synthesizer: NameSynthesizer,
) -> PairingPlan:
    """SRC がファイルまたは標準入力の場合の判定。"""
    source = _absolute(src_raw) if src_shape == Shape.FILE else None
    stem = source.stem if source is not None else _STDIN_STEM

    if config.match_expression is not None:
        logger.warning(
            "Ignoring match expression '%s': SRC is not a directory",
            config.match_expression,
        )

    if dst_raw is None or dst_shape is None:
        if not config.auto_named_dst_file:
            raise AutoNamingForbiddenError(
                "Automatic naming of the DST file is disabled. Specify DST explicitly."
            )
        # ファイルは SRC と同じディレクトリ、標準入力はカレントディレクトリへ
        parent = source.parent if source is not None else Path.cwd()
        destination = synthesizer.unique_file(parent, stem, config.default_extension)
        return PairingPlan(
            strategy=PairingStrategy.SINGLE,
            source_shape=src_shape,
            source=source,
            destination=destination,
        )

    if dst_shape == Shape.STREAM:
        strategy = (
            PairingStrategy.STREAM if source is None else PairingStrategy.SINGLE
        )
        return PairingPlan(
            strategy=strategy,
            source_shape=src_shape,
            destination_shape=dst_shape,
            source=source,
        )

    dst_path = _absolute(dst_raw)
    if dst_shape == Shape.DIRECTORY:
        destination = synthesizer.unique_file(dst_path, stem, config.default_extension)
    elif dst_shape == Shape.FILE:
        if (
            source is not None
            and not config.allow_inplace
            and _same_file(source, dst_path)
        ):
            raise InplaceError(
                f"SRC and DST refer to the same file: '{source}'. "
                "Choose a different DST or enable allow_inplace."
            )
        destination = dst_path
    else:
        _require_creatable_parent(dst_path)
        destination = dst_path

    return PairingPlan(
        strategy=PairingStrategy.SINGLE,
        source_shape=src_shape,
        destination_shape=dst_shape,
        source=source,
        destination=destination,
    )


def _plan_directory(
    config: SrcDstConfig,
    src_raw: str,
    dst_raw: str | None,
    dst_shape: Shape | None,
    synthesizer: NameSynthesizer,
) -> PairingPlan:
    """SRC がディレクトリの場合の判定。"""
    source = _absolute(src_raw)

    if dst_raw is None or dst_shape is None:
        if not config.auto_named_dst_dir:
            raise AutoNamingForbiddenError(
                "Automatic naming of the DST directory is disabled. "
                "Specify an existing DST directory."
            )
        if source.parent == source:
            raise ContainerCreationError(
                f"Cannot place an output directory next to '{source}'. "
                "Specify an existing DST directory."
            )
        container = synthesizer.container(
            source.parent,
            config.explicit_container or source.name,
            explicit=config.explicit_container is not None,
            create=config.create_container,
        )
        return PairingPlan(
            strategy=PairingStrategy.FAN_OUT,
            source_shape=Shape.DIRECTORY,
            source=source,
            destination=container,
            synthesized_container=True,
        )

    if dst_shape in (Shape.FILE, Shape.STREAM):
        raise ShapeMismatchError(
            f"Cannot write multiple files from directory '{source}' into "
            f"a single {'stream' if dst_shape == Shape.STREAM else 'file'} "
            f"'{dst_raw}'. Specify a DST directory instead."
        )
    if dst_shape == Shape.MISSING:
        raise DestinationNotFoundError(
            f"DST directory '{dst_raw}' does not exist. "
            "Create it first, or omit DST to use an automatically named directory."
        )

    dst_path = _absolute(dst_raw)
    if not config.allow_inplace and _same_file(source, dst_path):
        raise InplaceError(
            f"SRC and DST refer to the same directory: '{source}'. "
            "Choose a different DST or enable allow_inplace."
        )
    return PairingPlan(
        strategy=PairingStrategy.FAN_OUT,
        source_shape=Shape.DIRECTORY,
        destination_shape=Shape.DIRECTORY,
        source=source,
        destination=dst_path,
    )


def _absolute(raw: str) -> Path:
    """シンボリックリンクを解決せずに正規化した絶対パスを返す。"""
    return Path(os.path.abspath(raw))


def _same_file(a: Path, b: Path) -> bool:
    """a と b がファイルシステム上で同一エントリかどうか。"""
    try:
        return os.path.samefile(a, b)
    except FileNotFoundError:
        return False
    except OSError as e:
        raise ClassificationError(
            f"Cannot compare '{a}' with '{b}': {e.strerror or e}."
        ) from e


def _require_creatable_parent(path: Path) -> None:
    """path の親が存在するか、作成可能であることを確認する。

    最も近い既存の祖先がディレクトリでなければ作成不能とみなす。

    Raises:
        ShapeMismatchError: 既存の祖先が通常ファイル等の場合。
        ClassificationError: 祖先のメタデータ取得に失敗した場合。
    """
    for ancestor in path.parents:
        st = stat_path(str(ancestor))
        if st is None:
            continue
        if shape_from_mode(st.st_mode) == Shape.DIRECTORY:
            return
        raise ShapeMismatchError(
            f"Cannot create '{path}': '{ancestor}' is not a directory. "
            "Check the DST path."
        )
