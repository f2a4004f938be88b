"""設定リゾルバー。

設定ソースを低優先度から順に項目単位でマージし、SrcDstConfig を構築する:
フィールドデフォルト < ~/.config/srcdst/config.toml
< pyproject.toml [tool.srcdst] < CLI オプション
"""

from __future__ import annotations

import logging
from pathlib import Path

from srcdst.config._loader import load_pyproject_config, load_toml_config
from srcdst.config._locator import find_pyproject_toml, get_user_config_path
from srcdst.models.config import SrcDstConfig

logger = logging.getLogger(__name__)


def merge_config_layers(
    *layers: dict[str, object] | None,
) -> dict[str, object]:
    """複数の設定レイヤーを項目単位でマージする。

    後のレイヤーが先のレイヤーを上書きする。None のレイヤーはスキップされる。

    Args:
        layers: マージ対象の設定辞書。低優先度から高優先度の順。

    Returns:
        マージ済みの設定辞書。
    """
    result: dict[str, object] = {}
    for layer in layers:
        if layer is None:
            continue
        result.update(layer)
    return result


def filter_cli_overrides(cli_options: dict[str, object]) -> dict[str, object]:
    """CLI オプション辞書から None 値（未指定）を除外する。"""
    return {k: v for k, v in cli_options.items() if v is not None}


def resolve_config(
    start_dir: Path | None = None,
    cli_overrides: dict[str, object] | None = None,
) -> SrcDstConfig:
    """設定ソースを解決し SrcDstConfig を構築する。

    設定ファイルが存在しない場合は該当レイヤーをスキップする。

    Args:
        start_dir: pyproject.toml の探索開始ディレクトリ。None はカレント。
        cli_overrides: CLI オプションの辞書。None 値は未指定扱い。

    Returns:
        解決済みの SrcDstConfig。

    Raises:
        pydantic.ValidationError: マージ後の設定が不正な場合
            （default_extension がどのレイヤーにもない場合を含む）。
        tomllib.TOMLDecodeError: 設定ファイルの TOML 構文が不正な場合。
        PermissionError: 設定ファイルの読み取り権限がない場合。
    """
    effective_start = start_dir if start_dir is not None else Path.cwd()

    # Layer 1: ユーザーグローバル設定
    user_layer: dict[str, object] | None = None
    try:
        user_layer = load_toml_config(get_user_config_path())
    except FileNotFoundError:
        pass

    # Layer 2: pyproject.toml [tool.srcdst]
    pyproject_layer: dict[str, object] | None = None
    pyproject_path = find_pyproject_toml(effective_start)
    if pyproject_path is not None:
        pyproject_layer = load_pyproject_config(pyproject_path)
        if pyproject_layer is not None:
            logger.debug("Loaded [tool.srcdst] from %s", pyproject_path)

    # Layer 3 (最高優先): CLI overrides
    cli_layer: dict[str, object] | None = None
    if cli_overrides is not None:
        cli_layer = filter_cli_overrides(cli_overrides)

    merged = merge_config_layers(user_layer, pyproject_layer, cli_layer)
    return SrcDstConfig(**merged)  # type: ignore[arg-type]
