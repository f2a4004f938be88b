"""解決結果の出力整形。

table は Rich テーブル、json は PlanReport の JSON、plain はタブ区切り行。
"""

from __future__ import annotations

from enum import StrEnum

from rich.console import Console
from rich.table import Table
from rich.text import Text

from srcdst.engine import Pair
from srcdst.models._base import SrcDstBaseModel
from srcdst.models.locator import FileLocator, ResolvedPair
from srcdst.models.plan import PairingPlan


class OutputFormat(StrEnum):
    """解決結果の出力形式。"""

    TABLE = "table"
    JSON = "json"
    PLAIN = "plain"


class PlanReport(SrcDstBaseModel):
    """JSON 出力用の解決結果。

    Attributes:
        plan: 決定されたペアリング方針。
        pairs: 解決済みペア（生成順）。
        errors: エントリ単位のエラーメッセージ。
    """

    plan: PairingPlan
    pairs: tuple[ResolvedPair, ...] = ()
    errors: tuple[str, ...] = ()


def format_plain(pairs: list[Pair]) -> str:
    """1 ペア 1 行、入力と出力をタブで区切る。"""
    return "\n".join(f"{source}\t{destination}" for source, destination in pairs)


def format_json(plan: PairingPlan, pairs: list[Pair], errors: list[str]) -> str:
    """PlanReport を JSON 文字列に変換する。"""
    report = PlanReport(
        plan=plan,
        pairs=tuple(ResolvedPair.from_tuple(pair) for pair in pairs),
        errors=tuple(errors),
    )
    return report.model_dump_json(indent=2)


def build_table(plan: PairingPlan, pairs: list[Pair]) -> Table:
    """ペア一覧の Rich テーブルを構築する。

    テーブル列: # | Input | Output
    """
    table = Table(title=f"Resolved pairs ({plan.strategy.value})")
    table.add_column("#", justify="right")
    table.add_column("Input")
    table.add_column("Output")
    for index, (source, destination) in enumerate(pairs, start=1):
        table.add_row(str(index), _render_locator(source), _render_locator(destination))
    return table


def render_table(
    plan: PairingPlan, pairs: list[Pair], console: Console | None = None
) -> None:
    """ペア一覧を Rich テーブルとして出力する（既定は stdout）。"""
    (console or Console()).print(build_table(plan, pairs))


def _render_locator(locator: object) -> Text:
    """Locator を Rich レンダラブルに変換する。ストリームは強調表示。"""
    if isinstance(locator, FileLocator):
        return Text(str(locator.path))
    return Text(str(locator), style="cyan")
