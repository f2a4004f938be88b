"""CliApp — Typer アプリケーション定義。

srcdst plan SRC [DST] で解決結果（入出力ペア）を表示する。
ペアは stdout、診断メッセージは stderr に出力する。
"""

from __future__ import annotations

import importlib.metadata
import logging
import sys
import tomllib
from typing import Annotated, assert_never

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from srcdst.cli._formatter import (
    OutputFormat,
    format_json,
    format_plain,
    render_table,
)
from srcdst.config import resolve_config
from srcdst.engine import Pair, ResolutionError
from srcdst.models.config import SrcDstConfig
from srcdst.models.exit_code import ExitCode

app = typer.Typer(
    name="srcdst",
    help=(
        "Resolve SRC/DST path specifiers into input/output pairs.\n\n"
        "SRC and DST may each be a file, a directory, or '-' for stdin/stdout."
    ),
    add_completion=False,
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    """--version 指定時にバージョン番号を出力して終了する。"""
    if value:
        print(importlib.metadata.version("srcdst"))
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """--verbose 指定時に srcdst のロガーを stderr の RichHandler に接続する。"""
    if not verbose:
        return
    logger = logging.getLogger("srcdst")
    logger.setLevel(logging.DEBUG)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(
            RichHandler(console=Console(file=sys.stderr), show_path=False)
        )


def main() -> None:
    """CLI エントリポイント。pyproject.toml の [project.scripts] から呼び出される。"""
    app()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log resolution decisions.")
    ] = False,
) -> None:
    """Resolve SRC/DST path specifiers."""
    _configure_logging(verbose)


@app.command()
def plan(
    src: Annotated[
        str, typer.Argument(help="Source file, directory, or '-' for stdin.")
    ],
    dst: Annotated[
        str | None,
        typer.Argument(help="Destination file, directory, or '-' for stdout."),
    ] = None,
    ext: Annotated[
        str | None,
        typer.Option("--ext", "-e", help="Extension for synthesized output names."),
    ] = None,
    match: Annotated[
        str | None,
        typer.Option(
            "--match",
            "-m",
            help="Select directory entries, e.g. '*.jpg' or 'frame_{1..=999:04d}.jpg'.",
        ),
    ] = None,
    container: Annotated[
        str | None,
        typer.Option("--container", help="Name of the output directory for DIR SRC."),
    ] = None,
    allow_inplace: Annotated[
        bool | None,
        typer.Option(
            "--allow-inplace/--no-allow-inplace",
            help="Allow SRC and DST to be the same location.",
        ),
    ] = None,
    create_container: Annotated[
        bool,
        typer.Option(
            "--create-container/--no-create-container",
            help=(
                "Create the automatically named output directory. "
                "Without it, plan leaves the filesystem untouched."
            ),
        ),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", help="Output format: table, json, or plain."),
    ] = OutputFormat.TABLE,
) -> None:
    """Show the input/output pairs resolved from SRC and DST."""
    config_overrides: dict[str, object] = {
        "default_extension": ext,
        "match_expression": match,
        "explicit_container": container,
        "allow_inplace": allow_inplace,
        "create_container": create_container,
    }

    # 1. config 解決
    config = _load_config(config_overrides)

    # 2. SRC / DST 解決
    try:
        pairs_iter = config.parse(src, dst)
    except ResolutionError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(code=ExitCode.RESOLUTION_ERROR) from None

    # 3. ペア収集（エントリ単位のエラーは警告として継続）
    pairs: list[Pair] = []
    errors: list[str] = []
    with pairs_iter:
        while True:
            try:
                pairs.append(next(pairs_iter))
            except StopIteration:
                break
            except ResolutionError as e:
                errors.append(str(e))
                print(f"Warning: {e}", file=sys.stderr)

    # 4. stdout に出力
    if output_format == OutputFormat.TABLE:
        render_table(pairs_iter.plan, pairs)
    elif output_format == OutputFormat.JSON:
        print(format_json(pairs_iter.plan, pairs, errors))
    elif output_format == OutputFormat.PLAIN:
        if pairs:
            print(format_plain(pairs))
    else:
        assert_never(output_format)

    if not pairs and not errors:
        print("No entries matched.", file=sys.stderr)

    # 5. 終了コード
    raise typer.Exit(code=ExitCode.ENTRY_ERROR if errors else ExitCode.SUCCESS)


def _load_config(config_overrides: dict[str, object]) -> SrcDstConfig:
    """設定を解決する。失敗時はヒント付きで終了コード 3。"""
    try:
        return resolve_config(cli_overrides=config_overrides)
    except ValidationError as e:
        hint = (
            "Pass --ext or set default_extension in [tool.srcdst]."
            if any(err["loc"] == ("default_extension",) for err in e.errors())
            else "Check [tool.srcdst] in pyproject.toml and the CLI options."
        )
        print(f"Error: Invalid configuration: {e}\n{hint}", file=sys.stderr)
        raise typer.Exit(code=ExitCode.INPUT_ERROR) from None
    except tomllib.TOMLDecodeError as e:
        print(
            f"Error: Invalid configuration: {e}\n"
            "Check pyproject.toml and ~/.config/srcdst/config.toml for syntax errors.",
            file=sys.stderr,
        )
        raise typer.Exit(code=ExitCode.INPUT_ERROR) from None
    except PermissionError as e:
        print(
            f"Error: Cannot read configuration file: {e}\n"
            "Check file permissions for the configuration files.",
            file=sys.stderr,
        )
        raise typer.Exit(code=ExitCode.INPUT_ERROR) from None
