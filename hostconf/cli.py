"""Entry point for the hostconf command line tool."""

from __future__ import annotations

import argparse
from dataclasses import asdict
import json
import logging
from pathlib import Path
import sys
from typing import Any, List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .backends import repository_backend, startup_backend
from .errors import HostConfError
from .formatting import format_acknowledgment, format_repository_table, format_startup_table, format_state
from .host import HostContext, HostLayout
from .records import Acknowledgment, RepositoryRecord, StartupRecord

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hostconf",
        description="查看并修改软件源与开机启动项。",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--json", action="store_true", help="以 JSON 输出结果")
    output.add_argument("--ui", action="store_true", help="以 Rich 风格输出更美观的终端 UI")
    parser.add_argument("-v", "--verbose", action="store_true", help="输出调试日志")
    parser.add_argument("--root", type=Path, help="把系统路径（/etc/apt 等）重定位到此目录下")
    parser.add_argument("--helper", default="pkexec", help="提权助手命令（默认 pkexec）")

    groups = parser.add_subparsers(dest="group", required=True)

    repos = groups.add_parser("repos", help="软件源（APT 源或 Homebrew tap）")
    repo_actions = repos.add_subparsers(dest="action", required=True)
    repo_actions.add_parser("list", help="列出软件源")
    toggle = repo_actions.add_parser("toggle", help="启用或停用软件源")
    toggle.add_argument("id")
    _add_state_flags(toggle)
    add = repo_actions.add_parser("add", help="添加软件源")
    add.add_argument("line", help="例如 'deb http://example.com stable main' 或 tap 名称")
    delete = repo_actions.add_parser("delete", help="删除软件源")
    delete.add_argument("id")

    startup = groups.add_parser("startup", help="开机启动项（XDG autostart 或 LaunchAgents）")
    startup_actions = startup.add_subparsers(dest="action", required=True)
    startup_actions.add_parser("list", help="列出启动项")
    toggle = startup_actions.add_parser("toggle", help="启用或停用启动项")
    toggle.add_argument("file")
    _add_state_flags(toggle)
    add = startup_actions.add_parser("add", help="添加启动项")
    add.add_argument("name")
    add.add_argument("exec")
    edit = startup_actions.add_parser("edit", help="修改启动项的名称和命令")
    edit.add_argument("file")
    edit.add_argument("name")
    edit.add_argument("exec")
    delete = startup_actions.add_parser("delete", help="删除启动项")
    delete.add_argument("file")
    return parser


def _add_state_flags(parser: argparse.ArgumentParser) -> None:
    state = parser.add_mutually_exclusive_group(required=True)
    state.add_argument("--enable", dest="enabled", action="store_true")
    state.add_argument("--disable", dest="enabled", action="store_false")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def main(argv: Optional[Sequence[str]] = None, ctx: Optional[HostContext] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    if ctx is None:
        layout = HostLayout.rooted(args.root) if args.root else HostLayout()
        ctx = HostContext.for_host(layout, helper=args.helper)

    try:
        result = _dispatch(args, ctx)
    except HostConfError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    if args.json:
        print(_to_json(result))
    elif args.ui:
        _render_rich(result)
    else:
        print(_to_text(result))
    return 0


def _dispatch(args: argparse.Namespace, ctx: HostContext) -> Any:
    if args.group == "repos":
        backend: Any = repository_backend(ctx)
        if args.action == "toggle":
            return backend.toggle(args.id, args.enabled)
        if args.action == "add":
            return backend.add(args.line)
        if args.action == "delete":
            return backend.delete(args.id)
        return backend.list()

    backend = startup_backend(ctx)
    if args.action == "toggle":
        return backend.toggle(args.file, args.enabled)
    if args.action == "add":
        return backend.add(args.name, args.exec)
    if args.action == "edit":
        return backend.edit(args.file, args.name, args.exec)
    if args.action == "delete":
        return backend.delete(args.file)
    return backend.list()


def _to_json(result: Any) -> str:
    if isinstance(result, list):
        payload: Any = [asdict(record) for record in result]
    else:
        payload = asdict(result)
    return json.dumps(payload, ensure_ascii=False, indent=2)


def _to_text(result: Any) -> str:
    if isinstance(result, Acknowledgment):
        return format_acknowledgment(result)
    if result and isinstance(result[0], StartupRecord):
        return format_startup_table(result)
    if result:
        return format_repository_table(result)
    return "无记录"


def _render_rich(result: Any) -> None:
    console = Console()

    if isinstance(result, Acknowledgment):
        style = "bold green" if result.success and not result.warnings else "bold yellow"
        console.print(Panel(format_acknowledgment(result), style=style))
        return

    if not result:
        console.print(Panel("无记录", style="bold cyan"))
        return

    if isinstance(result[0], StartupRecord):
        console.print(_rich_startup_table(result))
    else:
        console.print(_rich_repository_table(result))


def _rich_repository_table(records: List[RepositoryRecord]) -> Table:
    table = Table(title="软件源", box=box.SIMPLE_HEAD)
    table.add_column("ID", style="bold")
    table.add_column("状态")
    table.add_column("类型")
    table.add_column("地址")
    table.add_column("发行版")
    table.add_column("组件")
    for record in records:
        table.add_row(
            record.id,
            _rich_state(record.enabled),
            record.types,
            record.uris,
            record.suites,
            record.components,
        )
    return table


def _rich_startup_table(records: List[StartupRecord]) -> Table:
    table = Table(title="开机启动项", box=box.SIMPLE_HEAD)
    table.add_column("文件", style="bold")
    table.add_column("状态")
    table.add_column("名称")
    table.add_column("命令")
    for record in records:
        table.add_row(record.file, _rich_state(record.enabled), record.name or "-", record.exec or "-")
    return table


def _rich_state(enabled: bool) -> str:
    color = "green" if enabled else "red"
    return f"[{color}]{format_state(enabled)}[/{color}]"


if __name__ == "__main__":
    sys.exit(main())
