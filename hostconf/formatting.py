"""Console-friendly formatting utilities."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .records import Acknowledgment, RepositoryRecord, StartupRecord


def render_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    widths = [len(h) for h in headers]
    for row in rows:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], len(cell))
    lines = []
    lines.append(_format_row(headers, widths))
    lines.append(_format_row(["-" * w for w in widths], widths))
    for row in rows:
        lines.append(_format_row(row, widths))
    return "\n".join(lines)


def format_state(enabled: bool) -> str:
    return "启用" if enabled else "停用"


def format_repository_table(records: Iterable[RepositoryRecord]) -> str:
    rows = [
        [record.id, format_state(record.enabled), record.types, record.uris, record.suites, record.components]
        for record in records
    ]
    return render_table(["ID", "状态", "类型", "地址", "发行版", "组件"], rows) if rows else "无软件源"


def format_startup_table(records: Iterable[StartupRecord]) -> str:
    rows = [
        [record.file, format_state(record.enabled), _or_dash(record.name), _or_dash(record.exec)]
        for record in records
    ]
    return render_table(["文件", "状态", "名称", "命令"], rows) if rows else "无启动项"


def format_acknowledgment(ack: Acknowledgment) -> str:
    lines = ["完成。" if ack.success else "失败。"]
    if ack.file:
        lines.append(f"新文件：{ack.file}")
    lines.extend(f"警告：{warning}" for warning in ack.warnings)
    return "\n".join(lines)


def _or_dash(value: Optional[str]) -> str:
    return value if value else "-"


def _format_row(row: Sequence[str], widths: Sequence[int]) -> str:
    padded = [cell.ljust(width) for cell, width in zip(row, widths)]
    return " | ".join(padded)
