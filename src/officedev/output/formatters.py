"""Format a ServiceResult for display.

Human mode dispatches on ``result.op`` to a Rich renderer; JSON mode dumps
the whole result; quiet mode prints just enough to script against.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

from officedev.output.console import capability_markup, create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from officedev.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False


def _render_devices(result: ServiceResult, console: Console) -> None:
    items = result.data.get("items", [])
    title = "Devices"
    if result.data.get("capability"):
        title += f" that {result.data['capability']}"
    table = Table(title=f"{title} ({len(items)})", title_justify="left")
    table.add_column("Name", style="office.name")
    table.add_column("Kind")
    table.add_column("Capabilities")
    table.add_column("Delegates", style="office.key")
    for item in items:
        delegates = item.get("delegates") or {}
        table.add_row(
            item["name"],
            item["kind"],
            capability_markup(item["capabilities"]),
            ", ".join(f"{cap}->{name}" for cap, name in delegates.items()),
        )
    console.print(table)


def _render_describe(result: ServiceResult, console: Console) -> None:
    data = result.data
    console.print(f"[office.name]{data['name']}[/] [office.key]({data['kind']})[/]")
    console.print(f"  [office.key]capabilities:[/] {capability_markup(data['capabilities'])}")
    for cap, name in (data.get("delegates") or {}).items():
        console.print(f"  [office.key]{cap} ->[/] {name}")


def _render_operation(result: ServiceResult, console: Console) -> None:
    data = result.data
    line = (
        f"[office.ok]OK[/] [office.op]{result.op}[/] {data['document_id']} "
        f"on [office.name]{data['device']}[/]"
    )
    if data.get("handled_by") and data["handled_by"] != data["device"]:
        line += f" [office.key](via {data['handled_by']})[/]"
    console.print(line)


_RENDERERS: dict[str, Callable[[ServiceResult, Console], None]] = {
    "list_devices": _render_devices,
    "describe": _render_describe,
    "print": _render_operation,
    "scan": _render_operation,
    "fax": _render_operation,
}


def _render_error(result: ServiceResult, console: Console) -> None:
    message = result.error.message if result.error else "Unknown error"
    code = f" [office.key]{escape(f'[{result.error.code}]')}[/]" if result.error else ""
    console.print(f"[office.error]ERROR[/] [office.op]{result.op}[/] — {escape(message)}{code}")


def render_quiet(result: ServiceResult) -> str:
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {message}"
    if result.op == "list_devices":
        return "\n".join(item["name"] for item in result.data.get("items", []))
    return f"OK: {result.op}"


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)

    console = create_console()
    if result.ok:
        renderer = _RENDERERS.get(result.op)
        if renderer is None:
            console.print(f"[office.ok]OK[/] [office.op]{result.op}[/]")
        else:
            renderer(result, console)
    else:
        _render_error(result, console)
    return get_output(console).rstrip("\n")
