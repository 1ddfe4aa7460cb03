"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from aacboard.output.console import create_console, get_output, style_for_source

if TYPE_CHECKING:
    from rich.console import Console

    from aacboard.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: card texts, patterns, or a status line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    cards = result.data.get("cards")
    if isinstance(cards, list):
        return "\n".join(str(card.get("text", "")) for card in cards)
    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item) for item in items)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="aac.ok")
    op = Text(f"  {result.op}", style="aac.op")
    console.print(label, op)


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="aac.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="aac.id")
    elif key == "source":
        v = Text(str(value), style=style_for_source(str(value)))
    else:
        v = Text(str(value))
    console.print(k, v)


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Meta block with the telemetry span tree (verbose only)."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    duration = span_data.get("duration_ms", 0.0)
    style = "yellow" if duration > 1000 else "dim"
    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {span_data.get('name', '?')}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)
    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _concept_line(concepts: list[dict[str, Any]]) -> str:
    return ", ".join(f"{c.get('type')}={c.get('value')}" for c in concepts)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    code = f" [{err.code}]" if err else ""
    console.print(Text("ERROR", style="aac.error"), Text(f"  {result.op}{code}", style="aac.op"))
    console.print(f"  {msg}")

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Board renderers ───────────────────────────────────────────────────


def _render_board(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render an interpreted or predefined context board."""
    d = result.data
    interp = d.get("interpretation", {})
    source = str(d.get("source", ""))

    header = [
        f"phrase: {d.get('phrase', '')}",
        f"intent: {interp.get('intent', '')}",
        f"confidence: {float(interp.get('confidence', 0.0)):.2f}",
        f"concepts: {_concept_line(interp.get('concepts', []))}",
    ]
    console.print(
        Panel(
            "\n".join(header),
            title=str(d.get("name", "Context board")),
            subtitle=source,
            border_style=style_for_source(source) or "dim",
            expand=False,
        )
    )

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Symbol")
    table.add_column("Text", style="aac.title")
    table.add_column("Category")
    table.add_column("ID", style="aac.id", justify="right")
    if verbose:
        table.add_column("Color", style="dim")

    for index, card in enumerate(d.get("cards", []), start=1):
        text = Text(str(card.get("text", "")))
        if card.get("temporary"):
            text.append("  (temporary)", style="aac.temporary")
        row: list[Any] = [
            str(index),
            str(card.get("symbol", "")),
            text,
            str(card.get("category", "")),
            str(card.get("id", "")),
        ]
        if verbose:
            row.append(str(card.get("color", "")))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{len(d.get('cards', []))} cards")
    if verbose:
        _render_meta(console, result)


# ── Catalog renderers ─────────────────────────────────────────────────


def _render_patterns(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    for pattern in result.data.get("items", []):
        console.print(f"  {pattern}")
    console.print(f"\n{result.data.get('count', 0)} patterns")


def _render_promotion(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    lines = [
        f"priority: {d.get('priority', '')}",
        f"concepts: {_concept_line(d.get('concepts', []))}",
        f"visual hints: {', '.join(d.get('visual_hints', []))}",
        "",
        "patterns:",
        *(f"  {p}" for p in d.get("patterns", [])),
    ]
    console.print(Panel("\n".join(lines), title=str(d.get("id", "?")), expand=False))


def _render_match(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    for key in ("phrase", "matched", "best_id", "confidence", "threshold"):
        if key in d:
            _field(console, key, d[key])
    if d.get("concepts"):
        _field(console, "concepts", _concept_line(d["concepts"]))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    "interpret": _render_board,
    "predefined_board": _render_board,
    "patterns": _render_patterns,
    "show_promotion": _render_promotion,
    "match": _render_match,
}
