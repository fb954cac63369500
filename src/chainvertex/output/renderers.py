"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). Renderers
are dispatched by ``result.op`` in :func:`render_result`; unknown ops fall
through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.text import Text

from chainvertex.output.console import create_console, get_output, style_for_liveness

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from chainvertex.services.result import ServiceResult

type _Renderer = Callable[[ServiceResult, Console], None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: ids, a bare value, or the status."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    ids = result.item_ids
    if ids is not None:
        return "\n".join(map(str, ids))
    if "exists" in result.data:
        return "true" if result.data["exists"] else "false"
    if result.op in ("create_vertex", "get_vertex", "delete_vertex"):
        return str(result.data["id"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="cv.ok"), Text(f"  {result.op}", style="cv.op"))


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="cv.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="cv.id")
    elif key == "owner":
        v = Text(str(value), style="cv.owner")
    elif key == "live":
        v = Text(str(value).lower(), style=style_for_liveness(bool(value)))
    elif isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(f"    {k}: {v}")


# ── Renderers ─────────────────────────────────────────────────────────


def _render_vertex(result: ServiceResult, console: Console) -> None:
    """Status line, then the vertex as a panel titled by id and liveness."""
    _status_line(console, result)
    d = result.data
    live = bool(d.get("live"))
    title = Text.assemble(
        (f"vertex {d['id']}", "cv.id"),
        "  ",
        ("live" if live else "deleted", style_for_liveness(live)),
    )
    meta = Text.assemble(
        ("owner: ", "cv.key"),
        (str(d.get("owner", "")), "cv.owner"),
        ("   created_at: ", "cv.key"),
        str(d.get("created_at", "")),
    )
    body = Text(str(d.get("data", "")), style="cv.data")
    console.print(Panel(Text("\n").join([meta, body]), title=title, title_align="left"))


def _render_edge(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    d = result.data
    console.print(
        Text.assemble(
            "  ",
            (str(d["from_id"]), "cv.id"),
            " -> ",
            (str(d["to_id"]), "cv.id"),
            f"  [{d['edge_type']}] weight={d['weight']}",
        )
    )


def _render_id_list(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    d = result.data
    for key in ("vertex_id", "owner"):
        if key in d:
            _field(console, key, d[key])
    ids = [str(vertex_id) for vertex_id in result.item_ids or []]
    _field(console, "count", d.get("count", len(ids)))
    if ids:
        console.print(Text("  ids: ", style="cv.key"), Text(", ".join(ids), style="cv.id"), sep="")


def _render_snapshot(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "format_version", d.get("format_version"))
    _field(console, "next_vertex_id", d.get("next_vertex_id"))
    _field(console, "total_edges", d.get("total_edges"))
    _field(console, "owners", len(d.get("owners", [])))


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="cv.error"), Text(f"  {result.op}", style="cv.op"), Text(f"— {msg}")
    )
    if err is not None and verbose:
        _field(console, "code", err.code)
        for key, value in err.detail.items():
            _field(console, key, value)


def _render_generic(result: ServiceResult, console: Console) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, _Renderer] = {
    "create_vertex": _render_vertex,
    "get_vertex": _render_vertex,
    "delete_vertex": _render_vertex,
    "create_edge": _render_edge,
    "get_edge": _render_edge,
    "adjacent": _render_id_list,
    "user_vertices": _render_id_list,
    "snapshot": _render_snapshot,
}
