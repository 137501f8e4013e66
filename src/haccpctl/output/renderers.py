"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). Renderers
are dispatched by ``result.op`` in :func:`render_result`; unknown ops
fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from haccpctl.output.console import create_console, get_output, style_for_classification

if TYPE_CHECKING:
    from rich.console import Console

    from haccpctl.services.result import ServiceResult

_DOMAIN_LABELS: dict[str, str] = {
    "temperature": "Temperature",
    "task_completion": "Cleaning",
    "credential_expiry": "Training",
    "review_cadence": "Allergen review",
}


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
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    d = result.data
    if result.op == "evaluate":
        return f"{d.get('score', 0)} {d.get('classification', '')}"
    if result.op == "next_step":
        step = d.get("step")
        return step["key"] if step else ""
    if result.op == "dismiss":
        dismissed = d.get("dismissed") or {}
        return str(dismissed.get("key", ""))
    if result.op == "review":
        return str(d.get("issues", 0))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="haccp.ok"), Text(f"  {result.op}", style="haccp.op"))


def _field(console: Console, key: str, value: Any) -> None:
    console.print(Text(f"  {key}: ", style="haccp.key"), Text(str(value)), sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(Text(f"    {k}: {v}"))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="haccp.error"),
        Text(f"  {result.op}", style="haccp.op"),
        Text(" — "),
        Text(msg),
        sep="",
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Scoring ───────────────────────────────────────────────────────────


def _render_evaluate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    classification = str(d.get("classification", ""))
    _status_line(console, result)
    _field(console, "tenant", d.get("tenant", ""))
    console.print(
        Text("  score: ", style="haccp.key"),
        Text(f"{d.get('score', 0)}/100", style="haccp.score"),
        Text(f"  {d.get('band', '')}  "),
        Text(classification.upper(), style=style_for_classification(classification)),
        sep="",
    )

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Domain")
    table.add_column("Score", style="haccp.score", justify="right")
    table.add_column("Status")
    for row in d.get("per_domain", []):
        if row.get("hard_fail"):
            status = Text("fail", style="haccp.class.fail")
        elif row.get("needs_setup"):
            status = Text("needs setup", style="haccp.class.setup")
        elif row.get("warn"):
            status = Text("attention", style="haccp.class.warn")
        else:
            status = Text("ok", style="haccp.class.ok")
        domain = str(row.get("domain", ""))
        table.add_row(_DOMAIN_LABELS.get(domain, domain), str(row.get("sub_score", 0)), status)
    console.print(table)
    if verbose:
        _render_meta(console, result)


# ── Advisory ──────────────────────────────────────────────────────────


def _step_panel(console: Console, step: dict[str, Any], subtitle: str) -> None:
    body = Text(f"{step['body']}\n\n{step['cta_label']} → {step['href']}")
    console.print(Panel(body, title=step["title"], subtitle=subtitle, expand=False))


def _render_next_step(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    step = d.get("step")
    if step is None:
        if d.get("remaining", 0) == 0:
            console.print("Setup complete — nothing to suggest.")
        else:
            console.print("Nothing to suggest right now (remaining steps are snoozed).")
        return
    _step_panel(console, step, f"Setup {d.get('progress', 0)}% · {d.get('remaining', 0)} left")
    if verbose:
        for s in d.get("steps", []):
            mark = "✓" if s.get("completed") else ("z" if s.get("snoozed") else " ")
            console.print(Text(f"  [{mark}] {s.get('key')}"))


def _render_dismiss(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    dismissed = d.get("dismissed") or {}
    _status_line(console, result)
    if dismissed.get("completed"):
        _field(console, "step", f"{dismissed.get('key')} is already complete")
    else:
        _field(console, "step", dismissed.get("key", ""))
        _field(console, "snoozed_until", dismissed.get("snooze_until", ""))
        _field(console, "dismissals", dismissed.get("snooze_count", 0))
    if not d.get("persisted", True) and not dismissed.get("completed"):
        console.print(Text("  snooze not saved; the step may reappear early", style="haccp.warning"))
    following = d.get("next")
    if following:
        _field(console, "next", following["title"])


# ── Review ────────────────────────────────────────────────────────────


def _render_review(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    for line in d.get("lines", []):
        console.print(Text(line))
    console.print()
    if d.get("eligible", True):
        _field(console, "issues", d.get("issues", 0))
    else:
        _field(console, "issues", f"0 (first review due {d.get('next_due_on')})")

    drift = (d.get("summary") or {}).get("drift", [])
    if verbose and drift:
        table = Table(show_header=True, pad_edge=False, expand=False)
        table.add_column("Training")
        table.add_column("Status")
        table.add_column("Expires")
        for item in drift:
            status = "EXPIRED" if item["status"] == "expired" else f"due in {item['days_left']}d"
            table.add_row(item["description"], status, str(item.get("expires_on") or "—"))
        console.print(table)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "evaluate": _render_evaluate,
    "next_step": _render_next_step,
    "dismiss": _render_dismiss,
    "review": _render_review,
}
