"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from folio.output.console import SEVERITY_STYLES, STATUS_STYLES, create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from folio.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Listings print one URL per line; creations print the new file path.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item["url"]) for item in items if isinstance(item, dict) and "url" in item)
    if "path" in result.data and result.op.startswith("create_"):
        return str(result.data["path"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="folio.ok")
    op = Text(f"  {result.op}", style="folio.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="folio.key")
    if key in ("url", "loc"):
        v = Text(str(value), style="folio.url")
    elif key in ("path", "output_dir", "output"):
        v = Text(str(value), style="folio.path")
    elif key == "title":
        v = Text(str(value), style="folio.title")
    elif isinstance(value, (dict, list)):
        v = Text(_json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _file_list(console: Console, files: list[str], *, label: str, verbose: bool) -> None:
    _field(console, label, len(files))
    if verbose:
        for f in files:
            console.print(f"    {f}")


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="folio.error")
    op = Text(f"  {result.op}", style="folio.op")
    code = Text(f" [{err.code}] " if err else " ", style="dim")
    console.print(label, op, code, Text(msg))

    if not err or not err.detail:
        return
    duplicates = err.detail.get("duplicates")
    if duplicates:
        for dup in duplicates:
            console.print(Text(f"    {dup['url']}: {', '.join(dup['sources'])}"))
    if verbose:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            if k != "duplicates":
                console.print(f"    {k}: {v}")


# ── Build renderers ───────────────────────────────────────────────────


def _render_build(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render build results: counts, CSS summary, plugin outputs."""
    _status_line(console, result)
    d = result.data
    _field(console, "output_dir", d.get("output_dir", ""))
    for key in ("post_count", "page_count", "static_count"):
        _field(console, key, d.get(key, 0))
    if d.get("draft_count"):
        _field(console, "draft_count", d["draft_count"])
    if d.get("hidden_count"):
        _field(console, "hidden_count", d["hidden_count"])

    css = d.get("css")
    if css:
        _field(console, "css", f"{css['output']} ({css['rule_count']} rules)")
    plugins = d.get("plugins") or {}
    if plugins:
        _field(console, "plugins", ", ".join(sorted(plugins)))
    _file_list(console, d.get("files_written", []), label="files_written", verbose=verbose)
    if verbose:
        _render_meta(console, result)


def _render_css(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render build_css results."""
    _status_line(console, result)
    d = result.data
    for key in ("output", "files_scanned", "class_count", "rule_count", "bytes"):
        if key in d:
            _field(console, key, d[key])
    if d.get("minified"):
        _field(console, "minified", True)
    unknown_count = d.get("unknown_count", 0)
    if unknown_count:
        _field(console, "unknown_count", unknown_count)
        if verbose:
            console.print(Text(f"    {' '.join(d.get('unknown', []))}"))
    if verbose:
        _render_meta(console, result)


# ── Check renderers ───────────────────────────────────────────────────


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render check results with issues grouped by category."""
    issues = result.data.get("issues", [])
    count = result.data.get("count", len(issues))

    if count == 0:
        console.print("[folio.ok]OK[/folio.ok]  No issues found.")
        return

    by_category: dict[str, list[dict[str, Any]]] = {}
    for issue in issues:
        cat = str(issue.get("category", "unknown"))
        by_category.setdefault(cat, []).append(issue)

    for cat, cat_issues in by_category.items():
        console.print(f"\n[bold]{cat}[/bold]")
        for issue in cat_issues:
            sev = str(issue.get("severity", "warning"))
            style = SEVERITY_STYLES.get(sev, "")
            prefix = f"[{style}]{sev}[/{style}]" if style else sev
            source = issue.get("source")
            where = f" {source}" if source else ""
            line = Text.from_markup(f"  {prefix}")
            line.append(f"{where}: {issue.get('message', '')}")
            console.print(line)
            if verbose and issue.get("fix_action"):
                console.print(f"    fix: {issue['fix_action']}")

    errors = result.data.get("error_count", sum(1 for i in issues if i.get("severity") == "error"))
    warnings = count - errors
    console.print(f"\n{errors} errors, {warnings} warnings")


def _render_fix(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render fix results."""
    _status_line(console, result)
    fixes = result.data.get("fixes", [])
    _field(console, "fixes_applied", result.data.get("count", len(fixes)))
    for fix in fixes:
        console.print(Text(f"  - {fix}"))


# ── Content renderers ─────────────────────────────────────────────────


def _render_created(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render create_post / create_page results."""
    _status_line(console, result)
    d = result.data
    for key in ("path", "title", "url", "date", "tags"):
        if d.get(key):
            _field(console, key, ", ".join(d[key]) if key == "tags" else d[key])
    if d.get("draft"):
        console.print(Text("  draft: not published until moved to the posts directory", style="folio.draft"))
    if verbose:
        _render_meta(console, result)


def _render_post_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list_posts results as a table."""
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Date", style="folio.date", no_wrap=True)
    table.add_column("Title", style="folio.title")
    table.add_column("URL", style="folio.url")
    table.add_column("Tags")
    if verbose:
        table.add_column("Source", style="dim")

    for item in items:
        title = Text(str(item.get("title") or "(untitled)"))
        if item.get("draft"):
            title.append(" [draft]", style=STATUS_STYLES["draft"])
        elif not item.get("visible", True):
            title.append(" [hidden]", style=STATUS_STYLES["hidden"])
        row: list[Any] = [
            str(item.get("date") or ""),
            title,
            str(item.get("url", "")),
            ", ".join(item.get("tags", [])),
        ]
        if verbose:
            row.append(str(item.get("source", "")))
        table.add_row(*row)

    console.print(table)
    total = result.data.get("total", len(items))
    shown = result.data.get("count", len(items))
    suffix = f" of {total}" if total != shown else ""
    console.print(f"\n{shown}{suffix} posts")


# ── Init renderer ─────────────────────────────────────────────────────


def _render_init(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render init_site results with site details and file manifest."""
    _status_line(console, result)
    d = result.data
    for key in ("path", "title", "url"):
        if key in d:
            _field(console, key, d[key])
    _file_list(console, d.get("files", []), label="files_created", verbose=verbose)
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "build": _render_build,
    "build_css": _render_css,
    "check": _render_check,
    "fix": _render_fix,
    "create_post": _render_created,
    "create_page": _render_created,
    "list_posts": _render_post_table,
    "init_site": _render_init,
}
