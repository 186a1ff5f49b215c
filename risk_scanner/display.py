# risk_scanner/display.py
from typing import Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from risk_scanner.classify import RiskCategory
from risk_scanner.explain import Block, Span
from risk_scanner.render import ReportView, format_block

TONE_STYLES = {
    "success": ("cyan", "bold green"),
    "error": ("red", "bold red"),
}

BADGE_STYLES = {
    RiskCategory.HIGH: "bold white on red",
    RiskCategory.MEDIUM: "bold black on yellow",
    RiskCategory.LOW: "bold black on green",
}


def _span_style(s: Span) -> str:
    if s.code:
        return "magenta"
    if s.strong:
        return "bold cyan"
    if s.emphasis:
        return "italic"
    return ""


def block_text(b: Block) -> Text:
    if b.kind == "code":
        return Text(format_block(b), style="magenta")

    indent = "  " * max(b.depth - 1, 0)
    out = Text(indent)
    if b.kind == "item":
        out.append(f"{b.marker} ", style="cyan")

    for s in b.spans:
        out.append(s.text, style=_span_style(s))

    if b.kind == "heading":
        out.stylize("bold underline")
    return out


def report_panel(view: ReportView) -> Panel:
    border, title_style = TONE_STYLES[view.tone]
    parts = []

    if view.badge:
        line = Text("RISK LEVEL: ", style="dim")
        line.append(f" {view.badge.label} ", style=BADGE_STYLES[view.badge.category])
        parts += [line, Text("")]

    parts.append(Text("// DETECTED FUNCTION", style="grey50"))
    parts.append(Text(view.function_label, style="magenta"))
    parts.append(Text(""))

    if view.arguments:
        parts.append(Text("// DECODED PARAMS", style="grey50"))
        for idx, arg in view.arguments:
            line = Text(f"[{idx}] ", style="cyan")
            line.append(arg)
            parts.append(line)
        parts.append(Text(""))

    parts.append(Text("// SYSTEM ANALYSIS", style="grey50"))
    parts.extend(block_text(b) for b in view.explanation)

    if view.details:
        parts.append(Text(""))
        parts.append(Text("// DETAILS", style="grey50"))
        parts.append(Text(view.details))

    return Panel(
        Group(*parts),
        title=Text(view.title, style=title_style),
        title_align="left",
        border_style=border,
    )


def show(view: ReportView, console: Optional[Console] = None):
    (console or Console()).print(report_panel(view))
