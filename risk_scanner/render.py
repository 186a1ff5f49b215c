# risk_scanner/render.py

import json
from dataclasses import dataclass, field
from typing import Any, List, Literal, Optional, Tuple

from risk_scanner.classify import RiskCategory, classify
from risk_scanner.explain import Block, Span, parse_explanation
from risk_scanner.models import ErrorResult, SuccessResult

Tone = Literal["success", "error"]

SUCCESS_TITLE = "> ANALYSIS COMPLETE"
ERROR_TITLE = "! SYSTEM ERROR !"
UNKNOWN_FUNCTION = "Unknown"
NO_DETAILS = "No details available."

MAX_CHARS = 8000


@dataclass(frozen=True)
class Badge:
    category: RiskCategory
    label: str


@dataclass(frozen=True)
class ReportView:
    """
    Display-ready report. Every block is optional except the title and
    the function line, which falls back to a placeholder.
    """
    tone: Tone
    title: str
    function_label: str
    explanation: List[Block] = field(default_factory=list)
    badge: Optional[Badge] = None
    arguments: Tuple[Tuple[int, str], ...] = ()
    details: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.tone == "error"


def _fallback_block(text: Optional[str]) -> List[Block]:
    return [Block("paragraph", (Span(text or NO_DETAILS),))]


def render(result: SuccessResult | ErrorResult) -> ReportView:
    if result.status == "error":
        return ReportView(
            tone="error",
            title=ERROR_TITLE,
            function_label=UNKNOWN_FUNCTION,
            explanation=_fallback_block(result.message),
            details=result.details,
        )

    badge = None
    if result.risk_level:
        badge = Badge(classify(result.risk_level), result.risk_level.upper())

    if result.function_name:
        function_label = f"{result.function_name}(...)"
    else:
        function_label = UNKNOWN_FUNCTION

    args = tuple(enumerate(result.arguments or []))

    if result.explanation:
        explanation = parse_explanation(result.explanation)
    else:
        explanation = _fallback_block(result.message)

    return ReportView(
        tone="success",
        title=SUCCESS_TITLE,
        function_label=function_label,
        explanation=explanation,
        badge=badge,
        arguments=args,
    )


# ---------------------------------------------------------
# Plain text
# ---------------------------------------------------------

def _span_text(s: Span) -> str:
    if s.code:
        return f"`{s.text}`"
    if s.strong:
        return f"**{s.text}**"
    if s.emphasis:
        return f"*{s.text}*"
    return s.text


def format_block(b: Block) -> str:
    text = "".join(_span_text(s) for s in b.spans)
    indent = "  " * max(b.depth - 1, 0)

    if b.kind == "item":
        return f"{indent}{b.marker} {text}"
    if b.kind == "heading":
        return text.upper()
    if b.kind == "code":
        return "\n".join(f"    {ln}" for ln in b.spans[0].text.splitlines())
    return indent + text


def format_report(view: ReportView) -> str:
    """
    Stable line-based rendering for logs, pipes and --plain.
    """
    lines: List[str] = [view.title, ""]

    if view.badge:
        lines.append(f"RISK LEVEL: [{view.badge.category.value}] {view.badge.label}")
        lines.append("")

    lines.append("// DETECTED FUNCTION")
    lines.append(f"  {view.function_label}")
    lines.append("")

    if view.arguments:
        lines.append("// DECODED PARAMS")
        for idx, arg in view.arguments:
            lines.append(f"  [{idx}] {arg}")
        lines.append("")

    lines.append("// SYSTEM ANALYSIS")
    for b in view.explanation:
        for ln in format_block(b).splitlines():
            lines.append(f"  {ln}")

    if view.details:
        lines.append("")
        lines.append("// DETAILS")
        lines.append(f"  {view.details}")

    return "\n".join(lines)


# ---------------------------------------------------------
# Raw JSON (ABI dumps, --debug)
# ---------------------------------------------------------

def safe_json(obj: Any) -> str:
    """
    Best-effort JSON serialization that NEVER throws.
    """
    try:
        return json.dumps(obj, indent=2, default=str)
    except (TypeError, ValueError):
        return json.dumps(str(obj), indent=2)


def truncate(text: str, limit: int = MAX_CHARS) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "\n...<truncated>..."
