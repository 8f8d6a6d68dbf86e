"""Report formatter for model showdown results."""

from __future__ import annotations

from typing import Literal

from showdown.core.pipeline import format_number
from showdown.models.showdown_models import ShowdownResult, StrategyResult

ReportFormat = Literal["markdown", "json", "text"]
REPORT_FORMATS: tuple[str, ...] = ("markdown", "json", "text")


def generate_report(result: ShowdownResult, fmt: ReportFormat = "markdown") -> str:
    if fmt == "json":
        return result.model_dump_json(by_alias=True, indent=2)
    if fmt == "text":
        return _format_text(result)
    if fmt == "markdown":
        return _format_markdown(result)
    raise ValueError(f"Unknown report format: {fmt!r} (expected one of {', '.join(REPORT_FORMATS)})")


def _percent(ratio: float) -> str:
    return f"{ratio * 100:.0f}%"


def _strategy_icon(r: StrategyResult) -> str:
    return "PASS" if r.decision == "approved" else "FAIL"


def _format_text(r: ShowdownResult) -> str:
    ev = r.evaluation
    lines = [
        f"Model Showdown: {ev.task}",
        f"Recommended: {ev.recommended_model}",
        f"Expert: {ev.expert_role} (confidence: {_percent(ev.expert_confidence)})",
        f"Strategy Agreement: {_percent(r.strategy_agreement)}",
        "",
        "Strategy Results:",
    ]
    for s in r.strategy_results:
        lines.append(
            f"  {_strategy_icon(s)} {s.strategy.value}: {s.decision} "
            f"({format_number(s.approval_percentage)}%, {format_number(s.duration_ms)}ms)"
        )

    if ev.alternatives:
        lines += ["", "Alternatives:"]
        lines += [f"  - {a.model} (score: {format_number(a.score)})" for a in ev.alternatives]

    if r.errors:
        lines += ["", "Errors:"]
        lines += [f"  - {e}" for e in r.errors]

    return "\n".join(lines)


def _format_markdown(r: ShowdownResult) -> str:
    ev = r.evaluation
    lines = [
        f"# Model Showdown: {ev.task}",
        "",
        "## Model Recommendation",
        "",
        "| Metric | Value |",
        "| --- | --- |",
        f"| Recommended Model | {ev.recommended_model} |",
        f"| Expert Role | {ev.expert_role} |",
        f"| Expert Confidence | {_percent(ev.expert_confidence)} |",
        f"| Strategy Agreement | {_percent(r.strategy_agreement)} |",
    ]

    if ev.alternatives:
        lines += ["", "## Alternatives", ""]
        lines += [f"- **{a.model}** (score: {format_number(a.score)})" for a in ev.alternatives]

    lines += [
        "",
        "## Voting Strategy Comparison",
        "",
        "| Strategy | Decision | Approval | Duration |",
        "| --- | --- | --- | --- |",
    ]
    for s in r.strategy_results:
        lines.append(
            f"| {s.strategy.value} | {s.decision} | "
            f"{format_number(s.approval_percentage)}% | {format_number(s.duration_ms)}ms |"
        )

    if ev.expert_output:
        lines += ["", "## Expert Analysis", "", ev.expert_output]

    if r.errors:
        lines += ["", "## Errors", ""]
        lines += [f"- {e}" for e in r.errors]

    return "\n".join(lines)
