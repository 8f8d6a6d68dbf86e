"""Run the model showdown against a live nexus-agents MCP server.

Usage:
    NEXUS_LIVE=true NEXUS_MCP_URL=http://localhost:3000/mcp model-showdown
    NEXUS_LIVE=true REPORT_FORMAT=json model-showdown --task "Design a plugin system"
"""

from __future__ import annotations

import argparse
import asyncio
import sys

import structlog
from pydantic import ValidationError

from showdown.core.errors import LiveBridgeUnavailableError
from showdown.core.live_bridge import create_mcp_caller, is_live_mode
from showdown.core.logging import configure_logging
from showdown.core.pipeline import run_showdown
from showdown.core.reporter import REPORT_FORMATS, generate_report
from showdown.core.settings import Settings, get_settings
from showdown.models.showdown_models import ShowdownConfig
from showdown.models.tool_contracts import Capability, ExpertRole, VotingStrategy

log = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="model-showdown",
        description="Route a task, run an expert on it and compare five consensus strategies.",
    )
    parser.add_argument("--task", help="Task text (default: SHOWDOWN_TASK)")
    parser.add_argument("--format", choices=REPORT_FORMATS, help="Report format (default: REPORT_FORMAT)")
    parser.add_argument("--capability", choices=[c.value for c in Capability])
    parser.add_argument("--role", choices=[r.value for r in ExpertRole], help="Override the inferred expert role")
    parser.add_argument(
        "--strategy",
        action="append",
        choices=[s.value for s in VotingStrategy],
        help="Voting strategy to run; repeat for several (default: all five)",
    )
    return parser


async def _run(settings: Settings, config: ShowdownConfig, fmt: str) -> str:
    caller = create_mcp_caller(settings)
    try:
        result = await run_showdown(caller, config)
    finally:
        await caller.close()
    return generate_report(result, fmt)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON)

    if not is_live_mode(settings):
        print("Set NEXUS_LIVE=true to run against a live MCP server.", file=sys.stderr)
        print("Usage: NEXUS_LIVE=true NEXUS_MCP_URL=<endpoint> model-showdown", file=sys.stderr)
        return 1

    try:
        config = ShowdownConfig(
            task=args.task or settings.SHOWDOWN_TASK,
            preferred_capability=args.capability,
            expert_role=args.role,
            strategies=args.strategy,
        )
    except ValidationError as e:
        print(f"Invalid showdown configuration: {e}", file=sys.stderr)
        return 1

    fmt = args.format or settings.REPORT_FORMAT
    print("Running model showdown against live MCP server...", file=sys.stderr)
    print(f"Task: {config.task}\n", file=sys.stderr)

    try:
        report = asyncio.run(_run(settings, config, fmt))
    except LiveBridgeUnavailableError as e:
        print(f"Failed to load live bridge: {e}", file=sys.stderr)
        return 1
    except (ValidationError, RuntimeError, OSError) as e:
        log.error("showdown_failed", error=str(e))
        print(f"Showdown failed: {e}", file=sys.stderr)
        return 1

    print(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
