"""Model showdown pipeline.

Chains: delegate_to_model -> create_expert -> execute_expert -> consensus_vote (x N strategies)

Stages 1-3 are fatal on failure: gateway errors and pydantic ValidationErrors propagate
unchanged. Stage 4 isolates each strategy; a failed vote becomes an error string in the
result and the remaining strategies still run. Nothing is retried.
"""

from __future__ import annotations

from dataclasses import dataclass
import time
from typing import Any

import structlog

from showdown.agents.role_router import infer_expert_role
from showdown.core.consensus import compute_agreement, to_strategy_result
from showdown.core.gateway import ToolCaller
from showdown.models.showdown_models import (
    AlternativeSummary,
    ModelEvaluation,
    ShowdownConfig,
    ShowdownResult,
    StrategyResult,
)
from showdown.models.tool_contracts import (
    VOTING_STRATEGIES,
    Capability,
    CreateExpertInput,
    CreateExpertResponse,
    DelegateInput,
    DelegateResponse,
    ExecuteExpertInput,
    ExecuteExpertResponse,
    ExpertRole,
    ListExpertsResponse,
    VoteInput,
    VoteResponse,
    VotingStrategy,
    WireModel,
)

log = structlog.get_logger(__name__)

DELEGATE_TOOL = "delegate_to_model"
LIST_EXPERTS_TOOL = "list_experts"
CREATE_EXPERT_TOOL = "create_expert"
EXECUTE_EXPERT_TOOL = "execute_expert"
VOTE_TOOL = "consensus_vote"

# Hard cap on expert output embedded in the proposal; overflow is dropped without a marker.
MAX_PROPOSAL_OUTPUT_CHARS = 2000


def format_number(value: int | float) -> str:
    """Render a wire number the way JSON prints it (97.0 -> "97", 0.88 -> "0.88")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _tool_args(contract: WireModel) -> dict[str, Any]:
    """Serialize a validated tool input into wire arguments, dropping unset options."""
    return contract.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# Pipeline steps
# =============================================================================

async def delegate_task(
    caller: ToolCaller,
    task: str,
    capability: Capability | str | None = None,
) -> DelegateResponse:
    """Step 1: route the task to the optimal model."""
    args = _tool_args(DelegateInput(task=task, preferred_capability=capability))
    raw = await caller.call(DELEGATE_TOOL, args)
    return DelegateResponse.model_validate(raw)


async def list_experts(caller: ToolCaller) -> ListExpertsResponse:
    """List the expert catalog offered by the server."""
    raw = await caller.call(LIST_EXPERTS_TOOL, {})
    return ListExpertsResponse.model_validate(raw)


async def create_expert(caller: ToolCaller, role: ExpertRole | str) -> CreateExpertResponse:
    """Step 2: create the expert that evaluates the recommendation."""
    raw = await caller.call(CREATE_EXPERT_TOOL, _tool_args(CreateExpertInput(role=role)))
    return CreateExpertResponse.model_validate(raw)


async def execute_expert(caller: ToolCaller, expert_id: str, task: str) -> ExecuteExpertResponse:
    """Step 3: run the expert's analysis."""
    raw = await caller.call(EXECUTE_EXPERT_TOOL, _tool_args(ExecuteExpertInput(expert_id=expert_id, task=task)))
    return ExecuteExpertResponse.model_validate(raw)


async def vote_with_strategy(
    caller: ToolCaller,
    proposal: str,
    strategy: VotingStrategy | str,
) -> VoteResponse:
    """Step 4: vote on the proposal with one consensus strategy."""
    raw = await caller.call(VOTE_TOOL, _tool_args(VoteInput(proposal=proposal, strategy=strategy)))
    return VoteResponse.model_validate(raw)


# =============================================================================
# Helpers
# =============================================================================

def build_proposal(delegation: DelegateResponse, expert_result: ExecuteExpertResponse) -> str:
    """Build the proposal text every voting strategy evaluates."""
    alternatives = ", ".join(
        f"{a.model} (score: {format_number(a.score)})" for a in delegation.alternatives
    )
    lines = [
        f"Model recommendation: {delegation.recommended_model}",
        f"Reasoning: {delegation.reasoning}",
        f"Alternatives: {alternatives}" if alternatives else "",
        f"Expert analysis (confidence: {format_number(expert_result.confidence)}):",
        expert_result.output[:MAX_PROPOSAL_OUTPUT_CHARS],
    ]
    return "\n".join(line for line in lines if line)


def build_expert_task(task: str, delegation: DelegateResponse) -> str:
    return (
        f'Evaluate this model recommendation for the task: "{task}"\n\n'
        f"Recommended: {delegation.recommended_model}\n"
        f"Reasoning: {delegation.reasoning}"
    )


@dataclass(frozen=True)
class StrategyOutcome:
    """Success or failure of one strategy's vote; exactly one of result/error is set."""

    strategy: VotingStrategy
    result: StrategyResult | None = None
    error: str | None = None


async def _run_strategy(caller: ToolCaller, proposal: str, strategy: VotingStrategy) -> StrategyOutcome:
    try:
        vote = await vote_with_strategy(caller, proposal, strategy)
        if vote.strategy != strategy.value:
            raise ValueError(f"server answered with strategy {vote.strategy!r}")
        return StrategyOutcome(strategy=strategy, result=to_strategy_result(vote))
    except Exception as e:
        log.warning("showdown_vote_failed", strategy=strategy.value, error=str(e))
        return StrategyOutcome(strategy=strategy, error=f"{strategy.value} vote failed: {e}")


# =============================================================================
# Full pipeline
# =============================================================================

async def run_showdown(caller: ToolCaller, config: ShowdownConfig) -> ShowdownResult:
    """Run delegate -> create -> execute -> vote and compare the strategies."""
    strategies = config.strategies if config.strategies is not None else VOTING_STRATEGIES
    started = time.perf_counter()
    log.info("showdown_started", task=config.task, strategies=[s.value for s in strategies])

    delegation = await delegate_task(caller, config.task, config.preferred_capability)
    log.info("showdown_stage_completed", stage="delegate", model=delegation.recommended_model)

    role = config.expert_role if config.expert_role is not None else infer_expert_role(config.task)
    expert = await create_expert(caller, role)
    log.info("showdown_stage_completed", stage="create_expert", expert_id=expert.expert_id, role=expert.role)

    expert_result = await execute_expert(caller, expert.expert_id, build_expert_task(config.task, delegation))
    log.info("showdown_stage_completed", stage="execute_expert", confidence=expert_result.confidence)

    evaluation = ModelEvaluation(
        task=config.task,
        recommended_model=delegation.recommended_model,
        reasoning=delegation.reasoning,
        alternatives=tuple(AlternativeSummary(model=a.model, score=a.score) for a in delegation.alternatives),
        expert_role=expert.role,
        expert_output=expert_result.output,
        expert_confidence=expert_result.confidence,
    )

    proposal = build_proposal(delegation, expert_result)
    outcomes = [await _run_strategy(caller, proposal, strategy) for strategy in strategies]

    strategy_results = tuple(o.result for o in outcomes if o.result is not None)
    errors = tuple(o.error for o in outcomes if o.error is not None)
    agreement = compute_agreement(strategy_results)

    log.info(
        "showdown_completed",
        strategies_ok=len(strategy_results),
        strategies_failed=len(errors),
        agreement=agreement,
        latency_ms=(time.perf_counter() - started) * 1000.0,
    )
    return ShowdownResult(
        evaluation=evaluation,
        strategy_results=strategy_results,
        strategy_agreement=agreement,
        errors=errors,
    )
