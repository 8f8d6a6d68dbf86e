"""Cross-strategy consensus aggregation."""

from __future__ import annotations

from collections.abc import Sequence

from showdown.models.showdown_models import StrategyResult
from showdown.models.tool_contracts import VoteResponse, VotingStrategy


def to_strategy_result(vote: VoteResponse) -> StrategyResult:
    """Project a vote onto the fields compared across strategies (ballots are dropped)."""
    return StrategyResult(
        strategy=VotingStrategy(vote.strategy),
        decision=vote.decision,
        approval_percentage=vote.approval_percentage,
        vote_counts=vote.vote_counts,
        duration_ms=vote.duration_ms,
    )


def compute_agreement(results: Sequence[StrategyResult]) -> float:
    """Share of strategies on the majority side (approved vs rejected).

    pending/timeout decisions count in the denominator only. Returns 0 for no results.
    """
    if not results:
        return 0.0
    approved = sum(1 for r in results if r.decision == "approved")
    rejected = sum(1 for r in results if r.decision == "rejected")
    return max(approved, rejected) / len(results)
