"""Pydantic models for showdown runs: configuration, evaluation summary and results."""

from __future__ import annotations

from pydantic import Field, field_validator

from showdown.models.tool_contracts import (
    Capability,
    ExpertRole,
    Number,
    VoteCounts,
    VoteDecision,
    VotingStrategy,
    WireModel,
)


class ShowdownConfig(WireModel):
    """Pipeline configuration for a single run."""

    task: str = Field(..., min_length=1, description="Task text to route, execute and vote on")
    preferred_capability: Capability | None = None
    expert_role: ExpertRole | None = None
    strategies: tuple[VotingStrategy, ...] | None = Field(
        default=None, description="Ordered subset of voting strategies; all five when omitted"
    )

    @field_validator("task")
    @classmethod
    def _task_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("task cannot be empty")
        return value

    @field_validator("strategies")
    @classmethod
    def _strategies_unique(cls, value: tuple[VotingStrategy, ...] | None) -> tuple[VotingStrategy, ...] | None:
        if value is not None and len(set(value)) != len(value):
            raise ValueError("strategies must not repeat")
        return value


class AlternativeSummary(WireModel):
    model: str
    score: Number


class ModelEvaluation(WireModel):
    """A single model evaluation run, flattened for proposals and reports."""

    task: str
    recommended_model: str
    reasoning: str
    alternatives: tuple[AlternativeSummary, ...] = ()
    expert_role: str
    expert_output: str
    expert_confidence: Number


class StrategyResult(WireModel):
    """Result of voting on a model evaluation with a specific strategy."""

    strategy: VotingStrategy
    decision: VoteDecision
    approval_percentage: Number
    vote_counts: VoteCounts
    duration_ms: Number


class ShowdownResult(WireModel):
    """Full showdown result comparing strategies."""

    evaluation: ModelEvaluation
    strategy_results: tuple[StrategyResult, ...] = ()
    strategy_agreement: float = Field(default=0.0, ge=0.0, le=1.0)
    errors: tuple[str, ...] = ()
