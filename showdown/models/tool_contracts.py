"""Pydantic contracts for the MCP tools chained by the showdown pipeline.

Covers: delegate_to_model, list_experts, create_expert, execute_expert, consensus_vote.
Field names follow the live nexus-agents payloads: most keys are camelCase on the wire,
a few routing keys (`recommended_model`, `estimated_tokens`, `preferred_capability`)
are snake_case. Python attributes are always snake_case.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for tool payloads: camelCase aliases, accepts either spelling, immutable."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Capability(str, Enum):
    reasoning = "reasoning"
    context = "context"
    speed = "speed"
    code = "code"


class ExpertRole(str, Enum):
    code_expert = "code_expert"
    architecture_expert = "architecture_expert"
    security_expert = "security_expert"
    documentation_expert = "documentation_expert"
    testing_expert = "testing_expert"
    devops_expert = "devops_expert"
    research_expert = "research_expert"
    pm_expert = "pm_expert"
    ux_expert = "ux_expert"


class VotingStrategy(str, Enum):
    simple_majority = "simple_majority"
    supermajority = "supermajority"
    unanimous = "unanimous"
    proof_of_learning = "proof_of_learning"
    higher_order = "higher_order"


# Canonical invocation order for a default run.
VOTING_STRATEGIES: tuple[VotingStrategy, ...] = tuple(VotingStrategy)

VoteDecision = Literal["approved", "rejected", "pending", "timeout"]
BallotDecision = Literal["approve", "reject", "abstain"]

# Wire numbers keep their JSON form: 97 stays an int, 0.88 stays a float.
Number = int | float


# =============================================================================
# delegate_to_model
# =============================================================================

class DelegateInput(WireModel):
    task: str = Field(..., min_length=1)
    preferred_capability: Capability | None = Field(default=None, alias="preferred_capability")
    model_hint: str | None = Field(default=None, alias="model_hint")
    estimate_tokens: bool | None = Field(default=None, alias="estimate_tokens")
    billing_mode: Literal["plan", "api"] | None = Field(default=None, alias="billing_mode")


class Alternative(WireModel):
    model: str
    score: Number
    tradeoff: str


class Governance(WireModel):
    """Present when the router promotes a task into a governed domain."""

    domain: str
    voting_threshold: str
    promotion_reason: str


class ModelCapabilities(WireModel):
    reasoning: Number
    context_window: Number
    code_generation: Number
    speed: Number
    cost: Number


class DelegateResponse(WireModel):
    recommended_model: str = Field(..., alias="recommended_model")
    reasoning: str
    capabilities: ModelCapabilities
    estimated_tokens: Number = Field(..., alias="estimated_tokens")
    alternatives: list[Alternative]
    governance: Governance | None = None


# =============================================================================
# list_experts
# =============================================================================

class ExpertInfo(WireModel):
    role: str
    name: str
    description: str
    capabilities: list[str]


class ListExpertsResponse(WireModel):
    experts: list[ExpertInfo]
    count: int


# =============================================================================
# create_expert
# =============================================================================

class CreateExpertInput(WireModel):
    role: ExpertRole
    model_preference: str | None = None


class CreateExpertResponse(WireModel):
    expert_id: str
    role: str
    capabilities: list[str]
    status: str


# =============================================================================
# execute_expert
# =============================================================================

class ExecuteExpertInput(WireModel):
    expert_id: str = Field(..., min_length=1)
    task: str = Field(..., min_length=1)
    context: dict[str, object] | None = None


class ExecuteExpertResponse(WireModel):
    expert_id: str
    output: str
    confidence: Number
    tokens_used: Number


# =============================================================================
# consensus_vote
# =============================================================================

class VoteInput(WireModel):
    proposal: str = Field(..., min_length=1, max_length=4000)
    strategy: VotingStrategy | None = None
    quick_mode: bool | None = None
    simulate_votes: bool | None = None


class VoteCounts(WireModel):
    approve: Number
    reject: Number
    abstain: Number
    error: Number


class AgentVote(WireModel):
    role: str
    decision: BallotDecision
    confidence: Number
    reasoning: str
    simulated: bool
    error: bool


class VoteResponse(WireModel):
    proposal: str
    strategy: str
    decision: VoteDecision
    approval_percentage: Number
    vote_counts: VoteCounts
    votes: list[AgentVote]
    duration_ms: Number
    simulate_votes: bool
