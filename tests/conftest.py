"""Shared payloads shaped like live nexus-agents tool responses."""

from __future__ import annotations

import copy
from typing import Any

import pytest


DELEGATE_CODEX: dict[str, Any] = {
    "recommended_model": "codex-5.3",
    "reasoning": "Selected codex-5.3 (score: 97.0) because: complex reasoning required, code generation task, preferred: code",
    "capabilities": {"reasoning": 10, "contextWindow": 400000, "codeGeneration": 10, "speed": 7, "cost": 5},
    "estimated_tokens": 28,
    "alternatives": [
        {"model": "codex-5.2", "score": 95, "tradeoff": "faster but less capable"},
        {"model": "claude-opus", "score": 85, "tradeoff": "different tradeoffs"},
        {"model": "claude-sonnet", "score": 84, "tradeoff": "cheaper but less capable"},
    ],
}

DELEGATE_WITH_GOVERNANCE: dict[str, Any] = {
    "recommended_model": "claude-opus",
    "reasoning": "Selected claude-opus for security review requiring supermajority",
    "capabilities": {"reasoning": 10, "contextWindow": 200000, "codeGeneration": 9, "speed": 6, "cost": 10},
    "estimated_tokens": 40,
    "alternatives": [],
    "governance": {
        "domain": "security",
        "votingThreshold": "supermajority",
        "promotionReason": "Security-related task requires elevated consensus",
    },
}

LIST_EXPERTS: dict[str, Any] = {
    "experts": [
        {"role": "code_expert", "name": "Code Expert", "description": "Senior software engineer.", "capabilities": ["task_execution", "code_generation"]},
        {"role": "security_expert", "name": "Security Expert", "description": "Security engineer.", "capabilities": ["task_execution", "code_review"]},
        {"role": "ux_expert", "name": "UX Designer Expert", "description": "UX designer.", "capabilities": ["collaboration"]},
    ],
    "count": 3,
}

CREATE_CODE_EXPERT: dict[str, Any] = {
    "expertId": "code-expert",
    "role": "code_expert",
    "capabilities": ["task_execution", "code_generation", "code_review", "tool_use", "collaboration"],
    "status": "ready",
}

EXECUTE_CODE: dict[str, Any] = {
    "expertId": "code-expert",
    "output": (
        "Vitest is recommended for TypeScript projects. It offers native ESM support, fast "
        "HMR-based execution, and first-class TypeScript integration."
    ),
    "confidence": 0.88,
    "tokensUsed": 1250,
}

_BALLOTS = [
    {"role": "architect", "decision": "approve", "confidence": 0.9, "reasoning": "Sound recommendation.", "simulated": False, "error": False},
    {"role": "security", "decision": "approve", "confidence": 0.85, "reasoning": "No concerns.", "simulated": False, "error": False},
    {"role": "catfish", "decision": "reject", "confidence": 0.6, "reasoning": "Could be faster.", "simulated": False, "error": False},
]


def vote_payload(strategy: str, decision: str = "approved", **overrides: Any) -> dict[str, Any]:
    payload = {
        "proposal": "The model recommendation and expert analysis are sound.",
        "strategy": strategy,
        "decision": decision,
        "approvalPercentage": 83.3,
        "voteCounts": {"approve": 5, "reject": 1, "abstain": 0, "error": 0},
        "votes": copy.deepcopy(_BALLOTS),
        "durationMs": 12500,
        "simulateVotes": False,
    }
    payload.update(overrides)
    return payload


# simple_majority/supermajority/proof_of_learning/higher_order approve; unanimous rejects.
STRATEGY_VOTES: dict[str, dict[str, Any]] = {
    "simple_majority": vote_payload("simple_majority"),
    "supermajority": vote_payload("supermajority"),
    "unanimous": vote_payload("unanimous", "rejected", durationMs=13100),
    "proof_of_learning": vote_payload("proof_of_learning", approvalPercentage=80.0, durationMs=15200),
    "higher_order": vote_payload("higher_order", approvalPercentage=85.0, durationMs=14800),
}


class RecordingCaller:
    """ToolCaller double: records every call and answers from a per-tool handler."""

    def __init__(self, fail_strategies: set[str] | None = None) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.fail_strategies = fail_strategies or set()
        self.responses: dict[str, Any] = {
            "delegate_to_model": DELEGATE_CODEX,
            "list_experts": LIST_EXPERTS,
            "create_expert": CREATE_CODE_EXPERT,
            "execute_expert": EXECUTE_CODE,
        }

    @property
    def tools(self) -> list[str]:
        return [tool for tool, _ in self.calls]

    def args_for(self, tool: str) -> list[dict[str, Any]]:
        return [args for name, args in self.calls if name == tool]

    async def call(self, tool: str, args: dict[str, Any]) -> Any:
        self.calls.append((tool, args))
        if tool == "consensus_vote":
            strategy = args["strategy"]
            if strategy in self.fail_strategies:
                raise RuntimeError(f"{strategy} voters unavailable")
            return STRATEGY_VOTES[strategy]
        response = self.responses.get(tool)
        if response is None:
            raise RuntimeError(f"Unexpected tool: {tool}")
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def caller() -> RecordingCaller:
    return RecordingCaller()
