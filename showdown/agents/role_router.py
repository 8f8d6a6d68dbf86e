"""Keyword routing from task text to a default expert role."""

from __future__ import annotations

from showdown.models.tool_contracts import ExpertRole

# Checked in order; the first role with a matching keyword wins.
ROLE_KEYWORDS: tuple[tuple[ExpertRole, tuple[str, ...]], ...] = (
    (ExpertRole.security_expert, ("security", "vulnerab")),
    (ExpertRole.architecture_expert, ("architect", "design")),
    (ExpertRole.testing_expert, ("test", "qa")),
    (ExpertRole.documentation_expert, ("doc", "readme")),
    (ExpertRole.devops_expert, ("deploy", "ci/cd")),
    (ExpertRole.research_expert, ("research", "paper")),
    (ExpertRole.pm_expert, ("product", "user stor")),
    (ExpertRole.ux_expert, ("ux", "usability")),
)

DEFAULT_ROLE = ExpertRole.code_expert


def infer_expert_role(task: str) -> ExpertRole:
    """Pick the expert role for a task by case-insensitive substring match.

    Short keywords ("qa", "ux") match as plain substrings too, with no word boundary.
    """
    t = task.lower()
    for role, keywords in ROLE_KEYWORDS:
        if any(kw in t for kw in keywords):
            return role
    return DEFAULT_ROLE
