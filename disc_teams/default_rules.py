"""Default compatibility rules seeded into a fresh rule store.

One rule per common staffing concern, expressed in the typed condition
schema (composition / pairing / skill_gap).
"""

from __future__ import annotations

from typing import Any

from disc_teams.rule_models import Rule, RulesDatabase


_DEFAULT_RULES: list[dict[str, Any]] = [
    {
        "id": "rule-balanced-team",
        "name": "BALANCED_TEAM",
        "description": "Team lacks style diversity or is dominated by one style",
        "rule_type": "composition",
        "severity": "warning",
        "conditions": {"minStyles": 2, "maxSameStyle": 3, "minTeamSize": 3},
        "suggestion": "Add members with complementary styles for balanced decision-making.",
    },
    {
        "id": "rule-no-detail",
        "name": "NO_DETAIL_ORIENTATION",
        "description": "Team lacks conscientiousness for detail work",
        "rule_type": "composition",
        "severity": "critical",
        "conditions": {"minStyles": 1, "maxSameStyle": 20, "requiredStyle": "C", "minTeamSize": 3},
        "suggestion": "Add at least one detail-oriented C-style member for quality assurance.",
    },
    {
        "id": "rule-d-s-friction",
        "name": "D_S_FRICTION",
        "description": "D-S pairing may need extra communication support",
        "rule_type": "pairing",
        "severity": "info",
        "conditions": {"style1": "D", "style2": "S"},
        "suggestion": "Establish clear communication protocols and regular check-ins.",
    },
    {
        "id": "rule-i-c-friction",
        "name": "I_C_FRICTION",
        "description": "i-C pairing may need extra communication support",
        "rule_type": "pairing",
        "severity": "info",
        "conditions": {"style1": "I", "style2": "C"},
        "suggestion": "Pair enthusiasm with analytical rigor through style awareness training.",
    },
    {
        "id": "rule-skill-review",
        "name": "SKILL_COVERAGE_REVIEW",
        "description": "Team is large enough to review skill coverage",
        "rule_type": "skill_gap",
        "severity": "info",
        "conditions": {"minTeamSize": 5},
        "suggestion": None,
    },
]


def create_default_rules() -> RulesDatabase:
    """Create the default rule database."""
    return RulesDatabase(rules=[Rule(**r) for r in _DEFAULT_RULES])


def get_default_rule_ids() -> list[str]:
    """Ids of the seeded rules, in seed order."""
    return [r["id"] for r in _DEFAULT_RULES]
