"""Configurable rule evaluation against a team roster.

All functions are *pure* apart from logging skipped rules.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import BaseModel, Field, ValidationError

from disc_teams.disc_styles import STYLE_ORDER, Roster, Style
from disc_teams.engine.team_analysis import style_distribution
from disc_teams.rule_models import (
    CompositionConditions,
    PairingConditions,
    Rule,
    RuleConditions,
    Severity,
    SkillGapConditions,
    UnknownRuleTypeError,
    parse_conditions,
)


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class Finding(BaseModel):
    """A single rule-triggered observation about a roster."""

    rule_id: str
    rule_name: str = ""
    severity: Severity
    message: str
    suggestion: str | None = None


class RuleEvaluation(BaseModel):
    """Findings plus the ids of active rules that could not be evaluated."""

    findings: list[Finding] = Field(default_factory=list)
    skipped_rule_ids: list[str] = Field(default_factory=list)


_SEVERITY_ORDER: dict[str, int] = {"critical": 0, "warning": 1, "info": 2, "success": 3}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def evaluate_rules(roster: Roster, rules: Iterable[Rule]) -> RuleEvaluation:
    """Evaluate active *rules* against *roster*, keeping the input rule order.

    A rule with an unknown type or a malformed payload is skipped and its id
    recorded in ``skipped_rule_ids``; the remaining rules are still evaluated.
    """
    distribution = style_distribution(roster)
    result = RuleEvaluation()

    for rule in rules:
        if not rule.is_active:
            continue
        try:
            conditions = parse_conditions(rule)
        except UnknownRuleTypeError:
            logger.warning("Skipping rule %s: unknown rule type %r", rule.id, rule.rule_type)
            result.skipped_rule_ids.append(rule.id)
            continue
        except ValidationError as e:
            logger.warning(
                "Skipping rule %s: malformed %s conditions (%d errors)",
                rule.id, rule.rule_type, e.error_count(),
            )
            result.skipped_rule_ids.append(rule.id)
            continue

        if _is_triggered(conditions, roster, distribution):
            result.findings.append(Finding(
                rule_id=rule.id,
                rule_name=rule.name,
                severity=rule.severity,
                message=_render_message(rule, conditions, roster, distribution),
                suggestion=rule.suggestion,
            ))

    logger.debug(
        "Evaluated %d members: %d findings, %d skipped rules",
        roster.size, len(result.findings), len(result.skipped_rule_ids),
    )
    return result


def evaluate(roster: Roster, rules: Iterable[Rule]) -> list[Finding]:
    """Return findings only; skipped rules are still logged."""
    return evaluate_rules(roster, rules).findings


def composition_violations(
    conditions: CompositionConditions,
    roster: Roster,
) -> list[str]:
    """Names of the composition requirements *roster* fails.

    Empty when the roster is below ``min_team_size`` (rule not applicable).
    """
    if roster.size < conditions.min_team_size:
        return []

    distribution = style_distribution(roster)
    violations: list[str] = []

    distinct = sum(1 for s in STYLE_ORDER if distribution[s] > 0)
    if distinct < conditions.min_styles:
        violations.append("min_styles")
    if max(distribution.values()) > conditions.max_same_style:
        violations.append("max_same_style")
    if conditions.required_style is not None and distribution[conditions.required_style] == 0:
        violations.append("required_style")

    return violations


def sort_findings_by_severity(findings: list[Finding]) -> list[Finding]:
    """Stable sort: critical → warning → info → success."""
    return sorted(findings, key=lambda f: _SEVERITY_ORDER[f.severity])


# ---------------------------------------------------------------------------
# Condition evaluation
# ---------------------------------------------------------------------------
def _is_triggered(
    conditions: RuleConditions,
    roster: Roster,
    distribution: dict[Style, int],
) -> bool:
    if isinstance(conditions, CompositionConditions):
        return bool(composition_violations(conditions, roster))
    if isinstance(conditions, PairingConditions):
        return _pairing_triggered(conditions, distribution)
    if isinstance(conditions, SkillGapConditions):
        return roster.size >= conditions.min_team_size
    raise TypeError(f"Unhandled conditions type: {type(conditions).__name__}")


def _pairing_triggered(conditions: PairingConditions, distribution: dict[Style, int]) -> bool:
    """Both styles present; a same-style pairing needs two distinct members of that style."""
    if conditions.style1 == conditions.style2:
        return distribution[conditions.style1] >= 2
    return distribution[conditions.style1] >= 1 and distribution[conditions.style2] >= 1


class _TemplateValues(dict):
    """Leaves unknown ``{placeholders}`` untouched when formatting."""

    def __missing__(self, key: object) -> str:
        return f"{{{key}}}"


def _render_message(
    rule: Rule,
    conditions: RuleConditions,
    roster: Roster,
    distribution: dict[Style, int],
) -> str:
    if not rule.message_template:
        return rule.description

    values = _TemplateValues(
        team_size=roster.size,
        profiled_count=sum(distribution.values()),
    )
    values.update(conditions.model_dump(exclude={"rule_type"}, exclude_none=True))
    try:
        return rule.message_template.format_map(values)
    except (AttributeError, IndexError, KeyError, TypeError, ValueError):
        logger.warning("Rule %s has an unusable message template; using description", rule.id)
        return rule.description
