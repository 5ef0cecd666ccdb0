"""Stored team report — adjusted pair scores, rule-weighted score, risks.

Built once when a team is saved, unlike the live ``team_analysis`` summary
which is recomputed on every roster change.
All functions are *pure* apart from the rule engine's logging.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, Field

from disc_teams.disc_styles import DISC_STYLES, STYLE_ORDER, Roster, Style, StyleProfile
from disc_teams.engine.compatibility import PairScore, canonical_pair, score_pair
from disc_teams.engine.recommendations import generate_recommendations
from disc_teams.engine.rule_engine import Finding, evaluate_rules
from disc_teams.engine.team_analysis import round_half_up, style_distribution
from disc_teams.rule_models import Rule


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class TeamReport(BaseModel):
    """Full compatibility report persisted alongside a team."""

    overall_score: int = Field(ge=0, le=100)
    distribution: dict[Style, int]
    pair_scores: list[PairScore] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    risks: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    findings: list[Finding] = Field(default_factory=list)
    skipped_rule_ids: list[str] = Field(default_factory=list)


# Average pair score used when fewer than two members are profiled
_NEUTRAL_PAIR_SCORE = 70

_SEVERITY_WEIGHTS: dict[str, int] = {"critical": -15, "warning": -5, "info": 0, "success": 5}

_STYLE_STRENGTHS: dict[Style, str] = {
    "D": "Decision-making capability with D-style leadership",
    "I": "Strong communication and stakeholder engagement via i-style members",
    "S": "Team stability and support focus from S-style members",
    "C": "Quality assurance and attention to detail from C-style members",
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def extremity_adjustment(a: StyleProfile, b: StyleProfile) -> int:
    """Score tweak for how pronounced two members' primary styles are.

    Two very strong (>80) members of the same style clash a little more;
    a moderate (50-70) D and S complement each other a little better.
    """
    score_a = a.score_for(a.primary_style)
    score_b = b.score_for(b.primary_style)

    if a.primary_style == b.primary_style and score_a > 80 and score_b > 80:
        return -10
    if {a.primary_style, b.primary_style} == {"D", "S"} and 50 <= score_a <= 70 and 50 <= score_b <= 70:
        return 5
    return 0


def adjusted_pair_scores(roster: Roster) -> list[PairScore]:
    """Matrix score plus :func:`extremity_adjustment` for every profiled pair."""
    results: list[PairScore] = []
    profiled = roster.profiled_members()
    for i, ma in enumerate(profiled):
        for mb in profiled[i + 1:]:
            pa, pb = ma.style_profile, mb.style_profile
            base = score_pair(*canonical_pair(pa.primary_style, pb.primary_style))  # type: ignore[union-attr]
            results.append(PairScore(
                member_a_id=ma.id,
                member_b_id=mb.id,
                style_a=pa.primary_style,  # type: ignore[union-attr]
                style_b=pb.primary_style,  # type: ignore[union-attr]
                score=base + extremity_adjustment(pa, pb),  # type: ignore[arg-type]
            ))
    return results


def overall_score(scores: list[PairScore], findings: Iterable[Finding]) -> int:
    """Average pair score shifted by finding severities, clamped to 0-100."""
    weight = sum(_SEVERITY_WEIGHTS[f.severity] for f in findings)
    if scores:
        total, count = sum(s.score for s in scores), len(scores)
    else:
        total, count = _NEUTRAL_PAIR_SCORE, 1
    score = round_half_up(total + weight * count, count)
    return max(0, min(100, score))


def build_team_report(roster: Roster, rules: Iterable[Rule]) -> TeamReport:
    """Evaluate *rules* and score *roster* for storage with the team."""
    distribution = style_distribution(roster)
    if sum(distribution.values()) == 0:
        return TeamReport(
            overall_score=0,
            distribution=distribution,
            risks=["No team members have DiSC assessments"],
            recommendations=["Complete DiSC assessments for all team members"],
        )

    evaluation = evaluate_rules(roster, rules)
    scores = adjusted_pair_scores(roster)

    return TeamReport(
        overall_score=overall_score(scores, evaluation.findings),
        distribution=distribution,
        pair_scores=scores,
        strengths=_strengths(distribution),
        risks=_risks(distribution, evaluation.findings),
        recommendations=generate_recommendations(roster, evaluation.findings),
        findings=evaluation.findings,
        skipped_rule_ids=evaluation.skipped_rule_ids,
    )


# ---------------------------------------------------------------------------
# Heuristics
# ---------------------------------------------------------------------------
def _strengths(distribution: dict[Style, int]) -> list[str]:
    strengths = [_STYLE_STRENGTHS[s] for s in STYLE_ORDER if distribution[s] > 0]

    if sum(1 for s in STYLE_ORDER if distribution[s] > 0) >= 3:
        strengths.append("Good diversity of perspectives and working styles")
    if distribution["D"] > 0 and distribution["S"] > 0:
        strengths.append("Balance between driving results and maintaining team harmony")
    if distribution["I"] > 0 and distribution["C"] > 0:
        strengths.append("Balance between enthusiasm and analytical rigor")

    return strengths


def _risks(distribution: dict[Style, int], findings: list[Finding]) -> list[str]:
    risks = [f.message for f in findings if f.severity in ("critical", "warning")]

    if distribution["D"] == 0:
        risks.append("May lack decisive leadership in critical moments")
    if distribution["C"] == 0:
        risks.append("May overlook important details or quality standards")

    total = sum(distribution.values())
    dominant = next((s for s in STYLE_ORDER if distribution[s] * 5 > total * 3), None)
    if dominant is not None and total > 2:
        risks.append(f"Team is heavily weighted toward {DISC_STYLES[dominant].name} style")

    return risks
