"""Live team analysis — average compatibility, style distribution, heuristics.

Recomputed on every roster change while a team is being built.
All functions are *pure*.
"""

from __future__ import annotations

from collections import Counter

from pydantic import BaseModel, Field

from disc_teams.disc_styles import STYLE_ORDER, Roster, Style
from disc_teams.engine.compatibility import canonical_pair, score_pair


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class AnalysisResult(BaseModel):
    """Live compatibility summary for a roster."""

    average_score: int = Field(ge=0, le=100)
    distribution: dict[Style, int]
    strengths: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    profiled_member_count: int = Field(ge=2)
    roster_size: int = Field(ge=2)


# Share of profiled members above which a repeated style is flagged
_CONCENTRATION_RATIO = 0.4


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def style_distribution(roster: Roster) -> dict[Style, int]:
    """Count profiled members per primary style; every style key is present."""
    counter: Counter[Style] = Counter(
        m.style_profile.primary_style  # type: ignore[union-attr]
        for m in roster.profiled_members()
    )
    return {s: counter.get(s, 0) for s in STYLE_ORDER}


def round_half_up(numerator: int, denominator: int) -> int:
    """Round ``numerator / denominator`` to the nearest integer, .5 going up.

    Exact for non-negative integers (no float drift at the .5 boundary).
    """
    return (2 * numerator + denominator) // (2 * denominator)


def analyze_team(roster: Roster) -> AnalysisResult | None:
    """Analyse *roster*; ``None`` when fewer than two members are profiled.

    ``None`` means "nothing to score yet" and is distinct from a low score.
    """
    if roster.size < 2:
        return None
    profiled = roster.profiled_members()
    if len(profiled) < 2:
        return None

    styles: list[Style] = [m.style_profile.primary_style for m in profiled]  # type: ignore[union-attr]
    distribution = style_distribution(roster)

    total = 0
    pair_count = 0
    for i in range(len(styles)):
        for j in range(i + 1, len(styles)):
            total += score_pair(*canonical_pair(styles[i], styles[j]))
            pair_count += 1

    return AnalysisResult(
        average_score=round_half_up(total, pair_count),
        distribution=distribution,
        strengths=_strengths(distribution),
        warnings=_warnings(distribution, len(profiled)),
        profiled_member_count=len(profiled),
        roster_size=roster.size,
    )


# ---------------------------------------------------------------------------
# Heuristics
# ---------------------------------------------------------------------------
def _warnings(distribution: dict[Style, int], profiled_count: int) -> list[str]:
    warnings: list[str] = []

    for style in STYLE_ORDER:
        count = distribution[style]
        if count >= 2 and count / profiled_count > _CONCENTRATION_RATIO:
            warnings.append(f"High {style} concentration may cause power struggles")

    missing = [s for s in STYLE_ORDER if distribution[s] == 0]
    if missing:
        warnings.append(f"Missing {', '.join(missing)} style perspectives")

    if distribution["D"] > 0 and distribution["S"] > 0:
        warnings.append("D-S pairing may need extra communication support")

    return warnings


def _strengths(distribution: dict[Style, int]) -> list[str]:
    strengths: list[str] = []

    if distribution["D"] > 0 and distribution["C"] > 0:
        strengths.append("Strong D-C pairing for decisive quality execution")
    if distribution["I"] > 0 and distribution["S"] > 0:
        strengths.append("i-S combo creates excellent team cohesion")
    if all(distribution[s] > 0 for s in STYLE_ORDER):
        strengths.append("All four styles represented - balanced perspective")
    if distribution["I"] >= 2:
        strengths.append("Strong influence presence for stakeholder engagement")

    return strengths
