"""Role suggestions and staffing recommendations for a roster.

All functions are *pure*.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, Field

from disc_teams.disc_styles import DISC_STYLES, STYLE_ORDER, Roster, Style
from disc_teams.engine.rule_engine import Finding
from disc_teams.engine.team_analysis import style_distribution


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class RoleSuggestion(BaseModel):
    """Ideal roles for one profiled member, taken from their primary style."""

    member_id: str
    style: Style
    suggested_roles: list[str] = Field(default_factory=list)


_MAX_RECOMMENDATIONS = 5

_MISSING_STYLE_ADVICE: dict[Style, str] = {
    "D": "Consider adding a D-style member or designating a clear decision-maker",
    "I": "Consider adding an i-style member for stakeholder communication",
    "S": "Consider adding an S-style member for team cohesion and support roles",
    "C": "Consider adding a C-style member for quality control and testing",
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def suggest_roles(roster: Roster) -> list[RoleSuggestion]:
    """Return role suggestions for every profiled member, in roster order."""
    suggestions: list[RoleSuggestion] = []
    for m in roster.profiled_members():
        style = m.style_profile.primary_style  # type: ignore[union-attr]
        suggestions.append(RoleSuggestion(
            member_id=m.id,
            style=style,
            suggested_roles=list(DISC_STYLES[style].ideal_roles),
        ))
    return suggestions


def generate_recommendations(
    roster: Roster,
    findings: Iterable[Finding] = (),
) -> list[str]:
    """Return up to five deduplicated recommendations.

    Rule suggestions come first (in finding order), then style-gap advice.
    """
    recs: list[str] = []

    recs.extend(f.suggestion for f in findings if f.suggestion)

    distribution = style_distribution(roster)
    if sum(distribution.values()) > 0:
        recs.extend(_MISSING_STYLE_ADVICE[s] for s in STYLE_ORDER if distribution[s] == 0)

    if distribution["D"] > 1:
        recs.append("Establish clear decision-making protocols to prevent D-style conflicts")

    if distribution["I"] > 0 and distribution["C"] > 0:
        recs.append(
            "Foster mutual understanding between i-style and C-style members "
            "through style awareness training"
        )

    return list(dict.fromkeys(recs))[:_MAX_RECOMMENDATIONS]
