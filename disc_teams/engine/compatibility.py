"""Pairwise compatibility scoring between DiSC styles.

All functions are *pure* — no side-effects, no I/O.
"""

from __future__ import annotations

from types import MappingProxyType

from pydantic import BaseModel, Field

from disc_teams.disc_styles import STYLE_ORDER, Roster, Style


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class PairScore(BaseModel):
    """Score for a single member ↔ member pair."""

    member_a_id: str
    member_b_id: str
    style_a: Style
    style_b: Style
    score: int = Field(ge=0, le=100)


# ---------------------------------------------------------------------------
# Compatibility matrix (style_a -> style_b = score)
# ---------------------------------------------------------------------------
COMPATIBILITY_MATRIX: MappingProxyType[str, MappingProxyType[str, int]] = MappingProxyType({
    "D": MappingProxyType({"D": 70, "I": 80, "S": 60, "C": 75}),
    "I": MappingProxyType({"D": 80, "I": 75, "S": 85, "C": 65}),
    "S": MappingProxyType({"D": 60, "I": 85, "S": 80, "C": 75}),
    "C": MappingProxyType({"D": 75, "I": 65, "S": 75, "C": 85}),
})


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def score_pair(style_a: Style, style_b: Style) -> int:
    """Return the matrix compatibility score (0-100) for two primary styles."""
    return COMPATIBILITY_MATRIX[style_a][style_b]


def canonical_pair(style_a: Style, style_b: Style) -> tuple[Style, Style]:
    """Order two styles by ``STYLE_ORDER`` so lookups ignore member order."""
    if STYLE_ORDER.index(style_a) <= STYLE_ORDER.index(style_b):
        return style_a, style_b
    return style_b, style_a


def pair_scores(roster: Roster) -> list[PairScore]:
    """Compute scores for every unordered pair of profiled members (upper-triangle only)."""
    results: list[PairScore] = []
    profiled = roster.profiled_members()
    for i, ma in enumerate(profiled):
        for mb in profiled[i + 1:]:
            sa = ma.style_profile.primary_style  # type: ignore[union-attr]
            sb = mb.style_profile.primary_style  # type: ignore[union-attr]
            results.append(PairScore(
                member_a_id=ma.id,
                member_b_id=mb.id,
                style_a=sa,
                style_b=sb,
                score=score_pair(*canonical_pair(sa, sb)),
            ))
    return results


def compatibility_label(score: int) -> str:
    """Human label for an average compatibility score."""
    if score >= 85:
        return "Excellent"
    if score >= 75:
        return "Good"
    if score >= 65:
        return "Fair"
    return "Needs Attention"
