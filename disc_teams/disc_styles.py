"""DiSC style definitions for team compatibility analysis.

Defines the four behavioural styles (Dominance / Influence / Steadiness /
Conscientiousness), the assessment profile carried by a consultant, and the
roster a team is built from.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Style enum
# ---------------------------------------------------------------------------
Style = Literal["D", "I", "S", "C"]

STYLE_ORDER: tuple[Style, ...] = ("D", "I", "S", "C")


def normalize_style(value: object) -> object:
    """Map the lowercase ``"i"`` used by assessment tooling onto ``"I"``."""
    if value == "i":
        return "I"
    return value


class CamelModel(BaseModel):
    """Base model accepting both camelCase payload keys and field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------
class StyleProfile(CamelModel):
    """A DiSC assessment result: primary/secondary style + four dimension scores.

    Scores are passed through as given. There is no check that the primary
    style carries the highest score.
    """

    model_config = ConfigDict(frozen=True)

    primary_style: Style
    secondary_style: Style | None = None
    d_score: float = 0
    i_score: float = 0
    s_score: float = 0
    c_score: float = 0

    @field_validator("primary_style", "secondary_style", mode="before")
    @classmethod
    def validate_style(cls, v: object) -> object:
        return normalize_style(v)

    def score_for(self, style: Style) -> float:
        """Return the dimension score for *style*."""
        return {
            "D": self.d_score,
            "I": self.i_score,
            "S": self.s_score,
            "C": self.c_score,
        }[style]


class TeamMember(CamelModel):
    """A roster entry; ``style_profile`` is ``None`` for unassessed members."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = Field(default="", max_length=100)
    style_profile: StyleProfile | None = None


class Roster(CamelModel):
    """The working set of members for a team under construction.

    ``members`` keeps display order; analysis treats it as a set keyed by id.
    """

    model_config = ConfigDict(frozen=True)

    members: list[TeamMember] = Field(default_factory=list)
    target_size: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def validate_unique_ids(self) -> Roster:
        ids = [m.id for m in self.members]
        if len(ids) != len(set(ids)):
            raise ValueError("Duplicate member ids in roster")
        return self

    @property
    def size(self) -> int:
        return len(self.members)

    def profiled_members(self) -> list[TeamMember]:
        """Members carrying a style profile, in roster order."""
        return [m for m in self.members if m.style_profile is not None]

    def add_member(self, member: TeamMember) -> Roster:
        """Return a new roster with *member* appended."""
        if any(m.id == member.id for m in self.members):
            raise ValueError(f"Member '{member.id}' is already on the roster")
        return Roster(members=[*self.members, member], target_size=self.target_size)

    def remove_member(self, member_id: str) -> Roster:
        """Return a new roster without *member_id*."""
        if not any(m.id == member_id for m in self.members):
            raise ValueError(f"Member '{member_id}' not found")
        return Roster(
            members=[m for m in self.members if m.id != member_id],
            target_size=self.target_size,
        )


class StyleInfo(BaseModel):
    """Display metadata for a single style."""

    style: Style
    name: str = Field(..., min_length=1)
    color: str = Field(default="#4A90D9")
    strengths: list[str] = Field(default_factory=list, min_length=1)
    challenges: list[str] = Field(default_factory=list, min_length=1)
    ideal_roles: list[str] = Field(default_factory=list, min_length=1)


# ---------------------------------------------------------------------------
# Style registry
# ---------------------------------------------------------------------------
DISC_STYLES: dict[str, StyleInfo] = {
    "D": StyleInfo(
        style="D",
        name="Dominance",
        color="#D64933",
        strengths=["Decisive", "Problem solver", "Risk taker", "Self-starter"],
        challenges=["Impatient", "Insensitive", "Demanding"],
        ideal_roles=["Project Lead", "Command Center Director", "Go-Live Manager"],
    ),
    "I": StyleInfo(
        style="I",
        name="Influence",
        color="#F4B942",
        strengths=["Enthusiastic", "Collaborative", "Creative", "Motivating"],
        challenges=["Disorganized", "Impulsive", "Lacks follow-through"],
        ideal_roles=["Trainer", "End-user Liaison", "Change Champion", "Stakeholder Manager"],
    ),
    "S": StyleInfo(
        style="S",
        name="Steadiness",
        color="#4A9B5D",
        strengths=["Patient", "Team player", "Reliable", "Good listener"],
        challenges=["Resistant to change", "Avoids conflict", "Indecisive"],
        ideal_roles=["At-the-Elbow Support", "Super User Coach", "Help Desk", "Patient Advocate"],
    ),
    "C": StyleInfo(
        style="C",
        name="Conscientiousness",
        color="#3B82C4",
        strengths=["Accurate", "Detail-oriented", "Quality-focused", "Systematic"],
        challenges=["Overly critical", "Analysis paralysis", "Perfectionist"],
        ideal_roles=["Build Analyst", "Testing Lead", "Data Validation", "Compliance Specialist"],
    ),
}


def get_style_info(style: str) -> StyleInfo | None:
    """Look up style metadata; accepts ``"i"`` as well as ``"I"``."""
    return DISC_STYLES.get(str(normalize_style(style)))


def get_member_style(member: TeamMember) -> Style | None:
    """Resolve a member's primary style, ``None`` when unassessed."""
    return member.style_profile.primary_style if member.style_profile else None
