"""Pydantic models for administrator-authored compatibility rules."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import ConfigDict, Field, TypeAdapter, field_validator

from disc_teams.disc_styles import CamelModel, Style, normalize_style


Severity = Literal["info", "success", "warning", "critical"]

RULE_TYPES: tuple[str, ...] = ("composition", "pairing", "skill_gap")


class UnknownRuleTypeError(ValueError):
    """Raised when a rule declares a ``rule_type`` with no condition shape."""


# ---------------------------------------------------------------------------
# Condition variants
# ---------------------------------------------------------------------------
class CompositionConditions(CamelModel):
    """Team makeup thresholds, gated on raw roster size."""

    model_config = ConfigDict(frozen=True)

    rule_type: Literal["composition"] = Field(default="composition", alias="rule_type")
    min_styles: int = Field(..., ge=0)
    max_same_style: int = Field(..., ge=0)
    required_style: Style | None = None
    min_team_size: int = Field(..., ge=0)

    @field_validator("required_style", mode="before")
    @classmethod
    def validate_required_style(cls, v: object) -> object:
        # the rule editor stores "" when no style is selected
        if v == "":
            return None
        return normalize_style(v)


class PairingConditions(CamelModel):
    """A pair of styles whose co-presence triggers the rule."""

    model_config = ConfigDict(frozen=True)

    rule_type: Literal["pairing"] = Field(default="pairing", alias="rule_type")
    style1: Style
    style2: Style

    @field_validator("style1", "style2", mode="before")
    @classmethod
    def validate_style(cls, v: object) -> object:
        return normalize_style(v)


class SkillGapConditions(CamelModel):
    """Placeholder hook: applies once the team reaches ``min_team_size``."""

    model_config = ConfigDict(frozen=True)

    rule_type: Literal["skill_gap"] = Field(default="skill_gap", alias="rule_type")
    min_team_size: int = Field(..., ge=0)


RuleConditions = Annotated[
    Union[CompositionConditions, PairingConditions, SkillGapConditions],
    Field(discriminator="rule_type"),
]

_CONDITIONS_ADAPTER: TypeAdapter[RuleConditions] = TypeAdapter(RuleConditions)


# ---------------------------------------------------------------------------
# Rule
# ---------------------------------------------------------------------------
class Rule(CamelModel):
    """A single compatibility rule as stored by the rule store.

    ``conditions`` is the raw payload; its shape depends on ``rule_type`` and
    is only checked by :func:`parse_conditions`.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)
    rule_type: str = Field(..., min_length=1)
    severity: Severity
    is_active: bool = True
    conditions: dict[str, Any] = Field(default_factory=dict)
    suggestion: str | None = None
    message_template: str | None = None

    @field_validator("conditions", mode="before")
    @classmethod
    def validate_conditions(cls, v: object) -> object:
        # a cleared payload is stored as null
        if v is None:
            return {}
        return v


def parse_conditions(rule: Rule) -> RuleConditions:
    """Validate ``rule.conditions`` against the shape of ``rule.rule_type``.

    Raises:
        UnknownRuleTypeError: If the rule type is not recognised.
        pydantic.ValidationError: If the payload is malformed for its type.
    """
    if rule.rule_type not in RULE_TYPES:
        raise UnknownRuleTypeError(f"Unknown rule type '{rule.rule_type}' for rule '{rule.id}'")
    payload = {k: v for k, v in rule.conditions.items() if k not in ("rule_type", "ruleType")}
    return _CONDITIONS_ADAPTER.validate_python({**payload, "rule_type": rule.rule_type})


class RulesDatabase(CamelModel):
    """All stored rules with validation."""

    version: str = "1.0"
    rules: list[Rule] = Field(default_factory=list)

    def get_active_rules(self) -> list[Rule]:
        """Active rules in stored order."""
        return [r for r in self.rules if r.is_active]

    def get_rule(self, rule_id: str) -> Rule | None:
        return next((r for r in self.rules if r.id == rule_id), None)

    def validate_database(self, check_conditions: bool = True) -> None:
        """Validate database constraints.

        Loading skips the condition check so a hand-edited payload only
        disables its own rule at evaluation time.
        """
        # Check unique rule ids
        rule_ids = [r.id for r in self.rules]
        if len(rule_ids) != len(set(rule_ids)):
            raise ValueError("Duplicate rule ids found")

        if not check_conditions:
            return

        # Every rule must carry a well-formed payload for its type
        for rule in self.rules:
            try:
                parse_conditions(rule)
            except ValueError as e:
                raise ValueError(f"Invalid conditions for rule '{rule.id}': {e}") from e
