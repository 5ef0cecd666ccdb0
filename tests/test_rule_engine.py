"""Tests for disc_teams/engine/rule_engine.py."""

import logging

from disc_teams.disc_styles import Roster, StyleProfile, TeamMember
from disc_teams.engine.rule_engine import (
    Finding,
    RuleEvaluation,
    composition_violations,
    evaluate,
    evaluate_rules,
    sort_findings_by_severity,
)
from disc_teams.rule_models import CompositionConditions, Rule


def _roster(styles: list[str | None]) -> Roster:
    return Roster(members=[
        TeamMember(id=f"m{i}", style_profile=StyleProfile(primary_style=s) if s else None)
        for i, s in enumerate(styles)
    ])


def _rule(rid: str, rule_type: str, conditions: dict, severity: str = "warning", **kwargs) -> Rule:
    return Rule(
        id=rid,
        name=rid.upper(),
        description=f"{rid} description",
        rule_type=rule_type,
        severity=severity,
        conditions=conditions,
        **kwargs,
    )


class TestCompositionRules:
    def test_homogeneous_team_triggers_once(self):
        """Both min_styles and max_same_style fail → exactly one finding."""
        rule = _rule("comp", "composition", {"minStyles": 2, "maxSameStyle": 1, "minTeamSize": 2}, severity="critical")
        findings = evaluate(_roster(["D", "D", "D"]), [rule])
        assert findings == [Finding(
            rule_id="comp", rule_name="COMP", severity="critical", message="comp description",
        )]

    def test_violations_reported_per_predicate(self):
        cond = CompositionConditions(min_styles=2, max_same_style=1, min_team_size=2, required_style="C")
        assert composition_violations(cond, _roster(["D", "D", "D"])) == [
            "min_styles", "max_same_style", "required_style",
        ]

    def test_gated_by_raw_roster_size(self):
        rule = _rule("comp", "composition", {"minStyles": 4, "maxSameStyle": 1, "minTeamSize": 4})
        assert evaluate(_roster(["D", "D", "D"]), [rule]) == []

    def test_gate_counts_unprofiled_members(self):
        rule = _rule("comp", "composition", {"minStyles": 2, "maxSameStyle": 3, "minTeamSize": 3})
        findings = evaluate(_roster(["D", None, None]), [rule])
        assert [f.rule_id for f in findings] == ["comp"]

    def test_satisfied_composition(self):
        rule = _rule("comp", "composition", {"minStyles": 3, "maxSameStyle": 2, "requiredStyle": "C", "minTeamSize": 3})
        assert evaluate(_roster(["D", "I", "C", "C"]), [rule]) == []

    def test_required_style_missing(self):
        rule = _rule("comp", "composition", {"minStyles": 1, "maxSameStyle": 10, "requiredStyle": "C", "minTeamSize": 1})
        findings = evaluate(_roster(["D", "I"]), [rule])
        assert len(findings) == 1

    def test_max_same_style_boundary(self):
        """A count equal to the maximum is allowed."""
        rule = _rule("comp", "composition", {"minStyles": 1, "maxSameStyle": 2, "minTeamSize": 0})
        assert evaluate(_roster(["S", "S"]), [rule]) == []
        assert len(evaluate(_roster(["S", "S", "S"]), [rule])) == 1


class TestPairingRules:
    def test_absent_styles_do_not_trigger(self):
        rule = _rule("pair", "pairing", {"style1": "D", "style2": "C"})
        assert evaluate(_roster(["I", "S", "I"]), [rule]) == []

    def test_both_present_triggers(self):
        rule = _rule("pair", "pairing", {"style1": "D", "style2": "S"}, severity="info")
        findings = evaluate(_roster(["S", "I", "D"]), [rule])
        assert [f.severity for f in findings] == ["info"]

    def test_order_insensitive(self):
        roster = _roster(["D", "S"])
        a = evaluate(roster, [_rule("pair", "pairing", {"style1": "D", "style2": "S"})])
        b = evaluate(roster, [_rule("pair", "pairing", {"style1": "S", "style2": "D"})])
        assert a == b
        assert len(a) == 1

    def test_only_one_side_present(self):
        rule = _rule("pair", "pairing", {"style1": "D", "style2": "S"})
        assert evaluate(_roster(["D", "D"]), [rule]) == []

    def test_same_style_needs_two_members(self):
        rule = _rule("pair", "pairing", {"style1": "D", "style2": "D"})
        assert evaluate(_roster(["D", "S"]), [rule]) == []
        assert len(evaluate(_roster(["D", "D"]), [rule])) == 1

    def test_lowercase_i_in_conditions(self):
        rule = _rule("pair", "pairing", {"style1": "i", "style2": "C"})
        assert len(evaluate(_roster(["I", "C"]), [rule])) == 1


class TestSkillGapRules:
    def test_below_min_size(self):
        rule = _rule("gap", "skill_gap", {"minTeamSize": 5})
        assert evaluate(_roster(["D", "I", "S", "C"]), [rule]) == []

    def test_at_min_size(self):
        rule = _rule("gap", "skill_gap", {"minTeamSize": 4})
        assert len(evaluate(_roster(["D", None, None, None]), [rule])) == 1


class TestEvaluation:
    def test_inactive_rules_skipped_silently(self):
        rule = _rule("gap", "skill_gap", {"minTeamSize": 0}, is_active=False)
        result = evaluate_rules(_roster(["D"]), [rule])
        assert result == RuleEvaluation()

    def test_malformed_rule_skipped_and_reported(self, caplog):
        rules = [
            _rule("bad", "pairing", {"style1": "D"}),
            _rule("gap", "skill_gap", {"minTeamSize": 1}),
        ]
        with caplog.at_level(logging.WARNING, logger="disc_teams.engine.rule_engine"):
            result = evaluate_rules(_roster(["D"]), rules)
        assert result.skipped_rule_ids == ["bad"]
        assert [f.rule_id for f in result.findings] == ["gap"]
        assert "bad" in caplog.text

    def test_unknown_rule_type_skipped_and_reported(self, caplog):
        rules = [
            _rule("odd", "mystery", {"anything": 1}),
            _rule("gap", "skill_gap", {"minTeamSize": 1}),
        ]
        with caplog.at_level(logging.WARNING, logger="disc_teams.engine.rule_engine"):
            result = evaluate_rules(_roster(["D"]), rules)
        assert result.skipped_rule_ids == ["odd"]
        assert len(result.findings) == 1
        assert "unknown rule type" in caplog.text

    def test_findings_keep_rule_order(self):
        rules = [
            _rule("a", "skill_gap", {"minTeamSize": 1}, severity="success"),
            _rule("b", "skill_gap", {"minTeamSize": 1}, severity="critical"),
            _rule("c", "skill_gap", {"minTeamSize": 1}, severity="info"),
        ]
        findings = evaluate(_roster(["D"]), rules)
        assert [f.rule_id for f in findings] == ["a", "b", "c"]

    def test_suggestion_carried(self):
        rule = _rule("gap", "skill_gap", {"minTeamSize": 1}, suggestion="Review skills")
        assert evaluate(_roster(["D"]), [rule])[0].suggestion == "Review skills"

    def test_idempotent_and_rules_untouched(self):
        rules = [_rule("pair", "pairing", {"style1": "D", "style2": "S"})]
        before = [r.model_dump() for r in rules]
        roster = _roster(["D", "S"])
        assert evaluate_rules(roster, rules) == evaluate_rules(roster, rules)
        assert [r.model_dump() for r in rules] == before

    def test_empty_rules(self):
        assert evaluate(_roster(["D", "S"]), []) == []


class TestMessageTemplate:
    def test_rendered_template(self):
        rule = _rule(
            "pair", "pairing", {"style1": "D", "style2": "S"},
            message_template="{style1}-{style2} friction in a team of {team_size}",
        )
        findings = evaluate(_roster(["D", "S", None]), [rule])
        assert findings[0].message == "D-S friction in a team of 3"

    def test_unknown_placeholder_left_verbatim(self):
        rule = _rule(
            "gap", "skill_gap", {"minTeamSize": 1},
            message_template="{profiled_count} assessed, owner {owner}",
        )
        findings = evaluate(_roster(["D", None]), [rule])
        assert findings[0].message == "1 assessed, owner {owner}"

    def test_broken_template_falls_back_to_description(self):
        rule = _rule("gap", "skill_gap", {"minTeamSize": 1}, message_template="broken {")
        findings = evaluate(_roster(["D"]), [rule])
        assert findings[0].message == "gap description"

    def test_template_indexing_a_number_does_not_stop_later_rules(self):
        bad = _rule("bad", "skill_gap", {"minTeamSize": 1}, message_template="{team_size[0]}")
        ok = _rule("ok", "skill_gap", {"minTeamSize": 1})
        findings = evaluate(_roster(["D", "S"]), [bad, ok])
        assert [f.rule_id for f in findings] == ["bad", "ok"]
        assert findings[0].message == "bad description"


class TestSeveritySort:
    def test_sorted_critical_first(self):
        findings = [
            Finding(rule_id="a", severity="success", message="a"),
            Finding(rule_id="b", severity="info", message="b"),
            Finding(rule_id="c", severity="critical", message="c"),
            Finding(rule_id="d", severity="warning", message="d"),
            Finding(rule_id="e", severity="critical", message="e"),
        ]
        assert [f.rule_id for f in sort_findings_by_severity(findings)] == ["c", "e", "d", "b", "a"]
