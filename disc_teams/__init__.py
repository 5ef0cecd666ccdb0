"""DiSC team compatibility analysis and rule evaluation."""

from .disc_styles import Roster, StyleProfile, TeamMember
from .engine.rule_engine import Finding, evaluate, evaluate_rules
from .engine.team_analysis import AnalysisResult, analyze_team
from .engine.team_report import TeamReport, build_team_report
from .rule_models import Rule, RulesDatabase

__all__ = [
    "AnalysisResult",
    "Finding",
    "Roster",
    "Rule",
    "RulesDatabase",
    "StyleProfile",
    "TeamMember",
    "TeamReport",
    "analyze_team",
    "build_team_report",
    "evaluate",
    "evaluate_rules",
]
