"""Team compatibility analysis engine.

Sub-modules:
- compatibility   – style matrix and pairwise scoring
- team_analysis   – live average score, distribution & heuristics
- rule_engine     – administrator rule evaluation
- recommendations – role suggestions and staffing advice
- team_report     – stored report: adjusted pair scores, weighted score, risks
"""
