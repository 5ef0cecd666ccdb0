"""Repository for created teams and their analysis snapshots (JSON file)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
import threading

from pydantic import Field

from disc_teams.config import get_teams_path
from disc_teams.disc_styles import CamelModel, Roster
from disc_teams.engine.rule_engine import Finding
from disc_teams.engine.team_analysis import AnalysisResult
from disc_teams.engine.team_report import TeamReport


logger = logging.getLogger(__name__)


class TeamRecord(CamelModel):
    """A persisted team: roster snapshot plus whatever analysis the caller kept."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    roster: Roster = Field(default_factory=Roster)
    analysis: AnalysisResult | None = None
    report: TeamReport | None = None
    findings: list[Finding] = Field(default_factory=list)


class TeamRepository:
    """Thread-safe persistence layer for TeamRecord."""

    def __init__(self, config_path: str | None = None) -> None:
        self._path = Path(config_path or get_teams_path())
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def save_team(self, team: TeamRecord) -> None:
        """Insert or replace *team* (atomic write)."""
        with self._lock:
            teams = self._read_all()
            teams[team.id] = team
            self._atomic_write(teams)
        logger.info("Saved team %s (%d members)", team.id, team.roster.size)

    def load_team(self, team_id: str) -> TeamRecord | None:
        """Return the team, or ``None`` when it was never saved."""
        with self._lock:
            return self._read_all().get(team_id)

    def list_teams(self) -> list[TeamRecord]:
        """All saved teams in insertion order."""
        with self._lock:
            return list(self._read_all().values())

    def delete_team(self, team_id: str) -> bool:
        """Remove a team; returns ``False`` if it did not exist."""
        with self._lock:
            teams = self._read_all()
            if teams.pop(team_id, None) is None:
                return False
            self._atomic_write(teams)
            return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _read_all(self) -> dict[str, TeamRecord]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path) as fh:
                data = json.load(fh)
            return {t["id"]: TeamRecord(**t) for t in data.get("teams", [])}
        except Exception as exc:
            raise ValueError(f"Failed to load teams: {exc}") from exc

    def _atomic_write(self, teams: dict[str, TeamRecord]) -> None:
        tmp = self._path.with_suffix(".tmp")
        payload = {"teams": [t.model_dump(by_alias=True) for t in teams.values()]}
        try:
            with open(tmp, "w") as fh:
                json.dump(payload, fh, indent=2, ensure_ascii=False)
            tmp.replace(self._path)
        except Exception as exc:
            if tmp.exists():
                tmp.unlink()
            raise ValueError(f"Failed to save teams: {exc}") from exc
