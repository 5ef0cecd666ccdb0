"""Repository for compatibility rule persistence (JSON file)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
import threading
from typing import Any

from pydantic import ValidationError

from disc_teams.config import get_rules_path
from disc_teams.default_rules import create_default_rules
from disc_teams.rule_models import Rule, RulesDatabase


logger = logging.getLogger(__name__)


def _field_name(key: str) -> str:
    """Map a camelCase payload key onto the Rule field name."""
    for name, field in Rule.model_fields.items():
        if key == field.alias:
            return name
    return key


class RuleRepository:
    """Thread-safe repository for rule definitions."""

    def __init__(self, config_path: str | None = None):
        """Initialize repository; falls back to DISC_RULES_PATH."""
        path = config_path or get_rules_path()
        self.config_path = Path(path)
        self.backup_path = Path(f"{path}.backup")
        self._lock = threading.Lock()

    def load_rules(self) -> RulesDatabase:
        """Load rules from JSON file or seed the defaults."""
        with self._lock:
            if not self.config_path.exists():
                db = create_default_rules()
                self._save_without_lock(db)
                logger.info("Seeded %d default rules at %s", len(db.rules), self.config_path)
                return db

            try:
                with open(self.config_path) as f:
                    data = json.load(f)
                db = RulesDatabase(
                    version=data.get("version", "1.0"),
                    rules=self._build_rules(data.get("rules", [])),
                )
                db.validate_database(check_conditions=False)
                return db
            except Exception as e:
                raise ValueError(f"Failed to load rules: {e}") from e

    @staticmethod
    def _build_rules(raw_rules: list[Any]) -> list[Rule]:
        """Build each stored rule on its own; unreadable entries are skipped."""
        rules: list[Rule] = []
        for index, raw in enumerate(raw_rules):
            try:
                rules.append(Rule.model_validate(raw))
            except ValidationError as e:
                rule_id = raw.get("id") if isinstance(raw, dict) else None
                logger.warning(
                    "Skipping stored rule #%d (%s): %d errors",
                    index, rule_id or "no id", e.error_count(),
                )
        return rules

    def save_rules(self, db: RulesDatabase) -> None:
        """Save rules to JSON file with backup."""
        with self._lock:
            db.validate_database()
            self._create_backup()
            self._save_without_lock(db)

    def list_active_rules(self) -> list[Rule]:
        """Active rules in stored order, snapshotted for one evaluation."""
        return self.load_rules().get_active_rules()

    def get_rule(self, rule_id: str) -> Rule | None:
        return self.load_rules().get_rule(rule_id)

    def _save_without_lock(self, db: RulesDatabase) -> None:
        """Save without acquiring lock (internal use)."""
        temp_path = self.config_path.with_suffix(".tmp")
        try:
            with open(temp_path, "w") as f:
                json.dump(db.model_dump(by_alias=True), f, indent=2, ensure_ascii=False)
            temp_path.replace(self.config_path)
        except Exception as e:
            if temp_path.exists():
                temp_path.unlink()
            raise ValueError(f"Failed to save rules: {e}") from e

    def _create_backup(self) -> None:
        """Create backup of current rules file."""
        if self.config_path.exists():
            try:
                with open(self.config_path) as f:
                    content = f.read()
                with open(self.backup_path, "w") as f:
                    f.write(content)
            except OSError:
                logger.warning("Failed to create backup", exc_info=True)

    def add_rule(self, rule: Rule) -> RulesDatabase:
        """Add a new rule; its conditions must match its rule type."""
        db = self.load_rules()

        if db.get_rule(rule.id) is not None:
            raise ValueError(f"Rule with id '{rule.id}' already exists")

        new_db = RulesDatabase(version=db.version, rules=[*db.rules, rule])
        self.save_rules(new_db)
        logger.info("Added rule %s (%s)", rule.id, rule.rule_type)
        return new_db

    def update_rule(self, rule_id: str, updates: dict[str, Any]) -> RulesDatabase:
        """Update an existing rule; the id cannot change."""
        db = self.load_rules()

        rule_idx = next(
            (i for i, r in enumerate(db.rules) if r.id == rule_id),
            None
        )
        if rule_idx is None:
            raise ValueError(f"Rule with id '{rule_id}' not found")

        updated_data = db.rules[rule_idx].model_dump()
        updated_data.update({_field_name(k): v for k, v in updates.items()})
        updated_data["id"] = rule_id
        updated_rule = Rule(**updated_data)

        new_rules = [*db.rules]
        new_rules[rule_idx] = updated_rule
        new_db = RulesDatabase(version=db.version, rules=new_rules)

        self.save_rules(new_db)
        return new_db

    def set_active(self, rule_id: str, is_active: bool) -> RulesDatabase:
        """Enable or disable a rule."""
        return self.update_rule(rule_id, {"is_active": is_active})

    def delete_rule(self, rule_id: str) -> RulesDatabase:
        """Delete a rule from the database."""
        db = self.load_rules()

        if db.get_rule(rule_id) is None:
            raise ValueError(f"Rule with id '{rule_id}' not found")

        new_db = RulesDatabase(
            version=db.version,
            rules=[r for r in db.rules if r.id != rule_id],
        )
        self.save_rules(new_db)
        logger.info("Deleted rule %s", rule_id)
        return new_db

    def reset_to_defaults(self) -> RulesDatabase:
        """Reset rules to the default set."""
        db = create_default_rules()
        self.save_rules(db)
        return db
