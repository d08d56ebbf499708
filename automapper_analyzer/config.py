"""Analyzer configuration loaded from a JSON file."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from automapper_analyzer.models import Severity
from automapper_analyzer.scanner.rules import RuleSet

CONFIG_ENV_VAR = "AUTOMAPPER_ANALYZER_CONFIG"
DEFAULT_CONFIG_PATH = "config/analyzer.json"


class AnalyzerConfigError(Exception):
    pass


class AnalyzerConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    disabled_rules: list[str] = Field(default_factory=list)
    severity_overrides: dict[str, Severity] = Field(default_factory=dict)
    include_generated: bool = False
    exclude: list[str] = Field(default_factory=list)
    max_workers: int | None = Field(default=None, ge=1)

    def apply(self, rule_set: RuleSet) -> RuleSet:
        """Return ``rule_set`` with rules disabled and severities overridden."""
        unknown = sorted(
            rid for rid in {*self.disabled_rules, *self.severity_overrides} if rid not in rule_set
        )
        if unknown:
            raise AnalyzerConfigError(f"Unknown rule ids in config: {', '.join(unknown)}")
        return rule_set.with_severity(self.severity_overrides).without(self.disabled_rules)


def load_config(config_path: str | None) -> AnalyzerConfig:
    """Load config from a JSON file. ``None`` means built-in defaults."""
    if config_path is None:
        return AnalyzerConfig()
    path = Path(config_path)
    if not path.exists():
        raise AnalyzerConfigError(f"Analyzer config not found: {config_path}")
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise AnalyzerConfigError(f"Invalid JSON in analyzer config: {e}") from e
    if not isinstance(data, dict):
        raise AnalyzerConfigError("Analyzer config must be a JSON object")
    try:
        return AnalyzerConfig.model_validate(data)
    except ValidationError as e:
        raise AnalyzerConfigError(f"Invalid analyzer config {config_path}: {e}") from e
