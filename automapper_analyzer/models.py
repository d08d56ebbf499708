"""Shared Pydantic data models for automapper-analyzer."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# --- Enums ---


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    HIDDEN = "hidden"


# --- Location Models ---


class Span(BaseModel):
    """Source range of a syntax node.

    Lines are 1-based, columns are 0-based, end is exclusive.
    """

    model_config = ConfigDict(frozen=True)

    start_line: int = Field(ge=1)
    start_column: int = Field(ge=0)
    end_line: int = Field(ge=1)
    end_column: int = Field(ge=0)
    start_byte: int = Field(default=0, ge=0)
    end_byte: int = Field(default=0, ge=0)


class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    file: str
    span: Span


# --- Finding Models ---


class Finding(BaseModel):
    model_config = ConfigDict(frozen=True)

    rule_id: str
    rule_name: str
    severity: Severity
    message: str
    location: Location
    snippet: str = ""


class RuleDescriptor(BaseModel):
    """Public description of one detection rule."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    category: str
    severity: Severity


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class FileReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    file: str
    findings: list[Finding]
    duration_ms: int = Field(ge=0)


class AnalysisReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    root: str
    files_analyzed: int = Field(ge=0)
    findings: list[Finding]
    skipped: list[str] = Field(default_factory=list)
    analyzed_at: str = Field(default_factory=_now_iso)  # ISO8601
    duration_ms: int = Field(ge=0)
