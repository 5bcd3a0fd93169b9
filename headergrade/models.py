"""Data structures shared by the rules, the analyzer and the report layer."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple


class Status(Enum):
    """Verdict of a single header evaluation."""
    PASS = "pass"
    PARTIAL = "partial"
    FAIL = "fail"
    MISSING = "missing"
    UNKNOWN = "unknown"


class Level(Enum):
    """Severity of a note attached to an evaluation."""
    FAIL = "fail"
    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"
    DETAIL = "detail"


@dataclass(frozen=True)
class Note:
    level: Level
    message: str

    def __str__(self):
        return self.message

    def to_dict(self):
        return {"level": self.level.value, "message": self.message}


@dataclass(frozen=True)
class RuleContext:
    """What a rule may look at besides the header's own value."""
    header_name: str
    weight: float
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Evaluation:
    score_delta: float
    status: Status
    notes: Tuple[Note, ...]

    def __post_init__(self):
        if not self.notes:
            raise ValueError("an evaluation needs at least one note")


@dataclass
class HeaderEntry:
    """One row of the report: a security, leaking or unrecognized header."""
    name: str
    present: bool
    weight: float
    leaking: bool = False
    value: Optional[str] = None
    status: Optional[Status] = None
    notes: Tuple[Note, ...] = ()
    score_delta: float = 0.0

    def to_dict(self) -> Dict:
        data = {
            "name": self.name,
            "value": self.value,
            "present": self.present,
            "weight": self.weight,
            "leaking": self.leaking,
            "score_delta": round(self.score_delta, 4),
        }
        if self.status is not None:
            data["status"] = self.status.value
        if self.notes:
            data["notes"] = [note.to_dict() for note in self.notes]
        return data


@dataclass
class AnalysisResult:
    detected: List[HeaderEntry]
    missing: List[HeaderEntry]
    leaking: List[HeaderEntry]
    score: float
    raw_score: float

    def entries(self):
        """All entries in report order: detected, missing, then leaking."""
        return [*self.detected, *self.missing, *self.leaking]

    def to_dict(self) -> Dict:
        return {
            "score": round(self.score, 1),
            "raw_score": round(self.raw_score, 4),
            "detected": [entry.to_dict() for entry in self.detected],
            "missing": [entry.to_dict() for entry in self.missing],
            "leaking": [entry.to_dict() for entry in self.leaking],
        }
