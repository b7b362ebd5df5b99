"""
Drill Session: per-scenario progress owned by a single drill session.

A DrillSession is a plain aggregate (id, two timestamps, and a mapping of
scenario id -> ScenarioProgress). It is handed to the scheduler on every
call and serialized verbatim by the session store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from adaptive_trainer.exceptions import InvalidAnswerQualityError

# =============================================================================
# Answer Quality
# =============================================================================


class AnswerQuality(str, Enum):
    """Graded outcome of a presented scenario."""

    BEST = "best"  # Picked the best option
    OK = "ok"  # Acceptable but not ideal
    BAD = "bad"  # Picked the wrong play
    TIMEOUT = "timeout"  # No answer before the timer ran out

    @classmethod
    def parse(cls, value: AnswerQuality | str) -> AnswerQuality:
        """
        Coerce a raw value into an AnswerQuality.

        Raises:
            InvalidAnswerQualityError: value is not a known quality
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidAnswerQualityError(value) from None


# Records persisted without a due date are treated as due right away
DUE_IMMEDIATELY = datetime.min.replace(tzinfo=timezone.utc)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def _parse_timestamp(value: str | None) -> datetime | None:
    if value is None:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _format_timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


# =============================================================================
# Scenario Progress
# =============================================================================


@dataclass
class ScenarioProgress:
    """Spaced repetition state and outcome tallies for one scenario."""

    scenario_id: str
    ease: float
    interval: float  # Days until next due
    next_due: datetime
    repetitions: int = 0  # Consecutive best/ok answers since last reset

    # Outcome tallies
    correct: int = 0
    partial: int = 0
    incorrect: int = 0
    timeouts: int = 0

    # Audit only
    last_shown: datetime | None = None
    last_answer: AnswerQuality | None = None

    @property
    def attempts(self) -> int:
        """Total answers recorded for this scenario."""
        return self.correct + self.partial + self.incorrect + self.timeouts

    def is_due(self, now: datetime) -> bool:
        """Check if this scenario is due at ``now``."""
        return self.next_due <= now

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "scenario_id": self.scenario_id,
            "correct": self.correct,
            "incorrect": self.incorrect,
            "partial": self.partial,
            "timeouts": self.timeouts,
            "repetitions": self.repetitions,
            "interval": self.interval,
            "ease": self.ease,
            "next_due": _format_timestamp(self.next_due),
            "last_shown": _format_timestamp(self.last_shown),
            "last_answer": self.last_answer.value if self.last_answer else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ScenarioProgress:
        """Create from dictionary."""
        last_answer = data.get("last_answer")
        return cls(
            scenario_id=data["scenario_id"],
            ease=float(data["ease"]),
            interval=float(data["interval"]),
            next_due=_parse_timestamp(data.get("next_due")) or DUE_IMMEDIATELY,
            repetitions=int(data.get("repetitions", 0)),
            correct=int(data.get("correct", 0)),
            partial=int(data.get("partial", 0)),
            incorrect=int(data.get("incorrect", 0)),
            timeouts=int(data.get("timeouts", 0)),
            last_shown=_parse_timestamp(data.get("last_shown")),
            last_answer=AnswerQuality.parse(last_answer) if last_answer else None,
        )


# =============================================================================
# Drill Session
# =============================================================================


@dataclass
class DrillSession:
    """Serializable drill session state."""

    id: str
    created_at: datetime
    updated_at: datetime
    progress: dict[str, ScenarioProgress] = field(default_factory=dict)

    def touch(self, now: datetime) -> None:
        """Advance ``updated_at``; never moves it backwards."""
        if now > self.updated_at:
            self.updated_at = now

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "created_at": _format_timestamp(self.created_at),
            "updated_at": _format_timestamp(self.updated_at),
            "progress": {
                scenario_id: record.to_dict()
                for scenario_id, record in self.progress.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> DrillSession:
        """
        Create from dictionary.

        Raises:
            KeyError, TypeError, ValueError: the blob is structurally invalid
        """
        for key in ("id", "created_at", "updated_at"):
            if not data.get(key):
                raise ValueError(f"session is missing '{key}'")

        progress_data = data["progress"]
        if not isinstance(progress_data, dict):
            raise TypeError("progress must be a mapping of scenario id to progress")

        progress = {}
        for scenario_id, record in progress_data.items():
            if not isinstance(record, dict):
                raise TypeError(f"progress for {scenario_id!r} must be a mapping")
            progress[scenario_id] = ScenarioProgress.from_dict(
                {**record, "scenario_id": record.get("scenario_id", scenario_id)}
            )

        return cls(
            id=str(data["id"]),
            created_at=_parse_timestamp(data["created_at"]),
            updated_at=_parse_timestamp(data["updated_at"]),
            progress=progress,
        )


def create_drill_session(session_id: str, now: datetime | None = None) -> DrillSession:
    """Create a new, empty drill session."""
    now = now or utc_now()
    return DrillSession(id=session_id, created_at=now, updated_at=now)
