"""
Adaptive Drill Scheduler.

Implements:
- Scenario selection: novel scenarios first (catalog order), then due
  scenarios by earliest due date, weakest (lowest ease) first on ties
- SM-2 style outcome application with four answer qualities

Outcome rules:
best    - correct +1, repetitions +1, ease +0.1 (cap 3.0),
          interval 1d, 3d, then interval * ease
ok      - partial +1, repetitions +1, ease -0.05 (floor 1.3),
          interval 1d while bootstrapping, then interval * max(1.0, ease - 0.3)
bad     - incorrect +1, repetitions reset, ease -0.2 (floor 1.3),
          interval reset to the seed value
timeout - timeouts +1, repetitions reset, ease -0.3 (floor 1.3),
          interval reset to the seed value

Intervals never exceed MAX_INTERVAL_DAYS (365).

The scheduler holds no state; every call takes the caller's DrillSession.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from loguru import logger

from .drill_session import AnswerQuality, DrillSession, ScenarioProgress, utc_now
from .scenario_catalog import ScenarioRecord

# =============================================================================
# Scheduling Constants
# =============================================================================

SEED_EASE = 2.5
EASE_FLOOR = 1.3
EASE_CEILING = 3.0

SEED_INTERVAL_DAYS = 0.01  # ~15 minutes: due again almost immediately
BOOTSTRAP_INTERVALS = (1.0, 3.0)  # Days for repetitions 1 and 2
MAX_INTERVAL_DAYS = 365.0  # Longest rest between reviews

BEST_EASE_BONUS = 0.1
OK_EASE_PENALTY = 0.05
OK_GROWTH_PENALTY = 0.3  # ok grows by (ease - this), never below 1.0
BAD_EASE_PENALTY = 0.2
TIMEOUT_EASE_PENALTY = 0.3

PRECISION = 2  # Decimal places kept for ease and interval

# Outcome counter bumped on the progress record
OUTCOME_TALLIES = {
    AnswerQuality.BEST: "correct",
    AnswerQuality.OK: "partial",
    AnswerQuality.BAD: "incorrect",
    AnswerQuality.TIMEOUT: "timeouts",
}


def _clamp_ease(ease: float) -> float:
    return round(min(EASE_CEILING, max(EASE_FLOOR, ease)), PRECISION)


def new_progress(scenario_id: str, now: datetime) -> ScenarioProgress:
    """Seed a progress record for a scenario answered for the first time."""
    return ScenarioProgress(
        scenario_id=scenario_id,
        ease=SEED_EASE,
        interval=SEED_INTERVAL_DAYS,
        next_due=now,
    )


# =============================================================================
# Scenario Selection
# =============================================================================


def due_scenarios(
    catalog: Iterable[ScenarioRecord],
    session: DrillSession,
    now: datetime | None = None,
) -> list[ScenarioRecord]:
    """
    Build the eligible queue in presentation order.

    Never-attempted scenarios come first in catalog order, followed by
    attempted scenarios whose due date has passed, earliest due first
    (ties: lowest ease, then catalog order). Progress for scenarios the
    catalog no longer contains is ignored.

    Args:
        catalog: Ordered scenarios to choose from
        session: Current drill session (not modified)
        now: Current time (defaults to the wall clock)

    Returns:
        Eligible scenarios, possibly empty
    """
    now = now or utc_now()

    unseen: list[ScenarioRecord] = []
    due: list[tuple[datetime, float, int, ScenarioRecord]] = []

    for position, scenario in enumerate(catalog):
        record = session.progress.get(scenario.id)
        if record is None:
            unseen.append(scenario)
        elif record.is_due(now):
            due.append((record.next_due, record.ease, position, scenario))

    due.sort(key=lambda item: item[:3])
    return unseen + [item[3] for item in due]


def pick_next_scenario(
    catalog: Iterable[ScenarioRecord],
    session: DrillSession,
    now: datetime | None = None,
) -> ScenarioRecord | None:
    """
    Choose the scenario to present next.

    Read-only: calling it repeatedly without answering changes nothing.

    Returns:
        The next scenario, or None when every scenario has been attempted
        and none is due yet (the caller should offer a reset)
    """
    queue = due_scenarios(catalog, session, now)
    if not queue:
        logger.debug(f"No scenario available for session {session.id}")
        return None

    chosen = queue[0]
    status = "due" if chosen.id in session.progress else "new"
    logger.debug(f"Next scenario for session {session.id}: {chosen.id} ({status})")
    return chosen


# =============================================================================
# Outcome Application
# =============================================================================


def _bootstrap_step(repetitions: int) -> float | None:
    """Fixed interval for early repetitions (1-based), None once past them."""
    if 1 <= repetitions <= len(BOOTSTRAP_INTERVALS):
        return BOOTSTRAP_INTERVALS[repetitions - 1]
    return None


def apply_result(
    session: DrillSession,
    scenario_id: str,
    quality: AnswerQuality | str,
    now: datetime | None = None,
) -> DrillSession:
    """
    Record an answer and reschedule the scenario.

    The scenario id is not checked against any catalog. A seeded progress
    record is created on the first answer. The new state is computed first
    and written to the record in one step.

    Args:
        session: Session to mutate in place
        scenario_id: Scenario that was just presented
        quality: Outcome of the answer
        now: Time of the answer (defaults to the wall clock)

    Returns:
        The same session, for chaining

    Raises:
        InvalidAnswerQualityError: quality is not best/ok/bad/timeout
    """
    quality = AnswerQuality.parse(quality)
    now = now or utc_now()

    record = session.progress.get(scenario_id) or new_progress(scenario_id, now)

    if quality is AnswerQuality.BEST:
        repetitions = record.repetitions + 1
        ease = _clamp_ease(record.ease + BEST_EASE_BONUS)
        step = _bootstrap_step(repetitions)
        interval = step if step is not None else record.interval * ease

    elif quality is AnswerQuality.OK:
        repetitions = record.repetitions + 1
        ease = _clamp_ease(record.ease - OK_EASE_PENALTY)
        if _bootstrap_step(repetitions) is not None:
            interval = BOOTSTRAP_INTERVALS[0]
        else:
            interval = record.interval * max(1.0, ease - OK_GROWTH_PENALTY)

    elif quality is AnswerQuality.BAD:
        repetitions = 0
        ease = _clamp_ease(record.ease - BAD_EASE_PENALTY)
        interval = SEED_INTERVAL_DAYS

    else:  # timeout
        repetitions = 0
        ease = _clamp_ease(record.ease - TIMEOUT_EASE_PENALTY)
        interval = SEED_INTERVAL_DAYS

    interval = round(min(interval, MAX_INTERVAL_DAYS), PRECISION)
    next_due = now + timedelta(days=interval)

    tally = OUTCOME_TALLIES[quality]
    setattr(record, tally, getattr(record, tally) + 1)
    record.repetitions = repetitions
    record.ease = ease
    record.interval = interval
    record.next_due = next_due
    record.last_shown = now
    record.last_answer = quality
    session.progress[scenario_id] = record
    session.touch(now)

    logger.debug(
        f"Recorded {quality.value} for {scenario_id}: ease={record.ease}, "
        f"interval={record.interval}d, repetitions={record.repetitions}, "
        f"next_due={record.next_due.isoformat()}"
    )

    return session
