"""Summary statistics for a drill session (read-only)."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .drill_session import DrillSession
from .scenario_catalog import ScenarioRecord
from .scheduler import SEED_EASE


@dataclass(frozen=True)
class DrillStats:
    """Aggregated progress across every scenario a session has answered."""

    correct_rate: float
    scenarios_seen: int
    total_attempts: int
    average_ease: float
    average_interval: float
    catalog_size: int
    scenarios_remaining: int  # Catalog scenarios never answered

    @property
    def correct_percent(self) -> float:
        return round(self.correct_rate * 100, 1)


def get_drill_stats(catalog: Iterable[ScenarioRecord], session: DrillSession) -> DrillStats:
    """
    Derive display statistics from a catalog and session.

    Tallies cover every progress record, including records for scenarios
    the catalog no longer contains. Never mutates the session.
    """
    records = list(session.progress.values())
    catalog_ids = [scenario.id for scenario in catalog]

    correct = sum(r.correct for r in records)
    total_attempts = sum(r.attempts for r in records)

    if records:
        average_ease = sum(r.ease for r in records) / len(records)
        average_interval = sum(r.interval for r in records) / len(records)
    else:
        average_ease = SEED_EASE
        average_interval = 0.0

    return DrillStats(
        correct_rate=correct / total_attempts if total_attempts else 0.0,
        scenarios_seen=len(records),
        total_attempts=total_attempts,
        average_ease=average_ease,
        average_interval=average_interval,
        catalog_size=len(catalog_ids),
        scenarios_remaining=sum(1 for i in catalog_ids if i not in session.progress),
    )
