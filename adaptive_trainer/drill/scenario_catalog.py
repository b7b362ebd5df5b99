"""
Scenario Catalog: Situational Drill Loader.

Loads and validates scenario packs from JSON files:
- Schema validation via Pydantic (fails loudly on a broken pack)
- Duplicate id detection
- Non-fatal quality warnings for pack authors

The catalog is immutable and ordered; catalog order is the order in which
never-attempted scenarios are presented.
"""

from __future__ import annotations

import json
from collections import Counter
from collections.abc import Iterator
from enum import Enum
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from adaptive_trainer.exceptions import ScenarioPackError

MIN_DESCRIPTION_LENGTH = 20

# =============================================================================
# Classification Axes
# =============================================================================


class Sport(str, Enum):
    BASEBALL = "baseball"
    SOFTBALL = "softball"


class Level(str, Enum):
    U8 = "8u"
    U10 = "10u"
    U12 = "12u"
    HIGH_SCHOOL = "high-school"
    COLLEGE = "college"


class Position(str, Enum):
    PITCHER = "pitcher"
    CATCHER = "catcher"
    INFIELD = "infield"
    OUTFIELD = "outfield"


class RunnerBase(str, Enum):
    FIRST = "first"
    SECOND = "second"
    THIRD = "third"


# =============================================================================
# Scenario Models
# =============================================================================


class AnswerOption(BaseModel):
    """One graded answer to a scenario."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    label: str = Field(min_length=1)
    description: str = ""
    coaching_cue: str | None = None


class ScenarioRecord(BaseModel):
    """
    A single situational drill.

    ``best`` is the one correct play; ``ok`` and ``bad`` are progressively
    worse alternatives used for partial-credit grading.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(min_length=1)
    sport: Sport
    level: Level
    category: str = Field(min_length=1)
    position: Position | None = None

    # Game situation
    title: str = ""
    description: str = ""
    question: str = ""
    outs: int = Field(default=0, ge=0, le=2)
    runners: tuple[RunnerBase, ...] = ()

    best: AnswerOption
    ok: AnswerOption
    bad: AnswerOption

    @field_validator("best")
    @classmethod
    def _best_needs_coaching_cue(cls, option: AnswerOption) -> AnswerOption:
        if not option.coaching_cue:
            raise ValueError("best option requires a coaching_cue")
        return option

    @field_validator("runners")
    @classmethod
    def _runners_unique(cls, runners: tuple[RunnerBase, ...]) -> tuple[RunnerBase, ...]:
        if len(set(runners)) != len(runners):
            raise ValueError("a base can only hold one runner")
        return runners

    @property
    def situation(self) -> str:
        """Short game-state summary, e.g. '1 out, runners on first and third'."""
        outs = f"{self.outs} out" if self.outs == 1 else f"{self.outs} outs"
        if not self.runners:
            return f"{outs}, bases empty"
        bases = " and ".join(r.value for r in self.runners)
        return f"{outs}, runner{'s' if len(self.runners) > 1 else ''} on {bases}"


class ScenarioPack(BaseModel):
    """Top-level shape of a scenario pack JSON file."""

    name: str = "unnamed"
    version: str = "1"
    scenarios: list[ScenarioRecord]


# =============================================================================
# Scenario Catalog
# =============================================================================


class ScenarioCatalog:
    """
    Ordered, immutable collection of scenarios.

    Features:
    - Catalog-order iteration (drives never-attempted priority)
    - Lookup by id
    - Per-sport / per-category summary
    """

    def __init__(self, scenarios: list[ScenarioRecord], name: str = "unnamed", version: str = "1"):
        ids = [s.id for s in scenarios]
        duplicates = sorted(i for i, n in Counter(ids).items() if n > 1)
        if duplicates:
            raise ScenarioPackError(
                f"Scenario pack '{name}' has duplicate ids",
                [f"duplicate id: {d}" for d in duplicates],
            )

        self.name = name
        self.version = version
        self._scenarios: tuple[ScenarioRecord, ...] = tuple(scenarios)
        self._by_id: dict[str, ScenarioRecord] = {s.id: s for s in scenarios}

    def __iter__(self) -> Iterator[ScenarioRecord]:
        return iter(self._scenarios)

    def __len__(self) -> int:
        return len(self._scenarios)

    def __contains__(self, scenario_id: object) -> bool:
        return scenario_id in self._by_id

    @property
    def scenarios(self) -> tuple[ScenarioRecord, ...]:
        return self._scenarios

    @property
    def ids(self) -> list[str]:
        return [s.id for s in self._scenarios]

    def get(self, scenario_id: str) -> ScenarioRecord | None:
        """Get a scenario by id (None if the catalog no longer has it)."""
        return self._by_id.get(scenario_id)

    def get_stats(self) -> dict:
        """
        Get catalog statistics.

        Returns:
            Dictionary with total count and per-sport / per-category counts
        """
        return {
            "total": len(self._scenarios),
            "by_sport": dict(Counter(s.sport.value for s in self._scenarios)),
            "by_category": dict(Counter(s.category for s in self._scenarios)),
        }


def load_scenario_pack(path: Path) -> ScenarioCatalog:
    """
    Load and validate a scenario pack.

    Args:
        path: Path to the pack JSON file

    Returns:
        ScenarioCatalog in file order

    Raises:
        ScenarioPackError: file unreadable, not JSON, or fails validation
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ScenarioPackError(f"Cannot read scenario pack {path}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ScenarioPackError(f"Scenario pack {path} is not valid JSON: {e}") from e

    return parse_scenario_pack(data, source=str(path))


def parse_scenario_pack(data: object, source: str = "<memory>") -> ScenarioCatalog:
    """Validate an already-decoded pack (a dict, or a bare list of scenarios)."""
    if isinstance(data, list):
        data = {"scenarios": data}

    try:
        pack = ScenarioPack.model_validate(data)
    except ValidationError as e:
        problems = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        ]
        raise ScenarioPackError(f"Scenario pack {source} is invalid", problems) from e

    catalog = ScenarioCatalog(pack.scenarios, name=pack.name, version=pack.version)

    stats = catalog.get_stats()
    by_sport = ", ".join(f"{k}: {v}" for k, v in sorted(stats["by_sport"].items()))
    logger.info(f"Loaded {stats['total']} scenarios from '{catalog.name}' ({by_sport})")

    return catalog


def check_pack_quality(catalog: ScenarioCatalog) -> list[str]:
    """
    Look for authoring problems that do not make the pack unusable.

    Returns:
        Human-readable warnings (empty if none)
    """
    warnings: list[str] = []

    for scenario in catalog:
        labels = [scenario.best.label, scenario.ok.label, scenario.bad.label]
        if len({label.strip().lower() for label in labels}) < 3:
            warnings.append(f"{scenario.id}: answer options share a label")
        if len(scenario.description.strip()) < MIN_DESCRIPTION_LENGTH:
            warnings.append(f"{scenario.id}: description is missing or very short")
        if not scenario.question.strip():
            warnings.append(f"{scenario.id}: no question text")

    stats = catalog.get_stats()
    for category, count in sorted(stats["by_category"].items()):
        if count == 1:
            warnings.append(f"category '{category}' has only one scenario")
    for sport in Sport:
        if sport.value not in stats["by_sport"]:
            warnings.append(f"no {sport.value} scenarios")

    for warning in warnings:
        logger.warning(f"Scenario pack '{catalog.name}': {warning}")

    return warnings
