"""
Answer grading for the drill player.

Maps the option a user picked, and how long they took, onto an
AnswerQuality. Any answer given after the time limit counts as a timeout.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from .drill_session import AnswerQuality
from .scenario_catalog import AnswerOption, ScenarioRecord

DEFAULT_TIME_LIMIT_SECONDS = 30.0

OPTION_QUALITIES = (AnswerQuality.BEST, AnswerQuality.OK, AnswerQuality.BAD)


@dataclass(frozen=True)
class DisplayedOption:
    """An answer option as shown to the user."""

    key: str  # "A", "B", "C"
    quality: AnswerQuality
    option: AnswerOption


def shuffle_options(
    scenario: ScenarioRecord,
    rng: random.Random | None = None,
) -> list[DisplayedOption]:
    """
    Lay out the three options in random order under keys A, B, C.

    Args:
        scenario: Scenario being presented
        rng: Random source (a fresh one if None)

    Returns:
        Options in display order
    """
    rng = rng or random.Random()
    qualities = list(OPTION_QUALITIES)
    rng.shuffle(qualities)

    return [
        DisplayedOption(key=chr(65 + i), quality=quality, option=getattr(scenario, quality.value))
        for i, quality in enumerate(qualities)
    ]


def grade_choice(
    choice: DisplayedOption | None,
    elapsed_seconds: float,
    time_limit: float = DEFAULT_TIME_LIMIT_SECONDS,
) -> AnswerQuality:
    """
    Convert a picked option to an answer quality.

    Args:
        choice: Option picked, or None if the user gave no answer
        elapsed_seconds: Time from presentation to answer
        time_limit: Seconds allowed before the answer counts as a timeout

    Returns:
        The option's quality, or TIMEOUT
    """
    if choice is None or elapsed_seconds > time_limit:
        return AnswerQuality.TIMEOUT
    return choice.quality
