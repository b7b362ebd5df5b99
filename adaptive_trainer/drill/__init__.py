"""
Adaptive drill engine.

Components:
- ScenarioCatalog: JSON scenario pack loading and validation
- ScenarioFilter: Restrict drilling by sport, level, category, position
- DrillSession: Per-scenario spaced repetition progress
- Scheduler: Next-scenario selection and outcome application
- DrillStats: Read-only progress summary
- SessionStore: JSON persistence of sessions and filters
"""

from .drill_session import (
    AnswerQuality,
    DrillSession,
    ScenarioProgress,
    create_drill_session,
)
from .grading import DisplayedOption, grade_choice, shuffle_options
from .scenario_catalog import (
    AnswerOption,
    ScenarioCatalog,
    ScenarioRecord,
    check_pack_quality,
    load_scenario_pack,
    parse_scenario_pack,
)
from .scenario_filter import ScenarioFilter, filter_scenarios, unique_values
from .scheduler import apply_result, due_scenarios, pick_next_scenario
from .session_store import SessionStore
from .stats import DrillStats, get_drill_stats

__all__ = [
    # Catalog
    "AnswerOption",
    "ScenarioRecord",
    "ScenarioCatalog",
    "load_scenario_pack",
    "parse_scenario_pack",
    "check_pack_quality",
    # Filtering
    "ScenarioFilter",
    "filter_scenarios",
    "unique_values",
    # Session
    "AnswerQuality",
    "ScenarioProgress",
    "DrillSession",
    "create_drill_session",
    # Scheduling
    "pick_next_scenario",
    "due_scenarios",
    "apply_result",
    # Stats
    "DrillStats",
    "get_drill_stats",
    # Persistence
    "SessionStore",
    # Grading
    "DisplayedOption",
    "shuffle_options",
    "grade_choice",
]
