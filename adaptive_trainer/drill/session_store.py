"""
Session and filter persistence for drill sessions.

The drill session is saved as an opaque JSON blob after every answer so the
user can stop and resume. Filter preferences are saved alongside it.
Files live in ~/.adaptive-trainer/ by default.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from loguru import logger

from adaptive_trainer.config import DEFAULT_STATE_DIR

from .drill_session import DrillSession
from .scenario_filter import ScenarioFilter

SESSION_FILE = "session.json"
FILTER_FILE = "filters.json"


class SessionStore:
    """
    Manages session and filter persistence.

    A corrupted or structurally invalid file is never an error: it is
    logged and treated as absent.
    """

    def __init__(self, state_dir: Optional[Path] = None):
        self.state_dir = state_dir or DEFAULT_STATE_DIR
        self.state_dir.mkdir(parents=True, exist_ok=True)

    @property
    def session_path(self) -> Path:
        return self.state_dir / SESSION_FILE

    @property
    def filter_path(self) -> Path:
        return self.state_dir / FILTER_FILE

    # =========================================================================
    # Session
    # =========================================================================

    def save_session(self, session: DrillSession) -> Path:
        """Save the session blob to disk."""
        self._write_json(self.session_path, session.to_dict())
        logger.debug(
            f"Saved session {session.id} ({len(session.progress)} scenarios) to {self.session_path}"
        )
        return self.session_path

    def load_session(self) -> Optional[DrillSession]:
        """Load the saved session, or None if missing or corrupted."""
        data = self._read_json(self.session_path)
        if data is None:
            return None

        try:
            session = DrillSession.from_dict(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Stored session has invalid structure, discarding: {e}")
            return None

        logger.info(f"Loaded session {session.id} with {len(session.progress)} scenarios")
        return session

    def clear_session(self) -> bool:
        """Delete the saved session file."""
        return self._delete(self.session_path)

    # =========================================================================
    # Filter
    # =========================================================================

    def save_filter(self, scenario_filter: ScenarioFilter) -> Path:
        """Save filter preferences to disk."""
        self._write_json(self.filter_path, scenario_filter.to_dict())
        return self.filter_path

    def load_filter(self) -> ScenarioFilter:
        """Load filter preferences, or an empty filter if missing or invalid."""
        data = self._read_json(self.filter_path)
        if data is None:
            return ScenarioFilter()

        try:
            return ScenarioFilter.from_dict(data)
        except (TypeError, AttributeError) as e:
            logger.warning(f"Stored filter has invalid structure, using default: {e}")
            return ScenarioFilter()

    def clear_filter(self) -> bool:
        """Delete the saved filter file."""
        return self._delete(self.filter_path)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _write_json(self, path: Path, data: dict) -> None:
        # Atomic replace: readers never see a partial file
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        tmp_path.replace(path)

    def _read_json(self, path: Path) -> Optional[dict]:
        if not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to parse {path}, discarding: {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Expected a JSON object in {path}, discarding")
            return None
        return data

    def _delete(self, path: Path) -> bool:
        if path.exists():
            path.unlink()
            return True
        return False
