"""In-memory session state for assessments and scenarios.

Holds the latest materiality assessment and scenarios by name for the
life of a session. Every save replaces the whole object; nothing is
merged. Writing to durable storage is the caller's job.
"""

from __future__ import annotations

import threading

from esgenius.materiality.models import MaterialityAssessment
from esgenius.scenario.models import Scenario


class AssessmentSession:
    """Thread-safe holder for one user's working set.

    Assessments are deep-copied on save and read. Scenarios are immutable
    and stored as given.
    """

    def __init__(self, session_id: str = "default") -> None:
        self.session_id = session_id
        self._assessment: MaterialityAssessment | None = None
        self._scenarios: dict[str, Scenario] = {}
        self._lock = threading.Lock()

    # -- Materiality ----------------------------------------------------------

    def save_assessment(self, assessment: MaterialityAssessment) -> None:
        """Store *assessment*, superseding any previous one."""
        with self._lock:
            self._assessment = assessment.model_copy(deep=True)

    def latest_assessment(self) -> MaterialityAssessment | None:
        with self._lock:
            if self._assessment is None:
                return None
            return self._assessment.model_copy(deep=True)

    # -- Scenarios ------------------------------------------------------------

    def save_scenario(self, scenario: Scenario) -> None:
        """Store or replace the scenario with the same name."""
        with self._lock:
            self._scenarios[scenario.name] = scenario

    def get_scenario(self, name: str) -> Scenario | None:
        """Retrieve a scenario, or None if not found."""
        with self._lock:
            return self._scenarios.get(name)

    def list_scenarios(self) -> list[Scenario]:
        """All scenarios, in the order their names were first saved."""
        with self._lock:
            return list(self._scenarios.values())

    def delete_scenario(self, name: str) -> bool:
        """Delete a scenario. Returns True if it existed."""
        with self._lock:
            return self._scenarios.pop(name, None) is not None

    def count(self) -> int:
        with self._lock:
            return len(self._scenarios)

    def clear(self) -> None:
        """Drop the assessment and all scenarios."""
        with self._lock:
            self._assessment = None
            self._scenarios.clear()
