"""Domain logic: suitability scoring and historical aggregation.

Dependency rule: analysis/ imports schemas and errors only.
It never fetches data itself; lookups are passed in as callables.

Modules:
  - suitability: weather values -> 0-100 score, category and reasons
  - preferences: user thresholds for the preference-driven scorer
  - historical: per-year lookups (scatter/gather) -> HistoricalSummary

Adding a scoring strategy
-------------------------
1. Write a class with ``assess(observation) -> SuitabilityAssessment``.
2. Keep it pure: same input, same output, same reason order.
3. Add tests in ``tests/test_suitability.py``.
"""

from picnic_planner.analysis.historical import get_historical_summary, target_dates
from picnic_planner.analysis.preferences import (
    DEFAULT_PREFERENCES,
    UserPreferences,
    load_preferences,
)
from picnic_planner.analysis.suitability import (
    FixedThresholdScorer,
    PreferenceScorer,
    SuitabilityScorer,
    assess_conditions,
)

__all__ = [
    "DEFAULT_PREFERENCES",
    "FixedThresholdScorer",
    "PreferenceScorer",
    "SuitabilityScorer",
    "UserPreferences",
    "assess_conditions",
    "get_historical_summary",
    "load_preferences",
    "target_dates",
]
