"""Static reference data.

Data that doesn't change with API calls.

Adding a new module:
1. Create ``reference/{name}.py`` with constants/dataclasses
2. Re-export from this ``__init__.py``
"""

from picnic_planner.reference.us_states import US_STATES as US_STATES
from picnic_planner.reference.us_states import state_full_name as state_full_name
