"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants
    ├── models.py         # Dataclasses for API responses (optional)
    └── {feature}.py      # Fetch functions (one per endpoint/concept)

Sources:
  - weather/    Open-Meteo forecast + archive
  - geocoding/  Open-Meteo place search

Fetch functions return domain models from ``picnic_planner.schemas`` and
raise ``picnic_planner.errors`` exceptions: ``UpstreamError`` for transport
or parse failures, ``NotFoundError`` when the provider has no data.
"""
