"""
Shared services.

- http.py      - requests session with retry/backoff and default timeout
- providers.py - weather provider protocol, Open-Meteo provider, TTL cache decorator
- planner.py   - PicnicPlanner facade returning structured Results
"""
