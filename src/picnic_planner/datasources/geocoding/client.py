"""Open-Meteo geocoding API constants.

API docs: https://open-meteo.com/en/docs/geocoding-api
"""

OPEN_METEO_GEOCODING = "https://geocoding-api.open-meteo.com/v1/search"

# Candidates requested per search; filtering by state/country happens locally
RESULT_COUNT = 10
