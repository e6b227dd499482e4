"""
Prefect flows for the data pipeline.

Flows:
- fetch: Resolve a place, fetch forecast + history, save the outlook snapshot

Usage (local):
    python -m picnic_planner.flows.fetch "Portland" 2026-07-04

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    prefect deployment run 'fetch-outlook/default'
"""
