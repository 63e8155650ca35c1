"""Core (UI-agnostic) meat sales dashboard logic.

This package contains:
- the sales record model and built-in sample data
- CSV parsing (uploaded text -> pandas)
- region / channel filtering
- KPI and series aggregation (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
- the dataset store that owns dashboard state
"""
