"""CycleTrack: cycle-aware daily health log.

Subpackages:
    engine/   — Cycle computation & aggregation (pure functions)
    services/ — Key-value storage and the entries/settings repository
    routers/  — FastAPI routes consumed by the dashboard, log and insights pages
    models/   — Pydantic request/response schemas
"""
