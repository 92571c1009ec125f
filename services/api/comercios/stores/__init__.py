"""Data stores for persistence and caching.

Stores handle:
- Record file: full-collection JSON reads and atomic writes
- Ranking cache: per-kind payload + TTL, guarded by per-slot locks

No aggregation/ranking logic in stores - that belongs in services.
"""
