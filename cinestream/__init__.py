"""
Shared Cinestream library code.

This package holds everything the HTTP surface in `api/` is built on:
- canonical content records (`cinestream.models`)
- the in-memory content store (`cinestream.store`)
- the TMDb catalog client (`cinestream.integrations.tmdb`)
- lookup/upsert orchestration (`cinestream.services`)
- the streaming server list resolver (`cinestream.servers`)

FastAPI routers should live outside this package and import from `cinestream`
rather than the other way around.
"""
