"""Infrastructure Layer — outbound HTTP, database, tokens and logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Every outbound HTTP call goes through ResilientHttpClient (retry/timeout/normalization)

Design Decisions:
    - Resilient wrappers over raw clients: routes and services never touch httpx directly
"""
