"""Service Layer — upstream proxy operations and gateway-owned resource logic.

Invariants:
    - Proxy services talk to the upstream only through ResilientHttpClient
    - A failed ApiResult is turned into ExternalAPIError here, never in routes
    - Persistence services own their commits; routes never call session.commit()
"""
