"""API Schemas — Pydantic models validating inbound requests at the route boundary.

Invariants:
    - Proxy DTOs mirror upstream field names (PageIndex, MobileNo, ...) so they forward unchanged
    - Gateway-owned resources (users, icons, tracking) use camelCase aliases over snake_case attributes
"""
