"""Core Layer — value types, error hierarchy and upstream endpoint table.

Invariants:
    - Core never imports from infrastructure/, services/ or api/
    - No IO: everything here is pure data and pure functions
"""
