"""Core Layer — pure domain logic: validation, classification, counters.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - Functions are deterministic; clocks and dates are passed in
"""
