"""Infrastructure Layer — upstream HTTP client and process-level concerns.

Invariants:
    - External calls wrapped with timeout and result mapping
"""
