"""APOD Explorer — validating, rate-limited proxy for NASA's Astronomy Picture of the Day.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
