"""Service Layer — request orchestration and runtime wiring."""
